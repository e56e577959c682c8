from .order_client import OrderClient

__all__ = ["OrderClient"]
