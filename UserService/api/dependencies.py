from fastapi import Request

from business.user import UserService


def get_user_service(request: Request) -> UserService:
    """Return the UserService built during application startup"""
    return request.app.state.user_service
