import logging

from .base import UserStore
from .dynamodb_store import DynamoDBUserStore
from .postgres_store import PostgresUserStore

logger = logging.getLogger(__name__)


def create_user_store(settings) -> UserStore:
    """
    Build the storage backend selected by configuration

    Nothing is connected or created here; call ``initialize()`` on the
    returned store before serving requests.
    """
    if settings.USE_POSTGRES:
        logger.info("Using PostgreSQL backend")
        return PostgresUserStore(settings.DATABASE_URL, sslmode=settings.DATABASE_SSLMODE)

    logger.info(f"Using DynamoDB backend (table: {settings.DYNAMODB_TABLE})")
    return DynamoDBUserStore(
        table_name=settings.DYNAMODB_TABLE,
        region_name=settings.AWS_REGION,
        endpoint_url=settings.DYNAMODB_ENDPOINT,
        aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
        aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
    )
