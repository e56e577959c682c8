from typing import Any, Dict, List, Optional
import logging

import boto3
from botocore.exceptions import ClientError

from models import User
from .base import UserStore

logger = logging.getLogger(__name__)

TABLE_EXISTS_ERROR = "ResourceInUseException"


class DynamoDBUserStore(UserStore):
    """
    Key-value backend on a single DynamoDB table keyed by ``userId``

    Writes follow DynamoDB semantics: PutItem overwrites an existing item and
    UpdateItem creates the item when the key is missing.
    """

    backend_name = "dynamodb"

    def __init__(
        self,
        table_name: str,
        region_name: str,
        endpoint_url: Optional[str] = None,
        aws_access_key_id: Optional[str] = None,
        aws_secret_access_key: Optional[str] = None,
        client: Any = None,
    ):
        self.table_name = table_name
        if client is None:
            session = boto3.session.Session()
            client = session.client(
                "dynamodb",
                region_name=region_name,
                endpoint_url=endpoint_url,
                aws_access_key_id=aws_access_key_id,
                aws_secret_access_key=aws_secret_access_key,
            )
        self.client = client

    def initialize(self) -> None:
        try:
            self.client.create_table(
                TableName=self.table_name,
                AttributeDefinitions=[{"AttributeName": "userId", "AttributeType": "S"}],
                KeySchema=[{"AttributeName": "userId", "KeyType": "HASH"}],
                BillingMode="PAY_PER_REQUEST",
            )
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") != TABLE_EXISTS_ERROR:
                logger.error(f"DynamoDB table create error: {str(e)}")
                raise
            logger.info(f"DynamoDB table already exists: {self.table_name}")
            return

        logger.info(f"Created DynamoDB table: {self.table_name}")
        self.client.get_waiter("table_exists").wait(TableName=self.table_name)

    @staticmethod
    def _to_user(item: Dict[str, Dict[str, str]]) -> User:
        return User(
            userId=item["userId"]["S"],
            name=item["name"]["S"],
            email=item["email"]["S"],
        )

    def create(self, user_id: str, name: str, email: str) -> None:
        self.client.put_item(
            TableName=self.table_name,
            Item={
                "userId": {"S": user_id},
                "name": {"S": name},
                "email": {"S": email},
            },
        )

    def get(self, user_id: str) -> Optional[User]:
        response = self.client.get_item(
            TableName=self.table_name,
            Key={"userId": {"S": user_id}},
        )
        item = response.get("Item")
        if not item:
            return None
        return self._to_user(item)

    def update(self, user_id: str, name: str, email: str) -> None:
        # "name" is a DynamoDB reserved word
        self.client.update_item(
            TableName=self.table_name,
            Key={"userId": {"S": user_id}},
            UpdateExpression="SET #n = :n, email = :e",
            ExpressionAttributeNames={"#n": "name"},
            ExpressionAttributeValues={":n": {"S": name}, ":e": {"S": email}},
        )

    def delete(self, user_id: str) -> None:
        self.client.delete_item(
            TableName=self.table_name,
            Key={"userId": {"S": user_id}},
        )

    def list(self) -> List[User]:
        users = []
        paginator = self.client.get_paginator("scan")
        for page in paginator.paginate(TableName=self.table_name):
            users.extend(self._to_user(item) for item in page.get("Items", []))
        return users

    def close(self) -> None:
        self.client.close()
