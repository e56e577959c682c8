from types import SimpleNamespace
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

import main
from config.settings import Settings
from service.storage import DynamoDBUserStore, PostgresUserStore, create_user_store


def make_settings(use_postgres: bool) -> SimpleNamespace:
    return SimpleNamespace(
        USE_POSTGRES=use_postgres,
        DATABASE_URL="postgresql://postgres:postgres@db:5432/users",
        DATABASE_SSLMODE="disable",
        DYNAMODB_TABLE="Users",
        DYNAMODB_ENDPOINT="http://localstack:4566",
        AWS_REGION="us-east-1",
        AWS_ACCESS_KEY_ID="test",
        AWS_SECRET_ACCESS_KEY="test",
    )


#
# Backend selection
#


def test_factory_selects_postgres():
    store = create_user_store(make_settings(use_postgres=True))

    assert isinstance(store, PostgresUserStore)
    assert store.dsn == "postgresql://postgres:postgres@db:5432/users"
    assert store.sslmode == "disable"
    assert store.connection is None


def test_factory_selects_dynamodb():
    with patch("service.storage.dynamodb_store.boto3.session.Session"):
        store = create_user_store(make_settings(use_postgres=False))

    assert isinstance(store, DynamoDBUserStore)
    assert store.table_name == "Users"


def test_backend_name_follows_flag():
    settings = Settings()

    settings.USE_POSTGRES = True
    assert settings.backend_name == "postgres"

    settings.USE_POSTGRES = False
    assert settings.backend_name == "dynamodb"


#
# Application lifespan
#


def test_startup_initializes_store_and_shutdown_closes_it(store):
    with patch.object(main, "create_user_store", return_value=store):
        with TestClient(main.app) as client:
            assert store.initialized is True
            assert main.app.state.user_service.store is store

            assert client.post(
                "/users", json={"userId": "u1", "name": "Ann", "email": "ann@x.com"}
            ).status_code == 201
            assert client.get("/users").json() == [
                {"userId": "u1", "name": "Ann", "email": "ann@x.com"}
            ]

    assert store.closed is True


def test_startup_aborts_when_backend_cannot_initialize(store, monkeypatch):
    def failing_initialize():
        raise ConnectionError("database unreachable")

    monkeypatch.setattr(store, "initialize", failing_initialize)

    with patch.object(main, "create_user_store", return_value=store):
        with pytest.raises(ConnectionError):
            with TestClient(main.app):
                pass

    assert store.closed is True
