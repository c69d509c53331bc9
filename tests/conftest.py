from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from main import create_app
from services.expense_store import ExpenseStore
from services.expenses_service import ExpenseService
from utils.settings import Settings


@pytest.fixture()
def settings() -> Settings:
    return Settings(mongodb_uri="mongodb://unused", db_name="expense_tracker_test")


@pytest.fixture()
def collection():
    return AsyncMongoMockClient()["expense_tracker_test"]["expenses"]


@pytest.fixture()
def store(collection) -> ExpenseStore:
    return ExpenseStore(collection)


@pytest.fixture()
def service(store) -> ExpenseService:
    return ExpenseService(store)


@pytest.fixture()
def app(settings, service):
    return create_app(settings, service=service)


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client
