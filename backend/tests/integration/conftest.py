import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app
from tests.helpers import sqlite_urls


@pytest.fixture()
def database_urls(tmp_path):
    """Async URL for the app and sync URL for assertions, same sqlite file."""
    return sqlite_urls(tmp_path)


@pytest.fixture()
def app(database_urls):
    async_url, _ = database_urls
    settings = Settings(_env_file=None, database_url=async_url, db_echo=False, db_synchronize=True)
    return create_app(settings)


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c
