import pytest
import os
import sys

CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.dirname(CURRENT_DIR)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from fastapi.testclient import TestClient
from users_service.config import Settings
from users_service.infrastructure.db import UserStore
from users_service.main import create_app


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Настройка тестового окружения"""
    # Используем in-memory БД
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")


@pytest.fixture
def test_settings():
    return Settings(DATABASE_URL="sqlite://", API_URL="", LOG_LEVEL="WARNING")


@pytest.fixture
def store(test_settings):
    """Отдельная in-memory БД на каждый тест"""
    return UserStore(test_settings.DATABASE_URL)


@pytest.fixture
def app(test_settings, store):
    return create_app(settings=test_settings, store=store)


@pytest.fixture
def live_client(app):
    """Клиент с запущенным lifespan: store открыт до первого запроса"""
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
