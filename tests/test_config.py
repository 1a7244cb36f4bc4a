import pytest

from order_service.config import Settings
from product_service.config import ProductSettings
from user_service.config import UserSettings

ORDER_VARS = (
    "USER_SERVICE_URL", "PRODUCT_SERVICE_URL", "DATABASE_URL", "REMOTE_TIMEOUT",
    "REMOTE_RETRIES", "PARALLEL_FETCH", "LOG_PATH", "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ORDER_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_point_at_local_services():
    settings = Settings()
    assert settings.user_service_url == "http://localhost:8080"
    assert settings.product_service_url == "http://localhost:8081"
    assert settings.database_url == "sqlite:///./orders.db"
    assert settings.remote_retries == 0
    assert settings.parallel_fetch is False
    assert settings.log_path is None


def test_empty_values_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("USER_SERVICE_URL", "")
    monkeypatch.setenv("PRODUCT_SERVICE_URL", "")
    monkeypatch.setenv("REMOTE_RETRIES", "")
    settings = Settings()
    assert settings.user_service_url == "http://localhost:8080"
    assert settings.product_service_url == "http://localhost:8081"
    assert settings.remote_retries == 0


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("USER_SERVICE_URL", "http://users:8080")
    monkeypatch.setenv("PRODUCT_SERVICE_URL", "http://products:8081")
    monkeypatch.setenv("DATABASE_URL", "postgresql://orders@db/orders")
    monkeypatch.setenv("REMOTE_TIMEOUT", "2.5")
    monkeypatch.setenv("REMOTE_RETRIES", "3")
    monkeypatch.setenv("PARALLEL_FETCH", "yes")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    settings = Settings()
    assert settings.user_service_url == "http://users:8080"
    assert settings.database_url == "postgresql://orders@db/orders"
    assert settings.remote_timeout == 2.5
    assert settings.remote_retries == 3
    assert settings.parallel_fetch is True
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("name, value", [
    ("REMOTE_RETRIES", "many"),
    ("REMOTE_TIMEOUT", "soon"),
    ("PARALLEL_FETCH", "maybe"),
])
def test_invalid_values_are_rejected(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError, match=name.lower()):
        Settings()


def test_sibling_services_read_their_own_database(monkeypatch):
    assert UserSettings().database_url == "sqlite:///./users.db"
    assert ProductSettings().database_url == "sqlite:///./products.db"
    monkeypatch.setenv("DATABASE_URL", "postgresql://catalog@db/catalog")
    monkeypatch.setenv("LOG_PATH", "/var/log/app")
    settings = ProductSettings()
    assert settings.database_url == "postgresql://catalog@db/catalog"
    assert settings.log_path == "/var/log/app"
