import httpx
import pytest
from fastapi.testclient import TestClient

from order_service.aggregator import OrderAggregator
from order_service.clients import product_client, user_client
from order_service.config import Settings
from order_service.main import create_app
from order_service.models import Base
from order_service.store import OrderStore
from service_common.db import init_db, make_engine, make_session_factory
from tests.stubs import PRODUCT_URL, USER_URL, StubServices


@pytest.fixture
def stubs():
    return StubServices()


@pytest.fixture
def http(stubs):
    with httpx.Client(transport=stubs.transport) as client:
        yield client


@pytest.fixture
def store():
    engine = make_engine("sqlite://")
    init_db(engine, Base)
    yield OrderStore(make_session_factory(engine))
    engine.dispose()


@pytest.fixture
def aggregator(store, http):
    return OrderAggregator(store, user_client(USER_URL, http), product_client(PRODUCT_URL, http))


@pytest.fixture
def client(stubs):
    settings = Settings(user_service_url=USER_URL, product_service_url=PRODUCT_URL, database_url="sqlite://")
    with TestClient(create_app(settings, transport=stubs.transport)) as client:
        yield client
