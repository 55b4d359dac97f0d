import pytest

from agrimarket import create_app
from agrimarket.config import TestingConfig
from agrimarket.repositories import MemoryUserRepository, MemoryProductRepository
from helpers import make_proxy, register_payload


@pytest.fixture
def users():
    return MemoryUserRepository()


@pytest.fixture
def products():
    return MemoryProductRepository()


@pytest.fixture
def ai_proxy():
    proxy = make_proxy()
    yield proxy
    proxy.shutdown()


@pytest.fixture
def app(users, products, ai_proxy):
    return create_app(TestingConfig, users=users, products=products, ai_proxy=ai_proxy)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def registered(client):
    """Register the default seller and return (token, user)."""
    response = client.post('/api/auth/register', json=register_payload())
    assert response.status_code == 201
    body = response.get_json()
    return body['token'], body['user']
