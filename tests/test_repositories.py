import threading

import pytest

from agrimarket import create_app
from agrimarket.config import TestingConfig
from agrimarket.models import User, UserType
from agrimarket.repositories import MemoryUserRepository, get_user_repository
from agrimarket.repositories.sql import SqlUserRepository, SqlProductRepository
from agrimarket.services import auth_service
from helpers import make_proxy, register_payload, auth_header


class SqlTestingConfig(TestingConfig):
    STORAGE_BACKEND = 'sql'


def make_user(username, user_id):
    now = auth_service.utcnow()
    return User(id=user_id, username=username, password='x', full_name='Test User', age=30,
                region='Cebu', user_type=UserType.BUYER, avatar='👤', created_at=now, updated_at=now)


def test_memory_insert_if_absent_is_atomic():
    users = MemoryUserRepository()
    barrier = threading.Barrier(8)
    results = []

    def register(i):
        barrier.wait()
        results.append(users.insert_if_absent(make_user('same-name', f'id-{i}')))

    threads = [threading.Thread(target=register, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results.count(True) == 1
    assert users.count() == 1


def test_memory_repository_lookups():
    users = MemoryUserRepository()
    user = make_user('alice', 'a1')
    users.insert_if_absent(user)

    assert users.get('a1') is user
    assert users.find_by_username('alice') is user
    assert users.find_by_username('Alice') is None
    assert users.list() == [user]


def test_memory_update_requires_existing_user():
    with pytest.raises(KeyError):
        MemoryUserRepository().update(make_user('bob', 'b1'))


@pytest.fixture
def sql_app():
    proxy = make_proxy()
    app = create_app(SqlTestingConfig, ai_proxy=proxy)
    yield app
    proxy.shutdown()


def test_sql_backend_is_selected(sql_app):
    with sql_app.app_context():
        assert isinstance(get_user_repository(), SqlUserRepository)
        assert isinstance(sql_app.extensions['repositories']['products'], SqlProductRepository)


def test_sql_backend_register_conflict_and_login(sql_app):
    client = sql_app.test_client()

    assert client.post('/api/auth/register', json=register_payload()).status_code == 201
    assert client.post('/api/auth/register', json=register_payload(fullName='Other')).status_code == 409
    login = client.post('/api/auth/login', json={'username': 'farmer42', 'password': 'secret1'})
    assert login.status_code == 200


def test_sql_backend_products(sql_app):
    client = sql_app.test_client()
    token = client.post('/api/auth/register', json=register_payload()).get_json()['token']
    for title, category in [('Organic Kale', 'vegetables'), ('Mangoes', 'fruits'), ('Kale 100% fresh', 'vegetables')]:
        response = client.post('/api/products', json={'title': title, 'pricePerKg': 50, 'stock': 3,
                                                      'category': category, 'tags': ['local']},
                               headers=auth_header(token))
        assert response.status_code == 201

    kale = client.get('/api/products?search=KALE').get_json()
    percent = client.get('/api/products?search=100%25').get_json()
    vegetables = client.get('/api/products?category=vegetables&limit=1&page=2').get_json()

    assert kale['total'] == 2
    assert [p['title'] for p in percent['products']] == ['Kale 100% fresh']
    assert vegetables['total'] == 2
    assert vegetables['totalPages'] == 2
    assert len(vegetables['products']) == 1
    assert kale['products'][0]['tags'] == ['local']


def test_sql_backend_profile_update(sql_app):
    client = sql_app.test_client()
    token = client.post('/api/auth/register', json=register_payload()).get_json()['token']

    response = client.put('/api/users/me', json={'fullName': 'Jane Q. Doe'}, headers=auth_header(token))

    assert response.status_code == 200
    assert client.get('/api/users').get_json()[0]['fullName'] == 'Jane Q. Doe'


def test_sql_and_memory_search_fold_non_ascii_alike(sql_app, client):
    sql_client = sql_app.test_client()
    for c in (sql_client, client):
        token = c.post('/api/auth/register', json=register_payload()).get_json()['token']
        for title in ('Ñame tubers', 'Crème fraîche', 'Okra'):
            c.post('/api/products', json={'title': title, 'pricePerKg': 40, 'stock': 2}, headers=auth_header(token))

    for c in (sql_client, client):
        assert [p['title'] for p in c.get('/api/products', query_string={'search': 'ñAME'}).get_json()['products']] == ['Ñame tubers']
        assert [p['title'] for p in c.get('/api/products', query_string={'search': 'CRÈME'}).get_json()['products']] == ['Crème fraîche']
