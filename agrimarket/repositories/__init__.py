from flask import current_app

from .base import UserRepository, ProductRepository
from .memory import MemoryUserRepository, MemoryProductRepository

EXTENSION_KEY = 'repositories'


def build_repositories(backend):
    if backend == 'memory':
        return MemoryUserRepository(), MemoryProductRepository()
    if backend == 'sql':
        from .sql import SqlUserRepository, SqlProductRepository
        return SqlUserRepository(), SqlProductRepository()
    raise ValueError(f"Unknown STORAGE_BACKEND: {backend}")


def init_repositories(app, users=None, products=None):
    """Attach the user/product repositories to ``app``.

    Explicit repositories win over the configured ``STORAGE_BACKEND``.
    """
    if users is None or products is None:
        default_users, default_products = build_repositories(app.config['STORAGE_BACKEND'])
        users = users if users is not None else default_users
        products = products if products is not None else default_products
    app.extensions[EXTENSION_KEY] = {'users': users, 'products': products}
    return users, products


def get_user_repository():
    return current_app.extensions[EXTENSION_KEY]['users']


def get_product_repository():
    return current_app.extensions[EXTENSION_KEY]['products']


__all__ = [
    'UserRepository', 'ProductRepository',
    'MemoryUserRepository', 'MemoryProductRepository',
    'init_repositories', 'get_user_repository', 'get_product_repository',
]
