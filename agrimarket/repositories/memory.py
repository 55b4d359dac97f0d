import threading

from .base import UserRepository, ProductRepository, matches_search


class MemoryUserRepository(UserRepository):
    def __init__(self):
        self._lock = threading.Lock()
        self._by_id = {}
        self._by_username = {}

    def get(self, user_id):
        return self._by_id.get(user_id)

    def find_by_username(self, username):
        return self._by_username.get(username)

    def insert_if_absent(self, user):
        with self._lock:
            if user.username in self._by_username or user.id in self._by_id:
                return False
            self._by_id[user.id] = user
            self._by_username[user.username] = user
            return True

    def update(self, user):
        with self._lock:
            if user.id not in self._by_id:
                raise KeyError(user.id)
            self._by_id[user.id] = user
            self._by_username[user.username] = user
        return user

    def list(self):
        with self._lock:
            return list(self._by_id.values())

    def count(self):
        return len(self._by_id)


class MemoryProductRepository(ProductRepository):
    def __init__(self):
        self._lock = threading.Lock()
        self._by_id = {}

    def get(self, product_id):
        return self._by_id.get(product_id)

    def find(self, category=None, search=None):
        products = self.list()
        if category:
            products = [p for p in products if p.category == category]
        if search:
            products = [p for p in products if matches_search(p, search)]
        return products

    def insert(self, product):
        with self._lock:
            if product.id in self._by_id:
                raise KeyError(f'Duplicate product id {product.id}')
            self._by_id[product.id] = product
        return product

    def update(self, product):
        with self._lock:
            if product.id not in self._by_id:
                raise KeyError(product.id)
            self._by_id[product.id] = product
        return product

    def list(self):
        with self._lock:
            return list(self._by_id.values())

    def count(self):
        return len(self._by_id)
