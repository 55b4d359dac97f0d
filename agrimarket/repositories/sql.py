import logging

from sqlalchemy.exc import IntegrityError

from agrimarket import db
from agrimarket.models import User, Product
from .base import UserRepository, ProductRepository, matches_search

logger = logging.getLogger(__name__)


class SqlUserRepository(UserRepository):
    def get(self, user_id):
        return db.session.get(User, user_id)

    def find_by_username(self, username):
        return User.query.filter_by(username=username).first()

    def insert_if_absent(self, user):
        # The unique constraint on username makes the insert itself the check
        try:
            db.session.add(user)
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            logger.info(f"Username already taken: {user.username}")
            return False
        return True

    def update(self, user):
        try:
            db.session.add(user)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        return user

    def list(self):
        return User.query.order_by(User.created_at, User.id).all()

    def count(self):
        return User.query.count()


class SqlProductRepository(ProductRepository):
    def get(self, product_id):
        return db.session.get(Product, product_id)

    def find(self, category=None, search=None):
        query = Product.query
        if category:
            query = query.filter(Product.category == category)
        products = query.order_by(Product.created_at, Product.id).all()
        if search:
            # SQLite's LIKE only folds ASCII, so text matching stays in Python
            products = [p for p in products if matches_search(p, search)]
        return products

    def insert(self, product):
        try:
            db.session.add(product)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        return product

    def update(self, product):
        return self.insert(product)

    def list(self):
        return Product.query.order_by(Product.created_at, Product.id).all()

    def count(self):
        return Product.query.count()
