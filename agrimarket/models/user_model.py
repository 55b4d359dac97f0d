import enum
from agrimarket import db


class UserType(enum.Enum):
    BUYER = 'buyer'
    SELLER = 'seller'
    BOTH = 'both'


DEFAULT_AVATAR = '👤'


class User(db.Model):
    __tablename__ = 'user'
    id = db.Column(db.String(32), primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False)
    password = db.Column(db.String(200), nullable=False)
    full_name = db.Column(db.String(120), nullable=False)
    age = db.Column(db.Integer, nullable=False)
    region = db.Column(db.String(120), nullable=False)
    user_type = db.Column(db.Enum(UserType), nullable=False, default=UserType.BUYER)
    avatar = db.Column(db.String(16), nullable=False, default=DEFAULT_AVATAR)
    created_at = db.Column(db.DateTime, nullable=False)
    updated_at = db.Column(db.DateTime, nullable=False)
    products_for_sale = db.relationship('Product', backref='seller', lazy=True, foreign_keys='Product.seller_id')

    @property
    def is_seller(self):
        return self.user_type in (UserType.SELLER, UserType.BOTH)

    @property
    def is_buyer(self):
        return self.user_type in (UserType.BUYER, UserType.BOTH)

    def __repr__(self):
        return f'<User {self.username} ({self.user_type})>'
