from .user_model import User, UserType, DEFAULT_AVATAR
from .product_model import Product

__all__ = ['User', 'UserType', 'DEFAULT_AVATAR', 'Product']
