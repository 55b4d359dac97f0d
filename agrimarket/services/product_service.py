# Product service module for catalog business logic
import logging
import math

from ..errors import AuthError, NotFoundError
from ..models import Product
from ..utils.validators import (
    check_min_length, check_float_min, check_int_range, raise_if_errors, to_int,
)
from .auth_service import new_id, utcnow

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
DEFAULT_CATEGORY = 'general'

CATEGORIES = [
    {'id': 'vegetables', 'name': 'Vegetables', 'icon': '🥕'},
    {'id': 'fruits', 'name': 'Fruits', 'icon': '🍎'},
    {'id': 'grains', 'name': 'Grains', 'icon': '🌾'},
    {'id': 'dairy', 'name': 'Dairy', 'icon': '🥛'},
    {'id': 'other', 'name': 'Other', 'icon': '📦'},
]

SAMPLE_PRODUCTS = [
    {
        'title': 'Fresh Organic Carrots',
        'description': 'Freshly harvested organic carrots from Benguet highlands',
        'pricePerKg': 85.50,
        'category': 'vegetables',
        'stock': 50,
        'location': {'lat': 16.4023, 'lng': 120.5960},
        'tags': ['organic', 'fresh', 'vegetables'],
        'rating': 4.5,
        'reviewCount': 24,
    },
    {
        'title': 'Sweet Guimaras Mangoes',
        'description': 'Premium sweet mangoes from Guimaras Island',
        'pricePerKg': 180.75,
        'category': 'fruits',
        'stock': 30,
        'location': {'lat': 10.5921, 'lng': 122.6321},
        'tags': ['premium', 'sweet', 'fruits'],
        'rating': 4.8,
        'reviewCount': 36,
    },
]


def format_product(product):
    return {
        'id': product.id,
        'sellerId': product.seller_id,
        'title': product.title,
        'description': product.description,
        'pricePerKg': product.price_per_kg,
        'category': product.category,
        'stock': product.stock,
        'location': product.location or {'lat': 0, 'lng': 0},
        'seller': {
            'fullName': product.seller_full_name,
            'username': product.seller_username,
            'region': product.seller_region,
            'avatar': product.seller_avatar,
        },
        'images': product.images or [],
        'tags': product.tags or [],
        'rating': product.rating,
        'reviewCount': product.review_count,
        'createdAt': product.created_at.isoformat() if product.created_at else None,
        'updatedAt': product.updated_at.isoformat() if product.updated_at else None,
    }


def parse_pagination(page, limit):
    errors = []
    page_number = 1 if page in (None, '') else to_int(page)
    if page_number is None or page_number < 1:
        errors.append({'field': 'page', 'message': 'page must be an integer >= 1'})
    page_size = DEFAULT_PAGE_SIZE if limit in (None, '') else to_int(limit)
    if page_size is None or not 1 <= page_size <= MAX_PAGE_SIZE:
        errors.append({'field': 'limit', 'message': f'limit must be an integer between 1 and {MAX_PAGE_SIZE}'})
    raise_if_errors(errors)
    return page_number, page_size


def list_products(products, category=None, search=None, page=1, limit=DEFAULT_PAGE_SIZE):
    page, limit = parse_pagination(page, limit)
    matches = products.find(category=category or None, search=search or None)
    total = len(matches)
    start = (page - 1) * limit
    return {
        'products': [format_product(p) for p in matches[start:start + limit]],
        'total': total,
        'page': page,
        'totalPages': math.ceil(total / limit),
    }


def get_product(products, product_id):
    product = products.get(product_id)
    if not product:
        raise NotFoundError('Product not found')
    return format_product(product)


def validate_product(data):
    errors = []
    title = check_min_length(data, 'title', 3, errors)
    price = check_float_min(data, 'pricePerKg', errors, minimum=0)
    stock = check_int_range(data, 'stock', errors, minimum=0)

    description = data.get('description') or ''
    if not isinstance(description, str):
        errors.append({'field': 'description', 'message': 'description must be a string'})
    category = data.get('category') or DEFAULT_CATEGORY
    if not isinstance(category, str):
        errors.append({'field': 'category', 'message': 'category must be a string'})
    tags = data.get('tags') or []
    if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
        errors.append({'field': 'tags', 'message': 'tags must be a list of strings'})
    location = data.get('location') or {'lat': 0, 'lng': 0}
    if not isinstance(location, dict):
        errors.append({'field': 'location', 'message': 'location must be an object with lat and lng'})
    raise_if_errors(errors)

    return {
        'title': title,
        'description': description,
        'price_per_kg': price,
        'stock': stock,
        'category': category,
        'tags': tags,
        'location': location,
    }


def build_product(seller, fields, rating=0, review_count=0):
    now = utcnow()
    return Product(
        id=new_id(),
        seller_id=seller.id,
        title=fields['title'],
        description=fields['description'],
        price_per_kg=fields['price_per_kg'],
        stock=fields['stock'],
        category=fields['category'],
        seller_full_name=seller.full_name,
        seller_username=seller.username,
        seller_region=seller.region,
        seller_avatar=seller.avatar,
        location=fields['location'],
        images=[],
        tags=fields['tags'],
        rating=rating,
        review_count=review_count,
        created_at=now,
        updated_at=now,
    )


def create_product(products, seller, data):
    """List a new product for ``seller``, the authenticated caller."""
    if seller is None:
        raise AuthError('User not found')
    fields = validate_product(data)
    product = products.insert(build_product(seller, fields))
    logger.info(f"Product created successfully: ID {product.id} by {seller.username}")
    return format_product(product)


def seed_sample_products(products, users):
    seller = users.find_by_username('farmer')
    if seller is None or products.count():
        return
    for sample in SAMPLE_PRODUCTS:
        fields = validate_product(sample)
        products.insert(build_product(seller, fields, sample['rating'], sample['reviewCount']))
    logger.info(f"Seeded {len(SAMPLE_PRODUCTS)} sample products")
