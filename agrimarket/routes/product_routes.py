from flask_restx import Namespace, Resource, fields, reqparse
from flask import g
import logging

from agrimarket.auth_middleware import token_required
from agrimarket.repositories import get_product_repository, get_user_repository
from agrimarket.services import product_service
from agrimarket.utils.validators import get_json_body

product_ns = Namespace('products', description='Operations related to products', path='/products')

logger = logging.getLogger(__name__)

# Swagger models
seller_model = product_ns.model('SellerSnapshot', {
    'fullName': fields.String(),
    'username': fields.String(),
    'region': fields.String(),
    'avatar': fields.String(),
})

location_model = product_ns.model('Location', {
    'lat': fields.Float(),
    'lng': fields.Float(),
})

product_model = product_ns.model('Product', {
    'id': fields.String(readonly=True),
    'sellerId': fields.String(readonly=True),
    'title': fields.String(required=True),
    'description': fields.String(),
    'pricePerKg': fields.Float(required=True),
    'category': fields.String(),
    'stock': fields.Integer(required=True),
    'location': fields.Nested(location_model),
    'seller': fields.Nested(seller_model, readonly=True),
    'images': fields.List(fields.String),
    'tags': fields.List(fields.String),
    'rating': fields.Float(readonly=True),
    'reviewCount': fields.Integer(readonly=True),
    'createdAt': fields.String(readonly=True),
    'updatedAt': fields.String(readonly=True),
})

product_input_model = product_ns.model('ProductInput', {
    'title': fields.String(required=True, min_length=3),
    'description': fields.String(),
    'pricePerKg': fields.Float(required=True, min=0),
    'category': fields.String(default='general'),
    'stock': fields.Integer(required=True, min=0),
    'tags': fields.List(fields.String),
    'location': fields.Nested(location_model),
})

product_page_model = product_ns.model('ProductPage', {
    'products': fields.List(fields.Nested(product_model)),
    'total': fields.Integer(),
    'page': fields.Integer(),
    'totalPages': fields.Integer(),
})

# Query string parser
list_parser = reqparse.RequestParser()
list_parser.add_argument('category', type=str, location='args', help='Exact category')
list_parser.add_argument('search', type=str, location='args', help='Substring of title or description')
list_parser.add_argument('page', type=str, location='args', help='Page number, starting at 1')
list_parser.add_argument('limit', type=str, location='args', help='Page size (max 100)')


@product_ns.route('')
class ProductList(Resource):
    @product_ns.doc('list_products')
    @product_ns.expect(list_parser)
    @product_ns.marshal_with(product_page_model)
    def get(self):
        """List products with optional category/search filters and pagination"""
        args = list_parser.parse_args()
        result = product_service.list_products(
            get_product_repository(),
            category=args['category'],
            search=args['search'],
            page=args['page'],
            limit=args['limit'],
        )
        logger.debug(f"Listed {len(result['products'])} of {result['total']} products")
        return result, 200

    @token_required
    @product_ns.expect(product_input_model)
    @product_ns.doc('create_product', security='BearerAuth')
    @product_ns.marshal_with(product_model, code=201)
    def post(self):
        """Create a new product listing for the authenticated seller"""
        seller = get_user_repository().get(g.user_id)
        product = product_service.create_product(get_product_repository(), seller, get_json_body())
        return product, 201


@product_ns.route('/<string:product_id>')
class ProductResource(Resource):
    @product_ns.doc('get_product')
    @product_ns.marshal_with(product_model)
    def get(self, product_id):
        """Get a product by ID"""
        return product_service.get_product(get_product_repository(), product_id), 200
