from flask_restx import Namespace, Resource, fields

from ..services.product_service import CATEGORIES

category_ns = Namespace('categories', description='Product categories', path='/categories')

# Swagger model
category_model = category_ns.model('Category', {
    'id': fields.String(description='Category key used on products'),
    'name': fields.String(description='Display name'),
    'icon': fields.String(description='Icon glyph'),
})


@category_ns.route('')
class CategoryList(Resource):
    @category_ns.marshal_list_with(category_model)
    def get(self):
        """Get all categories (public)"""
        return CATEGORIES, 200
