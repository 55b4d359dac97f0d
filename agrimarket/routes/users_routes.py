# agrimarket/routes/users_routes.py
from flask_restx import Namespace, Resource, fields
from flask import g

from agrimarket.auth_middleware import token_required
from agrimarket.repositories import get_user_repository
from agrimarket.services import auth_service
from agrimarket.utils.validators import get_json_body

users_ns = Namespace('users', description='Operations related to users', path='/users')

# Swagger models
user_model = users_ns.model('PublicUser', {
    'id': fields.String(description='User ID'),
    'username': fields.String(description='Username'),
    'fullName': fields.String(description='Full name'),
    'userType': fields.String(description='buyer, seller or both'),
    'age': fields.Integer(description='Age'),
    'region': fields.String(description='Region'),
    'avatar': fields.String(description='Avatar glyph'),
    'createdAt': fields.String(description='Creation time (ISO format)'),
    'updatedAt': fields.String(description='Last update time (ISO format)'),
})

profile_update_model = users_ns.model('ProfileUpdate', {
    'fullName': fields.String(min_length=2),
    'age': fields.Integer(min=18, max=100),
    'region': fields.String(min_length=2),
    'userType': fields.String(enum=auth_service.USER_TYPES),
    'avatar': fields.String(),
})


@users_ns.route('')
class UserList(Resource):
    @users_ns.marshal_list_with(user_model)
    def get(self):
        """Get all users (public profiles)"""
        users = get_user_repository().list()
        return [auth_service.format_user(u) for u in users], 200


@users_ns.route('/me')
class CurrentUser(Resource):
    @token_required
    @users_ns.doc(security='BearerAuth')
    @users_ns.marshal_with(user_model)
    def get(self):
        """Get the authenticated user's profile"""
        user = auth_service.get_user(get_user_repository(), g.user_id)
        return auth_service.format_user(user), 200

    @token_required
    @users_ns.expect(profile_update_model)
    @users_ns.doc(security='BearerAuth')
    def put(self):
        """Update the authenticated user's profile"""
        return auth_service.update_profile(get_user_repository(), g.user_id, get_json_body()), 200
