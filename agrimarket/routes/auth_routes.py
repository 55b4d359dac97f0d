from flask_restx import Namespace, Resource, fields
from flask import g

from agrimarket.auth_middleware import token_required
from agrimarket.repositories import get_user_repository
from agrimarket.services import auth_service
from agrimarket.utils.validators import get_json_body

auth_ns = Namespace('auth', description='Registration, login and token checks', path='/auth')

register_model = auth_ns.model('Register', {
    'username': fields.String(required=True, min_length=3, description='Unique username'),
    'password': fields.String(required=True, min_length=6, description='Password'),
    'fullName': fields.String(required=True, min_length=2, description='Full name'),
    'age': fields.Integer(required=True, min=18, max=100, description='Age'),
    'region': fields.String(required=True, min_length=2, description='Region or province'),
    'userType': fields.String(required=True, enum=auth_service.USER_TYPES, description='Account type'),
    'avatar': fields.String(description='Avatar glyph'),
})

login_model = auth_ns.model('Login', {
    'username': fields.String(required=True, description='Username'),
    'password': fields.String(required=True, description='Password'),
})


@auth_ns.route('/register')
class Register(Resource):
    @auth_ns.expect(register_model)
    @auth_ns.response(201, 'User registered')
    @auth_ns.response(400, 'Validation failed')
    @auth_ns.response(409, 'Username already exists')
    def post(self):
        """Register a new user"""
        return auth_service.register(get_user_repository(), get_json_body()), 201


@auth_ns.route('/login')
class Login(Resource):
    @auth_ns.expect(login_model)
    @auth_ns.response(401, 'Invalid username or password')
    def post(self):
        """Log in and receive a bearer token"""
        return auth_service.login(get_user_repository(), get_json_body()), 200


@auth_ns.route('/verify')
class VerifyToken(Resource):
    @token_required
    @auth_ns.doc(security='BearerAuth')
    def get(self):
        """Check that the bearer token is valid"""
        user = auth_service.get_user(get_user_repository(), g.user_id)
        return {
            'message': 'Token is valid',
            'user': auth_service.format_user(user)
        }, 200
