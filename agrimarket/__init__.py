import datetime
import logging

from flask import Flask, Blueprint, request
from flask_sqlalchemy import SQLAlchemy
from flask_jwt_extended import JWTManager
from flask_cors import CORS
from flask_bcrypt import Bcrypt
from flask_migrate import Migrate
from flask_restx import Api
from agrimarket.config import Config

__version__ = '1.0.0'
SERVICE_NAME = 'AgriMarket'

migrate = Migrate()
db = SQLAlchemy()
jwt = JWTManager()
bcrypt = Bcrypt()

logger = logging.getLogger(__name__)

AVAILABLE_ENDPOINTS = [
    'GET /',
    'GET /health',
    'POST /api/auth/register',
    'POST /api/auth/login',
    'GET /api/auth/verify',
    'GET /api/products',
    'POST /api/products',
    'GET /api/products/<id>',
    'GET /api/users',
    'PUT /api/users/me',
    'GET /api/stats',
    'GET /api/categories',
    'POST /api/ai/detect-disease',
    'POST /api/ai/farming-advice',
]


def create_api():
    return Api(
        title='AgriMarket API',
        version=__version__,
        description='Farming marketplace with plant disease detection and farming advice',
        doc='/docs',
        security=[{'BearerAuth': []}],
        authorizations={
            'BearerAuth': {
                'type': 'apiKey',
                'in': 'header',
                'name': 'Authorization',
                'description': 'Enter your token as "Bearer <token>"'
            }
        }
    )


def create_app(config_class=Config, users=None, products=None, ai_proxy=None):
    app = Flask(__name__, static_folder=config_class.FRONTEND_FOLDER, static_url_path='/static')
    app.config.from_object(config_class)
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    bcrypt.init_app(app)

    # Enable CORS
    CORS(app, resources={r"/*": {"origins": app.config.get('CORS_ORIGINS', '*')}},
         supports_credentials=app.config.get('CORS_SUPPORTS_CREDENTIALS', True),
         allow_headers=app.config.get('CORS_ALLOW_HEADERS', ["Content-Type", "Authorization"]),
         methods=app.config.get('CORS_METHODS', ["GET", "POST", "PUT", "DELETE", "PATCH"]))

    from . import models  # noqa: F401  (register tables before create_all)
    from .repositories import init_repositories
    from .services.ai_service import AIProxy
    users, products = init_repositories(app, users, products)
    app.extensions['ai_proxy'] = ai_proxy if ai_proxy is not None else AIProxy.from_config(app.config)

    # Rate limiting runs before any handler
    from .auth_middleware import setup_rate_limits
    setup_rate_limits(app)

    # Register API namespaces under /api
    from .routes.auth_routes import auth_ns
    from .routes.product_routes import product_ns
    from .routes.users_routes import users_ns
    from .routes.ai_routes import ai_ns
    from .routes.dashboard_routes import stats_ns
    from .routes.category_routes import category_ns

    api = create_api()
    blueprint = Blueprint('api', __name__, url_prefix='/api')
    api.init_app(blueprint)
    api.add_namespace(auth_ns)
    api.add_namespace(product_ns)
    api.add_namespace(users_ns)
    api.add_namespace(ai_ns)
    api.add_namespace(stats_ns)
    api.add_namespace(category_ns)
    app.register_blueprint(blueprint)

    from .errors import register_error_handlers
    register_error_handlers(app, api)

    @app.route('/health')
    def health():
        return {
            'status': 'OK',
            'timestamp': datetime.datetime.now(datetime.timezone.utc).isoformat(),
            'environment': app.config['ENVIRONMENT'],
            'version': __version__,
            'service': SERVICE_NAME,
            'counts': {
                'users': users.count(),
                'products': products.count(),
            },
        }

    @app.route('/')
    def index():
        return {
            'message': f'{SERVICE_NAME} backend API is running',
            'version': __version__,
            'description': 'AI-powered farming marketplace',
            'docs': '/api/docs',
            'endpoints': AVAILABLE_ENDPOINTS,
        }

    @app.errorhandler(404)
    def not_found(error):
        return {
            'error': 'Endpoint not found',
            'path': request.path,
            'availableEndpoints': AVAILABLE_ENDPOINTS,
        }, 404

    with app.app_context():
        if app.config['STORAGE_BACKEND'] == 'sql':
            db.create_all()  # Create all tables
        if app.config['SEED_DEMO_DATA']:
            seed_demo_data(users, products)

    logger.info(f"{SERVICE_NAME} ready: environment={app.config['ENVIRONMENT']}, "
                f"storage={app.config['STORAGE_BACKEND']}, "
                f"plant.id={'on' if app.config['PLANT_ID_API_KEY'] else 'off'}, "
                f"openai={'on' if app.config['OPENAI_API_KEY'] else 'off'}")
    return app


def seed_demo_data(users, products):
    from .services.auth_service import seed_demo_users
    from .services.product_service import seed_sample_products
    seed_demo_users(users)
    seed_sample_products(products, users)
