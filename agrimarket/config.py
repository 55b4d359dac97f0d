import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _env_list(name, default):
    value = os.getenv(name)
    if not value:
        return default
    return [item.strip() for item in value.split(',') if item.strip()]


class Config:
    # General
    SECRET_KEY = os.getenv('SECRET_KEY', 'agrimarket-secret-key')
    ENVIRONMENT = os.getenv('ENVIRONMENT', 'development')
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    MAX_CONTENT_LENGTH = 10 * 1024 * 1024
    FRONTEND_FOLDER = os.getenv('FRONTEND_FOLDER', os.path.join(os.getcwd(), 'frontend'))

    # Storage: 'memory' or 'sql'
    STORAGE_BACKEND = os.getenv('STORAGE_BACKEND', 'memory')
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', 'sqlite:///agrimarket.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SEED_DEMO_DATA = _env_bool('SEED_DEMO_DATA', True)

    # JWT configuration
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', 'agrimarket-jwt-secret')
    JWT_EXPIRES_DAYS = int(os.getenv('JWT_EXPIRES_DAYS', '7'))
    BCRYPT_LOG_ROUNDS = int(os.getenv('BCRYPT_LOG_ROUNDS', '12'))
    # sha256 pre-hash so passwords over bcrypt's 72 byte limit still work
    BCRYPT_HANDLE_LONG_PASSWORDS = True

    # CORS configuration
    CORS_ORIGINS = _env_list('ALLOWED_ORIGINS', ['http://localhost:3000'])
    CORS_SUPPORTS_CREDENTIALS = True
    CORS_ALLOW_HEADERS = ["Content-Type", "Authorization", "X-Requested-With"]
    CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH"]

    # Rate limiting (fixed window, per client address)
    RATE_LIMIT_ENABLED = _env_bool('RATE_LIMIT_ENABLED', True)
    RATE_LIMIT_WINDOW = int(os.getenv('RATE_LIMIT_WINDOW', str(15 * 60)))
    AUTH_RATE_LIMIT = int(os.getenv('AUTH_RATE_LIMIT', '10'))
    API_RATE_LIMIT = int(os.getenv('API_RATE_LIMIT', '100'))

    # External AI providers
    PLANT_ID_API_KEY = os.getenv('PLANT_ID_API_KEY')
    PLANT_ID_URL = os.getenv('PLANT_ID_URL', 'https://api.plant.id/v2/identify')
    CROP_HEALTH_API_KEY = os.getenv('CROP_HEALTH_API_KEY')
    CROP_HEALTH_URL = os.getenv('CROP_HEALTH_URL', 'https://api.crop.health/v1/analyze')
    OPENAI_API_KEY = os.getenv('OPENAI_API_KEY')
    OPENAI_MODEL = os.getenv('OPENAI_MODEL', 'gpt-4o-mini')
    AI_TIMEOUT = float(os.getenv('AI_TIMEOUT', '10'))
    AI_MAX_WORKERS = int(os.getenv('AI_MAX_WORKERS', '4'))

    # Flask-RESTX: error bodies are built by our own handlers only
    ERROR_INCLUDE_MESSAGE = False
    ERROR_404_HELP = False
    RESTX_ERROR_404_HELP = False
    RESTX_MASK_SWAGGER = False


class TestingConfig(Config):
    TESTING = True
    ENVIRONMENT = 'test'
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SEED_DEMO_DATA = False
    BCRYPT_LOG_ROUNDS = 4
    RATE_LIMIT_ENABLED = False
    JWT_SECRET_KEY = 'test-jwt-secret'
    PLANT_ID_API_KEY = None
    CROP_HEALTH_API_KEY = None
    OPENAI_API_KEY = None
    AI_TIMEOUT = 2


class ProductionConfig(Config):
    ENVIRONMENT = 'production'
    SEED_DEMO_DATA = _env_bool('SEED_DEMO_DATA', False)


def config_for_environment(environment=None):
    environment = environment or Config.ENVIRONMENT
    return ProductionConfig if environment == 'production' else Config
