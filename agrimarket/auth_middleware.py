from functools import wraps
from flask import request, g, current_app

from .errors import AuthError, RateLimitError
from .services.auth_service import verify_token
from .utils.rate_limit import FixedWindowRateLimiter

AUTH_PREFIX = '/api/auth/'
API_PREFIX = '/api/'


def get_bearer_token():
    auth_header = request.headers.get('Authorization', '')
    parts = auth_header.split(' ')
    if len(parts) == 2 and parts[0] == 'Bearer' and parts[1]:
        return parts[1]
    return None


def token_required(f):
    """Reject the request unless it carries a valid bearer token; sets ``g.user_id``."""
    @wraps(f)
    def decorated(*args, **kwargs):
        g.user_id = verify_token(get_bearer_token())
        return f(*args, **kwargs)
    return decorated


def setup_rate_limits(app):
    window = app.config['RATE_LIMIT_WINDOW']
    limiters = {
        'auth': FixedWindowRateLimiter(app.config['AUTH_RATE_LIMIT'], window),
        'api': FixedWindowRateLimiter(app.config['API_RATE_LIMIT'], window),
    }

    @app.before_request
    def enforce_rate_limits():
        if not current_app.config['RATE_LIMIT_ENABLED'] or request.method == 'OPTIONS':
            return None
        path = request.path
        client = request.remote_addr or 'unknown'
        if path.startswith(AUTH_PREFIX) and not limiters['auth'].hit(client):
            raise RateLimitError('Too many authentication attempts')
        if path.startswith(API_PREFIX) and not limiters['api'].hit(client):
            raise RateLimitError('Too many requests')
        return None
