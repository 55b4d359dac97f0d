# Auth service module: registration, login and bearer tokens
import datetime
import logging
import uuid

from flask import current_app
from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt import PyJWTError

from .. import bcrypt
from ..errors import AuthError, ConflictError, NotFoundError
from ..models import User, UserType, DEFAULT_AVATAR
from ..utils.validators import (
    check_min_length, check_not_empty, check_int_range, check_choice, raise_if_errors,
)

logger = logging.getLogger(__name__)

USER_TYPES = [t.value for t in UserType]
INVALID_CREDENTIALS = 'Invalid username or password'

DEMO_USERS = [
    {'id': '1', 'username': 'demo', 'password': 'demo123', 'fullName': 'Demo User',
     'userType': 'both', 'age': 30, 'region': 'Metro Manila', 'avatar': '👨‍💼'},
    {'id': '2', 'username': 'farmer', 'password': 'farm123', 'fullName': 'Juan Dela Cruz',
     'userType': 'seller', 'age': 45, 'region': 'Benguet', 'avatar': '👨‍🌾'},
    {'id': '3', 'username': 'buyer', 'password': 'buy123', 'fullName': 'Maria Santos',
     'userType': 'buyer', 'age': 28, 'region': 'Quezon City', 'avatar': '👩‍💼'},
]


def utcnow():
    return datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)


def new_id():
    return uuid.uuid4().hex


def format_user(user):
    """Public profile: everything except the password hash."""
    return {
        'id': user.id,
        'username': user.username,
        'fullName': user.full_name,
        'userType': user.user_type.value,
        'age': user.age,
        'region': user.region,
        'avatar': user.avatar,
        'createdAt': user.created_at.isoformat() if user.created_at else None,
        'updatedAt': user.updated_at.isoformat() if user.updated_at else None,
    }


def hash_password(password):
    return bcrypt.generate_password_hash(password).decode('utf-8')


def issue_token(user_id):
    expires = datetime.timedelta(days=current_app.config['JWT_EXPIRES_DAYS'])
    return create_access_token(identity=str(user_id), expires_delta=expires)


def verify_token(token):
    """Return the user id embedded in ``token``.

    Does not check that the user still exists.
    """
    if not token:
        raise AuthError('Access token required')
    try:
        data = decode_token(token)
    except (PyJWTError, JWTExtendedException) as e:
        logger.info(f"Rejected token: {e}")
        raise AuthError('Invalid or expired token', status_code=403)
    user_id = data.get('sub')
    if not user_id:
        raise AuthError('Invalid or expired token', status_code=403)
    return user_id


def validate_registration(data):
    errors = []
    username = check_min_length(data, 'username', 3, errors)
    password = check_min_length(data, 'password', 6, errors)
    full_name = check_min_length(data, 'fullName', 2, errors)
    age = check_int_range(data, 'age', errors, minimum=18, maximum=100)
    region = check_min_length(data, 'region', 2, errors)
    user_type = check_choice(data, 'userType', USER_TYPES, errors)
    avatar = data.get('avatar') or DEFAULT_AVATAR
    if not isinstance(avatar, str):
        errors.append({'field': 'avatar', 'message': 'avatar must be a string'})
    raise_if_errors(errors)
    return {
        'username': username,
        'password': password,
        'full_name': full_name,
        'age': age,
        'region': region,
        'user_type': UserType(user_type),
        'avatar': avatar,
    }


def create_user(users, fields, user_id=None):
    now = utcnow()
    user = User(
        id=user_id or new_id(),
        username=fields['username'],
        password=hash_password(fields['password']),
        full_name=fields['full_name'],
        age=fields['age'],
        region=fields['region'],
        user_type=fields['user_type'],
        avatar=fields['avatar'],
        created_at=now,
        updated_at=now,
    )
    if not users.insert_if_absent(user):
        raise ConflictError('Username already exists')
    return user


def register(users, data):
    fields = validate_registration(data)
    user = create_user(users, fields)
    logger.info(f"User registered: {user.username} ({user.id})")
    return {
        'message': 'User registered successfully',
        'token': issue_token(user.id),
        'user': format_user(user),
    }


def login(users, data):
    errors = []
    username = check_not_empty(data, 'username', errors)
    password = check_not_empty(data, 'password', errors)
    raise_if_errors(errors)

    user = users.find_by_username(username)
    if not user or not bcrypt.check_password_hash(user.password, password):
        logger.info(f"Failed login for username: {username}")
        raise AuthError(INVALID_CREDENTIALS)

    return {
        'message': 'Login successful',
        'token': issue_token(user.id),
        'user': format_user(user),
    }


def get_user(users, user_id):
    user = users.get(user_id)
    if not user:
        raise NotFoundError('User not found')
    return user


def update_profile(users, user_id, data):
    user = get_user(users, user_id)
    errors = []
    full_name = check_min_length(data, 'fullName', 2, errors, required=False)
    age = check_int_range(data, 'age', errors, minimum=18, maximum=100, required=False)
    region = check_min_length(data, 'region', 2, errors, required=False)
    user_type = check_choice(data, 'userType', USER_TYPES, errors, required=False)
    avatar = data.get('avatar')
    if avatar is not None and (not isinstance(avatar, str) or not avatar):
        errors.append({'field': 'avatar', 'message': 'avatar must be a non-empty string'})
    raise_if_errors(errors)

    if full_name is not None:
        user.full_name = full_name
    if age is not None:
        user.age = age
    if region is not None:
        user.region = region
    if user_type is not None:
        user.user_type = UserType(user_type)
    if avatar is not None:
        user.avatar = avatar
    user.updated_at = utcnow()
    users.update(user)
    logger.info(f"Profile updated: {user.username}")
    return {'message': 'Profile updated successfully', 'user': format_user(user)}


def seed_demo_users(users):
    for demo in DEMO_USERS:
        if users.find_by_username(demo['username']):
            continue
        fields = validate_registration(demo)
        create_user(users, fields, user_id=demo['id'])
    logger.info(f"Demo users ready: {', '.join(d['username'] for d in DEMO_USERS)}")
