"""Bearer-token authentication.

Tokens are HS256 JWTs carrying the user id. ``token_required`` rejects a
request before the view runs, so no write happens for an anonymous caller.
"""

from datetime import datetime, timedelta, timezone
from functools import wraps
from flask import request, current_app
import jwt
from translations_api.errors import UnauthorizedError


def _get_secret_key():
    """Get JWT secret from Flask app config (single source of truth)."""
    return current_app.config['JWT_SECRET_KEY']


def create_access_token(user_id):
    """Issue a signed token for a user."""
    expires_in = current_app.config['JWT_ACCESS_TOKEN_EXPIRES']
    payload = {
        'user_id': user_id,
        'iat': datetime.now(timezone.utc),
        'exp': datetime.now(timezone.utc) + timedelta(seconds=expires_in)
    }
    return jwt.encode(payload, _get_secret_key(), algorithm='HS256')


def token_required(f):
    """
    Decorator to require a valid bearer token.
    
    Extracts user_id from the token and passes it as the first argument
    to the decorated function.
    
    Usage:
        @bp.route('/protected')
        @token_required
        def protected_route(current_user_id):
            return jsonify({'user_id': current_user_id})
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        from translations_api import db
        from translations_api.models import User
        
        auth_header = request.headers.get('Authorization')
        
        if not auth_header or not auth_header.startswith('Bearer '):
            raise UnauthorizedError('Token is missing')
        
        try:
            token = auth_header.split(' ', 1)[1].strip()
            payload = jwt.decode(token, _get_secret_key(), algorithms=['HS256'])
            current_user_id = payload['user_id']
        except jwt.ExpiredSignatureError:
            raise UnauthorizedError('Token has expired')
        except (jwt.InvalidTokenError, KeyError):
            raise UnauthorizedError('Token is invalid')
        
        if db.session.get(User, current_user_id) is None:
            raise UnauthorizedError('User not found')
        
        return f(current_user_id, *args, **kwargs)
    return decorated
