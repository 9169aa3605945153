"""Authentication routes: login and current user."""

from flask import Blueprint, request, jsonify
from translations_api import db, limiter
from translations_api.errors import ValidationError, UnauthorizedError
from translations_api.models import User
from translations_api.utils import token_required, create_access_token
import logging

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/login', methods=['POST'])
@limiter.limit("10 per minute")
def login():
    """Authenticate user and return a bearer token."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}

    errors = {}
    for field in ('email', 'password'):
        if not isinstance(data.get(field), str) or not data[field].strip():
            errors[field] = [f'The {field} field is required.']
    if errors:
        raise ValidationError(errors)
    
    email = data['email'].strip().lower()
    user = User.query.filter_by(email=email).first()
    
    if not user or not user.check_password(data['password']):
        logger.info(f"Failed login attempt for {email}")
        raise UnauthorizedError('The provided credentials are incorrect.')
    
    return jsonify({
        'token': create_access_token(user.id),
        'message': 'Logged in successfully!'
    }), 200


@auth_bp.route('/me', methods=['GET'])
@token_required
def get_current_user(current_user_id):
    """Get the authenticated user."""
    user = db.session.get(User, current_user_id)
    return jsonify(user.to_dict()), 200
