"""Locale routes."""

from flask import Blueprint, request, jsonify, current_app, abort
from translations_api import db
from translations_api.models import Locale
from translations_api.utils import token_required
from translations_api.validation import LOCALE_RULES, id_in_range, validate
import logging

logger = logging.getLogger(__name__)

locales_bp = Blueprint('locales', __name__)


def _export_cache():
    return current_app.extensions['export_cache']


def _get_locale_or_404(locale_id):
    if not id_in_range(locale_id):
        abort(404, description='Locale not found')
    return db.get_or_404(Locale, locale_id, description='Locale not found')


@locales_bp.route('', methods=['GET'])
@token_required
def get_locales(current_user_id):
    """Get all locales."""
    locales = Locale.query.order_by(Locale.id).all()
    return jsonify([locale.to_dict() for locale in locales]), 200


@locales_bp.route('', methods=['POST'])
@token_required
def create_locale(current_user_id):
    """Create a new locale."""
    data = validate(request.get_json(silent=True), LOCALE_RULES)
    
    locale = Locale(code=data['code'], name=data['name'])
    db.session.add(locale)
    db.session.commit()
    
    # A stale entry may survive from a deleted locale with the same code
    _export_cache().delete(locale.code)
    
    return jsonify(locale.to_dict()), 201


@locales_bp.route('/<int:locale_id>', methods=['GET'])
@token_required
def get_locale(current_user_id, locale_id):
    """Get a specific locale by ID."""
    locale = _get_locale_or_404(locale_id)
    return jsonify(locale.to_dict()), 200


@locales_bp.route('/<int:locale_id>', methods=['PUT', 'PATCH'])
@token_required
def update_locale(current_user_id, locale_id):
    """Update a locale's code and/or name."""
    locale = _get_locale_or_404(locale_id)
    data = validate(request.get_json(silent=True), LOCALE_RULES, partial=True, instance_id=locale.id)
    
    previous_code = locale.code
    for field in ('code', 'name'):
        if field in data:
            setattr(locale, field, data[field])
    db.session.commit()
    
    # Exports are keyed by code: a rename moves the payload to a new key
    if locale.code != previous_code:
        _export_cache().delete(previous_code, locale.code)
        logger.info(f"Locale {locale.id} renamed {previous_code} -> {locale.code} by user {current_user_id}")
    
    return jsonify(locale.to_dict()), 200


@locales_bp.route('/<int:locale_id>', methods=['DELETE'])
@token_required
def delete_locale(current_user_id, locale_id):
    """Delete a locale and all of its translations."""
    locale = _get_locale_or_404(locale_id)
    code = locale.code
    
    db.session.delete(locale)
    db.session.commit()
    
    _export_cache().delete(code)
    logger.info(f"Locale {code} deleted by user {current_user_id}")
    
    return '', 204
