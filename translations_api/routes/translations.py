"""Translation routes: CRUD, search and per-locale export."""

from flask import Blueprint, request, jsonify, current_app
from translations_api.services.translations import TranslationService
from translations_api.utils import token_required

translations_bp = Blueprint('translations', __name__)


def get_translation_service():
    """Build a service bound to this app's export cache."""
    return TranslationService(
        current_app.extensions['export_cache'],
        allow_empty_value=current_app.config['ALLOW_EMPTY_TRANSLATION_VALUE']
    )


@translations_bp.route('', methods=['GET'])
@token_required
def get_translations(current_user_id):
    """Get all translations, 20 per page.
    
    Query params:
    - page: Page number (default: 1)
    """
    page = request.args.get('page', 1, type=int)
    return jsonify(get_translation_service().list(page=page)), 200


@translations_bp.route('/search', methods=['GET'])
@token_required
def search_translations(current_user_id):
    """Search translations.
    
    Query params (all optional, combined with AND):
    - key: Substring of the translation key
    - content: Substring of the translation value
    - tag: Tag ID the translation must carry
    - locale: Locale ID
    - page: Page number (default: 1)
    """
    result = get_translation_service().search(
        page=request.args.get('page', 1, type=int),
        key=request.args.get('key'),
        content=request.args.get('content'),
        tag=request.args.get('tag'),
        locale=request.args.get('locale')
    )
    return jsonify(result), 200


@translations_bp.route('/export/<string:locale_code>', methods=['GET'])
@token_required
def export_translations(current_user_id, locale_code):
    """Export every translation of a locale as a flat {key: value} object."""
    return jsonify(get_translation_service().export(locale_code)), 200


@translations_bp.route('/<int:translation_id>', methods=['GET'])
@token_required
def get_translation(current_user_id, translation_id):
    """Get a specific translation by ID."""
    translation = get_translation_service().get(translation_id)
    return jsonify(translation.to_dict()), 200


@translations_bp.route('', methods=['POST'])
@token_required
def create_translation(current_user_id):
    """Create a new translation."""
    translation = get_translation_service().create(
        request.get_json(silent=True),
        user_id=current_user_id
    )
    return jsonify(translation.to_dict()), 201


@translations_bp.route('/<int:translation_id>', methods=['PUT', 'PATCH'])
@token_required
def update_translation(current_user_id, translation_id):
    """Update an existing translation."""
    translation = get_translation_service().update(
        translation_id,
        request.get_json(silent=True),
        user_id=current_user_id
    )
    return jsonify(translation.to_dict()), 200


@translations_bp.route('/<int:translation_id>', methods=['DELETE'])
@token_required
def delete_translation(current_user_id, translation_id):
    """Delete a translation."""
    get_translation_service().delete(translation_id, user_id=current_user_id)
    return '', 204
