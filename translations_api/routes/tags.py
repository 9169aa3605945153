"""Tag routes."""

from flask import Blueprint, request, jsonify, abort
from translations_api import db
from translations_api.models import Tag
from translations_api.utils import token_required
from translations_api.validation import TAG_RULES, id_in_range, validate

tags_bp = Blueprint('tags', __name__)


def _get_tag_or_404(tag_id):
    if not id_in_range(tag_id):
        abort(404, description='Tag not found')
    return db.get_or_404(Tag, tag_id, description='Tag not found')


@tags_bp.route('', methods=['GET'])
@token_required
def get_tags(current_user_id):
    """Get all tags."""
    tags = Tag.query.order_by(Tag.id).all()
    return jsonify([tag.to_dict() for tag in tags]), 200


@tags_bp.route('', methods=['POST'])
@token_required
def create_tag(current_user_id):
    """Create a new tag."""
    data = validate(request.get_json(silent=True), TAG_RULES)
    
    tag = Tag(name=data['name'])
    db.session.add(tag)
    db.session.commit()
    
    return jsonify(tag.to_dict()), 201


@tags_bp.route('/<int:tag_id>', methods=['GET'])
@token_required
def get_tag(current_user_id, tag_id):
    """Get a specific tag by ID."""
    tag = _get_tag_or_404(tag_id)
    return jsonify(tag.to_dict()), 200


@tags_bp.route('/<int:tag_id>', methods=['PUT', 'PATCH'])
@token_required
def update_tag(current_user_id, tag_id):
    """Rename a tag."""
    tag = _get_tag_or_404(tag_id)
    data = validate(request.get_json(silent=True), TAG_RULES, partial=True, instance_id=tag.id)
    
    if 'name' in data:
        tag.name = data['name']
    db.session.commit()
    
    return jsonify(tag.to_dict()), 200


@tags_bp.route('/<int:tag_id>', methods=['DELETE'])
@token_required
def delete_tag(current_user_id, tag_id):
    """Delete a tag, detaching it from every translation.

    Export payloads only carry keys and values, so no cache entry changes.
    """
    tag = _get_tag_or_404(tag_id)
    
    db.session.delete(tag)
    db.session.commit()
    
    return '', 204
