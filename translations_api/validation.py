"""Declarative request validation.

Each rule table maps a field name to the constraints it must satisfy::

    {'key': {'required': True, 'type': str, 'max_length': 255}}

A single generic ``validate`` walks the table. Supported constraint kinds:

- ``required``: field must be present (skipped for partial updates) and non-null
- ``type``: one of ``int``, ``str``, ``list``
- ``non_empty``: string must contain something other than whitespace
- ``max_length``: maximum string length
- ``each_type``: type every list item must have
- ``exists``: model class whose primary key the value must reference
- ``each_exists``: model class every list item must reference
- ``unique``: ``(model, column_name)`` pair the value must not collide with
"""

from translations_api import db
from translations_api.errors import ValidationError
from translations_api.models import Locale, Tag


TYPE_NAMES = {int: 'an integer', str: 'a string', list: 'an array'}

# Bounds of a signed 64-bit INTEGER column
MAX_ID = 2 ** 63 - 1
MIN_ID = -2 ** 63


def _is_type(value, expected):
    # bool is a subclass of int but never a valid id
    if expected is int:
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, expected)


def id_in_range(value):
    """True when ``value`` is an integer the database can compare against an id."""
    return _is_type(value, int) and MIN_ID <= value <= MAX_ID


def translation_rules(allow_empty_value=False):
    """Rules for creating or updating a translation."""
    return {
        'locale_id': {'required': True, 'type': int, 'exists': Locale},
        'key': {'required': True, 'type': str, 'non_empty': True, 'max_length': 255},
        'value': {'required': True, 'type': str, 'non_empty': not allow_empty_value},
        'tags': {'type': list, 'each_type': int, 'each_exists': Tag},
    }


LOCALE_RULES = {
    'code': {'required': True, 'type': str, 'non_empty': True, 'max_length': 10, 'unique': (Locale, 'code')},
    'name': {'required': True, 'type': str, 'non_empty': True, 'max_length': 50},
}

TAG_RULES = {
    'name': {'required': True, 'type': str, 'non_empty': True, 'max_length': 255, 'unique': (Tag, 'name')},
}


def _check_field(field, value, rule, instance_id):
    """Return the first error message for a present field, or None."""
    if value is None:
        if rule.get('required'):
            return f'The {field} field is required.'
        return f'The {field} field must be {TYPE_NAMES[rule["type"]]}.'

    expected = rule.get('type')
    if expected is not None and not _is_type(value, expected):
        return f'The {field} field must be {TYPE_NAMES[expected]}.'

    if rule.get('non_empty') and isinstance(value, str) and not value.strip():
        return f'The {field} field is required.'

    max_length = rule.get('max_length')
    if max_length is not None and len(value) > max_length:
        return f'The {field} field must not be greater than {max_length} characters.'

    item_type = rule.get('each_type')
    if item_type is not None:
        for item in value:
            if not _is_type(item, item_type):
                return f'Each item in {field} must be {TYPE_NAMES[item_type]}.'

    model = rule.get('exists')
    if model is not None and (not id_in_range(value) or db.session.get(model, value) is None):
        return f'The selected {field} is invalid.'

    model = rule.get('each_exists')
    if model is not None and value:
        wanted = {item for item in value if id_in_range(item)}
        found = {row.id for row in model.query.filter(model.id.in_(wanted)).all()} if wanted else set()
        missing = sorted(set(value) - found)
        if missing:
            return f'The selected {field} are invalid: {", ".join(str(m) for m in missing)}.'

    unique = rule.get('unique')
    if unique is not None:
        model, column = unique
        query = model.query.filter(getattr(model, column) == value)
        if instance_id is not None:
            query = query.filter(model.id != instance_id)
        if query.first() is not None:
            return f'The {field} has already been taken.'

    return None


def validate(data, rules, partial=False, instance_id=None):
    """Validate ``data`` against ``rules``.

    Args:
        data: Decoded JSON body
        rules: Rule table (see module docstring)
        partial: When True, absent fields are skipped instead of required
        instance_id: Row excluded from ``unique`` checks (the one being updated)

    Returns:
        Dict holding only the validated fields that were present in ``data``

    Raises:
        ValidationError: with a ``{field: [message]}`` mapping
    """
    if not isinstance(data, dict):
        raise ValidationError({'body': ['The request body must be a JSON object.']})

    errors = {}
    cleaned = {}

    for field, rule in rules.items():
        if field not in data:
            if rule.get('required') and not partial:
                errors[field] = [f'The {field} field is required.']
            continue

        message = _check_field(field, data[field], rule, instance_id)
        if message:
            errors[field] = [message]
        else:
            cleaned[field] = data[field]

    if errors:
        raise ValidationError(errors)

    return cleaned
