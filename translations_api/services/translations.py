"""Translation service: write path, search and cached export.

All translation mutations go through here so that the (locale_id, key)
uniqueness rule, the tag associations and the export cache stay consistent.
"""

import logging
from sqlalchemy import false
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import joinedload, selectinload
from translations_api import db
from translations_api.errors import ConflictError, NotFoundError
from translations_api.models import Locale, Tag, Translation
from translations_api.validation import id_in_range, translation_rules, validate

logger = logging.getLogger(__name__)

PAGE_SIZE = 20


def _parse_id(raw):
    """Coerce a query-string id; None when it is not a storable integer."""
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return None
    return value if id_in_range(value) else None


class TranslationService:
    """Operations on translations, bound to an export cache.

    Args:
        cache: ExportCache used by ``export`` and invalidated by writes
        allow_empty_value: Accept '' as a translation value
        page_size: Items per page for ``list`` and ``search``
    """

    def __init__(self, cache, allow_empty_value=False, page_size=PAGE_SIZE):
        self.cache = cache
        self.allow_empty_value = allow_empty_value
        self.page_size = page_size

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _rules(self):
        return translation_rules(allow_empty_value=self.allow_empty_value)

    def _base_query(self):
        return Translation.query.options(
            joinedload(Translation.locale),
            selectinload(Translation.tags)
        )

    def _key_taken(self, locale_id, key, exclude_id=None) -> bool:
        """Friendly pre-check; the unique constraint is the real guard."""
        query = Translation.query.filter_by(locale_id=locale_id, key=key)
        if exclude_id is not None:
            query = query.filter(Translation.id != exclude_id)
        return db.session.query(query.exists()).scalar()

    def _load_tags(self, tag_ids):
        if not tag_ids:
            return []
        return Tag.query.filter(Tag.id.in_(set(tag_ids))).order_by(Tag.id).all()

    def _commit(self, locale_id, key, exclude_id=None):
        """Commit, turning a unique-constraint race into a ConflictError."""
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            if self._key_taken(locale_id, key, exclude_id=exclude_id):
                logger.info(f"Concurrent write lost the race for key '{key}' in locale {locale_id}")
                raise ConflictError()
            raise

    def _paginate(self, query, page):
        page = page if page and page > 0 else 1
        pagination = query.order_by(Translation.id).paginate(
            page=page,
            per_page=self.page_size,
            error_out=False
        )
        return {
            'translations': [t.to_dict() for t in pagination.items],
            'total': pagination.total,
            'pages': pagination.pages,
            'current_page': page,
            'per_page': self.page_size
        }

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, translation_id) -> Translation:
        if not id_in_range(translation_id):
            raise NotFoundError('Translation not found')
        translation = self._base_query().filter(Translation.id == translation_id).first()
        if translation is None:
            raise NotFoundError('Translation not found')
        return translation

    def list(self, page=1) -> dict:
        return self._paginate(self._base_query(), page)

    def search(self, page=1, key=None, content=None, tag=None, locale=None) -> dict:
        """Search translations. Every predicate is optional; given ones are ANDed.

        ``key`` and ``content`` are case-insensitive substring matches on the
        translation key and value. ``tag`` and ``locale`` are ids; an unknown
        or non-numeric id matches nothing.
        """
        query = self._base_query()

        if key is not None:
            query = query.filter(Translation.key.icontains(key, autoescape=True))

        if content is not None:
            query = query.filter(Translation.value.icontains(content, autoescape=True))

        if tag is not None:
            tag_id = _parse_id(tag)
            if tag_id is None:
                query = query.filter(false())
            else:
                query = query.filter(Translation.tags.any(Tag.id == tag_id))

        if locale is not None:
            locale_id = _parse_id(locale)
            if locale_id is None:
                query = query.filter(false())
            else:
                query = query.filter(Translation.locale_id == locale_id)

        return self._paginate(query, page)

    def export(self, locale_code) -> dict:
        """Return {key: value} for every translation in a locale (cache-aside).

        The cache version is read before the database so that a write
        committed during the rebuild keeps the stale mapping out of the cache.
        """
        cached = self.cache.get(locale_code)
        if cached is not None:
            logger.debug(f"Export cache hit for '{locale_code}'")
            return cached

        logger.debug(f"Export cache miss for '{locale_code}'")
        version = self.cache.version(locale_code)
        locale = Locale.query.filter_by(code=locale_code).first()
        if locale is None:
            raise NotFoundError(f"Locale '{locale_code}' not found")

        rows = db.session.query(Translation.key, Translation.value).filter(
            Translation.locale_id == locale.id
        ).order_by(Translation.key).all()

        mapping = {row.key: row.value for row in rows}
        self.cache.set(locale_code, mapping, version=version)
        return mapping

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create(self, payload, user_id=None) -> Translation:
        """Create a translation from a request payload.

        Raises:
            ValidationError: bad fields or unknown locale/tag ids
            ConflictError: the key already exists in that locale
        """
        data = validate(payload, self._rules())

        if self._key_taken(data['locale_id'], data['key']):
            raise ConflictError()

        translation = Translation(
            locale_id=data['locale_id'],
            key=data['key'],
            value=data['value']
        )
        if data.get('tags'):
            translation.tags = self._load_tags(data['tags'])

        db.session.add(translation)
        self._commit(data['locale_id'], data['key'])

        self.cache.delete(translation.locale.code)
        logger.info(f"Translation {translation.id} ('{translation.key}') created by user {user_id}")
        return translation

    def update(self, translation_id, payload, user_id=None) -> Translation:
        """Partially update a translation.

        ``tags`` absent leaves tags alone, a non-empty list replaces them
        and an empty list detaches all of them.
        """
        translation = self.get(translation_id)
        data = validate(payload, self._rules(), partial=True)

        previous_code = translation.locale.code
        locale_id = data.get('locale_id', translation.locale_id)
        key = data.get('key', translation.key)

        if ('key' in data or 'locale_id' in data) and \
                self._key_taken(locale_id, key, exclude_id=translation.id):
            raise ConflictError()

        for field in ('locale_id', 'key', 'value'):
            if field in data:
                setattr(translation, field, data[field])

        if 'tags' in data:
            translation.tags = self._load_tags(data['tags'])

        self._commit(locale_id, key, exclude_id=translation.id)

        # Old and new locale both change when a translation moves
        self.cache.delete(previous_code, translation.locale.code)
        logger.info(f"Translation {translation.id} updated by user {user_id}: {sorted(data)}")
        return translation

    def delete(self, translation_id, user_id=None):
        """Delete a translation together with its tag associations."""
        translation = self.get(translation_id)
        locale_code = translation.locale.code

        db.session.delete(translation)
        db.session.commit()

        self.cache.delete(locale_code)
        logger.info(f"Translation {translation_id} deleted by user {user_id}")
