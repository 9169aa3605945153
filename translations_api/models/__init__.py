"""Database models for the translation management API."""

from .user import User
from .locale import Locale
from .tag import Tag
from .translation import Translation, translation_tags

__all__ = ['User', 'Locale', 'Tag', 'Translation', 'translation_tags']
