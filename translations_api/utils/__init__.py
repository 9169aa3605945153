"""Shared utilities for the translation API."""

from translations_api.utils.auth import token_required, create_access_token

__all__ = [
    'token_required',
    'create_access_token',
]
