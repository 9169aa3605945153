"""Service layer: export cache and the translation service."""
