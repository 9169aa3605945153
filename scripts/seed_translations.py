#!/usr/bin/env python3
"""Seed a large set of translations for load and export testing.

Creates the en/fr/es locales and a handful of tags when missing, wipes
existing translations, then inserts translations in chunks with 1-3 random
tags each.

Usage:
    python scripts/seed_translations.py [total]
"""

import sys
import os
import random
import uuid

# Add parent directory to path to import app modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from translations_api import create_app, db
from translations_api.models import Locale, Tag, Translation, translation_tags

DEFAULT_LOCALES = [
    {'code': 'en', 'name': 'English'},
    {'code': 'fr', 'name': 'French'},
    {'code': 'es', 'name': 'Spanish'},
]

DEFAULT_TAGS = ['mobile', 'desktop', 'web', 'marketing', 'legal']

CHUNK_SIZE = 5000
DEFAULT_TOTAL = 100000


def _ensure_defaults():
    """Create default locales and tags if the tables are empty."""
    if Locale.query.count() == 0:
        for locale_data in DEFAULT_LOCALES:
            db.session.add(Locale(**locale_data))
        print(f"Added {len(DEFAULT_LOCALES)} locales")
    
    if Tag.query.count() == 0:
        for name in DEFAULT_TAGS:
            db.session.add(Tag(name=name))
        print(f"Added {len(DEFAULT_TAGS)} tags")
    
    db.session.commit()
    return Locale.query.all(), Tag.query.all()


def seed_translations(total=DEFAULT_TOTAL, chunk_size=CHUNK_SIZE, app=None):
    """Replace all translations with ``total`` generated rows."""
    app = app or create_app()
    
    with app.app_context():
        locales, tags = _ensure_defaults()
        # Plain values: every chunk commits and detaches the loaded rows
        locale_refs = [(locale.id, locale.code) for locale in locales]
        tag_ids = [tag.id for tag in tags]
        
        print("Removing existing translations...")
        db.session.execute(translation_tags.delete())
        db.session.execute(Translation.__table__.delete())
        db.session.commit()
        
        print(f"Seeding {total} translations...")
        inserted = 0
        
        while inserted < total:
            batch = []
            for _ in range(min(chunk_size, total - inserted)):
                inserted += 1
                locale_id, locale_code = random.choice(locale_refs)
                batch.append(Translation(
                    locale_id=locale_id,
                    key=f"app_key_{uuid.uuid4().hex[:12]}_{inserted}",
                    value=f"This is a sample translation for {locale_code} number {inserted}"
                ))
            
            db.session.add_all(batch)
            # Flush to get the generated ids for the link rows
            db.session.flush()
            
            links = []
            for translation in batch:
                for tag_id in random.sample(tag_ids, random.randint(1, min(3, len(tag_ids)))):
                    links.append({'translation_id': translation.id, 'tag_id': tag_id})
            
            if links:
                db.session.execute(translation_tags.insert(), links)
            
            db.session.commit()
            db.session.expunge_all()
            print(f"  {inserted}/{total}")
        
        # Every cached export is now stale
        cache = app.extensions['export_cache']
        cache.delete(*[code for _, code in locale_refs])
        
        print("\n" + "="*50)
        print("Seeding complete!")
        print(f"Total translations: {Translation.query.count()}")
        print("="*50)
        return inserted


if __name__ == '__main__':
    total = int(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_TOTAL
    seed_translations(total)
