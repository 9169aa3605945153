"""Locale model: the language/region a translation belongs to."""

from datetime import datetime
from translations_api import db


class Locale(db.Model):
    """A locale such as 'en' or 'fr'."""
    
    __tablename__ = 'locales'
    
    id = db.Column(db.Integer, primary_key=True)
    code = db.Column(db.String(10), unique=True, nullable=False, index=True)  # e.g., 'en', 'pt-BR'
    name = db.Column(db.String(50), nullable=False)  # e.g., 'English'
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    
    # Deleting a locale deletes its translations (and their tag links)
    translations = db.relationship(
        'Translation',
        backref='locale',
        cascade='all, delete-orphan'
    )
    
    def to_dict(self):
        """Convert locale to dictionary."""
        return {
            'id': self.id,
            'code': self.code,
            'name': self.name,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None
        }
    
    def __repr__(self):
        return f'<Locale {self.code}>'
