"""Translation model and its tag association table."""

from datetime import datetime
from translations_api import db


# Pure join table: no attributes besides the two foreign keys
translation_tags = db.Table(
    'translation_tags',
    db.Column('translation_id', db.Integer, db.ForeignKey('translations.id', ondelete='CASCADE'), primary_key=True),
    db.Column('tag_id', db.Integer, db.ForeignKey('tags.id', ondelete='CASCADE'), primary_key=True)
)


class Translation(db.Model):
    """A localized string identified by (locale, key)."""
    
    __tablename__ = 'translations'
    
    id = db.Column(db.Integer, primary_key=True)
    locale_id = db.Column(db.Integer, db.ForeignKey('locales.id', ondelete='CASCADE'), nullable=False, index=True)
    key = db.Column(db.String(255), nullable=False, index=True)  # e.g., 'home.title'
    value = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    
    # A key is unique within a locale; this constraint is the real guard
    # against concurrent duplicate inserts
    __table_args__ = (
        db.UniqueConstraint('locale_id', 'key', name='uq_translations_locale_key'),
    )
    
    tags = db.relationship(
        'Tag',
        secondary=translation_tags,
        backref=db.backref('translations', order_by='Translation.id'),
        order_by='Tag.id'
    )
    
    def to_dict(self):
        """Convert translation to dictionary with locale and tags inlined."""
        return {
            'id': self.id,
            'locale_id': self.locale_id,
            'key': self.key,
            'value': self.value,
            'locale': self.locale.to_dict() if self.locale else None,
            'tags': [tag.to_dict() for tag in self.tags],
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None
        }
    
    def __repr__(self):
        return f'<Translation {self.id}: {self.key}>'
