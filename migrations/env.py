"""Alembic environment for the translations schema.

The database URL and metadata come from the application factory, so
``flask db upgrade`` and plain ``alembic upgrade`` target the same database.
"""

import logging
import os
import sys
from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from translations_api import create_app, db
from translations_api import models  # noqa: F401

config = context.config
fileConfig(config.config_file_name)
logger = logging.getLogger('alembic.env')

app = create_app()
target_metadata = db.metadata


def database_url():
    """URL of the application's database, normalized for SQLAlchemy."""
    url = app.config.get('SQLALCHEMY_DATABASE_URI') or 'sqlite:///translations.db'
    if url.startswith('postgres://'):
        url = url.replace('postgres://', 'postgresql://', 1)
    return url


def skip_empty_autogenerate(context, revision, directives):
    """Drop autogenerated revisions that would contain no operations."""
    if getattr(config.cmd_opts, 'autogenerate', False) and directives[0].upgrade_ops.is_empty():
        directives[:] = []
        logger.info('No schema changes detected for translations, locales or tags.')


def run_migrations_offline():
    """Emit the migration SQL without connecting."""
    context.configure(url=database_url(), target_metadata=target_metadata, literal_binds=True)

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    """Apply migrations over a live connection."""
    engine = create_engine(database_url(), poolclass=pool.NullPool)

    with engine.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            process_revision_directives=skip_empty_autogenerate,
            # SQLite cannot ALTER constraints in place
            render_as_batch=connection.dialect.name == 'sqlite',
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
