from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
import logging
import os
from dotenv import load_dotenv

load_dotenv()

db = SQLAlchemy()
migrate = Migrate()
limiter = Limiter(key_func=get_remote_address)

logger = logging.getLogger(__name__)


def _env_flag(name, default='false'):
    return os.getenv(name, default).lower() in ('true', '1', 'yes')


def _database_url():
    url = os.getenv('DATABASE_URL', 'sqlite:///translations.db')
    # Render/Heroku style URLs are rejected by SQLAlchemy 1.4+
    if url.startswith('postgres://'):
        url = url.replace('postgres://', 'postgresql://', 1)
    return url


def create_app(config_name='development', overrides=None, redis_client=None):
    """Application factory.

    ``redis_client`` lets callers hand in an already configured client
    (tests pass a fakeredis instance); otherwise one is built from REDIS_URL.
    """
    app = Flask(__name__)

    # Config
    app.config['SQLALCHEMY_DATABASE_URI'] = _database_url()
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['JWT_SECRET_KEY'] = os.getenv('JWT_SECRET_KEY', 'dev-secret')
    app.config['JWT_ACCESS_TOKEN_EXPIRES'] = int(os.getenv('JWT_ACCESS_TOKEN_EXPIRES', 86400))
    app.config['REDIS_URL'] = os.getenv('REDIS_URL')
    app.config['REDIS_SOCKET_TIMEOUT'] = float(os.getenv('REDIS_SOCKET_TIMEOUT', 5))
    app.config['EXPORT_CACHE_TTL'] = int(os.getenv('EXPORT_CACHE_TTL', 3600))
    app.config['ALLOW_EMPTY_TRANSLATION_VALUE'] = _env_flag('ALLOW_EMPTY_TRANSLATION_VALUE')
    app.config['RATELIMIT_STORAGE_URI'] = os.getenv(
        'RATELIMIT_STORAGE_URI',
        app.config['REDIS_URL'] or 'memory://'
    )
    app.config['LOG_LEVEL'] = os.getenv('LOG_LEVEL', 'INFO').upper()

    if config_name == 'testing':
        app.config['TESTING'] = True
        app.config['SQLALCHEMY_DATABASE_URI'] = 'sqlite:///:memory:'
        app.config['RATELIMIT_ENABLED'] = False
        app.config['RATELIMIT_STORAGE_URI'] = 'memory://'

    if overrides:
        app.config.update(overrides)

    logging.basicConfig(
        level=getattr(logging, app.config['LOG_LEVEL'], logging.INFO),
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s'
    )

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)
    CORS(app)

    from translations_api.services.redis_client import create_redis_client
    from translations_api.services.export_cache import ExportCache

    if redis_client is None:
        redis_client = create_redis_client(
            app.config['REDIS_URL'],
            socket_timeout=app.config['REDIS_SOCKET_TIMEOUT']
        )
    app.extensions['export_cache'] = ExportCache(
        redis_client,
        ttl=app.config['EXPORT_CACHE_TTL']
    )

    # Create tables with error handling
    with app.app_context():
        from translations_api import models  # noqa: F401
        try:
            db.create_all()
        except Exception as e:
            logger.warning(f"Could not create database tables: {e}")

    from translations_api.errors import register_error_handlers
    register_error_handlers(app)

    # Register routes
    from translations_api.routes import register_routes
    register_routes(app)

    # Health check
    @app.route('/health', methods=['GET'])
    def health():
        return {'status': 'ok'}, 200

    return app
