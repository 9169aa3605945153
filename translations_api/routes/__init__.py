"""Routes package for the translation management API."""


def register_routes(app):
    """Register all route blueprints with the application."""
    from .auth import auth_bp
    from .locales import locales_bp
    from .tags import tags_bp
    from .translations import translations_bp
    
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(locales_bp, url_prefix='/api/locales')
    app.register_blueprint(tags_bp, url_prefix='/api/tags')
    app.register_blueprint(translations_bp, url_prefix='/api/translations')
