"""
Lumen - Dance Studio Admin
==========================

Back office for a dance-studio site, packaged as a Flask extension:
- Session-based admin authentication
- Uniform JSON CRUD for blog posts, classes, coaches, events and products
- Dashboard with stats, recent logs and image upload
- Public /health endpoint

Usage:
    from flask import Flask
    from lumen import Lumen

    app = Flask(__name__)
    lumen = Lumen(app, {'brand_name': 'My Studio'})

Every module is registered by default; turn one off with
`{'features': {'events': False}}`.
"""

import logging
import os

from flask_cors import CORS

from .core.config import Config
from .core.database import init_database
from .core.errors import register_error_handlers

__version__ = '0.1.0'

log = logging.getLogger(__name__)

DEFAULT_FEATURES = {
    'auth': True,
    'dashboard': True,
    'blog': True,
    'classes': True,
    'coaches': True,
    'events': True,
    'shop': True,
    'ops': True,
}


class Lumen:
    """Flask extension wiring configuration, storage and all admin modules"""

    def __init__(self, app=None, config=None):
        self._config = dict(config or {})
        self._registered = []
        if app is not None:
            self.init_app(app)

    @property
    def brand_name(self):
        return self._config.get('brand_name') or Config.BRAND_NAME

    @property
    def features(self):
        features = dict(DEFAULT_FEATURES)
        features.update(self._config.get('features') or {})
        return features

    def init_app(self, app):
        self._apply_config(app)
        self._setup_database_dir(app)

        register_error_handlers(app)
        origins = [o.strip() for o in str(app.config['CORS_ORIGINS']).split(',') if o.strip()]
        CORS(app, resources={r"/api/*": {"origins": origins}}, supports_credentials=True)

        self._register_modules(app)

        # Models are imported by the modules above; tables can be created now
        init_database(app)

        @app.context_processor
        def inject_lumen_config():
            return {
                'brand_name': self.brand_name,
                'lumen_config': self._config,
            }

        app.extensions['lumen'] = self
        log.info("Lumen initialised with modules: %s", ', '.join(self._registered))

    def _apply_config(self, app):
        """Fill unset app.config keys from Config (environment)"""
        if not app.config.get('SECRET_KEY'):
            if not Config.SECRET_KEY:
                log.warning("FLASK_SECRET_KEY is not set; using a random key, sessions reset on restart")
            app.config['SECRET_KEY'] = Config.SECRET_KEY or os.urandom(32).hex()

        for key in ('DB_DIR', 'DEFAULT_SIGNUP_ROLE', 'CORS_ORIGINS', 'UPLOAD_FOLDER',
                    'UPLOAD_MODE', 'MAX_UPLOAD_MB', 'LOG_RETENTION_DAYS'):
            app.config.setdefault(key, getattr(Config, key))

        app.config.setdefault('MAX_CONTENT_LENGTH', (int(app.config['MAX_UPLOAD_MB']) + 1) * 1024 * 1024)
        app.config.setdefault('SESSION_COOKIE_HTTPONLY', True)
        app.config.setdefault('SESSION_COOKIE_SAMESITE', 'Lax')

    def _setup_database_dir(self, app):
        """Create DB_DIR when the store is a local sqlite file"""
        if app.config.get('SQLALCHEMY_DATABASE_URI') or Config.DATABASE_URL:
            return
        db_dir = app.config.get('DB_DIR')
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

    def _register_modules(self, app):
        features = self.features

        if features.get('auth'):
            from .modules.auth import auth_bp
            app.register_blueprint(auth_bp)
            self._registered.append('auth')

        if features.get('dashboard'):
            from .modules.dashboard import dashboard_bp, dashboard_api_bp
            app.register_blueprint(dashboard_bp)
            app.register_blueprint(dashboard_api_bp)
            self._registered.append('dashboard')

        if features.get('blog'):
            from .modules.blog import blog_bp
            app.register_blueprint(blog_bp)
            self._registered.append('blog')

        if features.get('classes'):
            from .modules.classes import classes_bp
            app.register_blueprint(classes_bp)
            self._registered.append('classes')

        if features.get('coaches'):
            from .modules.coaches import coaches_bp
            app.register_blueprint(coaches_bp)
            self._registered.append('coaches')

        if features.get('events'):
            from .modules.events import events_bp
            app.register_blueprint(events_bp)
            self._registered.append('events')

        if features.get('shop'):
            from .modules.shop import shop_bp
            app.register_blueprint(shop_bp)
            self._registered.append('shop')

        if features.get('ops'):
            from .modules.ops import ops_health_bp
            app.register_blueprint(ops_health_bp)
            self._registered.append('ops')

    def get_registered_modules(self):
        return list(self._registered)


__all__ = ['Lumen', '__version__']
