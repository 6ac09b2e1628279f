import os
from dotenv import load_dotenv

load_dotenv(override=True)

class Config:
    """
    Base configuration for the Lumen studio admin.
    Deployments provide secrets and database paths via environment variables.
    """
    # Flask settings
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY')

    # Get DB_DIR from environment, or use a default if not set
    DB_DIR = os.getenv('DB_DIR', os.path.join(os.getcwd(), 'databases'))

    # Full SQLAlchemy URL wins over the DB_DIR sqlite file
    DATABASE_URL = os.getenv('DATABASE_URL')

    # Accounts created through public sign-up get this role.
    # Admins are created with the create-admin command or by another admin.
    DEFAULT_SIGNUP_ROLE = os.getenv('DEFAULT_SIGNUP_ROLE', 'user')

    # Comma separated list of origins allowed to call /api/* with credentials
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', 'http://localhost:3000')

    # Uploads: "local" writes under the static folder, "data-uri" returns inline images
    UPLOAD_FOLDER = os.getenv('UPLOAD_FOLDER', 'uploads')
    UPLOAD_MODE = os.getenv('UPLOAD_MODE', 'local')
    MAX_UPLOAD_MB = int(os.getenv('MAX_UPLOAD_MB', '5'))

    LOG_RETENTION_DAYS = int(os.getenv('LOG_RETENTION_DAYS', '30'))

    # Table names
    USERS_TABLE = "users"
    LOGS_TABLE = "app_logs"

    BRAND_NAME = os.getenv('BRAND_NAME', 'Lumen Studio')

    # Port for local server (optional)
    port = int(os.getenv('PORT', '5000'))


def get_config_value(key, default=None):
    """Get configuration value: Flask app config first, then Config, then env var"""
    try:
        from flask import current_app
        val = current_app.config.get(key)
        if val is not None:
            return val
    except RuntimeError:
        pass
    val = getattr(Config, key, None)
    if val is not None:
        return val
    return os.getenv(key, default)
