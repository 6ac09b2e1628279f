"""
Database
========

Shared Flask-SQLAlchemy handle and helpers used by every module.
Models live next to the module that owns them; this file only holds
what is common to all of them.
"""

import os
from datetime import datetime
from decimal import Decimal

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import String, text
from sqlalchemy.types import TypeDecorator

from .config import Config

db = SQLAlchemy()


def utcnow():
    return datetime.utcnow()


def isoformat(value):
    """Serialize a datetime column for JSON output"""
    if value is None:
        return None
    return value.isoformat()


class DecimalText(TypeDecorator):
    """Decimal stored as its exact text, so no digits are lost to the backend"""
    impl = String(40)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(Decimal(str(value)))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value)


def resolve_database_uri(app):
    """Pick the database URL: explicit app config, DATABASE_URL, then the sqlite file"""
    uri = app.config.get('SQLALCHEMY_DATABASE_URI')
    if uri:
        return uri

    if Config.DATABASE_URL:
        return Config.DATABASE_URL

    studio_db = app.config.get('STUDIO_DB')
    if not studio_db:
        db_dir = app.config.get('DB_DIR') or Config.DB_DIR
        studio_db = os.path.join(db_dir, 'studio.db')
    return f"sqlite:///{os.path.abspath(studio_db)}"


def init_database(app):
    """Bind the shared handle to the app and create missing tables"""
    app.config['SQLALCHEMY_DATABASE_URI'] = resolve_database_uri(app)
    app.config.setdefault('SQLALCHEMY_TRACK_MODIFICATIONS', False)
    db.init_app(app)

    with app.app_context():
        db.create_all()
        print(f"Database initialized at {app.config['SQLALCHEMY_DATABASE_URI']}")


def ping():
    """Return True when the store answers a trivial query"""
    db.session.execute(text('SELECT 1'))
    return True
