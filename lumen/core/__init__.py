"""
Lumen Core
==========

Core utilities and shared functionality for Lumen modules.
"""

from .config import Config, get_config_value
from .database import db
from .errors import AdminError
from .logging_service import LoggingService, db_log

__all__ = ['Config', 'get_config_value', 'db', 'AdminError', 'LoggingService', 'db_log']
