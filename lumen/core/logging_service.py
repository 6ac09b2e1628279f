"""
Centralized logging service for the studio admin.
Provides structured logging with database storage and easy integration.
"""

import json
import logging
import traceback
from datetime import datetime, timedelta

from flask import request, session, has_request_context, has_app_context

from .config import Config
from .database import db

console = logging.getLogger('lumen')


class AppLog(db.Model):
    """One structured log row"""
    __tablename__ = Config.LOGS_TABLE

    id = db.Column(db.Integer, primary_key=True)
    timestamp = db.Column(db.String(32), nullable=False, index=True)
    level = db.Column(db.String(10), nullable=False, index=True)
    source = db.Column(db.String(50), nullable=False, index=True)
    message = db.Column(db.Text, nullable=False)
    details = db.Column(db.Text)
    ip_address = db.Column(db.String(64))
    request_path = db.Column(db.String(255))
    user_id = db.Column(db.String(32))

    def to_dict(self):
        return {
            'id': self.id,
            'timestamp': self.timestamp,
            'level': self.level,
            'source': self.source,
            'message': self.message,
            'details': self.details,
            'ip_address': self.ip_address,
            'request_path': self.request_path,
            'user_id': self.user_id,
        }


class LoggingService:
    """Centralized logging service for application-wide logging"""

    @staticmethod
    def _get_request_context():
        """Extract request context information"""
        if not has_request_context():
            return None, None, None

        ip_address = request.headers.get('X-Forwarded-For', request.remote_addr)
        if ip_address and ',' in ip_address:
            ip_address = ip_address.split(',')[0].strip()

        account_id = session.get('account_id')
        return ip_address, request.path, str(account_id) if account_id else None

    @staticmethod
    def log(level, source, message, details=None, user_id=None):
        """
        Log a message to the database and the `lumen` console logger

        Args:
            level (str): Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            source (str): Source component (auth, blog, shop, etc.)
            message (str): Main log message
            details (str/dict): Additional details (will be JSON-encoded if dict)
            user_id (str): Optional user identifier, defaults to the session account

        Callers must not hold uncommitted writes on db.session: the row is
        written on its own connection.
        """
        level = level.upper()
        console.log(getattr(logging, level, logging.INFO), f"[{source}] {message}")

        if not has_app_context():
            return

        ip_address, request_path, session_user = LoggingService._get_request_context()

        if isinstance(details, (dict, list)):
            details = json.dumps(details, indent=2, default=str)

        try:
            with db.engine.begin() as conn:
                conn.execute(AppLog.__table__.insert().values(
                    timestamp=datetime.now().isoformat(),
                    level=level,
                    source=source,
                    message=message,
                    details=details,
                    ip_address=ip_address,
                    request_path=request_path,
                    user_id=user_id or session_user,
                ))
        except Exception as e:
            # Console copy above is the fallback
            console.warning(f"Logging service error: {e}")

    @staticmethod
    def debug(source, message, details=None, user_id=None):
        """Log debug message"""
        LoggingService.log('DEBUG', source, message, details, user_id)

    @staticmethod
    def info(source, message, details=None, user_id=None):
        """Log info message"""
        LoggingService.log('INFO', source, message, details, user_id)

    @staticmethod
    def warning(source, message, details=None, user_id=None):
        """Log warning message"""
        LoggingService.log('WARNING', source, message, details, user_id)

    @staticmethod
    def error(source, message, details=None, user_id=None):
        """Log error message"""
        LoggingService.log('ERROR', source, message, details, user_id)

    @staticmethod
    def critical(source, message, details=None, user_id=None):
        """Log critical message"""
        LoggingService.log('CRITICAL', source, message, details, user_id)

    @staticmethod
    def log_user_action(source, action, user_id=None, details=None):
        """Log user actions (sign-in, create, delete, etc.)"""
        LoggingService.info(source, f"User action: {action}", details, user_id)

    @staticmethod
    def log_error_with_traceback(source, error, details=None):
        """Log error with full traceback"""
        error_details = {
            'error_type': type(error).__name__,
            'error_message': str(error),
            'traceback': traceback.format_exc()
        }
        if details:
            error_details['additional_details'] = details

        LoggingService.error(source, f"Exception occurred: {type(error).__name__}", error_details)

    @staticmethod
    def log_security_event(message, details=None):
        """Log security-related events (denied access, bad credentials)"""
        LoggingService.warning('security', message, details)

    @staticmethod
    def recent_logs(limit=100, level=None, source=None):
        """Newest log rows first"""
        query = AppLog.query
        if level:
            query = query.filter(AppLog.level == level.upper())
        if source:
            query = query.filter(AppLog.source == source)
        rows = query.order_by(AppLog.timestamp.desc(), AppLog.id.desc()).limit(limit).all()
        return [row.to_dict() for row in rows]

    @staticmethod
    def cleanup_old_logs(days_to_keep=30):
        """Clean up old log entries"""
        cutoff_iso = (datetime.now() - timedelta(days=days_to_keep)).isoformat()

        with db.engine.begin() as conn:
            result = conn.execute(
                AppLog.__table__.delete().where(AppLog.timestamp < cutoff_iso)
            )
            deleted_count = result.rowcount

        LoggingService.info('system', f"Cleaned up {deleted_count} old log entries")
        return deleted_count


def db_log(level, source, message, details=None):
    """Shortcut used by modules: db_log('info', 'shop', 'Product created', {...})"""
    LoggingService.log(level, source, message, details)
