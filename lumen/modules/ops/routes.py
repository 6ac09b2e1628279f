"""
Ops Routes
==========

Public health endpoint: is the data store answering, is the disk filling up.
"""

import shutil
from datetime import datetime

from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError

from ...core.database import db, ping
from ...core.logging_service import db_log
from . import ops_health_bp


def _check_database():
    """Run a trivial query against the store."""
    try:
        ping()
        return {'status': 'ok'}
    except SQLAlchemyError as e:
        db.session.rollback()
        db_log('error', 'ops', 'Health check: database unavailable', {'error': str(e)})
        return {'status': 'critical', 'error': 'Database unavailable'}


def _get_disk_usage(path='/'):
    """Get disk usage for the partition holding `path`."""
    try:
        usage = shutil.disk_usage(path)
    except OSError as e:
        return {'percent': 0, 'error': str(e)}
    return {
        'total_gb': round(usage.total / (1024 ** 3), 1),
        'free_gb': round(usage.free / (1024 ** 3), 1),
        'percent': round((usage.used / usage.total) * 100, 1),
    }


def _compute_status(database, disk):
    """Overall status and issues list from the individual checks."""
    issues = []
    status = 'ok'

    if database['status'] != 'ok':
        issues.append({'type': 'database', 'message': database.get('error', 'Database unavailable')})
        status = 'critical'

    # Disk pressure is reported but never fails the check while the store answers
    disk_pct = disk.get('percent', 0)
    if disk_pct >= 90:
        issues.append({'type': 'disk_critical', 'message': f'Disk usage critical: {disk_pct}%'})
    elif disk_pct >= 80:
        issues.append({'type': 'disk_warning', 'message': f'Disk usage high: {disk_pct}%'})
    if disk_pct >= 80 and status != 'critical':
        status = 'warning'

    return status, issues


def build_health_response():
    """Build the health check response dict."""
    database = _check_database()
    disk = _get_disk_usage()
    status, issues = _compute_status(database, disk)

    return {
        'status': status,
        'timestamp': datetime.now().isoformat(),
        'checks': {
            'database': database,
            'disk': disk,
        },
        'issues': issues,
    }, status


@ops_health_bp.route('/')
@ops_health_bp.route('')
def health_check():
    """Public health endpoint for uptime monitors."""
    data, status = build_health_response()
    code = 503 if status == 'critical' else 200
    return jsonify(data), code
