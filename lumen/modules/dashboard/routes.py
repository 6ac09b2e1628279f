"""
Admin Dashboard Routes
======================

Login/logout pages, the admin landing page, and the JSON endpoints the
dashboard screens call (stats, recent logs, image upload).
"""

from flask import flash, g, jsonify, redirect, render_template, request, url_for
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from ...core.config import get_config_value
from ...core.database import db
from ...core.errors import AdminError, Forbidden, StoreUnavailable, ValidationError
from ...core.logging_service import LoggingService
from ...core.resource import store_failure
from ...core.storage import ALLOWED_EXTENSIONS, allowed_file, upload_file
from ..auth.database import ADMIN_ROLE
from ..auth.gate import admin_required, api_admin_required, end_session, start_session
from ..auth.routes import authenticate
from ..blog.models import BlogPost
from ..classes.models import DanceClass
from ..coaches.models import Coach
from ..events.models import Event
from ..shop.models import Product
from . import dashboard_bp, dashboard_api_bp


def _safe_next(target):
    """Only follow relative redirects back into this site"""
    if target and target.startswith('/') and not target.startswith('//'):
        return target
    return None


@dashboard_bp.route('/login', methods=['GET', 'POST'])
def login():
    """Admin login route"""
    if request.method == 'POST':
        try:
            account = authenticate(request.form)
        except ValidationError:
            flash('Please enter both email and password', 'error')
            return render_template('dashboard/login.html'), 400
        except AdminError as e:
            flash(e.message, 'error')
            return render_template('dashboard/login.html'), e.status_code
        except SQLAlchemyError as e:
            db.session.rollback()
            LoggingService.log_error_with_traceback('auth', e)
            flash('Sign-in is unavailable right now, please try again later', 'error')
            return render_template('dashboard/login.html'), 503

        if account.role != ADMIN_ROLE:
            end_session()
            LoggingService.log_security_event('Non-admin dashboard sign-in refused', {'account_id': account.id})
            flash(Forbidden.default_message, 'error')
            return render_template('dashboard/login.html'), 403

        start_session(account, remember=request.form.get('remember') == 'on')
        LoggingService.log_user_action('auth', 'dashboard sign-in', user_id=str(account.id))
        flash('Login successful', 'success')
        return redirect(_safe_next(request.args.get('next')) or url_for('admin.dashboard'))

    return render_template('dashboard/login.html')


@dashboard_bp.route('/logout')
def logout():
    """Admin logout route"""
    end_session()
    flash('You have been logged out', 'info')
    return redirect(url_for('admin.login'))


@dashboard_bp.route('/')
@dashboard_bp.route('/dashboard')
@admin_required
def dashboard():
    """Admin dashboard - the unified admin interface"""
    return render_template('dashboard/dashboard.html', account=g.account)


def collect_stats():
    """Totals per resource plus the quick stats shown on the dashboard home"""
    def count(model, **filters):
        return model.query.filter_by(**filters).count()

    total_students = db.session.query(func.coalesce(func.sum(DanceClass.enrolled), 0)).scalar()

    return {
        'overview': {
            'totalPosts': count(BlogPost),
            'totalClasses': count(DanceClass),
            'totalCoaches': count(Coach),
            'totalEvents': count(Event),
            'totalProducts': count(Product),
            'totalStudents': int(total_students),
            'activeClasses': count(DanceClass, status='active'),
        },
        'quickStats': {
            'draftPosts': count(BlogPost, status='draft'),
            'lowStockProducts': count(Product, status='low-stock'),
            'upcomingEvents': count(Event, status='upcoming'),
        },
    }


@dashboard_api_bp.route('/admin/stats')
@api_admin_required
def stats():
    """Dashboard statistics"""
    try:
        return jsonify(collect_stats())
    except SQLAlchemyError as e:
        return store_failure('dashboard', e)


@dashboard_api_bp.route('/admin/logs')
@api_admin_required
def recent_logs():
    """Recent application log entries, newest first"""
    limit = request.args.get('limit', 100, type=int)
    limit = max(1, min(limit, 500))
    try:
        logs = LoggingService.recent_logs(
            limit=limit,
            level=request.args.get('level'),
            source=request.args.get('source'),
        )
        return jsonify({'logs': logs, 'count': len(logs)})
    except SQLAlchemyError as e:
        return store_failure('dashboard', e)


@dashboard_api_bp.route('/uploads', methods=['POST'])
@api_admin_required
def upload_image():
    """Upload an image for a record; returns its URL (or data URI)"""
    image = request.files.get('image')
    if image is None or not image.filename:
        return ValidationError('image', 'No image file provided').to_response()

    if not allowed_file(image.filename):
        allowed = ', '.join(sorted(ALLOWED_EXTENSIONS))
        return ValidationError('image', f"Invalid file type. Allowed: {allowed}").to_response()

    max_bytes = int(get_config_value('MAX_UPLOAD_MB', 5)) * 1024 * 1024
    file_bytes = image.read()
    if len(file_bytes) > max_bytes:
        return ValidationError('image', 'Image is too large').to_response()

    folder = request.form.get('folder', 'misc')
    try:
        url = upload_file(file_bytes, image.filename, folder)
    except OSError as e:
        LoggingService.log_error_with_traceback('uploads', e)
        return StoreUnavailable('Upload failed').to_response()

    LoggingService.log_user_action('uploads', f"Uploaded image to {folder}")
    return jsonify({'success': True, 'url': url}), 201
