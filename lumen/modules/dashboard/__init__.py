"""
Dashboard Module
================

Admin dashboard interface for Lumen Studio.

Provides core admin functionality:
- Admin login/logout pages (session based)
- Admin landing page
- Dashboard statistics and recent log feed
- Image upload endpoint used by the resource editors

This is the foundation module that the resource modules plug into.
"""

from flask import Blueprint

# Blueprint name is 'admin' so the auth gate can redirect to admin.login
dashboard_bp = Blueprint(
    'admin',
    __name__,
    url_prefix='/admin',
    template_folder='templates'
)

# JSON endpoints backing the dashboard
dashboard_api_bp = Blueprint(
    'admin_api',
    __name__,
    url_prefix='/api'
)

from . import routes

__all__ = ['dashboard_bp', 'dashboard_api_bp']
