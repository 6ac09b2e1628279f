"""
Lumen Auth Module

Provides account authentication for the admin surface:
- Email/password sign-up and sign-in (bcrypt hashes)
- Session establishment and sign-out
- Admin bootstrap (first admin, or admin-created admins)
- The auth gate used by every admin route
"""

from flask import Blueprint

auth_bp = Blueprint(
    'auth',
    __name__,
    url_prefix='/api/auth'
)

from . import routes
from .database import Account, AccountDatabase
from .gate import admin_required, api_admin_required, evaluate_access

__all__ = ['auth_bp', 'Account', 'AccountDatabase', 'admin_required', 'api_admin_required', 'evaluate_access']
