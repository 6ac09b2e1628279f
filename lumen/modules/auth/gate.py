"""
Auth Gate
=========

Every administrative operation is evaluated here before it runs:
no session -> Unauthenticated, wrong role -> Forbidden.
"""

from collections import namedtuple
from functools import wraps

from flask import g, jsonify, redirect, request, session, url_for

from ...core.errors import Forbidden, Unauthenticated
from ...core.logging_service import LoggingService
from .database import ADMIN_ROLE, AccountDatabase

GateDecision = namedtuple('GateDecision', ['admitted', 'account', 'error'])


def start_session(account, remember=False):
    """Bind the session to an account after a successful sign-in"""
    session.clear()
    session['account_id'] = account.id
    session['account_email'] = account.email
    session['account_role'] = account.role
    session.permanent = remember


def end_session():
    session.clear()


def current_account():
    """Account bound to the session, or None (also for stale sessions)"""
    account_id = session.get('account_id')
    if not account_id:
        return None
    return AccountDatabase.get_by_id(account_id)


def evaluate_access(required_role=ADMIN_ROLE):
    """
    Admit or deny the current request.

    The role is re-read from the accounts table on each call, so a demoted
    or deleted account loses access on its next request.
    """
    if not session.get('account_id'):
        return GateDecision(False, None, Unauthenticated())

    account = current_account()
    if account is None:
        end_session()
        return GateDecision(False, None, Unauthenticated('Session expired, please sign in again'))

    if required_role and account.role != required_role:
        return GateDecision(False, account, Forbidden())

    return GateDecision(True, account, None)


def _deny(decision):
    LoggingService.log_security_event(
        f"Denied {request.method} {request.path}: {decision.error.code}",
        {'account_id': decision.account.id if decision.account else None},
    )


def api_admin_required(f):
    """Decorator for JSON endpoints: 401/403 body instead of the view"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        decision = evaluate_access()
        if not decision.admitted:
            _deny(decision)
            return jsonify(decision.error.to_dict()), decision.error.status_code
        g.account = decision.account
        return f(*args, **kwargs)
    return decorated_function


def admin_required(f):
    """Decorator for admin pages: redirect to the login surface"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        decision = evaluate_access()
        if not decision.admitted:
            _deny(decision)
            return redirect(url_for('admin.login', next=request.path))
        g.account = decision.account
        return f(*args, **kwargs)
    return decorated_function
