from flask import request, jsonify
from sqlalchemy.exc import SQLAlchemyError

from ...core.config import get_config_value
from ...core.database import db
from ...core.errors import AdminError, InvalidCredentials, StoreUnavailable, ValidationError
from ...core.fields import EMAIL_REGEX
from ...core.logging_service import LoggingService
from . import auth_bp
from .database import ADMIN_ROLE, MAX_PASSWORD_BYTES, AccountDatabase
from .gate import current_account, end_session, evaluate_access, start_session


def _payload():
    """JSON body, or form fields for plain HTML posts"""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def _required(data, *fields):
    values = {}
    for field in fields:
        value = data.get(field)
        if value is not None and not isinstance(value, str):
            raise ValidationError(field, f'{field} must be text')
        value = value.strip() if value and field != 'password' else value
        if not value:
            raise ValidationError(field, 'Missing fields')
        values[field] = value
    return values


def _store_failure(error):
    db.session.rollback()
    LoggingService.log_error_with_traceback('auth', error)
    return StoreUnavailable().to_response()


def create_account_from(data, role):
    """Validate {name, email, password} and create the account"""
    values = _required(data, 'name', 'email', 'password')
    if not EMAIL_REGEX.match(values['email']):
        raise ValidationError('email', 'Please enter a valid email address')
    if len(values['password'].encode('utf-8')) > MAX_PASSWORD_BYTES:
        raise ValidationError('password', f'Password cannot be longer than {MAX_PASSWORD_BYTES} bytes')
    return AccountDatabase.create_account(values['name'], values['email'], values['password'], role=role)


def authenticate(data):
    """Check {email, password}; returns the account or raises InvalidCredentials"""
    values = _required(data, 'email', 'password')
    account = AccountDatabase.verify_credentials(values['email'], values['password'])
    if not account:
        LoggingService.log_security_event('Failed sign-in', {'email': AccountDatabase.normalize_email(values['email'])})
        raise InvalidCredentials()
    return account


@auth_bp.route('/signup', methods=['POST'])
def signup():
    """Create an account with the default sign-up role"""
    try:
        role = get_config_value('DEFAULT_SIGNUP_ROLE', 'user')
        account = create_account_from(_payload(), role)
        LoggingService.log_user_action('auth', 'signup', user_id=str(account.id), details={'email': account.email})
        return jsonify({'message': 'Signup successful', 'user': account.to_dict()}), 201
    except AdminError as e:
        return e.to_response()
    except SQLAlchemyError as e:
        return _store_failure(e)


@auth_bp.route('/signin', methods=['POST'])
def signin():
    """Email/password sign-in; establishes the session"""
    try:
        data = _payload()
        account = authenticate(data)
        start_session(account, remember=data.get('remember') in (True, 'on', 'true'))
        LoggingService.log_user_action('auth', 'signin', user_id=str(account.id))
        return jsonify({'message': 'Sign-in successful', 'user': account.to_dict()})
    except AdminError as e:
        return e.to_response()
    except SQLAlchemyError as e:
        return _store_failure(e)


@auth_bp.route('/signout', methods=['POST'])
def signout():
    end_session()
    return jsonify({'message': 'Signed out'})


@auth_bp.route('/session', methods=['GET'])
def session_info():
    """Account bound to the current session"""
    try:
        account = current_account()
    except SQLAlchemyError as e:
        return _store_failure(e)
    if account is None:
        end_session()
        return jsonify({'error': 'Authentication required', 'code': 'Unauthenticated', 'authenticated': False}), 401
    return jsonify({'authenticated': True, 'user': account.to_session_dict()})


@auth_bp.route('/admins', methods=['POST'])
def create_admin():
    """Create an admin account (open only while no admin exists)"""
    try:
        if AccountDatabase.count_admins() > 0:
            decision = evaluate_access()
            if not decision.admitted:
                LoggingService.log_security_event('Denied admin creation', {'reason': decision.error.code})
                return decision.error.to_response()

        account = create_account_from(_payload(), ADMIN_ROLE)
        LoggingService.log_user_action('auth', 'create-admin', details={'email': account.email})
        return jsonify({'message': f'Admin {account.email} created successfully', 'user': account.to_dict()}), 201
    except AdminError as e:
        return e.to_response()
    except SQLAlchemyError as e:
        return _store_failure(e)
