import bcrypt
from sqlalchemy.exc import IntegrityError

from ...core.config import Config
from ...core.database import db, utcnow, isoformat
from ...core.errors import DuplicateAccount

ADMIN_ROLE = 'admin'
USER_ROLE = 'user'

# bcrypt only reads this many bytes of a password
MAX_PASSWORD_BYTES = 72


class Account(db.Model):
    """Admin site account"""
    __tablename__ = Config.USERS_TABLE

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(128), nullable=False)
    role = db.Column(db.String(20), nullable=False, default=USER_ROLE)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    last_login = db.Column(db.DateTime)

    def to_dict(self):
        """Public fields only; never the hash"""
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'role': self.role,
        }

    def to_session_dict(self):
        data = self.to_dict()
        data['lastLogin'] = isoformat(self.last_login)
        return data


class AccountDatabase:
    @staticmethod
    def _hash_password(password):
        """Hash password using bcrypt"""
        return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')

    @staticmethod
    def _verify_password(password, password_hash):
        """Verify password against hash"""
        try:
            return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
        except ValueError:
            # Malformed hash in the table
            return False

    @staticmethod
    def normalize_email(email):
        return (email or '').strip().lower()

    @staticmethod
    def get_by_email(email):
        """Get active account by email address"""
        return Account.query.filter_by(
            email=AccountDatabase.normalize_email(email), is_active=True
        ).first()

    @staticmethod
    def get_by_id(account_id):
        """Get active account by ID"""
        account = db.session.get(Account, account_id)
        if account is None or not account.is_active:
            return None
        return account

    @staticmethod
    def create_account(name, email, password, role=USER_ROLE):
        """Create a new account; the password is stored only as a bcrypt hash"""
        email = AccountDatabase.normalize_email(email)
        if Account.query.filter_by(email=email).first():
            raise DuplicateAccount()

        account = Account(
            name=name.strip(),
            email=email,
            password_hash=AccountDatabase._hash_password(password),
            role=role,
            created_at=utcnow(),
        )
        db.session.add(account)
        try:
            db.session.commit()
        except IntegrityError:
            # Lost a race with a concurrent sign-up
            db.session.rollback()
            raise DuplicateAccount()
        return account

    @staticmethod
    def verify_credentials(email, password):
        """Return the account when the password matches, else None"""
        account = AccountDatabase.get_by_email(email)
        if account and AccountDatabase._verify_password(password, account.password_hash):
            account.last_login = utcnow()
            db.session.commit()
            return account
        return None

    @staticmethod
    def count_admins():
        return Account.query.filter_by(role=ADMIN_ROLE, is_active=True).count()
