"""
Shared fixtures: a fully initialised app on a throwaway sqlite file,
plus clients signed in as an admin and as a regular user.
"""

import shutil
import tempfile

import pytest
from flask import Flask

from lumen import Lumen
from lumen.modules.auth.database import ADMIN_ROLE, USER_ROLE, AccountDatabase

ADMIN_EMAIL = "admin@studio.test"
USER_EMAIL = "dancer@studio.test"
PASSWORD = "correct horse battery"


def make_app(db_dir, static_folder="static", **config):
    app = Flask(__name__, static_folder=static_folder)
    app.config["TESTING"] = True
    app.config["SECRET_KEY"] = "test-secret"
    app.config["DB_DIR"] = db_dir
    app.config.update(config)
    Lumen(app)
    return app


def create_account(app, email, role, name="Test Account", password=PASSWORD):
    with app.app_context():
        account = AccountDatabase.create_account(name, email, password, role=role)
        return account.id


def sign_in(client, email, password=PASSWORD):
    response = client.post("/api/auth/signin", json={"email": email, "password": password})
    assert response.status_code == 200, response.get_json()
    return response


@pytest.fixture
def tmp_db_dir():
    """Create a temporary directory for test databases, cleaned up after."""
    d = tempfile.mkdtemp(prefix="lumen-test-")
    yield d
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def app(tmp_db_dir):
    """Fully initialised Flask app with all Lumen modules registered."""
    return make_app(tmp_db_dir)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(app):
    """Test client holding an admin session"""
    create_account(app, ADMIN_EMAIL, ADMIN_ROLE, name="Studio Admin")
    client = app.test_client()
    sign_in(client, ADMIN_EMAIL)
    return client


@pytest.fixture
def user_client(app):
    """Test client holding a non-admin session"""
    create_account(app, USER_EMAIL, USER_ROLE, name="Regular Dancer")
    client = app.test_client()
    sign_in(client, USER_EMAIL)
    return client
