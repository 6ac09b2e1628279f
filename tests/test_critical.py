"""
Critical Integration Tests for Lumen
====================================

Focused tests covering the integration points most likely to break.
Run with: pytest tests/test_critical.py -v

NOTE: pytest is listed under extras_require["dev"] in setup.py.
Install with: pip install -e ".[dev]"
"""

import os
import shutil
import tempfile
from unittest.mock import patch

from flask import Flask
from sqlalchemy import inspect
from sqlalchemy.exc import OperationalError

from lumen import Lumen
from lumen.core.database import db


# ---------------------------------------------------------------------------
# 1. Framework initialisation -- Lumen(app) does not raise
# ---------------------------------------------------------------------------

def test_framework_initialisation(tmp_db_dir):
    """Lumen(app) boots without errors and stores itself on the app."""
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["SECRET_KEY"] = "test-secret"
    app.config["DB_DIR"] = tmp_db_dir

    lumen = Lumen(app, {'brand_name': 'Test Studio'})

    assert "lumen" in app.extensions
    assert app.extensions["lumen"] is lumen


# ---------------------------------------------------------------------------
# 2. Config resolution -- the sqlite file lives under DB_DIR
# ---------------------------------------------------------------------------

def test_config_database_uri(app, tmp_db_dir):
    """SQLALCHEMY_DATABASE_URI points at studio.db inside DB_DIR."""
    uri = app.config["SQLALCHEMY_DATABASE_URI"]
    assert uri.startswith("sqlite:///")
    assert uri.endswith("studio.db")
    assert os.path.abspath(tmp_db_dir) in uri


def test_tables_created(app):
    """db.create_all() ran for every model."""
    with app.app_context():
        tables = set(inspect(db.engine).get_table_names())

    for table in ("users", "app_logs", "blog_posts", "dance_classes", "coaches", "events", "products"):
        assert table in tables, f"Table '{table}' missing. Found: {sorted(tables)}"


# ---------------------------------------------------------------------------
# 3. Blueprint registration -- all expected modules are registered
# ---------------------------------------------------------------------------

EXPECTED_MODULES = [
    "auth",
    "dashboard",
    "blog",
    "classes",
    "coaches",
    "events",
    "shop",
    "ops",
]


def test_all_blueprints_registered(app):
    """All feature modules should be registered as blueprints."""
    registered = app.extensions["lumen"].get_registered_modules()

    for mod in EXPECTED_MODULES:
        assert mod in registered, (
            f"Module '{mod}' was not registered. Registered: {registered}"
        )

    assert len(registered) == len(EXPECTED_MODULES)


def test_feature_flag_disables_module(tmp_db_dir):
    """A module switched off in `features` is not registered and its routes 404."""
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["SECRET_KEY"] = "test-secret"
    app.config["DB_DIR"] = tmp_db_dir

    lumen = Lumen(app, {'features': {'events': False}})

    assert "events" not in lumen.get_registered_modules()
    rules = [rule.rule for rule in app.url_map.iter_rules()]
    assert "/api/events" not in rules
    assert "/api/products" in rules


# ---------------------------------------------------------------------------
# 4. Template context -- lumen_config and brand_name are injected
# ---------------------------------------------------------------------------

def test_template_context_injection(app):
    """Context processor injects lumen_config and brand_name."""
    with app.test_request_context("/"):
        ctx = {}
        for func in app.template_context_processors[None]:
            ctx.update(func())

        assert "lumen_config" in ctx, "lumen_config missing from template context"
        assert "brand_name" in ctx, "brand_name missing from template context"
        assert isinstance(ctx["lumen_config"], dict)
        assert isinstance(ctx["brand_name"], str)
        assert len(ctx["brand_name"]) > 0


# ---------------------------------------------------------------------------
# 5. Database directory creation -- _setup_database_dir creates the dir
# ---------------------------------------------------------------------------

def test_database_dir_creation():
    """_setup_database_dir creates the configured DB_DIR on disk."""
    d = tempfile.mkdtemp(prefix="lumen-dbtest-")
    target = os.path.join(d, "sub", "databases")

    try:
        app = Flask(__name__)
        app.config["TESTING"] = True
        app.config["SECRET_KEY"] = "test-secret"
        app.config["DB_DIR"] = target

        Lumen(app)

        assert os.path.isdir(target), f"DB_DIR was not created at {target}"
        assert os.path.isfile(os.path.join(target, "studio.db"))
    finally:
        shutil.rmtree(d, ignore_errors=True)


# ---------------------------------------------------------------------------
# 6. Admin auth guard -- unauthenticated requests are turned away
# ---------------------------------------------------------------------------

def test_admin_auth_redirect(client):
    """Unauthenticated GET to /admin/ should redirect to login."""
    response = client.get("/admin/", follow_redirects=False)
    assert response.status_code == 302, (
        f"Expected 302 redirect, got {response.status_code}"
    )
    assert "/admin/login" in response.headers.get("Location", "")


def test_admin_api_requires_session(client):
    """Every resource list endpoint answers 401 without a session."""
    for resource in ("blog", "classes", "coaches", "events", "products"):
        response = client.get(f"/api/{resource}")
        assert response.status_code == 401, resource
        assert response.get_json()["code"] == "Unauthenticated"


# ---------------------------------------------------------------------------
# 7. Health endpoint -- GET /health returns status and checks
# ---------------------------------------------------------------------------

def test_health_endpoint(client):
    """GET /health returns JSON with status field and checks dict.
    HTTP 200 whenever the store answers."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.get_json()
    assert data["status"] in ("ok", "warning")
    assert data["checks"]["database"]["status"] == "ok"
    assert "disk" in data["checks"]


def test_health_full_disk_is_only_a_warning(client):
    """A nearly full disk is reported but does not fail the check."""
    with patch("lumen.modules.ops.routes._get_disk_usage", return_value={"percent": 97}):
        response = client.get("/health")

    assert response.status_code == 200
    data = response.get_json()
    assert data["status"] == "warning"
    assert [issue["type"] for issue in data["issues"]] == ["disk_critical"]


def test_health_endpoint_database_down(client):
    """A failing store makes /health critical with HTTP 503."""
    with patch("lumen.modules.ops.routes.ping", side_effect=OperationalError("SELECT 1", {}, Exception("down"))):
        response = client.get("/health")

    assert response.status_code == 503
    data = response.get_json()
    assert data["status"] == "critical"
    assert data["checks"]["database"]["status"] == "critical"


# ---------------------------------------------------------------------------
# 8. CORS -- /api/* answers preflight for the configured origin
# ---------------------------------------------------------------------------

def test_cors_allows_configured_origin(client):
    response = client.options(
        "/api/blog",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "GET",
        },
    )
    assert response.headers.get("Access-Control-Allow-Origin") == "http://localhost:3000"
    assert response.headers.get("Access-Control-Allow-Credentials") == "true"
