"""
Client side: AdminApiClient against the real app (through the Flask test
client) and RecordStore cache / notification behaviour.
"""

from unittest.mock import MagicMock
from urllib.parse import urlsplit

import pytest
import requests

from lumen.client import AdminApiClient, RecordStore
from lumen.core.errors import NotFound, StoreUnavailable, ValidationError
from lumen.modules.auth.database import ADMIN_ROLE

from conftest import ADMIN_EMAIL, PASSWORD, create_account

BASE_URL = "http://studio.test"


class FlaskResponse:
    """Just enough of requests.Response for AdminApiClient"""

    def __init__(self, response):
        self.status_code = response.status_code
        self._data = response.get_json(silent=True)

    def json(self):
        if self._data is None:
            raise ValueError("No JSON body")
        return self._data


class FlaskSession:
    """Routes AdminApiClient requests into a Flask test client"""

    def __init__(self, test_client):
        self.test_client = test_client

    def request(self, method, url, json=None, timeout=None):
        path = urlsplit(url).path
        return FlaskResponse(self.test_client.open(path, method=method, json=json))


@pytest.fixture
def api(app):
    create_account(app, ADMIN_EMAIL, ADMIN_ROLE)
    client = AdminApiClient(BASE_URL, session=FlaskSession(app.test_client()))
    client.signin(ADMIN_EMAIL, PASSWORD)
    return client


@pytest.fixture
def coaches(api):
    store = RecordStore(api, "coaches")
    store.load()
    return store


# ---------------------------------------------------------------------------
# AdminApiClient
# ---------------------------------------------------------------------------

def test_client_roundtrip(api):
    created = api.create("products", {"name": "Practice Shoes", "price": 29.99, "stock": 10})
    assert created["slug"] == "practice-shoes"

    assert api.get("products", created["id"])["name"] == "Practice Shoes"
    assert api.patch_status("products", created["id"], "inactive")["status"] == "inactive"
    assert api.delete("products", created["id"])["success"] is True

    with pytest.raises(NotFound):
        api.get("products", created["id"])


def test_client_classifies_validation_errors(api):
    with pytest.raises(ValidationError) as excinfo:
        api.create("blog", {"title": "", "author": "Maria", "authorId": 1})

    assert excinfo.value.field == "title"


def test_client_transport_failure():
    session = MagicMock()
    session.request.side_effect = requests.ConnectionError("connection refused")
    client = AdminApiClient(BASE_URL, session=session)

    with pytest.raises(StoreUnavailable):
        client.list("events")

    session.request.assert_called_once_with("GET", f"{BASE_URL}/api/events", json=None, timeout=10)


def test_client_rejects_unknown_resource(api):
    with pytest.raises(ValueError):
        api.list("users")


# ---------------------------------------------------------------------------
# RecordStore
# ---------------------------------------------------------------------------

def test_load_empty_is_ready(coaches):
    assert coaches.state == "ready"
    assert coaches.records == []
    assert coaches.error is None


def test_load_failure_is_distinguishable(app):
    client = AdminApiClient(BASE_URL, session=FlaskSession(app.test_client()))
    store = RecordStore(client, "coaches")

    assert store.load() is False
    assert store.state == "error"
    assert store.error == "Authentication required"
    assert store.notifications[-1]["kind"] == "destructive"


def test_create_prepends_and_notifies(coaches):
    first = coaches.create({"name": "Jane Doe", "email": "jane@example.com"})
    second = coaches.create({"name": "Carlos Ruiz", "email": "carlos@example.com"})

    assert [r["id"] for r in coaches.records] == [second["id"], first["id"]]
    assert coaches.notifications[-1]["kind"] == "success"
    assert coaches.notifications[-1]["message"] == "Coach created successfully"


def test_update_and_patch_replace_by_id(coaches):
    jane = coaches.create({"name": "Jane Doe", "email": "jane@example.com"})
    coaches.create({"name": "Carlos Ruiz", "email": "carlos@example.com"})

    coaches.update(jane["id"], {"name": "Jane Doe", "email": "jane@example.com", "specialties": "Salsa, Tango"})
    assert coaches.find(jane["id"])["specialties"] == ["Salsa", "Tango"]

    coaches.patch_status(jane["id"], "on-leave")
    assert coaches.find(jane["id"])["status"] == "on-leave"
    assert len(coaches.records) == 2


def test_failed_mutation_leaves_state_unchanged(coaches):
    jane = coaches.create({"name": "Jane Doe", "email": "jane@example.com"})
    before = [dict(r) for r in coaches.records]

    assert coaches.create({"name": "No Email"}) is None
    assert coaches.update(jane["id"], {"name": "", "email": "jane@example.com"}) is None
    assert coaches.patch_status(jane["id"], "retired") is None
    assert coaches.delete(9999) is False

    assert coaches.records == before
    failures = [n for n in coaches.notifications if n["kind"] == "destructive"]
    assert len(failures) == 4
    assert failures[0]["message"] == "Email is required"
    assert failures[-1]["message"] == "Coach not found"


def test_delete_removes_by_id(coaches):
    jane = coaches.create({"name": "Jane Doe", "email": "jane@example.com"})

    assert coaches.delete(jane["id"]) is True
    assert coaches.records == []


def test_dismiss_notification(coaches):
    coaches.create({"name": "Jane Doe", "email": "jane@example.com"})
    notification = coaches.notifications[-1]

    coaches.dismiss(notification["id"])
    assert notification not in coaches.notifications


def test_mutations_never_relist(coaches):
    coaches.client = MagicMock(wraps=coaches.client)
    coaches.create({"name": "Jane Doe", "email": "jane@example.com"})

    coaches.client.list.assert_not_called()


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------

def test_filtered_by_search_and_facet(coaches):
    jane = coaches.create({"name": "Jane Doe", "email": "jane@example.com", "specialties": "Salsa, Tango"})
    carlos = coaches.create({"name": "Carlos Ruiz", "email": "carlos@example.com", "specialties": "Bachata"})
    coaches.patch_status(carlos["id"], "inactive")

    assert [r["id"] for r in coaches.filtered(search="tango")] == [jane["id"]]
    assert [r["id"] for r in coaches.filtered(search="RUIZ")] == [carlos["id"]]
    assert [r["id"] for r in coaches.filtered(facet="inactive")] == [carlos["id"]]
    assert len(coaches.filtered()) == 2
    assert coaches.filtered(search="jane", facet="inactive") == []


def test_products_filter_on_category(api):
    store = RecordStore(api, "products")
    store.load()
    store.create({"name": "Practice Shoes", "price": 29.99, "stock": 10, "category": "Footwear"})
    store.create({"name": "Studio Tee", "price": 15, "stock": 3, "category": "Apparel"})

    assert [r["name"] for r in store.filtered(facet="Apparel")] == ["Studio Tee"]
    assert [r["name"] for r in store.filtered(search="foot")] == ["Practice Shoes"]
