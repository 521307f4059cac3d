"""API tests. The in-memory repo replaces the SQL store unless noted."""

import pytest
from fastapi.testclient import TestClient

from api.main import app, get_repository
from contactbook.infrastructure import InMemoryContactRepository


@pytest.fixture
def client():
    repo = InMemoryContactRepository()
    app.dependency_overrides[get_repository] = lambda: repo
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


class _BrokenRepository:
    def _fail(self, *args, **kwargs):
        raise OSError("could not connect to server: Connection refused")

    list_all = get_by_id = insert = update_by_id = delete_by_id = _fail


@pytest.fixture
def broken_client():
    app.dependency_overrides[get_repository] = lambda: _BrokenRepository()
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _create(client, **fields):
    body = {"firstName": "Jane", "lastName": "Doe"}
    body.update(fields)
    return client.post("/contacts", json=body)


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_list_empty(client):
    r = client.get("/contacts")
    assert r.status_code == 200
    assert r.json() == []


def test_create_returns_201_with_location_and_camel_case_body(client):
    r = _create(client, email="jane@x.com", id=55)
    assert r.status_code == 201
    body = r.json()
    assert body == {
        "id": 1,
        "firstName": "Jane",
        "lastName": "Doe",
        "email": "jane@x.com",
        "phone": None,
    }
    assert r.headers["location"].endswith("/contacts/1")


def test_create_missing_names_is_400(client):
    r = client.post("/contacts", json={"firstName": "  ", "lastName": "Doe"})
    assert r.status_code == 400
    assert r.json() == {"message": "First Name and Last Name are required."}

    r = client.post("/contacts", json={"email": "a@b.c"})
    assert r.status_code == 400
    assert client.get("/contacts").json() == []


def test_create_malformed_body_is_400(client):
    r = client.post("/contacts", json={"firstName": ["not", "a", "string"], "lastName": "Doe"})
    assert r.status_code == 400
    assert "message" in r.json()


def test_create_duplicate_email_is_409(client):
    assert _create(client, email="jane@x.com").status_code == 201
    r = _create(client, firstName="Other", email="jane@x.com")
    assert r.status_code == 409
    assert "jane@x.com" in r.json()["message"]


def test_get_missing_is_404(client):
    r = client.get("/contacts/99")
    assert r.status_code == 404
    assert r.json() == {"message": "Contact with ID 99 not found."}


def test_null_fields_round_trip_as_null(client):
    created = _create(client, email=None, phone=None).json()
    r = client.get(f"/contacts/{created['id']}")
    assert r.status_code == 200
    assert r.json()["email"] is None
    assert r.json()["phone"] is None


def test_list_is_ordered_by_last_then_first_name(client):
    _create(client, firstName="Bob", lastName="Zed")
    _create(client, firstName="Amy", lastName="Adams")
    r = client.get("/contacts")
    assert [c["lastName"] for c in r.json()] == ["Adams", "Zed"]


def test_update_id_mismatch_is_400(client):
    created = _create(client).json()
    r = client.put(
        f"/contacts/{created['id']}",
        json={"id": created["id"] + 1, "firstName": "Jane", "lastName": "Doe"},
    )
    assert r.status_code == 400
    assert "mismatch" in r.json()["message"]


def test_update_without_body_id_is_400(client):
    created = _create(client).json()
    r = client.put(f"/contacts/{created['id']}", json={"firstName": "Jane", "lastName": "Doe"})
    assert r.status_code == 400


def test_update_missing_is_404(client):
    r = client.put("/contacts/7", json={"id": 7, "firstName": "A", "lastName": "B"})
    assert r.status_code == 404


def test_update_conflict_is_409(client):
    _create(client, email="jane@x.com")
    bob = _create(client, firstName="Bob", email="bob@x.com").json()
    r = client.put(
        f"/contacts/{bob['id']}",
        json={"id": bob["id"], "firstName": "Bob", "lastName": "Doe", "email": "jane@x.com"},
    )
    assert r.status_code == 409


def test_delete_then_delete_again(client):
    created = _create(client).json()
    r = client.delete(f"/contacts/{created['id']}")
    assert r.status_code == 204
    assert r.content == b""
    assert client.delete(f"/contacts/{created['id']}").status_code == 404


def test_internal_errors_are_500_without_details(broken_client):
    for method, path, body in [
        ("GET", "/contacts", None),
        ("GET", "/contacts/1", None),
        ("POST", "/contacts", {"firstName": "A", "lastName": "B"}),
        ("PUT", "/contacts/1", {"id": 1, "firstName": "A", "lastName": "B"}),
        ("DELETE", "/contacts/1", None),
    ]:
        r = broken_client.request(method, path, json=body)
        assert r.status_code == 500
        message = r.json()["message"]
        assert "internal server error" in message
        assert "Connection refused" not in message


def test_end_to_end_scenario(client):
    r = _create(client, email="jane@x.com")
    assert r.status_code == 201
    contact_id = r.json()["id"]

    assert _create(client, email="jane@x.com").status_code == 409

    r = client.put(
        f"/contacts/{contact_id}",
        json={"id": contact_id, "firstName": "Jane", "lastName": "Smith"},
    )
    assert r.status_code == 204

    r = client.get(f"/contacts/{contact_id}")
    assert r.status_code == 200
    assert r.json()["lastName"] == "Smith"

    assert client.delete(f"/contacts/{contact_id}").status_code == 204
    assert client.get(f"/contacts/{contact_id}").status_code == 404


def test_lifespan_wires_sql_store(tmp_path, monkeypatch):
    monkeypatch.setenv("CONTACTBOOK_DATABASE_URL", f"sqlite:///{tmp_path / 'api.db'}")
    with TestClient(app) as client:
        r = _create(client, email="jane@x.com")
        assert r.status_code == 201
        contact_id = r.json()["id"]
        assert _create(client, email="jane@x.com").status_code == 409
        assert client.get(f"/contacts/{contact_id}").json()["email"] == "jane@x.com"
        assert client.delete(f"/contacts/{contact_id}").status_code == 204


@pytest.mark.parametrize("contact_id", [2**31, 9223372036854775808])
def test_ids_beyond_column_range_are_404_on_sql_store(tmp_path, monkeypatch, contact_id):
    monkeypatch.setenv("CONTACTBOOK_DATABASE_URL", f"sqlite:///{tmp_path / 'range.db'}")
    with TestClient(app) as client:
        assert client.get(f"/contacts/{contact_id}").status_code == 404
        r = client.put(
            f"/contacts/{contact_id}",
            json={"id": contact_id, "firstName": "A", "lastName": "B"},
        )
        assert r.status_code == 404
        assert client.delete(f"/contacts/{contact_id}").status_code == 404


def test_boolean_body_id_is_rejected(client):
    created = _create(client).json()
    assert created["id"] == 1
    r = client.put("/contacts/1", json={"id": True, "firstName": "Jane", "lastName": "Smith"})
    assert r.status_code == 400
    assert client.get("/contacts/1").json()["lastName"] == "Doe"


def test_update_and_delete_messages_name_the_operation(client):
    r = client.put("/contacts/8", json={"id": 8, "firstName": "A", "lastName": "B"})
    assert r.json() == {"message": "Contact with ID 8 not found for update."}
    r = client.delete("/contacts/8")
    assert r.json() == {"message": "Contact with ID 8 not found for deletion."}


def test_update_conflict_message(client):
    _create(client, email="jane@x.com")
    bob = _create(client, firstName="Bob", email="bob@x.com").json()
    r = client.put(
        f"/contacts/{bob['id']}",
        json={"id": bob["id"], "firstName": "Bob", "lastName": "Doe", "email": "jane@x.com"},
    )
    assert r.status_code == 409
    assert r.json() == {
        "message": "Cannot update contact, the email 'jane@x.com' is already in use by another contact."
    }
