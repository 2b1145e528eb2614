# tests/test_notes.py
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

BASE = "/api/v1/notes"

def test_notes_crud_scenario(client):
    # création: le balisage est échappé
    r = client.post(f"{BASE}/", json={"title": "Hi", "text": "<b>x</b>", "datetime": "2020-01-01T00:00:00Z"})
    assert r.status_code == 201
    [note] = r.get_json()
    note_id = note["id"]
    assert note["title"] == "Hi"
    assert "<" not in note["text"] and ">" not in note["text"]

    # lecture
    r = client.get(f"{BASE}/{note_id}")
    assert r.status_code == 200
    assert r.get_json() == [note]

    # liste brute, sans enveloppe
    r = client.get(f"{BASE}/")
    assert r.status_code == 200
    assert note_id in [n["id"] for n in r.get_json()]

    # remplacement complet
    r = client.put(f"{BASE}/{note_id}", json={"title": "Bye", "text": "y", "datetime": "2021-01-01T00:00:00Z"})
    assert r.status_code == 200
    [updated] = r.get_json()
    assert (updated["title"], updated["text"]) == ("Bye", "y")
    assert updated["datetime"].startswith("2021-01-01T00:00:00")

    r = client.get(f"{BASE}/{note_id}")
    assert r.get_json() == [updated]

    # suppression: 204 sans corps
    r = client.delete(f"{BASE}/{note_id}")
    assert r.status_code == 204
    assert r.data == b""

    # re-get -> 404
    r = client.get(f"{BASE}/{note_id}")
    assert r.status_code == 404
    assert r.get_json() == {"error": "Note not found"}

def test_create_validation_errors(client):
    r = client.post(f"{BASE}/", json={"title": "t" * 256, "text": "ok", "datetime": "yesterday"})
    assert r.status_code == 400
    assert r.get_json() == [
        {"field": "title", "error": "title must be a non-empty string"},
        {"field": "datetime", "error": "Datetime must be a ISO 8601 date"},
    ]

def test_create_without_json_body(client):
    r = client.post(f"{BASE}/", data="not json", content_type="text/plain")
    assert r.status_code == 400
    assert [e["field"] for e in r.get_json()] == ["title", "text", "datetime"]

def test_update_validation_errors(client):
    r = client.post(f"{BASE}/", json={"title": "Keep", "text": "me", "datetime": "2020-01-01T00:00:00Z"})
    note_id = r.get_json()[0]["id"]

    r = client.put(f"{BASE}/{note_id}", json={"title": "", "text": None, "datetime": "2021-01-01T00:00:00Z"})
    assert r.status_code == 400
    assert [e["field"] for e in r.get_json()] == ["title", "text"]

    r = client.get(f"{BASE}/{note_id}")
    assert r.get_json()[0]["title"] == "Keep"

def test_unknown_note_is_404(client):
    for method in ("get", "delete"):
        r = getattr(client, method)(f"{BASE}/987654")
        assert r.status_code == 404
        assert r.get_json() == {"error": "Note not found"}

    r = client.put(f"{BASE}/987654", json={"title": "x", "text": "y", "datetime": "2021-01-01T00:00:00Z"})
    assert r.status_code == 404
    assert r.get_json() == {"error": "Note not found"}

def test_non_integer_id_hits_generic_404(client):
    r = client.get(f"{BASE}/abc")
    assert r.status_code == 404
    assert r.get_json()["error"]["code"] == "http_error"

def test_method_not_allowed(client):
    r = client.patch(f"{BASE}/1", json={})
    assert r.status_code == 405
    assert r.get_json()["error"]["code"] == "http_error"

def test_storage_error_is_forwarded_to_generic_handler(app, client, monkeypatch):
    store = app.extensions["note_store"]

    def boom(*args, **kwargs):
        raise OperationalError("SELECT * FROM notes", {}, Exception("connection refused"))

    monkeypatch.setattr(store, "read_all", boom)
    r = client.get(f"{BASE}/")
    assert r.status_code == 500
    assert r.get_json()["error"]["code"] == "storage_error"

def test_unexpected_error_is_forwarded_to_generic_handler(app, client, monkeypatch):
    store = app.extensions["note_store"]

    def boom(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(store, "read_one", boom)
    r = client.get(f"{BASE}/1")
    assert r.status_code == 500
    assert r.get_json()["error"]["code"] == "internal_error"

def test_negative_and_out_of_range_ids_are_not_found(client):
    for note_id in ("-1", "99999999999999999999"):
        for method in ("get", "delete"):
            r = getattr(client, method)(f"{BASE}/{note_id}")
            assert r.status_code == 404
            assert r.get_json() == {"error": "Note not found"}

        r = client.put(f"{BASE}/{note_id}", json={"title": "x", "text": "y", "datetime": "2021-01-01T00:00:00Z"})
        assert r.status_code == 404
        assert r.get_json() == {"error": "Note not found"}

def test_create_with_no_inserted_row_returns_500(app, client, monkeypatch):
    engine = MagicMock()
    engine.begin.return_value.__exit__.return_value = False
    conn = engine.begin.return_value.__enter__.return_value
    conn.execute.return_value.mappings.return_value.all.return_value = []
    monkeypatch.setattr(app.extensions["note_store"], "engine", engine)

    r = client.post(f"{BASE}/", json={"title": "Hi", "text": "x", "datetime": "2020-01-01T00:00:00Z"})
    assert r.status_code == 500
    assert r.get_json() == "Internal error"
