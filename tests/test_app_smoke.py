from __future__ import annotations

from fastapi.testclient import TestClient


def test_app_smoke_routes(reload_endpoints):
    import app as app_module

    client = TestClient(app_module.create_app())

    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_document_lifecycle(reload_endpoints, sandbox_data):
    import app as app_module

    client = TestClient(app_module.create_app())

    r = client.get("/documents/todo")
    assert r.status_code == 404
    assert r.json()["error"] == "StorageIOError"

    r = client.put("/documents/todo", json={"items": [1, 2, 3]})
    assert r.status_code == 200
    assert r.json()["written"] == '{"items":[1,2,3]}'
    assert (sandbox_data / "todo.json").read_text(encoding="utf-8") == '{"items":[1,2,3]}'

    r = client.post("/documents/todo/arrays/items", json={"value": 5})
    assert r.status_code == 200
    assert r.json()["phase"] == "succeeded"
    assert r.json()["document"] == {"items": [1, 2, 3, 5]}

    r = client.put("/documents/todo/arrays/items/0", json={"value": "first"})
    assert r.status_code == 200

    r = client.delete("/documents/todo/arrays/items/1")
    assert r.status_code == 200

    r = client.get("/documents/todo")
    assert r.status_code == 200
    assert r.json() == {"name": "todo", "document": {"items": ["first", 3, 5]}}


def test_document_edit_errors(reload_endpoints, sandbox_data):
    import app as app_module

    client = TestClient(app_module.create_app())
    client.put("/documents/todo", json={"items": [1, 2, 3], "title": "x"})

    r = client.post("/documents/todo/arrays/missing", json={"value": 5})
    assert r.status_code == 404
    body = r.json()
    assert body["phase"] == "mutation_failed"
    assert "missing" in body["error"]
    assert body["written"] == '{"items":[1,2,3],"title":"x"}'

    r = client.post("/documents/todo/arrays/title", json={"value": 5})
    assert r.status_code == 409

    r = client.delete("/documents/todo/arrays/items/7")
    assert r.status_code == 404

    (sandbox_data / "broken.json").write_text("{not json", encoding="utf-8")
    r = client.get("/documents/broken")
    assert r.status_code == 500
    assert r.json()["error"] == "DecodeError"


def test_document_name_must_stay_in_data_dir(reload_endpoints):
    import app as app_module

    client = TestClient(app_module.create_app())

    r = client.get("/documents/.hidden")
    assert r.status_code == 400


def test_unencodable_body_is_rejected_without_touching_file(reload_endpoints, sandbox_data):
    import app as app_module

    client = TestClient(app_module.create_app())
    client.put("/documents/todo", json={"items": []})

    r = client.put(
        "/documents/todo",
        content='{"a":"\\ud800"}',
        headers={"content-type": "application/json"},
    )
    assert r.status_code == 400
    assert r.json()["error"] == "EncodeError"
    assert (sandbox_data / "todo.json").read_text(encoding="utf-8") == '{"items":[]}'


def test_log_level_falls_back_to_info():
    import logging

    import app as app_module

    assert app_module.log_level("debug") == logging.DEBUG
    assert app_module.log_level("WARNING") == logging.WARNING
    assert app_module.log_level("makeLogRecord") == logging.INFO
    assert app_module.log_level("nonsense") == logging.INFO
