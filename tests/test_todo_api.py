from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from todo_api.api.deps import get_todo_repo
from todo_api.api.schemas.todo import TodoOut
from todo_api.domain.errors import ValidationError
from todo_api.domain.todos.schemas import Todo
from todo_api.infrastructure.db.models import Base
from todo_api.main import app

TODOS = "/api/todos"


def _create(client, title="new title", contents="new contents"):
    res = client.post(TODOS, json={"title": title, "contents": contents})
    assert res.status_code == 201, res.text
    return res.json()


def test_create_returns_201_with_generated_fields(client):
    body = _create(client)

    assert set(body) == {"id", "title", "contents", "create_at"}
    assert body["id"]
    assert body["title"] == "new title"
    assert body["contents"] == "new contents"
    datetime.fromisoformat(body["create_at"])


def test_list_returns_array_of_created_todos(client):
    assert client.get(TODOS).json() == []

    a = _create(client, "FIRST TITLE", "FIRST CONTENTS")
    b = _create(client, "SECOND TITLE", "SECOND CONTENTS")

    res = client.get(TODOS)
    assert res.status_code == 200
    assert sorted(res.json(), key=lambda t: t["id"]) == sorted([a, b], key=lambda t: t["id"])


def test_get_by_id(client):
    created = _create(client)

    res = client.get(f"{TODOS}/{created['id']}")

    assert res.status_code == 200
    assert res.json() == created


def test_get_unknown_id_is_404_with_error_envelope(client):
    res = client.get(f"{TODOS}/does-not-exist")

    assert res.status_code == 404
    assert res.json() == {"errors": [{"message": "Not found entity"}]}


def test_update_keeps_id_and_create_at(client):
    created = _create(client, "buy milk", "2%")

    res = client.put(f"{TODOS}/{created['id']}", json={"title": "buy milk", "contents": "whole"})

    assert res.status_code == 200
    assert res.json() == {**created, "contents": "whole"}
    assert client.get(f"{TODOS}/{created['id']}").json()["contents"] == "whole"


def test_update_unknown_id_is_404(client):
    res = client.put(f"{TODOS}/does-not-exist", json={"title": "t", "contents": "c"})

    assert res.status_code == 404
    assert res.json()["errors"][0]["message"] == "Not found entity"
    assert client.get(TODOS).json() == []


def test_update_invalid_payload_is_400(client):
    created = _create(client)

    res = client.put(f"{TODOS}/{created['id']}", json={"contents": "no title"})

    assert res.status_code == 400
    assert res.json()["errors"][0]["message"].startswith("title:")


def test_delete_returns_removed_id(client):
    created = _create(client)

    res = client.delete(f"{TODOS}/{created['id']}")

    assert res.status_code == 200
    assert res.json() == created["id"]
    assert client.get(f"{TODOS}/{created['id']}").status_code == 404


def test_delete_unknown_id_is_404(client):
    res = client.delete(f"{TODOS}/does-not-exist")

    assert res.status_code == 404
    assert "errors" in res.json()


def test_create_with_missing_fields_is_400(client):
    res = client.post(TODOS, json={})

    assert res.status_code == 400
    messages = [e["message"] for e in res.json()["errors"]]
    assert len(messages) == 2
    assert any(m.startswith("title:") for m in messages)
    assert any(m.startswith("contents:") for m in messages)


def test_create_with_blank_title_is_400(client):
    res = client.post(TODOS, json={"title": "   ", "contents": "c"})

    assert res.status_code == 400
    assert client.get(TODOS).json() == []


def test_create_with_malformed_json_is_400(client):
    res = client.post(TODOS, content=b"{not json", headers={"Content-Type": "application/json"})

    assert res.status_code == 400
    assert res.json()["errors"]


def test_create_ignores_client_supplied_id(client):
    res = client.post(TODOS, json={"id": "mine", "title": "t", "contents": "c", "create_at": "2000-01-01"})

    assert res.status_code == 201
    assert res.json()["id"] != "mine"
    assert not res.json()["create_at"].startswith("2000")


def test_method_not_allowed_uses_error_envelope(client):
    res = client.patch(f"{TODOS}/any", json={})

    assert res.status_code == 405
    assert res.json() == {"errors": [{"message": "Method Not Allowed"}]}


def test_store_failure_is_500_with_error_envelope(client, engine):
    Base.metadata.drop_all(engine)

    res = client.get(TODOS)

    assert res.status_code == 500
    assert res.json() == {"errors": [{"message": "Internal server error"}]}


def test_uninitialized_store_is_500():
    # Sin override ni startup: la session factory no existe
    app.dependency_overrides.pop(get_todo_repo, None)
    res = TestClient(app).get(TODOS)

    assert res.status_code == 500
    assert res.json() == {"errors": [{"message": "Internal server error"}]}


def test_request_id_is_echoed(client):
    res = client.get(TODOS, headers={"X-Request-Id": "abc123"})

    assert res.headers["X-Request-Id"] == "abc123"
    assert client.get(TODOS).headers["X-Request-Id"]


def test_openapi_documents_todo_routes(client):
    doc = client.get("/openapi.json").json()

    assert doc["info"]["title"] == "Todo Starter API"
    assert {"get", "post"} <= set(doc["paths"][TODOS])
    assert {"get", "put", "delete"} <= set(doc["paths"][f"{TODOS}/{{id}}"])
    assert "404" in doc["paths"][f"{TODOS}/{{id}}"]["get"]["responses"]


def test_create_title_length_limit(client):
    too_long = client.post(TODOS, json={"title": "x" * 256, "contents": "c"})

    assert too_long.status_code == 400
    assert too_long.json()["errors"][0]["message"].startswith("title:")
    assert client.get(TODOS).json() == []

    at_limit = client.post(TODOS, json={"title": "x" * 255, "contents": "c"})
    assert at_limit.status_code == 201
    assert at_limit.json()["title"] == "x" * 255


def test_update_title_length_limit(client):
    created = _create(client)

    too_long = client.put(f"{TODOS}/{created['id']}", json={"title": "y" * 256, "contents": "c"})

    assert too_long.status_code == 400
    assert too_long.json()["errors"][0]["message"].startswith("title:")
    assert client.get(f"{TODOS}/{created['id']}").json()["title"] == created["title"]

    at_limit = client.put(f"{TODOS}/{created['id']}", json={"title": "y" * 255, "contents": "c"})
    assert at_limit.status_code == 200
    assert at_limit.json()["title"] == "y" * 255


def test_domain_validation_error_uses_error_envelope(client):
    @app.get("/_raise-validation")
    def _raise():
        raise ValidationError(details=["title: too short", "contents: required"])

    try:
        res = client.get("/_raise-validation")
    finally:
        app.router.routes.pop()

    assert res.status_code == 400
    assert res.json() == {"errors": [{"message": "title: too short"}, {"message": "contents: required"}]}


def test_todo_out_requires_persisted_todo():
    with pytest.raises(ValueError):
        TodoOut.from_domain(Todo(title="draft"))


def test_openapi_path_parameter_is_id(client):
    doc = client.get("/openapi.json").json()

    params = doc["paths"][f"{TODOS}/{{id}}"]["get"]["parameters"]
    assert [(p["name"], p["in"]) for p in params] == [("id", "path")]
