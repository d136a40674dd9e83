"""Endpoint tests for the /gamers routes, through the full app with a temporary JSON store."""

import json
import logging
from pathlib import Path
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from src.api.app import create_app
from src.core.config import ApiConfig
from src.core.models import GamerModel
from src.db.json_repository import JsonFileGamerRepository


def create(client: TestClient, body: dict) -> dict:
    response = client.post("/gamers", json=body)
    assert response.status_code == 200
    return response.json()


# -- List --
def test_list_empty(client: TestClient) -> None:
    response = client.get("/gamers")
    assert response.status_code == 200
    assert response.json() == []


def test_list_reflects_inserts_in_order(client: TestClient) -> None:
    created = [create(client, {"title": f"Score = {score}"}) for score in (10, 20, 30)]
    response = client.get("/gamers")
    assert response.status_code == 200
    assert response.json() == created


# -- Create / Get --
def test_create_then_get(client: TestClient) -> None:
    created = create(client, {"title": "Score = 100", "author": "A"})
    assert isinstance(created["id"], str) and created["id"]
    assert created == {"id": created["id"], "title": "Score = 100", "author": "A"}

    response = client.get(f"/gamers/{created['id']}")
    assert response.status_code == 200
    assert response.json() == created


def test_create_ignores_client_id(client: TestClient) -> None:
    existing = create(client, {"title": "first"})
    created = create(client, {"id": existing["id"], "title": "second"})
    assert created["id"] != existing["id"]
    assert len(client.get("/gamers").json()) == 2


def test_create_keeps_arbitrary_json_values(client: TestClient) -> None:
    body = {"score": 1.5, "active": False, "nickname": None, "tags": ["a"], "stats": {"k": 1}}
    created = create(client, body)
    assert client.get(f"/gamers/{created['id']}").json() == {"id": created["id"], **body}


def test_get_absent_id(client: TestClient) -> None:
    response = client.get("/gamers/doesnotexist")
    assert response.status_code == 404
    assert response.content == b""


def test_create_storage_failure_is_500(client: TestClient) -> None:
    with patch.object(
        JsonFileGamerRepository, "create_gamer", side_effect=OSError("disk full")
    ):
        response = client.post("/gamers", json={"title": "T"})
    assert response.status_code == 500
    assert response.json() == {"error": "OSError", "message": "disk full"}


# -- Malformed requests --
def test_malformed_json_is_400(client: TestClient) -> None:
    response = client.post(
        "/gamers",
        content=b'{"title": "unterminated',
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert client.get("/gamers").json() == []


def test_non_object_body_is_422(client: TestClient) -> None:
    response = client.post("/gamers", json=["not", "an", "object"])
    assert response.status_code == 422


def test_malformed_json_on_update_is_400(client: TestClient) -> None:
    created = create(client, {"title": "A"})
    response = client.put(
        f"/gamers/{created['id']}",
        content=b"{nope}",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400


@pytest.mark.parametrize(
    "body",
    [
        b'{"score": NaN}',
        b'{"score": Infinity}',
        b'{"score": -Infinity}',
        b'{"stats": {"ratio": [1, NaN]}}',  # nested
    ],
)
def test_non_finite_numbers_are_400(client: TestClient, db_file: Path, body: bytes) -> None:
    """NaN / Infinity are not JSON: nothing gets stored and the file stays plain JSON."""
    response = client.post("/gamers", content=body, headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    assert client.get("/gamers").json() == []
    assert json.loads(db_file.read_text(encoding="utf-8")) == {"gamers": []}


def test_non_finite_number_on_update_is_400(client: TestClient) -> None:
    created = create(client, {"score": 1})
    response = client.put(
        f"/gamers/{created['id']}",
        content=b'{"score": Infinity}',
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert client.get(f"/gamers/{created['id']}").json() == created


# -- Update --
def test_update_merges_not_replaces(client: TestClient) -> None:
    created = create(client, {"title": "A", "author": "B"})
    gamer_id = created["id"]

    response = client.put(f"/gamers/{gamer_id}", json={"title": "C", "id": "other"})
    assert response.status_code == 200
    assert response.json() == {"id": gamer_id, "title": "C", "author": "B"}
    assert client.get(f"/gamers/{gamer_id}").json() == {"id": gamer_id, "title": "C", "author": "B"}
    assert client.get("/gamers/other").status_code == 404


def test_update_absent_id_is_permissive(client: TestClient) -> None:
    response = client.put("/gamers/doesnotexist", json={"title": "C"})
    assert response.status_code == 200
    assert response.json() is None
    assert client.get("/gamers").json() == []


def test_update_storage_failure_is_500(client: TestClient) -> None:
    created = create(client, {"title": "A"})
    with patch.object(
        JsonFileGamerRepository, "update_gamer", side_effect=RuntimeError("boom")
    ):
        response = client.put(f"/gamers/{created['id']}", json={"title": "C"})
    assert response.status_code == 500
    assert response.json() == {"error": "RuntimeError", "message": "boom"}


# -- Delete --
def test_delete_existing(client: TestClient) -> None:
    first = create(client, {"title": "A"})
    second = create(client, {"title": "B"})

    response = client.delete(f"/gamers/{first['id']}")
    assert response.status_code == 200
    assert response.content == b""
    assert client.get("/gamers").json() == [second]


def test_delete_absent_id(client: TestClient) -> None:
    create(client, {"title": "A"})
    response = client.delete("/gamers/doesnotexist")
    assert response.status_code == 200
    assert len(client.get("/gamers").json()) == 1


# -- Persistence / wiring --
def test_backing_file_follows_mutations(client: TestClient, db_file: Path) -> None:
    created = create(client, {"title": "A"})
    assert json.loads(db_file.read_text(encoding="utf-8")) == {
        "gamers": [{"id": created["id"], "title": "A"}]
    }
    client.delete(f"/gamers/{created['id']}")
    assert json.loads(db_file.read_text(encoding="utf-8")) == {"gamers": []}


def test_restart_keeps_collection(test_config: ApiConfig) -> None:
    with TestClient(create_app(test_config)) as first_run:
        created = [create(first_run, {"rank": rank}) for rank in range(3)]

    with TestClient(create_app(test_config)) as second_run:
        assert second_run.get("/gamers").json() == created


def test_explicit_repository_is_used(test_config: ApiConfig, tmp_path: Path) -> None:
    """A repository handed to create_app replaces the configured store."""
    repo = JsonFileGamerRepository(tmp_path / "other.json", collection="players")
    app = create_app(test_config, repository=repo)
    repo.create_gamer(GamerModel(id="seeded", fields={"title": "T"}))

    with TestClient(app) as test_client:
        assert test_client.get("/gamers").json() == [{"id": "seeded", "title": "T"}]


def test_sql_backend(tmp_path: Path) -> None:
    config = ApiConfig(store_backend="sql", database_url=f"sqlite:///{tmp_path / 'gamers.db'}")
    with TestClient(create_app(config)) as test_client:
        created = create(test_client, {"title": "A", "author": "B"})
        test_client.put(f"/gamers/{created['id']}", json={"title": "C"})
        assert test_client.get(f"/gamers/{created['id']}").json() == {
            "id": created["id"],
            "title": "C",
            "author": "B",
        }
        assert test_client.delete(f"/gamers/{created['id']}").status_code == 200
        assert test_client.get("/gamers").json() == []


# -- Cross-cutting --
def test_cors_headers(client: TestClient) -> None:
    response = client.get("/gamers", headers={"Origin": "http://example.com"})
    assert response.headers["access-control-allow-origin"] == "*"


def test_api_docs(client: TestClient) -> None:
    response = client.get("/api-docs")
    assert response.status_code == 200
    assert "swagger" in response.text.lower()

    spec = client.get("/api-docs/openapi.json").json()
    assert spec["info"]["title"] == "Gamers API"
    assert spec["servers"] == [{"url": "http://localhost:4000"}]
    assert set(spec["paths"]) == {"/gamers", "/gamers/{gamer_id}"}


def test_failed_write_leaves_collection_unchanged(client: TestClient, db_file: Path) -> None:
    """A create or update whose write fails answers 500 and is not visible afterwards."""
    created = create(client, {"title": "A"})

    # A directory in place of the backing file makes every write fail
    db_file.unlink()
    db_file.mkdir()

    response = client.post("/gamers", json={"title": "ghost"})
    assert response.status_code == 500
    assert response.json()["error"] == "RepositoryError"

    response = client.put(f"/gamers/{created['id']}", json={"title": "changed"})
    assert response.status_code == 500

    assert client.get("/gamers").json() == [created]


def test_access_log_line(client: TestClient, caplog: pytest.LogCaptureFixture) -> None:
    """One morgan-style line per request: METHOD path status duration ms - content-length."""
    with caplog.at_level(logging.INFO, logger="src.api.access"):
        created = client.post("/gamers", json={"title": "A"})
        missing = client.get("/gamers/doesnotexist")

    lines = [record.getMessage() for record in caplog.records if record.name == "src.api.access"]
    assert len(lines) == 2

    method, path, status, duration, unit, dash, length = lines[0].split(" ")
    assert (method, path, status, unit, dash) == ("POST", "/gamers", "200", "ms", "-")
    assert float(duration) >= 0
    assert length == created.headers["content-length"]

    method, path, status, _, _, _, length = lines[1].split(" ")
    assert (method, path, status) == ("GET", "/gamers/doesnotexist", "404")
    assert length == missing.headers["content-length"] == "0"
