"""Tests for the HTTP surface"""
import pytest
from fastapi.testclient import TestClient

from main import app


@pytest.fixture
def client():
    return TestClient(app)


def test_parse(client):
    response = client.post("/parse", json={"text": '{"files":{"a.ts":"console.log(1)"'})
    assert response.status_code == 200
    body = response.json()
    assert body["files"] == {"a.ts": "console.log(1)"}
    assert body["truncated"] is True
    assert body["format"] == "json"


def test_parse_error_is_unprocessable(client):
    response = client.post("/parse", json={"text": "no json at all"})
    assert response.status_code == 422
    assert response.json()["detail"]["kind"] == "no_json_found"


def test_ingest(client):
    response = client.post("/ingest", json={"text": '{"files": {"a.tsx": "import { clsx } from \'clsx\'"}}'})
    assert response.status_code == 200
    body = response.json()
    assert body["import_map"] == {"imports": {"clsx": "https://esm.sh/clsx@2.1.1"}}
    assert "react" in body["full_import_map"]["imports"]
    assert body["incomplete_files"] == []


def test_ingest_empty_file_set(client):
    response = client.post("/ingest", json={"text": '{"explanation": "sorry"}'})
    assert response.status_code == 422
    assert response.json()["detail"]["kind"] == "empty_file_set"


def test_import_map(client):
    response = client.post("/import-map", json={"files": {"a.ts": "import 'zod'"}})
    assert response.json() == {"imports": {"zod": "https://esm.sh/zod@3.23.8"}}


def test_base_import_map(client):
    imports = client.get("/import-map/base").json()["imports"]
    assert imports["react"] == "https://esm.sh/react@19.0.0"


def test_resolve(client):
    assert client.post("/resolve", json={"specifier": "./App"}).json() == {"specifier": "./App", "url": None}
    body = client.post("/resolve", json={"specifier": "lucide-react"}).json()
    assert body["url"] == "https://esm.sh/lucide-react@0.469.0?external=react"


def test_specifier_error(client):
    body = client.post("/specifier-error", json={"message": 'Failed to resolve module specifier "clsx"'}).json()
    assert body == {"specifier": "clsx", "url": "https://esm.sh/clsx@2.1.1"}
    body = client.post("/specifier-error", json={"message": "boom"}).json()
    assert body == {"specifier": None, "url": None}
