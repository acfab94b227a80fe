"""Tests for the HTTP surface."""

import pytest
from fastapi.testclient import TestClient

from app.config.settings import Settings
from app.main import app


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_split_with_overrides(client):
    resp = client.post(
        "/split",
        json={
            "text": "aaaa\n\nbbbb\n\ncccc",
            "max_chunk_size": 4,
            "chunk_overlap": 0,
            "separators": ["\n\n", ""],
        },
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["profile"] == "default"
    assert body["strategy"] == "recursive"
    assert body["total_chunks"] == 3
    assert [c["text"] for c in body["chunks"]] == ["aaaa", "bbbb", "cccc"]
    assert body["chunks"][2]["start"] == 12


def test_split_named_profile(client):
    resp = client.post("/split", json={"text": "# Title\nBody text.\n", "profile": "markdown"})
    assert resp.status_code == 200
    chunk = resp.json()["chunks"][0]
    assert chunk["text"] == "Body text."
    assert chunk["metadata"] == {"h1": "Title"}


def test_split_reports_oversized(client):
    resp = client.post(
        "/split",
        json={"text": "abcdef", "max_chunk_size": 2, "chunk_overlap": 0, "separators": [" "]},
    )
    assert resp.json()["oversized_chunks"] == 1


def test_invalid_overlap_is_422(client):
    resp = client.post("/split", json={"text": "abc", "max_chunk_size": 5, "chunk_overlap": 5})
    assert resp.status_code == 422
    assert "chunk_overlap" in resp.json()["detail"]


def test_unknown_profile_is_422(client):
    resp = client.post("/split", json={"text": "abc", "profile": "nope"})
    assert resp.status_code == 422


def test_text_too_large_is_413(client, monkeypatch):
    monkeypatch.setattr("app.controllers.routes.split.get_settings", lambda: Settings(max_text_chars=3))
    resp = client.post("/split", json={"text": "abcd"})
    assert resp.status_code == 413


def test_profiles(client):
    body = client.get("/split/profiles").json()
    assert body["active"] == "default"
    assert body["profiles"]["paragraphs"]["strategy"] == "character"
