"""Integration tests for the JSON API and HTML pages."""

import pytest
from fastapi.testclient import TestClient

import tagsummary.domain.corpus as corpus_mod
import tagsummary.settings_store as store
from tagsummary.domain.pipeline import EMPTY_SUMMARY_MESSAGE
from tagsummary.main import app


@pytest.fixture
def client(vault, tmp_path, monkeypatch):
    monkeypatch.setattr(corpus_mod, "VAULT_PATH", str(vault))
    monkeypatch.setattr(store, "SETTINGS_PATH", str(tmp_path / "settings.json"))
    return TestClient(app)


PLAIN = {"include_link": False, "include_callout": False}


def test_summary_without_matches(client):
    resp = client.post("/api/summary", json={"source": "tags: #project/beta\nexclude: #private", "options": PLAIN})
    assert resp.status_code == 200
    body = resp.json()
    assert body == {
        "markdown": "",
        "empty": True,
        "message": EMPTY_SUMMARY_MESSAGE,
        "fragment_count": 0,
        "document_count": 0,
    }


def test_summary_with_matches_uses_stored_settings(client):
    client.put("/api/settings", json={"include_callout": False})
    resp = client.post("/api/summary", json={"source": "tags: #review"})
    body = resp.json()
    assert body["empty"] is False
    assert body["markdown"] == (
        "Needs review #project/beta #review\n\n"
        "Source: **[[Projects/beta.md|beta]]**\n\n\n"
    )
    assert body["fragment_count"] == 1


def test_directive(client):
    resp = client.post("/api/directive", json={"include": "#project", "exclude": "#private"})
    assert resp.json() == {"block": "```add-summary\ntags: #project\nexclude: #private\n```\n"}


def test_directive_requires_include(client):
    assert client.post("/api/directive", json={"include": ""}).status_code == 422


def test_tags(client):
    assert "#project/alpha" in client.get("/api/tags").json()["tags"]


def test_settings_round_trip(client):
    assert client.get("/api/settings").json() == {
        "include_link": True,
        "include_callout": True,
        "remove_tags": False,
        "include_children": True,
    }
    resp = client.put("/api/settings", json={"include_link": False})
    assert resp.json()["include_link"] is False
    assert client.get("/api/settings").json()["include_link"] is False


def test_notes_list(client):
    paths = [n["path"] for n in client.get("/api/notes").json()]
    assert paths[0] == "Ideas.md"
    assert "Projects/beta.md" in paths


def test_note_expanded(client):
    client.put("/api/settings", json={"include_link": False, "include_callout": False})
    resp = client.get("/api/notes/Overview.md")
    assert resp.status_code == 200
    body = resp.json()
    assert body["display_name"] == "Overview"
    assert body["markdown"] == "# Overview\n\nKick-off on Monday #project/alpha ^kickoff\n\nEnd\n"


def test_note_missing(client):
    assert client.get("/api/notes/nope.md").status_code == 404


def test_pages(client):
    index = client.get("/")
    assert index.status_code == 200
    assert "Projects/alpha.md" in index.text

    page = client.get("/notes/Overview.md")
    assert page.status_code == 200
    assert "Kick-off on Monday" in page.text


def test_empty_note_page_shows_message(client, vault):
    (vault / "Blank.md").write_text("", encoding="utf-8")
    page = client.get("/notes/Blank.md")
    assert page.status_code == 200
    assert "This note is empty." in page.text


def test_undecodable_note_does_not_break_vault(client, vault):
    (vault / "Latin1.md").write_bytes(b"caf\xe9 #review\n")

    assert client.get("/api/notes/Latin1.md").status_code == 422
    assert client.get("/notes/Latin1.md").status_code == 422
    assert "#review" in client.get("/api/tags").json()["tags"]

    resp = client.post("/api/summary", json={"source": "tags: #review", "options": PLAIN})
    assert resp.status_code == 200
    assert resp.json()["markdown"] == "Needs review #project/beta #review\n\n\n"
