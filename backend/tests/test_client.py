from __future__ import annotations

import pytest

from notekeeper.client import ApiError, NotesClient


@pytest.fixture
def notes_client(client):
    return NotesClient(http=client)


def test_full_flow(notes_client, summarizer):
    registered = notes_client.register("bob", "bob@x.com", "secret1")
    assert notes_client.is_authenticated
    assert notes_client.user == registered["user"]

    note = notes_client.create_note("A", "B", color_tag="green")
    notes_client.create_note("other", "text")
    notes_client.update_note(note["id"], is_pinned=True)

    listed = notes_client.list_notes()
    assert [n["title"] for n in listed] == ["A", "other"]
    assert [n["title"] for n in notes_client.list_notes(color="green")] == ["A"]
    assert [n["title"] for n in notes_client.list_notes(pinned=False)] == ["other"]
    assert [n["title"] for n in notes_client.search_notes("oth")] == ["other"]
    assert notes_client.get_note(note["id"])["is_pinned"] is True

    assert notes_client.summarize_note(note["id"]) == ("Summary of A.", False)
    assert notes_client.summarize_note(note["id"]) == ("Summary of A.", True)

    notes_client.update_note(note["id"], is_archived=True)
    assert [n["title"] for n in notes_client.list_notes(archived=True)] == ["A"]

    notes_client.delete_note(note["id"])
    with pytest.raises(ApiError) as excinfo:
        notes_client.get_note(note["id"])
    assert excinfo.value.status_code == 404
    assert excinfo.value.message == "Note not found"


def test_login_stores_token(notes_client):
    notes_client.register("bob", "bob@x.com", "secret1")
    notes_client.logout()
    assert not notes_client.is_authenticated

    notes_client.login("bob@x.com", "secret1")

    assert notes_client.is_authenticated
    assert notes_client.list_notes() == []


def test_rejected_token_is_forgotten(notes_client):
    notes_client.token = "abc.def.ghi"

    with pytest.raises(ApiError) as excinfo:
        notes_client.list_notes()

    assert excinfo.value.status_code == 401
    assert excinfo.value.message == "Invalid or expired token"
    assert notes_client.token is None


def test_requires_base_url_or_http():
    with pytest.raises(ValueError):
        NotesClient()
