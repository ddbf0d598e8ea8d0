from __future__ import annotations

import pytest

from conftest import auth_headers, create_note


def titles(response) -> list[str]:
    assert response.status_code == 200, response.text
    return [n["title"] for n in response.json()["notes"]]


class TestAuthentication:
    def test_missing_token(self, client):
        response = client.get("/api/notes")

        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Authentication required"}
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_malformed_header_counts_as_missing(self, client, bob_token):
        response = client.get("/api/notes", headers={"Authorization": f"Token {bob_token}"})

        assert response.status_code == 401
        assert response.json()["message"] == "Authentication required"

    def test_invalid_token(self, client):
        response = client.get("/api/notes", headers=auth_headers("abc.def.ghi"))

        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Invalid or expired token"}

    @pytest.mark.parametrize(
        ("method", "path"),
        [
            ("get", "/api/notes/1"),
            ("get", "/api/notes/search?q=a"),
            ("post", "/api/notes"),
            ("put", "/api/notes/1"),
            ("delete", "/api/notes/1"),
            ("post", "/api/ai/notes/1/summarize"),
        ],
    )
    def test_every_note_route_requires_auth(self, client, method, path):
        response = client.request(method.upper(), path, json={})

        assert response.status_code == 401


class TestCreateAndRead:
    def test_create_note_defaults(self, client, bob):
        note = create_note(client, bob, "A", "B")

        assert note["title"] == "A"
        assert note["content"] == "B"
        assert note["color_tag"] is None
        assert note["is_pinned"] is False
        assert note["is_archived"] is False
        assert note["summary"] is None
        assert note["created_at"]
        assert note["updated_at"]

    def test_create_then_list(self, client, bob):
        create_note(client, bob, "A", "B")

        response = client.get("/api/notes", headers=bob)

        assert response.status_code == 200
        notes = response.json()["notes"]
        assert response.json()["success"] is True
        assert len(notes) == 1
        assert notes[0]["is_pinned"] is False

    @pytest.mark.parametrize(
        "body",
        [
            {"content": "B"},
            {"title": "A"},
            {"title": "  ", "content": "B"},
            {"title": "A", "content": ""},
        ],
    )
    def test_create_requires_title_and_content(self, client, bob, body):
        response = client.post("/api/notes", json=body, headers=bob)

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Title and content are required"}

    def test_create_with_color(self, client, bob):
        note = create_note(client, bob, "A", "B", color_tag="red")

        assert note["color_tag"] == "red"

    def test_get_note(self, client, bob):
        note = create_note(client, bob, "A", "B")

        response = client.get(f"/api/notes/{note['id']}", headers=bob)

        assert response.status_code == 200
        assert response.json()["note"] == note

    def test_get_missing_note(self, client, bob):
        response = client.get("/api/notes/999", headers=bob)

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Note not found"}

    @pytest.mark.parametrize("note_id", ["99999999999999999999", "-99999999999999999999"])
    def test_ids_beyond_integer_range_are_not_found(self, client, bob, note_id):
        path = f"/api/notes/{note_id}"

        responses = [
            client.get(path, headers=bob),
            client.put(path, json={"title": "x"}, headers=bob),
            client.delete(path, headers=bob),
            client.post(f"/api/ai/notes/{note_id}/summarize", headers=bob),
        ]

        for response in responses:
            assert response.status_code == 404, response.text
            assert response.json() == {"success": False, "message": "Note not found"}


class TestOwnership:
    def test_other_users_note_is_not_found(self, client, bob, alice):
        note = create_note(client, bob, "secret", "bob only")
        path = f"/api/notes/{note['id']}"

        assert client.get(path, headers=alice).status_code == 404
        assert client.put(path, json={"title": "mine"}, headers=alice).status_code == 404
        assert client.delete(path, headers=alice).status_code == 404
        assert client.post(f"/api/ai/notes/{note['id']}/summarize", headers=alice).status_code == 404

        # Untouched for the owner
        assert client.get(path, headers=bob).json()["note"]["title"] == "secret"

    def test_lists_and_search_are_scoped(self, client, bob, alice):
        create_note(client, bob, "bob note", "shared word")
        create_note(client, alice, "alice note", "shared word")

        assert titles(client.get("/api/notes", headers=alice)) == ["alice note"]
        assert titles(client.get("/api/notes/search", params={"q": "shared"}, headers=alice)) == ["alice note"]


class TestListing:
    def test_default_list_excludes_archived(self, client, bob):
        create_note(client, bob, "active", "x")
        archived = create_note(client, bob, "old", "x")
        client.put(f"/api/notes/{archived['id']}", json={"is_archived": True}, headers=bob)

        assert titles(client.get("/api/notes", headers=bob)) == ["active"]
        assert titles(client.get("/api/notes", params={"archived": "true"}, headers=bob)) == ["old"]
        assert titles(client.get("/api/notes", params={"archived": "false"}, headers=bob)) == ["active"]

    def test_pinned_filter(self, client, bob):
        create_note(client, bob, "plain", "x")
        pinned = create_note(client, bob, "pinned", "x")
        client.put(f"/api/notes/{pinned['id']}", json={"is_pinned": True}, headers=bob)

        assert titles(client.get("/api/notes", params={"pinned": "true"}, headers=bob)) == ["pinned"]
        assert titles(client.get("/api/notes", params={"pinned": "false"}, headers=bob)) == ["plain"]

    def test_color_filter(self, client, bob):
        create_note(client, bob, "red one", "x", color_tag="red")
        create_note(client, bob, "blue one", "x", color_tag="blue")
        create_note(client, bob, "untagged", "x")

        assert titles(client.get("/api/notes", params={"color": "red"}, headers=bob)) == ["red one"]
        assert len(titles(client.get("/api/notes", params={"color": ""}, headers=bob))) == 3

    def test_newest_updated_first(self, client, bob):
        first = create_note(client, bob, "first", "x")
        create_note(client, bob, "second", "x")

        assert titles(client.get("/api/notes", headers=bob)) == ["second", "first"]

        client.put(f"/api/notes/{first['id']}", json={"content": "edited"}, headers=bob)

        assert titles(client.get("/api/notes", headers=bob)) == ["first", "second"]

    def test_pinned_note_precedes_more_recently_updated_notes(self, client, bob):
        a = create_note(client, bob, "A", "B")
        other = create_note(client, bob, "other", "x")

        response = client.put(f"/api/notes/{a['id']}", json={"is_pinned": True}, headers=bob)
        assert response.status_code == 200
        assert response.json()["note"]["is_pinned"] is True

        client.put(f"/api/notes/{other['id']}", json={"content": "touched later"}, headers=bob)

        notes = client.get("/api/notes", headers=bob).json()["notes"]
        assert [n["title"] for n in notes] == ["A", "other"]
        assert notes[0]["is_pinned"] is True


class TestUpdate:
    def test_partial_update_leaves_other_fields(self, client, bob):
        note = create_note(client, bob, "A", "B", color_tag="red")

        response = client.put(f"/api/notes/{note['id']}", json={"title": "A2"}, headers=bob)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Note updated successfully"
        updated = body["note"]
        assert updated["title"] == "A2"
        assert updated["content"] == "B"
        assert updated["color_tag"] == "red"
        assert updated["updated_at"] >= note["updated_at"]
        assert updated["created_at"] == note["created_at"]

    def test_explicit_null_clears_color(self, client, bob):
        note = create_note(client, bob, "A", "B", color_tag="red")

        response = client.put(f"/api/notes/{note['id']}", json={"color_tag": None}, headers=bob)

        assert response.status_code == 200
        assert response.json()["note"]["color_tag"] is None

    def test_no_fields_to_update(self, client, bob):
        note = create_note(client, bob, "A", "B")

        response = client.put(f"/api/notes/{note['id']}", json={}, headers=bob)

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "No fields to update"}
        after = client.get(f"/api/notes/{note['id']}", headers=bob).json()["note"]
        assert after["updated_at"] == note["updated_at"]

    def test_unknown_fields_only_is_no_fields(self, client, bob):
        note = create_note(client, bob, "A", "B")

        response = client.put(f"/api/notes/{note['id']}", json={"user_id": 42}, headers=bob)

        assert response.status_code == 400
        assert response.json()["message"] == "No fields to update"

    def test_blank_title_rejected(self, client, bob):
        note = create_note(client, bob, "A", "B")

        response = client.put(f"/api/notes/{note['id']}", json={"title": " "}, headers=bob)

        assert response.status_code == 400
        assert response.json()["message"] == "Title cannot be empty"

    def test_update_missing_note(self, client, bob):
        response = client.put("/api/notes/999", json={"title": "x"}, headers=bob)

        assert response.status_code == 404


class TestDelete:
    def test_delete_then_gone(self, client, bob):
        note = create_note(client, bob, "A", "B")
        path = f"/api/notes/{note['id']}"

        response = client.delete(path, headers=bob)

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Note deleted successfully"}
        assert client.get(path, headers=bob).status_code == 404
        assert client.delete(path, headers=bob).status_code == 404


class TestSearch:
    @pytest.mark.parametrize("query", ["", "   "])
    def test_blank_query_returns_nothing(self, client, bob, query):
        create_note(client, bob, "A", "B")

        response = client.get("/api/notes/search", params={"q": query}, headers=bob)

        assert response.status_code == 200
        assert response.json() == {"success": True, "notes": []}

    def test_missing_query_returns_nothing(self, client, bob):
        create_note(client, bob, "A", "B")

        assert titles(client.get("/api/notes/search", headers=bob)) == []

    def test_matches_title_or_content_case_insensitively(self, client, bob):
        create_note(client, bob, "Groceries", "milk")
        create_note(client, bob, "Todo", "buy MILK and bread")
        create_note(client, bob, "Unrelated", "nothing here")

        assert sorted(titles(client.get("/api/notes/search", params={"q": "milk"}, headers=bob))) == [
            "Groceries",
            "Todo",
        ]
        assert titles(client.get("/api/notes/search", params={"q": "grocer"}, headers=bob)) == ["Groceries"]

    def test_excludes_archived_and_puts_pinned_first(self, client, bob):
        pinned = create_note(client, bob, "pinned match", "x")
        create_note(client, bob, "recent match", "x")
        archived = create_note(client, bob, "archived match", "x")
        client.put(f"/api/notes/{pinned['id']}", json={"is_pinned": True}, headers=bob)
        client.put(f"/api/notes/{archived['id']}", json={"is_archived": True}, headers=bob)

        assert titles(client.get("/api/notes/search", params={"q": "match"}, headers=bob)) == [
            "pinned match",
            "recent match",
        ]

    def test_wildcards_are_literal(self, client, bob):
        create_note(client, bob, "progress", "100% done")
        create_note(client, bob, "plain", "nothing special")

        assert titles(client.get("/api/notes/search", params={"q": "%"}, headers=bob)) == ["progress"]
        assert titles(client.get("/api/notes/search", params={"q": "_"}, headers=bob)) == []
