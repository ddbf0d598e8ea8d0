"""HTTP client for the Notekeeper API.

Holds the session token between calls and wraps every route. Usage::

    with NotesClient("http://localhost:3000") as client:
        client.login("bob@x.com", "secret1")
        client.create_note("Groceries", "milk, eggs", color_tag="green")
        for note in client.list_notes():
            print(note["title"])
"""
from __future__ import annotations

from typing import Any

import httpx

from notekeeper.utils.logging import get_logger

logger = get_logger(__name__)


class ApiError(Exception):
    """Non-2xx response from the API."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class NotesClient:
    def __init__(
        self,
        base_url: str | None = None,
        *,
        http: httpx.Client | None = None,
        token: str | None = None,
        api_prefix: str = "/api",
        timeout: float = 30.0,
    ) -> None:
        if http is None:
            if base_url is None:
                raise ValueError("Either base_url or http must be given")
            http = httpx.Client(base_url=base_url, timeout=timeout)
            self._owns_http = True
        else:
            self._owns_http = False
        self._http = http
        self._prefix = api_prefix.rstrip("/")
        self.token = token
        self.user: dict[str, Any] | None = None

    def __enter__(self) -> NotesClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    # Authentication

    def register(self, username: str, email: str, password: str) -> dict[str, Any]:
        data = self._request(
            "POST",
            "/auth/register",
            json={"username": username, "email": email, "password": password},
        )
        self._store_session(data)
        return data

    def login(self, email: str, password: str) -> dict[str, Any]:
        data = self._request("POST", "/auth/login", json={"email": email, "password": password})
        self._store_session(data)
        return data

    def logout(self) -> None:
        self.token = None
        self.user = None

    # Notes

    def list_notes(
        self,
        *,
        color: str | None = None,
        archived: bool | None = None,
        pinned: bool | None = None,
    ) -> list[dict[str, Any]]:
        params: dict[str, str] = {}
        if color:
            params["color"] = color
        if archived is not None:
            params["archived"] = "true" if archived else "false"
        if pinned is not None:
            params["pinned"] = "true" if pinned else "false"
        return self._request("GET", "/notes", params=params)["notes"]

    def get_note(self, note_id: int) -> dict[str, Any]:
        return self._request("GET", f"/notes/{note_id}")["note"]

    def create_note(self, title: str, content: str, color_tag: str | None = None) -> dict[str, Any]:
        body = {"title": title, "content": content, "color_tag": color_tag}
        return self._request("POST", "/notes", json=body)["note"]

    def update_note(self, note_id: int, **changes: Any) -> dict[str, Any]:
        return self._request("PUT", f"/notes/{note_id}", json=changes)["note"]

    def delete_note(self, note_id: int) -> None:
        self._request("DELETE", f"/notes/{note_id}")

    def search_notes(self, query: str) -> list[dict[str, Any]]:
        return self._request("GET", "/notes/search", params={"q": query})["notes"]

    def summarize_note(self, note_id: int) -> tuple[str, bool]:
        """Return ``(summary, cached)``."""
        data = self._request("POST", f"/ai/notes/{note_id}/summarize")
        return data["summary"], data["cached"]

    def _store_session(self, data: dict[str, Any]) -> None:
        self.token = data["token"]
        self.user = data["user"]

    def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        response = self._http.request(method, f"{self._prefix}{path}", headers=headers, **kwargs)
        try:
            data = response.json()
        except ValueError:
            data = {"success": False, "message": response.text or response.reason_phrase}

        if response.is_error:
            if response.status_code == 401:
                # Token rejected or expired; drop it so the caller logs in again
                self.logout()
            message = data.get("message") or "Request failed"
            logger.debug("API request failed", extra={"path": path, "status_code": response.status_code})
            raise ApiError(response.status_code, message)
        return data
