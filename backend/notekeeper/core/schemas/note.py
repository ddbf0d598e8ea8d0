from __future__ import annotations

from typing import Any

from pydantic import Field

from notekeeper.core.models.base import AppBaseModel

PATCHABLE_FIELDS = ("title", "content", "color_tag", "is_pinned", "is_archived")


class NoteFilters(AppBaseModel):
    """Optional list filters. ``archived=None`` means "exclude archived"."""

    color: str | None = None
    archived: bool | None = None
    pinned: bool | None = None


class NotePatch(AppBaseModel):
    """Partial update of a note.

    Only fields present in ``model_fields_set`` are written; an explicit
    ``color_tag=None`` clears the tag.
    """

    title: str | None = Field(default=None)
    content: str | None = Field(default=None)
    color_tag: str | None = Field(default=None)
    is_pinned: bool | None = Field(default=None)
    is_archived: bool | None = Field(default=None)

    @property
    def is_empty(self) -> bool:
        return not (self.model_fields_set & set(PATCHABLE_FIELDS))

    def changes(self) -> dict[str, Any]:
        """Return the supplied fields, validated and normalized for storage."""
        changes: dict[str, Any] = {}
        for key in PATCHABLE_FIELDS:
            if key not in self.model_fields_set:
                continue
            value = getattr(self, key)
            if key in {"title", "content"}:
                if value is None or not value.strip():
                    raise ValueError(f"{key.capitalize()} cannot be empty")
                value = value.strip()
            elif key == "color_tag":
                if value is not None:
                    value = value.strip() or None
            elif value is None:
                raise ValueError(f"{key} must be true or false")
            changes[key] = value
        return changes
