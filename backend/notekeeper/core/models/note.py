from __future__ import annotations

from datetime import datetime  # noqa: TCH003

from pydantic import Field

from .base import TimestampedModel


class Note(TimestampedModel):
    """Note domain model."""

    id: int = Field(..., description="Unique note identifier")

    # User and ownership
    user_id: int = Field(..., description="Owner of the note")

    title: str = Field(..., description="Note title")
    content: str = Field(..., description="Note content")
    color_tag: str | None = Field(default=None, description="Optional color label")

    # Organization
    is_pinned: bool = Field(default=False, description="Pinned notes sort first")
    is_archived: bool = Field(default=False, description="Whether note is archived")

    # Cached AI summary, written once
    summary: str | None = Field(default=None, description="AI-generated summary")

    updated_at: datetime

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": 1,
                    "user_id": 1,
                    "title": "Dentist Appointment",
                    "content": "Dentist appointment on Monday at 10:00 AM. Don't forget to bring insurance card.",
                    "color_tag": "blue",
                    "is_pinned": True,
                    "is_archived": False,
                    "summary": None,
                }
            ]
        }
    }
