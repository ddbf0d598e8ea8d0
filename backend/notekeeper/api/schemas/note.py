from __future__ import annotations

from datetime import datetime  # noqa: TCH003

from pydantic import BaseModel, ConfigDict, Field, model_validator

from notekeeper.core.models.base import AppBaseModel


class NoteCreate(AppBaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str | None = Field(default=None, description="Note title")
    content: str | None = Field(default=None, description="Note content")
    color_tag: str | None = Field(default=None, max_length=32, description="Optional color label")

    @model_validator(mode="after")
    def validate_title_and_content(self) -> NoteCreate:
        title = (self.title or "").strip()
        content = (self.content or "").strip()
        if not title or not content:
            raise ValueError("Title and content are required")
        self.title = title
        self.content = content
        # Normalize empty color to None
        self.color_tag = (self.color_tag or "").strip() or None
        return self


class NoteUpdate(AppBaseModel):
    """Partial update body. Omitted fields stay unchanged."""

    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    content: str | None = None
    color_tag: str | None = Field(default=None, max_length=32)
    is_pinned: bool | None = None
    is_archived: bool | None = None


class NoteRead(AppBaseModel):
    id: int
    user_id: int
    title: str
    content: str
    color_tag: str | None
    is_pinned: bool
    is_archived: bool
    summary: str | None
    created_at: datetime
    updated_at: datetime


class NoteResponse(BaseModel):
    success: bool = True
    message: str | None = None
    note: NoteRead


class NoteListResponse(BaseModel):
    success: bool = True
    notes: list[NoteRead]


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class SummaryResponse(BaseModel):
    success: bool = True
    summary: str
    cached: bool = Field(..., description="True when the stored summary was returned without a new AI call")
