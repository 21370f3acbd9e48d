from __future__ import annotations

from datetime import datetime  # noqa: TCH003

from pydantic import ConfigDict, Field

from notes_api.core.models.base import AppBaseModel


class NoteWrite(AppBaseModel):
    """Body of create and update requests.

    Title presence is checked by the note service so that a missing title is
    a 400 rather than a schema 422. Tags are normalized by the service too.
    """

    model_config = ConfigDict(extra="ignore")

    title: str | None = Field(default=None, description="Note title (required, non-blank)")
    body: str | None = Field(default=None, description="Note body, defaults to empty")
    tags: list[str] | None = Field(default=None, description="Free-text tags")


class NoteRead(AppBaseModel):
    id: int
    title: str
    body: str
    created_at: datetime
    tags: list[str]


class NoteList(AppBaseModel):
    notes: list[NoteRead]
