from __future__ import annotations

from datetime import datetime  # noqa: TCH003

from pydantic import Field

from .base import AppBaseModel


class Note(AppBaseModel):
    """Note as stored, together with the names of its associated tags."""

    id: int = Field(description="Store-assigned note identifier")
    owner_id: str = Field(description="Opaque identity of the owning user")

    title: str = Field(min_length=1, description="Note title")
    body: str = Field(default="", description="Note body")

    created_at: datetime

    # Flattened from the notes_tags -> tags join
    tags: list[str] = Field(default_factory=list, description="Normalized tag names")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": 42,
                    "owner_id": "2f1c9a4e-7d1b-4c55-9e0a-0c3f5d6b8a21",
                    "title": "Groceries",
                    "body": "eggs, milk",
                    "created_at": "2025-01-01T09:30:00+00:00",
                    "tags": ["food"],
                }
            ]
        }
    }
