from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from notes_api.core.models.note import Note


class NoteRepository(ABC):
    """Abstract repository interface for notes and their tag associations.

    Every method that touches a note takes the owner id and must filter on it.
    Create and update are single atomic units in the store: the note row, any
    new tag rows and the association rows are written together or not at all.
    Implementations raise ``StoreError`` for any persistence failure.
    """

    @abstractmethod
    async def list_for_owner(self, owner_id: str) -> Sequence[Note]:  # pragma: no cover - interface only
        """Return the owner's notes with their tags, newest first."""

    @abstractmethod
    async def create_with_tags(
        self,
        *,
        owner_id: str,
        title: str,
        body: str,
        tag_names: list[str],
    ) -> Note:  # pragma: no cover
        """Insert a note, reuse or create its tags, and link them.

        ``tag_names`` is already normalized and de-duplicated.
        """

    @abstractmethod
    async def update_with_tags(
        self,
        *,
        note_id: int,
        owner_id: str,
        title: str,
        body: str,
        tag_names: list[str],
    ) -> Note | None:  # pragma: no cover
        """Update title/body and replace the tag associations of an owned note.

        Return None, changing nothing, when ``(note_id, owner_id)`` matches no row.
        """

    @abstractmethod
    async def delete_for_owner(self, *, note_id: int, owner_id: str) -> int:  # pragma: no cover
        """Delete an owned note (associations cascade). Return the number of rows removed."""

    @abstractmethod
    async def ping(self) -> None:  # pragma: no cover
        """Issue a trivial query; raise ``StoreError`` if the store is unreachable."""
