from __future__ import annotations

from typing import TYPE_CHECKING

from notes_api.core.exceptions import NotFoundError, ValidationError
from notes_api.core.services.tag_service import normalize_tag_names
from notes_api.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from notes_api.core.models.note import Note
    from notes_api.core.repositories.note_repository import NoteRepository

logger = get_logger(__name__)


class NoteService:
    """Owner-scoped note operations.

    Every call takes the owner id resolved from the request and passes it down
    to the repository, which filters on it. A note owned by someone else is
    reported exactly like a missing one.
    """

    def __init__(self, repo: NoteRepository) -> None:
        self._repo = repo

    async def list_notes(self, owner_id: str) -> Sequence[Note]:
        """List notes for the given owner, newest first."""
        return await self._repo.list_for_owner(owner_id)

    async def create_note(
        self,
        owner_id: str,
        title: str | None,
        body: str | None = None,
        tag_names: list[str] | None = None,
    ) -> Note:
        """Create a note with its normalized tag set."""
        clean_title = self._require_title(title)
        note = await self._repo.create_with_tags(
            owner_id=owner_id,
            title=clean_title,
            body=body or "",
            tag_names=normalize_tag_names(tag_names),
        )
        logger.info("Created note %s", note.id, extra={"owner_id": owner_id})
        return note

    async def update_note(
        self,
        owner_id: str,
        note_id: int,
        title: str | None,
        body: str | None = None,
        tag_names: list[str] | None = None,
    ) -> Note:
        """Replace title, body and tag set of an owned note.

        Omitted tags mean "no tags": the note's associations are replaced by
        the given list, never merged with it.
        """
        clean_title = self._require_title(title)
        note = await self._repo.update_with_tags(
            note_id=note_id,
            owner_id=owner_id,
            title=clean_title,
            body=body or "",
            tag_names=normalize_tag_names(tag_names),
        )
        if note is None:
            raise NotFoundError("Note not found or you lack permission to edit it.")
        logger.info("Updated note %s", note_id, extra={"owner_id": owner_id})
        return note

    async def delete_note(self, owner_id: str, note_id: int) -> None:
        """Delete an owned note."""
        removed = await self._repo.delete_for_owner(note_id=note_id, owner_id=owner_id)
        if removed == 0:
            raise NotFoundError("Note not found or you lack permission to delete it.")
        logger.info("Deleted note %s", note_id, extra={"owner_id": owner_id})

    @staticmethod
    def _require_title(title: str | None) -> str:
        clean = (title or "").strip()
        if not clean:
            raise ValidationError("Title is required.")
        return clean
