from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

from notes_api.core.exceptions import StoreError
from notes_api.core.models.note import Note
from notes_api.core.repositories.note_repository import NoteRepository
from notes_api.utils.logging import get_logger

logger = get_logger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from supabase import Client


class SupabaseNoteRepository(NoteRepository):
    """Supabase implementation of the NoteRepository.

    Reads go through PostgREST with an embedded ``notes_tags -> tags`` select.
    Create and update call the ``create_note_with_tags`` and
    ``update_note_with_tags`` database functions, each of which runs in a single
    transaction (see ``supabase/migrations``). Deletes rely on the
    ``notes_tags.note_id`` foreign key cascading.
    """

    TABLE_NAME = "notes"
    LIST_COLUMNS = "id, owner_id, title, body, created_at, notes_tags(tags(tag_name))"

    def __init__(self, client: Client) -> None:
        self._client: Client = client

    async def list_for_owner(self, owner_id: str) -> Sequence[Note]:
        resp = await self._run(
            "list_notes",
            lambda: self._client.table(self.TABLE_NAME)
            .select(self.LIST_COLUMNS)
            .eq("owner_id", owner_id)
            .order("created_at", desc=True)
            .execute(),
            owner_id=owner_id,
        )
        items = resp.data or []
        return [self._row_to_note(self._flatten_tags(i)) for i in items]

    async def create_with_tags(
        self,
        *,
        owner_id: str,
        title: str,
        body: str,
        tag_names: list[str],
    ) -> Note:
        params: dict[str, Any] = {
            "note_title": title,
            "note_body": body,
            "user_id": owner_id,
            "tag_names": tag_names,
        }
        resp = await self._run(
            "create_note_with_tags",
            lambda: self._client.rpc("create_note_with_tags", params=params).execute(),
            owner_id=owner_id,
        )
        data = self._first(resp.data)
        if not data:
            logger.error("create_note_with_tags returned no row", extra={"owner_id": owner_id})
            raise StoreError("create_note_with_tags", "No data returned from create_note_with_tags")
        return self._row_to_note(data)

    async def update_with_tags(
        self,
        *,
        note_id: int,
        owner_id: str,
        title: str,
        body: str,
        tag_names: list[str],
    ) -> Note | None:
        params: dict[str, Any] = {
            "note_id_to_update": note_id,
            "note_title": title,
            "note_body": body,
            "user_id": owner_id,
            "tag_names": tag_names,
        }
        resp = await self._run(
            "update_note_with_tags",
            lambda: self._client.rpc("update_note_with_tags", params=params).execute(),
            owner_id=owner_id,
            note_id=note_id,
        )
        data = self._first(resp.data)
        if not data:
            return None
        return self._row_to_note(data)

    async def delete_for_owner(self, *, note_id: int, owner_id: str) -> int:
        # PostgREST returns the deleted rows; an empty list means nothing matched
        resp = await self._run(
            "delete_note",
            lambda: self._client.table(self.TABLE_NAME)
            .delete()
            .eq("id", note_id)
            .eq("owner_id", owner_id)
            .execute(),
            owner_id=owner_id,
            note_id=note_id,
        )
        return len(resp.data or [])

    async def ping(self) -> None:
        await self._run(
            "ping",
            lambda: self._client.table(self.TABLE_NAME).select("id").limit(1).execute(),
        )

    @staticmethod
    async def _run(operation: str, func: Callable[[], Any], **context: Any) -> Any:
        """Run a blocking supabase-py call in a worker thread.

        Any failure is logged with its context and re-raised as ``StoreError``.
        """
        try:
            return await asyncio.to_thread(func)
        except Exception as err:
            logger.error(
                "Store operation %s failed: %s",
                operation,
                err,
                extra={"operation": operation, "error_type": type(err).__name__, **context},
            )
            raise StoreError(operation) from err

    @staticmethod
    def _first(data: Any) -> dict[str, Any]:
        if isinstance(data, list) and data:
            return data[0]
        if isinstance(data, dict):
            return data
        return {}

    @staticmethod
    def _flatten_tags(row: dict[str, Any]) -> dict[str, Any]:
        """Turn the embedded ``notes_tags: [{tags: {tag_name}}]`` into sorted ``tags: [name]``.

        Sorted by name to match the projection the create/update functions return.
        """
        normalized = dict(row)
        links = normalized.pop("notes_tags", None) or []
        tags: list[str] = []
        for link in links:
            tag = (link or {}).get("tags") or {}
            name = tag.get("tag_name")
            if name:
                tags.append(name)
        normalized["tags"] = sorted(tags)
        return normalized

    @staticmethod
    def _row_to_note(row: dict[str, Any]) -> Note:
        normalized = dict(row)
        if normalized.get("body") is None:
            normalized["body"] = ""
        if normalized.get("tags") is None:
            normalized["tags"] = []
        return Note.model_validate(normalized)
