from __future__ import annotations

from notes_api.core.models.base import AppBaseModel


class AuthUser(AppBaseModel):
    """Authenticated user resolved from the Supabase JWT.

    ``id`` is treated as an opaque owner identity by the note services.
    """

    id: str
    email: str
    role: str | None = None
