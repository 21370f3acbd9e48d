from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from notes_api.core.repositories.implementations.supabase.note_repository import (
    SupabaseNoteRepository,
)
from notes_api.core.schemas.auth import AuthUser
from notes_api.core.services.note_service import NoteService
from notes_api.db.base import bearer_token_from_header, create_request_supabase_client
from notes_api.utils.logging import get_logger

logger = get_logger(__name__)

# Use auto_error=False to answer missing tokens with 401 instead of 403
http_bearer = HTTPBearer(auto_error=False)

if TYPE_CHECKING:
    from supabase import Client

    from notes_api.core.repositories.note_repository import NoteRepository


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_request_supabase_client(request: Request) -> Client:
    """Create a request-scoped Supabase client and set PostgREST bearer.

    Extracts the Authorization: Bearer <jwt> header if present and configures
    PostgREST to enforce RLS for the user.
    """
    return create_request_supabase_client(
        bearer_token_from_header(request.headers.get("authorization"))
    )


def get_note_repository(client: Client = Depends(get_request_supabase_client)) -> NoteRepository:
    """Get a request-scoped note repository instance using request client."""
    return SupabaseNoteRepository(client)


def get_note_service(repo: NoteRepository = Depends(get_note_repository)) -> NoteService:
    """Get a request-scoped note service instance."""
    return NoteService(repo)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Security(http_bearer),
) -> AuthUser:
    """Validate the JWT via Supabase Auth and return the authenticated user.

    The returned ``id`` is the owner identity for every note operation.
    """
    if not credentials:
        raise _unauthorized("Authentication required")
    jwt = credentials.credentials
    if not jwt or len(jwt.split(".")) != 3:
        raise _unauthorized("Invalid token format")

    supabase = create_request_supabase_client(jwt)
    try:
        resp = await asyncio.to_thread(lambda: supabase.auth.get_user(jwt))
    except Exception as err:
        error_msg = str(err).lower()
        logger.warning(
            "JWT validation failed",
            extra={
                "error_type": type(err).__name__,
                "error_summary": error_msg[:100] if error_msg else "Unknown error",
            }
        )
        if "invalid" in error_msg or "expired" in error_msg:
            raise _unauthorized("Token is invalid or expired") from err
        raise _unauthorized("Authentication failed") from err

    user = getattr(resp, "user", None)
    user_id = getattr(user, "id", None) if user else None
    if not user_id:
        raise _unauthorized("Invalid user data")
    return AuthUser(
        id=str(user_id),
        email=getattr(user, "email", None) or "",
        role=getattr(user, "role", None),
    )
