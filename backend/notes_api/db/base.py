from __future__ import annotations

from supabase import Client, create_client
from supabase.lib.client_options import ClientOptions

from notes_api.config import settings
from notes_api.utils.logging import get_logger

logger = get_logger(__name__)

# Request clients are short-lived and never own a session of their own
_REQUEST_CLIENT_OPTIONS = {"auto_refresh_token": False, "persist_session": False}


def bearer_token_from_header(authorization: str | None) -> str | None:
    """Return the token of an ``Authorization: Bearer <token>`` header, if any."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def create_request_supabase_client(bearer_token: str | None = None) -> Client:
    """Build a Supabase client for one request.

    The anon key identifies the project; the caller's JWT, when present,
    becomes the PostgREST bearer so row-level security evaluates
    ``auth.uid()`` as that user. Without a token only anon-visible rows are
    reachable, which the readiness probe relies on.
    """
    if not settings.supabase_anon_key:
        raise RuntimeError("supabase_anon_key is required for request client")

    client = create_client(
        settings.supabase_url,
        settings.supabase_anon_key,
        options=ClientOptions(**_REQUEST_CLIENT_OPTIONS),
    )
    if bearer_token:
        client.postgrest.auth(bearer_token)
    logger.debug("Request Supabase client ready", extra={"authenticated": bool(bearer_token)})
    return client
