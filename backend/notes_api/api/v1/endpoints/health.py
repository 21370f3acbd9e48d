from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from notes_api.config import settings
from notes_api.core.exceptions import StoreError
from notes_api.core.repositories.note_repository import NoteRepository  # noqa: TCH001
from notes_api.dependencies import get_note_repository

router = APIRouter()


@router.get("/")
async def health_check():
    """Liveness probe."""
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "healthy",
            "service": "notes-api",
            "version": "0.1.0"
        }
    )


@router.get("/ready")
async def readiness_check(repo: NoteRepository = Depends(get_note_repository)):
    """Readiness probe: 503 until the store answers a trivial query."""
    try:
        await repo.ping()
    except StoreError:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unavailable", "database": "error"},
        )

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "ready",
            "database": "connected",
            "api_prefix": settings.api_prefix
        }
    )
