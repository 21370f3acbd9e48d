from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status

from notes_api.api.v1.schemas.note import NoteList, NoteRead, NoteWrite
from notes_api.core.exceptions import NotFoundError, StoreError, ValidationError
from notes_api.core.schemas.auth import AuthUser  # noqa: TCH001
from notes_api.core.services.note_service import NoteService  # noqa: TCH001
from notes_api.dependencies import get_current_user, get_note_service

router = APIRouter(
    responses={
        401: {"description": "Unauthorized"},
        500: {"description": "Store failure"},
    }
)


@router.get("/", response_model=NoteList)
async def list_notes(
    current_user: AuthUser = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    try:
        notes = await service.list_notes(current_user.id)
    except StoreError as err:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list notes",
        ) from err
    return NoteList(notes=[NoteRead.model_validate(n) for n in notes])


@router.post("/new", response_model=NoteRead, status_code=status.HTTP_201_CREATED)
async def create_note(
    payload: NoteWrite,
    current_user: AuthUser = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    try:
        note = await service.create_note(
            current_user.id,
            title=payload.title,
            body=payload.body,
            tag_names=payload.tags,
        )
    except ValidationError as err:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(err)) from err
    except StoreError as err:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create note",
        ) from err
    return NoteRead.model_validate(note)


@router.put("/{note_id}", response_model=NoteRead)
async def update_note(
    note_id: int,
    payload: NoteWrite,
    current_user: AuthUser = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    try:
        note = await service.update_note(
            current_user.id,
            note_id,
            title=payload.title,
            body=payload.body,
            tag_names=payload.tags,
        )
    except ValidationError as err:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(err)) from err
    except NotFoundError as err:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(err)) from err
    except StoreError as err:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update note",
        ) from err
    return NoteRead.model_validate(note)


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(
    note_id: int,
    current_user: AuthUser = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    try:
        await service.delete_note(current_user.id, note_id)
    except NotFoundError as err:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(err)) from err
    except StoreError as err:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete note",
        ) from err
    return Response(status_code=status.HTTP_204_NO_CONTENT)
