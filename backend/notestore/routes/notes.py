"""
NoteStore - Notes Route Handlers
==================================

What:  The note CRUD endpoints.
How:   Extract the name/body from the request, delegate to NoteService,
       return a plain-text confirmation (or JSON for the list).
       Errors are raised by the service and turned into responses by the
       global exception handlers in main.py; nothing is caught here.

Endpoints:
    GET    /notes               → 200 JSON [{name, text}, ...]
    GET    /notes/{note_name}   → 200 note text            | 404
    PUT    /notes/{note_name}   → 200 "Note updated"       | 404
    DELETE /notes/{note_name}   → 200 "Note deleted"       | 404
    POST   /write               → 201 "Note created"       | 400 if it exists
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import PlainTextResponse

from notestore.dependencies import get_note_service
from notestore.exceptions import NotFoundError, ValidationError
from notestore.schemas.note import NoteItem
from notestore.services.note_service import NOTE_ENCODING, NoteService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notes"])

# OpenAPI descriptions for the plain-text error bodies
NOT_FOUND_RESPONSE = {404: {"description": "Note not found", "content": {"text/plain": {}}}}
SERVER_ERROR_RESPONSE = {500: {"description": "Internal Server Error", "content": {"text/plain": {}}}}


@router.get(
    "/notes",
    response_model=List[NoteItem],
    responses={**SERVER_ERROR_RESPONSE},
    summary="List all notes",
    description="Returns every note in the cache directory, in directory order.",
)
async def list_notes(
    service: NoteService = Depends(get_note_service),
) -> List[NoteItem]:
    return await service.list_notes()


@router.get(
    "/notes/{note_name}",
    response_class=PlainTextResponse,
    responses={
        200: {"description": "Note content", "content": {"text/plain": {}}},
        **NOT_FOUND_RESPONSE,
        **SERVER_ERROR_RESPONSE,
    },
    summary="Get a specific note",
)
async def get_note(
    note_name: str,
    service: NoteService = Depends(get_note_service),
) -> PlainTextResponse:
    content = await service.read_note(note_name)
    return PlainTextResponse(content)


@router.put(
    "/notes/{note_name}",
    response_class=PlainTextResponse,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"text/plain": {"schema": {"type": "string"}}},
        }
    },
    responses={
        200: {"description": "Note updated successfully", "content": {"text/plain": {}}},
        400: {"description": "Body is not valid UTF-8", "content": {"text/plain": {}}},
        **NOT_FOUND_RESPONSE,
        **SERVER_ERROR_RESPONSE,
    },
    summary="Update an existing note",
)
async def update_note(
    note_name: str,
    request: Request,
    service: NoteService = Depends(get_note_service),
) -> PlainTextResponse:
    """
    Overwrite a note with the raw request body.

    The body is read as-is (any Content-Type) and decoded as UTF-8.
    A missing note is reported before the body is looked at.
    """
    if not await service.note_exists(note_name):
        raise NotFoundError(resource="note", resource_id=note_name)

    body = await request.body()
    try:
        content = body.decode(NOTE_ENCODING)
    except UnicodeDecodeError:
        raise ValidationError(
            message="Note content must be UTF-8 text",
            field="body",
            context={"size": len(body)},
        )

    await service.update_note(note_name, content)
    return PlainTextResponse("Note updated")


@router.delete(
    "/notes/{note_name}",
    response_class=PlainTextResponse,
    responses={
        200: {"description": "Note deleted successfully", "content": {"text/plain": {}}},
        **NOT_FOUND_RESPONSE,
        **SERVER_ERROR_RESPONSE,
    },
    summary="Delete a specific note",
)
async def delete_note(
    note_name: str,
    service: NoteService = Depends(get_note_service),
) -> PlainTextResponse:
    await service.delete_note(note_name)
    return PlainTextResponse("Note deleted")


@router.post(
    "/write",
    status_code=201,
    response_class=PlainTextResponse,
    responses={
        201: {"description": "Note created", "content": {"text/plain": {}}},
        400: {"description": "Note already exists", "content": {"text/plain": {}}},
        **SERVER_ERROR_RESPONSE,
    },
    summary="Create a new note",
    description=(
        "Creates a note from form fields `note_name` and `note`. Accepts both "
        "application/x-www-form-urlencoded and multipart/form-data, so the "
        "page at /UploadForm.html can post to it directly."
    ),
)
async def write_note(
    note_name: str = Form(..., description="Name of the new note"),
    note: str = Form("", description="Note content"),
    service: NoteService = Depends(get_note_service),
) -> PlainTextResponse:
    await service.create_note(note_name, note)
    return PlainTextResponse("Note created", status_code=201)
