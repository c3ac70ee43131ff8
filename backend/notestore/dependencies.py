"""
NoteStore - Request Dependencies
==================================

What:  FastAPI dependencies that hand per-app objects to route handlers.
How:   create_app() stores the NoteService on app.state; get_note_service
       reads it back from the request.

Example usage in a route:
    @router.get("/notes")
    async def list_notes(service: NoteService = Depends(get_note_service)):
        return await service.list_notes()

Tests can swap the service with app.dependency_overrides[get_note_service].
"""

from fastapi import Request

from notestore.services.note_service import NoteService


def get_note_service(request: Request) -> NoteService:
    """The NoteService bound to this application's cache directory."""
    return request.app.state.note_service
