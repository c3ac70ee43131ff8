"""
NoteStore - Custom Exception Hierarchy
========================================

What:  Application-specific exceptions for the note store.
How:   Each exception carries a user-facing message and an optional context
       dict. Global exception handlers (registered in main.py) catch these
       and return plain-text responses with the matching HTTP status code.
Who:   Raised by NoteService; caught by the handlers in main.py.

Exception Hierarchy:
    NoteStoreError (base)        → 500 Internal Server Error
    ├── ValidationError          → 400 Bad Request (invalid name or body)
    ├── NotFoundError            → 404 Not Found
    ├── NoteAlreadyExistsError   → 400 Bad Request (create on existing name)
    └── FileStorageError         → 500 Internal Server Error

The context dict is logged server-side only. It may hold file paths and OS
error text, none of which is ever returned to the client.
"""

from typing import Any, Dict, Optional


class NoteStoreError(Exception):
    """
    Base exception for all NoteStore errors.

    Attributes:
        message:  User-facing error description (safe to return in a response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "Internal Server Error",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NoteStoreError):
    """
    Raised when client input cannot be used as-is.

    When:    Note names that would leave the cache directory, request bodies
             that are not valid UTF-8.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(NoteStoreError):
    """
    Raised when the file backing a note does not exist.

    When:    GET/PUT/DELETE /notes/{note_name} for a name with no file.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "note",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource_id = resource_id


class NoteAlreadyExistsError(NoteStoreError):
    """
    Raised when creating a note whose file is already present.

    When:    POST /write with a note_name that exists, including a concurrent
             create that wins the race between the check and the write.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        name: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["name"] = name
        super().__init__(message="Note already exists", context=ctx)
        self.name = name


class FileStorageError(NoteStoreError):
    """
    Raised when a filesystem operation fails unexpectedly.

    What:    Could not list, read, write, or delete inside the cache directory.
    When:    Permission denied, disk full, entry is a directory, I/O error.
    HTTP:    500 Internal Server Error

    Recovery:
        None. Operations touch a single file, so there is nothing to roll
        back. The full OS error goes to the log; the client gets a generic
        message.
    """

    def __init__(
        self,
        message: str = "Internal Server Error",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
