"""
NoteStore - Note Service (Filesystem-Backed Note Store)
=========================================================

What:  Every note operation: list, read, create, update, delete, plus the
       existence check and cache directory bootstrap.
How:   A note named <name> is the file <cache_dir>/<name>.txt. All I/O goes
       through aiofiles so handlers never block the event loop.
Who:   Constructed once by create_app() and injected into route handlers.

Operation Flow (read / update / delete):
    ┌──────────┐    ┌─────────────┐    ┌──────────────┐    ┌──────────┐
    │  Route   │───▶│  note_path  │───▶│ note_exists  │───▶│  File    │
    │          │    │ (name check)│    │  (stat)      │    │  op      │
    └──────────┘    └─────────────┘    └──────────────┘    └──────────┘
                          │                   │                  │
                   ValidationError      NotFoundError     FileStorageError

Concurrency:
    No locking. Read, update and delete check existence and then act, so a
    file removed in between is possible; it surfaces as NotFoundError for
    read and delete. Create writes in exclusive mode ("x"), so of two
    concurrent creates for one name exactly one succeeds.
"""

import logging
from pathlib import Path
from typing import List, Union

import aiofiles
import aiofiles.os

from notestore.exceptions import (
    FileStorageError,
    NoteAlreadyExistsError,
    NotFoundError,
    ValidationError,
)
from notestore.schemas.note import NoteItem

logger = logging.getLogger(__name__)

NOTE_EXTENSION = ".txt"
NOTE_ENCODING = "utf-8"

# Characters that would let a note name leave the cache directory
FORBIDDEN_NAME_CHARS = ("/", "\\", "\x00")


class NoteService:
    """
    Stateless note store over a single flat directory.

    Directory Structure:
        cache/
        ├── groceries.txt
        ├── todo.txt
        └── ideas.txt

    A note exists if and only if its file exists. There is no index.
    """

    def __init__(self, cache_dir: Union[str, Path]):
        self.cache_dir = Path(cache_dir).expanduser().resolve()

    def note_path(self, name: str) -> Path:
        """
        Build the file path for a note name.

        Raises:
            ValidationError: name is empty or contains a path separator or NUL.
        """
        if not name or any(char in name for char in FORBIDDEN_NAME_CHARS):
            raise ValidationError(
                message="Invalid note name",
                field="note_name",
                context={"name": name},
            )
        path = self.cache_dir / f"{name}{NOTE_EXTENSION}"
        if path.parent != self.cache_dir:
            raise ValidationError(
                message="Invalid note name",
                field="note_name",
                context={"name": name, "path": str(path)},
            )
        return path

    async def note_exists(self, name: str) -> bool:
        """
        Existence check used to gate every other operation.

        Returns False on any access error; a missing file and an unreadable
        directory look the same.
        """
        path = self.note_path(name)
        try:
            await aiofiles.os.stat(path)
        except OSError:
            return False
        return True

    async def ensure_cache_directory(self) -> Path:
        """
        Create the cache directory (with parents) if it is not accessible.

        Called from the application lifespan before any request is served.
        Errors propagate: a server that cannot create its cache directory
        should not start.
        """
        try:
            await aiofiles.os.stat(self.cache_dir)
        except OSError:
            await aiofiles.os.makedirs(self.cache_dir, exist_ok=True)
            logger.info("Created cache directory %s", self.cache_dir)
        return self.cache_dir

    async def list_notes(self) -> List[NoteItem]:
        """
        Return every note in the cache directory.

        Order is whatever the directory listing yields; it is not sorted.
        Entries not ending in .txt are skipped.

        Raises:
            FileStorageError: the directory or one of the files can't be read.
        """
        try:
            entries = await aiofiles.os.listdir(self.cache_dir)
            notes = []
            for entry in entries:
                if not entry.endswith(NOTE_EXTENSION):
                    continue
                text = await self._read_text(self.cache_dir / entry)
                notes.append(NoteItem(name=entry[: -len(NOTE_EXTENSION)], text=text))
        except OSError as e:
            logger.error("Failed to list notes in %s: %s", self.cache_dir, str(e))
            raise FileStorageError(
                context={"path": str(self.cache_dir), "os_error": str(e)},
            )

        logger.debug("Listed %d notes", len(notes))
        return notes

    async def read_note(self, name: str) -> str:
        """Return the content of a note. Raises NotFoundError if it is absent."""
        path = self.note_path(name)
        if not await self.note_exists(name):
            raise NotFoundError(resource="note", resource_id=name)

        try:
            return await self._read_text(path)
        except FileNotFoundError:
            raise NotFoundError(resource="note", resource_id=name)
        except OSError as e:
            logger.error("Failed to read note %s: %s", path, str(e))
            raise FileStorageError(context={"path": str(path), "os_error": str(e)})

    async def create_note(self, name: str, content: str) -> None:
        """
        Create a new note.

        Raises:
            NoteAlreadyExistsError: a file for this name is already present.
            FileStorageError: the write failed.
        """
        path = self.note_path(name)
        if await self.note_exists(name):
            raise NoteAlreadyExistsError(name=name)

        try:
            await self._write_text(path, content, mode="x")
        except FileExistsError:
            raise NoteAlreadyExistsError(name=name, context={"race": True})
        except OSError as e:
            logger.error("Failed to create note %s: %s", path, str(e))
            raise FileStorageError(context={"path": str(path), "os_error": str(e)})

        logger.info("Note created: %s (%d chars)", name, len(content))

    async def update_note(self, name: str, content: str) -> None:
        """Replace the content of an existing note."""
        path = self.note_path(name)
        if not await self.note_exists(name):
            raise NotFoundError(resource="note", resource_id=name)

        try:
            await self._write_text(path, content, mode="w")
        except OSError as e:
            logger.error("Failed to update note %s: %s", path, str(e))
            raise FileStorageError(context={"path": str(path), "os_error": str(e)})

        logger.info("Note updated: %s (%d chars)", name, len(content))

    async def delete_note(self, name: str) -> None:
        """Remove an existing note's file."""
        path = self.note_path(name)
        if not await self.note_exists(name):
            raise NotFoundError(resource="note", resource_id=name)

        try:
            await aiofiles.os.remove(path)
        except FileNotFoundError:
            raise NotFoundError(resource="note", resource_id=name)
        except OSError as e:
            logger.error("Failed to delete note %s: %s", path, str(e))
            raise FileStorageError(context={"path": str(path), "os_error": str(e)})

        logger.info("Note deleted: %s", name)

    # ── File helpers ──────────────────────────────────────────────────────
    # newline="" keeps content byte-for-byte: no \r\n translation either way.
    # Invalid UTF-8 already on disk is replaced rather than failing the read.

    async def _read_text(self, path: Path) -> str:
        async with aiofiles.open(
            path, "r", encoding=NOTE_ENCODING, errors="replace", newline=""
        ) as f:
            return await f.read()

    async def _write_text(self, path: Path, content: str, mode: str) -> None:
        async with aiofiles.open(path, mode, encoding=NOTE_ENCODING, newline="") as f:
            await f.write(content)
