from datetime import datetime
from typing import Callable, List

from core.errors import Err, ErrorKind, Ok, Result
from models.mixins import new_id
from models.notes import Note
from repositories.base import NoteStore
from schemas.note_schemas import NoteRequest
from services.token_service import utc_now
from utils.logger import get_logger

logger = get_logger(__name__)


class NoteService:
    """
    Owner-scoped access to notes.
    """

    def __init__(self, notes: NoteStore, clock: Callable[[], datetime] = utc_now):
        self.notes = notes
        self.clock = clock

    def create_or_update(self, request: NoteRequest, caller_id: str) -> Result[Note]:
        """
        Insert a note, or overwrite the one with ``request.id``.

        The owner is always the caller and ``created_at`` is reset on every
        write. An overwrite does not look at the previous owner.
        """
        note_id = request.id or new_id()

        note = self.notes.save(
            Note(
                id=note_id,
                title=request.title,
                content=request.content,
                color=request.color,
                created_at=self.clock(),
                owner_id=caller_id,
            )
        )

        logger.info(
            "Note saved",
            extra={"note_id": note.id, "user_id": caller_id, "is_new": request.id is None}
        )
        return Ok(note)

    def list_by_owner(self, caller_id: str) -> Result[List[Note]]:
        return Ok(list(self.notes.find_by_owner(caller_id)))

    def delete(self, note_id: str, caller_id: str) -> Result[None]:
        note = self.notes.find_by_id(note_id)

        if note is None:
            return Err(ErrorKind.NOT_FOUND, "Note not found")

        if str(note.owner_id) != str(caller_id):
            logger.warning(
                "Note delete denied - caller is not the owner",
                extra={"note_id": note_id, "user_id": caller_id}
            )
            return Err(ErrorKind.FORBIDDEN, "You don't have permission to delete this note")

        self.notes.delete_by_id(note_id)

        logger.info("Note deleted", extra={"note_id": note_id, "user_id": caller_id})
        return Ok(None)
