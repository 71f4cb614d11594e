from typing import List

from fastapi import APIRouter, Response
from starlette import status

from core.errors import unwrap
from schemas.note_schemas import NoteRequest, NoteResponse
from utils.deps import note_service_dependency, user_id_dependency


router = APIRouter(
    prefix="/notes",
    tags=["notes"]
)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=NoteResponse)
def create_or_update_note(body: NoteRequest, user_id: user_id_dependency,
                          note_service: note_service_dependency):
    """
    Create a note, or overwrite the note with ``id`` when one is given.
    """
    note = unwrap(note_service.create_or_update(body, user_id))
    return NoteResponse.model_validate(note)


@router.get("", response_model=List[NoteResponse])
def get_notes(user_id: user_id_dependency, note_service: note_service_dependency):
    notes = unwrap(note_service.list_by_owner(user_id))
    return [NoteResponse.model_validate(note) for note in notes]


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_note(note_id: str, user_id: user_id_dependency, note_service: note_service_dependency):
    unwrap(note_service.delete(note_id, user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
