from typing import List, Optional
from sqlalchemy.orm import Session
from models.notes import Note


class SqlNoteStore:

    def __init__(self, db: Session):
        self.db = db

    def save(self, note: Note) -> Note:
        """
        Insert, or overwrite every column of the row with the same id.
        """
        model = self.db.merge(note)
        self.db.commit()
        self.db.refresh(model)
        return model

    def find_by_id(self, note_id: str) -> Optional[Note]:
        return self.db.query(Note).filter(Note.id == note_id).one_or_none()

    def find_by_owner(self, owner_id: str) -> List[Note]:
        return self.db.query(Note).filter(Note.owner_id == owner_id).all()

    def delete_by_id(self, note_id: str) -> None:
        self.db.query(Note).filter(Note.id == note_id).delete(synchronize_session=False)
        self.db.commit()
