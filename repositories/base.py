"""
Store interfaces the services depend on.

The SQLAlchemy implementations live next to this module; tests swap in
in-memory versions.
"""
from datetime import datetime
from typing import List, Optional, Protocol

from models.notes import Note
from models.refresh_tokens import RefreshToken
from models.users import User


class UserStore(Protocol):
    def find_by_email(self, email: str) -> Optional[User]: ...

    def find_by_id(self, user_id: str) -> Optional[User]: ...

    def add(self, email: str, hashed_password: str) -> Optional[User]:
        """
        Insert a user, or return None if the email is already taken.
        """
        ...


class RefreshTokenStore(Protocol):
    def put(self, owner_id: str, token_hash: str, expires_at: datetime) -> None: ...

    def find_by_owner_and_hash(self, owner_id: str, token_hash: str) -> Optional[RefreshToken]: ...

    def delete_by_owner_and_hash(self, owner_id: str, token_hash: str) -> bool:
        """
        Delete the matching record. True only for the call that removed it.
        """
        ...


class NoteStore(Protocol):
    def save(self, note: Note) -> Note: ...

    def find_by_id(self, note_id: str) -> Optional[Note]: ...

    def find_by_owner(self, owner_id: str) -> List[Note]: ...

    def delete_by_id(self, note_id: str) -> None: ...
