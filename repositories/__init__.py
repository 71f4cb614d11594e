from repositories.base import UserStore, RefreshTokenStore, NoteStore
from repositories.users import SqlUserStore
from repositories.refresh_tokens import SqlRefreshTokenStore
from repositories.notes import SqlNoteStore

__all__ = [
    "UserStore", "RefreshTokenStore", "NoteStore",
    "SqlUserStore", "SqlRefreshTokenStore", "SqlNoteStore",
]
