from models.users import User
from models.refresh_tokens import RefreshToken
from models.notes import Note

__all__ = ["User", "RefreshToken", "Note"]
