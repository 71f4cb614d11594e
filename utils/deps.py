from functools import lru_cache
from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import APIKeyHeader
from sqlalchemy.orm import Session

from core.config import settings
from core.database import SessionLocal
from core.errors import ErrorKind, ServiceError
from repositories import SqlNoteStore, SqlRefreshTokenStore, SqlUserStore
from services.auth_service import AuthService
from services.note_service import NoteService
from services.token_service import TokenCodec, TokenType
from utils.hashing import password_hasher


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

db_dependency = Annotated[Session, Depends(get_db)]


@lru_cache
def get_token_codec() -> TokenCodec:
    # One codec per process; the signing config never changes after startup
    return TokenCodec(settings.jwt_config())


def get_auth_service(db: db_dependency, codec: Annotated[TokenCodec, Depends(get_token_codec)]) -> AuthService:
    return AuthService(
        users=SqlUserStore(db),
        refresh_tokens=SqlRefreshTokenStore(db),
        hasher=password_hasher,
        codec=codec,
    )


def get_note_service(db: db_dependency) -> NoteService:
    return NoteService(notes=SqlNoteStore(db))


auth_service_dependency = Annotated[AuthService, Depends(get_auth_service)]
note_service_dependency = Annotated[NoteService, Depends(get_note_service)]


# Raw header so the codec sees (and strips) the "Bearer " marker itself
authorization_header = APIKeyHeader(name="Authorization", auto_error=False)


def get_current_user_id(
    authorization: Annotated[Optional[str], Depends(authorization_header)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> str:
    if not authorization or not authorization.startswith("Bearer "):
        raise ServiceError(ErrorKind.INVALID_TOKEN, "Could not validate credentials.")

    user_id = codec.verify(authorization, TokenType.ACCESS)
    if user_id is None:
        raise ServiceError(ErrorKind.INVALID_TOKEN, "Could not validate credentials.")

    return user_id


user_id_dependency = Annotated[str, Depends(get_current_user_id)]
