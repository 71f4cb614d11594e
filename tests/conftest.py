import base64
import os
import threading
from datetime import datetime, timezone
from typing import Generator, List, Optional

# Settings are read at import time, so the environment must be ready first
os.environ.setdefault("ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("JWT_SECRET", base64.b64encode(b"test-secret-key-that-is-32-bytes!").decode())
os.environ.setdefault("LOG_DIR", "logs")

import pytest
from passlib.context import CryptContext
from httpx import ASGITransport, AsyncClient
from sqlalchemy.orm import Session

from main import app
from core.config import JwtConfig
from core.database import Base, engine, SessionLocal
from models.mixins import new_id
from models.notes import Note
from models.refresh_tokens import RefreshToken
from models.users import User
from services.auth_service import AuthService
from services.note_service import NoteService
from services.token_service import TokenCodec
from utils.deps import get_db
from utils.hashing import PasswordHasher

TEST_PASSWORD = "Passw0rd1"

TEST_JWT_CONFIG = JwtConfig(
    secret=b"unit-test-secret-unit-test-secret",
    algorithm="HS256",
    access_token_validity_ms=900000,
    refresh_token_validity_ms=2592000000,
)


class FixedClock:
    """
    Manually advanced clock for expiry tests.
    """

    def __init__(self, start: datetime = datetime(2025, 1, 1, tzinfo=timezone.utc)):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, delta):
        self.current = self.current + delta


class InMemoryUserStore:

    def __init__(self):
        self.users = {}

    def find_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.email == email), None)

    def find_by_id(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)

    def add(self, email: str, hashed_password: str) -> Optional[User]:
        # Unique email, like the users.email constraint
        if any(u.email == email for u in self.users.values()):
            return None
        user = User(id=new_id(), email=email, hashed_password=hashed_password)
        self.users[user.id] = user
        return user


class InMemoryRefreshTokenStore:
    """
    Thread-safe store; the lock makes delete a compare-and-delete.
    """

    def __init__(self):
        self.records: List[RefreshToken] = []
        self.lock = threading.Lock()

    def put(self, owner_id: str, token_hash: str, expires_at: datetime) -> None:
        with self.lock:
            self.records.append(RefreshToken(user_id=owner_id, token_hash=token_hash, expires_at=expires_at))

    def find_by_owner_and_hash(self, owner_id: str, token_hash: str) -> Optional[RefreshToken]:
        with self.lock:
            return next(
                (r for r in self.records if r.user_id == owner_id and r.token_hash == token_hash),
                None
            )

    def delete_by_owner_and_hash(self, owner_id: str, token_hash: str) -> bool:
        with self.lock:
            before = len(self.records)
            self.records = [
                r for r in self.records
                if not (r.user_id == owner_id and r.token_hash == token_hash)
            ]
            return len(self.records) < before


class InMemoryNoteStore:

    def __init__(self):
        self.notes = {}

    def save(self, note: Note) -> Note:
        self.notes[note.id] = note
        return note

    def find_by_id(self, note_id: str) -> Optional[Note]:
        return self.notes.get(note_id)

    def find_by_owner(self, owner_id: str) -> List[Note]:
        return [n for n in self.notes.values() if n.owner_id == owner_id]

    def delete_by_id(self, note_id: str) -> None:
        self.notes.pop(note_id, None)


@pytest.fixture(scope="session")
def hasher() -> PasswordHasher:
    # Minimum cost keeps the service tests fast
    return PasswordHasher(CryptContext(schemes=["bcrypt"], bcrypt__rounds=4))


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def jwt_config() -> JwtConfig:
    return TEST_JWT_CONFIG


@pytest.fixture
def codec(jwt_config, clock) -> TokenCodec:
    return TokenCodec(jwt_config, clock=clock)


@pytest.fixture
def user_store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def refresh_store() -> InMemoryRefreshTokenStore:
    return InMemoryRefreshTokenStore()


@pytest.fixture
def note_store() -> InMemoryNoteStore:
    return InMemoryNoteStore()


@pytest.fixture
def auth_service(user_store, refresh_store, hasher, codec) -> AuthService:
    return AuthService(users=user_store, refresh_tokens=refresh_store, hasher=hasher, codec=codec)


@pytest.fixture
def note_service(note_store, clock) -> NoteService:
    return NoteService(notes=note_store, clock=clock)


@pytest.fixture
def session() -> Generator[Session, None, None]:
    """
    Fresh, empty SQLite database for each test.
    """
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

    Base.metadata.drop_all(bind=engine)


@pytest.fixture
async def client(session: Session):
    """
    HTTP client bound to the app, with get_db pointing at the test session.
    """
    def override_get_db():
        try:
            yield session
        finally:
            pass  # session fixture owns cleanup

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


async def _register_and_login(client, email: str, password: str = TEST_PASSWORD) -> dict:
    response = await client.post("/auth/register", json={"email": email, "password": password})
    assert response.status_code == 201

    response = await client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200
    return response.json()


@pytest.fixture
def register_and_login():
    return _register_and_login


@pytest.fixture
async def user_tokens(client) -> dict:
    return await _register_and_login(client, "owner@example.com")


@pytest.fixture
async def auth_headers(user_tokens) -> dict:
    return {"Authorization": f"Bearer {user_tokens['accessToken']}"}


@pytest.fixture
async def other_auth_headers(client) -> dict:
    tokens = await _register_and_login(client, "other@example.com")
    return {"Authorization": f"Bearer {tokens['accessToken']}"}
