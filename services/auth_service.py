from datetime import timezone

from core.errors import Err, ErrorKind, Ok, Result
from models.users import User
from repositories.base import RefreshTokenStore, UserStore
from services.token_service import TokenCodec, TokenPair, TokenType, hash_refresh_token
from utils.hashing import PasswordHasher
from utils.logger import get_logger

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid credentials."
INVALID_REFRESH_TOKEN = "Invalid refresh token."
DUPLICATE_EMAIL = "A user with that email already exists."


class AuthService:
    """
    Registration, login and refresh-token rotation.

    Collaborators are passed in so tests can run the flow against in-memory
    stores. Expected failures come back as ``Err`` values, never exceptions.
    """

    def __init__(self, users: UserStore, refresh_tokens: RefreshTokenStore,
                 hasher: PasswordHasher, codec: TokenCodec):
        self.users = users
        self.refresh_tokens = refresh_tokens
        self.hasher = hasher
        self.codec = codec

    def register(self, email: str, password: str) -> Result[User]:
        """
        Create an account. No tokens are issued here.

        Flow:
        1. Reject if the trimmed email is already taken
        2. Hash the password
        3. Store the user with the trimmed email; the store also rejects a
           duplicate that slipped past step 1 in a concurrent registration
        """
        email = email.strip()

        if self.users.find_by_email(email) is not None:
            logger.warning("Registration attempt with existing email", extra={"email": email})
            return Err(ErrorKind.DUPLICATE_IDENTITY, DUPLICATE_EMAIL)

        user = self.users.add(email=email, hashed_password=self.hasher.hash(password))
        if user is None:
            logger.warning("Registration lost a race for the same email", extra={"email": email})
            return Err(ErrorKind.DUPLICATE_IDENTITY, DUPLICATE_EMAIL)

        logger.info("User registered", extra={"user_id": user.id})
        return Ok(user)

    def login(self, email: str, password: str) -> Result[TokenPair]:
        # Looked up exactly as sent; "no such user" and "wrong password" must look the same
        user = self.users.find_by_email(email)

        if user is None:
            logger.warning("Login failed - user not found", extra={"email": email})
            return Err(ErrorKind.INVALID_CREDENTIALS, INVALID_CREDENTIALS)

        if not self.hasher.verify(password, user.hashed_password):
            logger.warning("Login failed - invalid password", extra={"user_id": user.id})
            return Err(ErrorKind.INVALID_CREDENTIALS, INVALID_CREDENTIALS)

        tokens = self._issue_tokens(user.id)

        logger.info("User logged in", extra={"user_id": user.id})
        return Ok(tokens)

    def refresh(self, raw_refresh_token: str) -> Result[TokenPair]:
        """
        Trade a refresh token for a new access + refresh pair.

        The old token is single use. Its record is removed with a conditional
        delete and only the caller whose delete actually removed the row gets
        a new pair; concurrent callers holding a copy of the same token fail.
        """
        user_id = self.codec.verify(raw_refresh_token, TokenType.REFRESH)
        if user_id is None:
            logger.warning("Refresh failed - token did not verify")
            return Err(ErrorKind.INVALID_TOKEN, INVALID_REFRESH_TOKEN)

        # The account may have been removed after the token was issued
        user = self.users.find_by_id(user_id)
        if user is None:
            logger.warning("Refresh failed - unknown subject", extra={"user_id": user_id})
            return Err(ErrorKind.INVALID_TOKEN, INVALID_REFRESH_TOKEN)

        token_hash = hash_refresh_token(raw_refresh_token)

        record = self.refresh_tokens.find_by_owner_and_hash(user.id, token_hash)
        if record is None:
            logger.warning("Refresh failed - token not recognized", extra={"user_id": user.id})
            return Err(ErrorKind.INVALID_TOKEN, INVALID_REFRESH_TOKEN)

        expires_at = record.expires_at
        if expires_at.tzinfo is None:
            # SQLite hands back naive datetimes
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        if expires_at <= self.codec.now():
            self.refresh_tokens.delete_by_owner_and_hash(user.id, token_hash)
            logger.warning("Refresh failed - stored token expired", extra={"user_id": user.id})
            return Err(ErrorKind.INVALID_TOKEN, INVALID_REFRESH_TOKEN)

        if not self.refresh_tokens.delete_by_owner_and_hash(user.id, token_hash):
            logger.warning("Refresh failed - token already redeemed", extra={"user_id": user.id})
            return Err(ErrorKind.INVALID_TOKEN, INVALID_REFRESH_TOKEN)

        tokens = self._issue_tokens(user.id)

        logger.info("Refresh token rotated", extra={"user_id": user.id})
        return Ok(tokens)

    def _issue_tokens(self, user_id: str) -> TokenPair:
        tokens = self.codec.issue_pair(user_id)
        self.refresh_tokens.put(
            owner_id=user_id,
            token_hash=hash_refresh_token(tokens.refresh_token),
            expires_at=self.codec.refresh_expires_at(),
        )
        return tokens
