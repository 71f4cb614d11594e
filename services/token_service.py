import hashlib
import math
import secrets
from dataclasses import dataclass
from datetime import datetime, timezone, timedelta
from enum import Enum
from typing import Callable, Optional

from jose import jwt, JWTError

from core.config import JwtConfig
from utils.logger import get_logger

logger = get_logger(__name__)

BEARER_PREFIX = "Bearer "


class TokenType(str, Enum):
    ACCESS = "access"
    REFRESH = "refresh"


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def hash_refresh_token(raw_token: str) -> str:
    """
    Fast one-way digest used to store refresh tokens at rest.

    The tokens are signed, high-entropy strings so a plain SHA-256 is enough;
    the goal is only to never persist the bearer secret itself.
    """
    return hashlib.sha256(raw_token.encode()).hexdigest()


class TokenCodec:
    """
    Issues and verifies signed JWTs tagged with a token type.

    Both token types are signed with the same secret. The ``type`` claim lives
    inside the signed payload, so an access token can never pass a refresh
    check (or the other way around).
    """

    def __init__(self, config: JwtConfig, clock: Callable[[], datetime] = utc_now):
        self._config = config
        self._clock = clock

    def now(self) -> datetime:
        return self._clock()

    def validity_ms(self, token_type: TokenType) -> int:
        if token_type is TokenType.ACCESS:
            return self._config.access_token_validity_ms
        return self._config.refresh_token_validity_ms

    def issue(self, subject: str, token_type: TokenType, validity_ms: Optional[int] = None) -> str:
        """
        Create a signed token for ``subject``.

        Args:
            subject: User id carried in ``sub``
            token_type: ACCESS or REFRESH
            validity_ms: Lifetime in milliseconds (default: configured value for the type)

        Returns:
            Encoded JWT string
        """
        if validity_ms is None:
            validity_ms = self.validity_ms(token_type)

        issued_at = self.now()
        expires_at = issued_at + timedelta(milliseconds=validity_ms)

        payload = {
            "sub": subject,
            "type": token_type.value,
            "iat": int(issued_at.timestamp()),
            # Rounded up so a token never lives shorter than validity_ms
            "exp": math.ceil(expires_at.timestamp()),
            # Two tokens minted in the same second must still differ
            "jti": secrets.token_urlsafe(16),
        }

        return jwt.encode(payload, self._config.secret, algorithm=self._config.algorithm)

    def issue_pair(self, subject: str) -> TokenPair:
        return TokenPair(
            access_token=self.issue(subject, TokenType.ACCESS),
            refresh_token=self.issue(subject, TokenType.REFRESH),
        )

    def refresh_expires_at(self) -> datetime:
        return self.now() + timedelta(milliseconds=self._config.refresh_token_validity_ms)

    def verify(self, token: Optional[str], expected_type: TokenType) -> Optional[str]:
        """
        Return the subject of a valid token of ``expected_type``, else None.

        A leading ``Bearer `` marker is stripped first. Bad signatures, garbage
        input, expired tokens (``now >= exp``) and type mismatches all give
        None; nothing is raised to the caller.
        """
        if not token:
            return None

        if token.startswith(BEARER_PREFIX):
            token = token[len(BEARER_PREFIX):]

        try:
            # Expiry is checked below against the injected clock
            payload = jwt.decode(
                token,
                self._config.secret,
                algorithms=[self._config.algorithm],
                options={"verify_exp": False},
            )
        except JWTError:
            return None

        subject = payload.get("sub")
        expires_at = payload.get("exp")
        token_type = payload.get("type")

        if not isinstance(subject, str) or not subject:
            return None

        if not isinstance(expires_at, (int, float)) or self.now().timestamp() >= expires_at:
            logger.debug("Rejected expired token", extra={"token_type": token_type})
            return None

        if token_type != expected_type.value:
            logger.debug(
                "Rejected token of wrong type",
                extra={"expected": expected_type.value, "actual": token_type}
            )
            return None

        return subject
