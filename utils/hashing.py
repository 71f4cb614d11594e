from passlib.context import CryptContext

# bcrypt only looks at the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72


def _truncate(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class PasswordHasher:
    """
    Salted bcrypt hashing for user credentials.

    Every call to ``hash`` draws a fresh salt, so the same password hashes to
    a different digest each time while all of them still verify.
    """

    def __init__(self, context: CryptContext | None = None):
        self._context = context or CryptContext(schemes=['bcrypt'], deprecated='auto')

    def hash(self, password: str) -> str:
        return self._context.hash(_truncate(password))

    def verify(self, password: str, hashed_password: str) -> bool:
        # passlib raises for digests it cannot identify; treat those as a mismatch
        try:
            return self._context.verify(_truncate(password), hashed_password)
        except (ValueError, TypeError):
            return False


password_hasher = PasswordHasher()
