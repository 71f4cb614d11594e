from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session
from models.refresh_tokens import RefreshToken
from utils.logger import get_logger

logger = get_logger(__name__)


class SqlRefreshTokenStore:
    """
    Refresh-token records keyed by (user_id, token_hash).
    """

    def __init__(self, db: Session):
        self.db = db

    def put(self, owner_id: str, token_hash: str, expires_at: datetime) -> None:
        self.db.add(RefreshToken(user_id=owner_id, token_hash=token_hash, expires_at=expires_at))
        self.db.commit()

    def find_by_owner_and_hash(self, owner_id: str, token_hash: str) -> Optional[RefreshToken]:
        return self.db.query(RefreshToken).filter(
            RefreshToken.user_id == owner_id,
            RefreshToken.token_hash == token_hash
        ).first()

    def delete_by_owner_and_hash(self, owner_id: str, token_hash: str) -> bool:
        """
        Conditional delete in a single statement.

        When two requests race on the same token the database serialises the
        DELETEs; only one of them sees a non-zero row count.
        """
        deleted = self.db.query(RefreshToken).filter(
            RefreshToken.user_id == owner_id,
            RefreshToken.token_hash == token_hash
        ).delete(synchronize_session=False)
        self.db.commit()

        if deleted > 1:
            logger.warning(
                "Multiple refresh token records removed for one hash",
                extra={"user_id": owner_id, "rows": deleted}
            )

        return deleted > 0
