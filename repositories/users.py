from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from models.users import User
from utils.logger import get_logger

logger = get_logger(__name__)


class SqlUserStore:

    def __init__(self, db: Session):
        self.db = db

    def find_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def find_by_id(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).one_or_none()

    def add(self, email: str, hashed_password: str) -> Optional[User]:
        """
        Insert a user. Returns None when the email is already taken, which
        can still happen after a lookup miss if two registrations race.
        """
        model = User(email=email, hashed_password=hashed_password)
        self.db.add(model)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.warning("User insert hit the unique email constraint", extra={"email": email})
            return None

        self.db.refresh(model)
        return model
