from core.database import Base
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from models.mixins import UUIDPrimaryKeyMixin, CreatedAtMixin


class User(Base, UUIDPrimaryKeyMixin, CreatedAtMixin):
    __tablename__ = "users"

    #relationships
    refresh_tokens = relationship("RefreshToken", back_populates="user", cascade="all, delete-orphan",
                                  passive_deletes=True)

    # Stored trimmed; case is kept as registered
    email = Column(String(320), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
