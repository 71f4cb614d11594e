from core.database import Base
from sqlalchemy import Column, DateTime, String, Text, BigInteger
from models.mixins import UUIDPrimaryKeyMixin


class Note(Base, UUIDPrimaryKeyMixin):
    __tablename__ = "notes"

    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False, default="")
    # ARGB colour value, e.g. 0xFF5733
    color = Column(BigInteger, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False)

    # Set from the authenticated subject, never from the request body
    owner_id = Column(String(36), nullable=False, index=True)
