import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class NoteRequest(BaseModel):
    id: Optional[str] = None
    title: str
    content: str
    # Stored as a signed 64-bit BIGINT
    color: int = Field(ge=-2**63, le=2**63 - 1)

    @field_validator('id')
    @classmethod
    def validate_id(cls, value):
        if value is None:
            return value
        try:
            return str(uuid.UUID(value))
        except ValueError:
            raise ValueError('Note id must be a valid identifier')

    @field_validator('title')
    @classmethod
    def validate_title(cls, value):
        if not value.strip():
            raise ValueError('Title can\'t be blank.')
        return value


class NoteResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    title: str
    content: str
    # Stored as a signed 64-bit BIGINT
    color: int = Field(ge=-2**63, le=2**63 - 1)
    created_at: datetime
