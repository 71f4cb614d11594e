import re

from email_validator import validate_email, EmailNotValidError
from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Accepts and emits camelCase field names, snake_case is accepted too.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Token(CamelModel):
    access_token: str
    refresh_token: str


class AuthRequest(BaseModel):
    email: str
    password: str

    @field_validator('email')
    @classmethod
    def validate_email_format(cls, value):
        """
        Syntax check only. The value is passed on exactly as sent: register
        trims it, login does not.
        """
        try:
            validate_email(value.strip(), check_deliverability=False)
        except EmailNotValidError:
            raise ValueError('Invalid email format.')

        return value

    @field_validator('password')
    @classmethod
    def validate_password(cls, value):
        """
        Password must be at least 9 characters and contain:
        - At least one lowercase letter
        - At least one uppercase letter
        - At least one digit
        """
        if len(value) < 9:
            raise ValueError('Password must be at least 9 characters long')

        if not re.search(r'[a-z]', value):
            raise ValueError('Password must contain at least one lowercase character')

        if not re.search(r'[A-Z]', value):
            raise ValueError('Password must contain at least one uppercase character')

        if not re.search(r'\d', value):
            raise ValueError('Password must contain at least one digit')

        return value


class RefreshTokenRequest(CamelModel):
    refresh_token: str

    @field_validator('refresh_token')
    @classmethod
    def validate_token(cls, value):
        if not value or not value.strip():
            raise ValueError('Refresh token cannot be empty')
        return value
