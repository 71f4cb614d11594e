import base64
import binascii
from dataclasses import dataclass

from pydantic_settings import BaseSettings
from pydantic import ConfigDict, field_validator


@dataclass(frozen=True)
class JwtConfig:
    """
    Immutable signing configuration, built once at startup.
    """
    secret: bytes
    algorithm: str
    access_token_validity_ms: int
    refresh_token_validity_ms: int


class Settings(BaseSettings):
    model_config = ConfigDict(env_file=".env")

    ENV: str = "development"

    DATABASE_URL: str
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_VALIDITY_MS: int = 15 * 60 * 1000
    REFRESH_TOKEN_VALIDITY_MS: int = 30 * 24 * 60 * 60 * 1000
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]

    @field_validator('JWT_SECRET')
    @classmethod
    def validate_secret(cls, value):
        """
        The secret is shipped base64 encoded and must decode to something.
        """
        try:
            decoded = base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError):
            raise ValueError('JWT_SECRET must be base64 encoded')

        if not decoded:
            raise ValueError('JWT_SECRET cannot be empty')

        return value

    def jwt_config(self) -> JwtConfig:
        return JwtConfig(
            secret=base64.b64decode(self.JWT_SECRET),
            algorithm=self.JWT_ALGORITHM,
            access_token_validity_ms=self.ACCESS_TOKEN_VALIDITY_MS,
            refresh_token_validity_ms=self.REFRESH_TOKEN_VALIDITY_MS,
        )


settings = Settings()
