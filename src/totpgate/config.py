"""Engine configuration loaded from environment variables or a ``.env`` file."""

import hashlib
from enum import StrEnum
from typing import Any, Callable

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Algorithm(StrEnum):
    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"

    @property
    def digest(self) -> Callable[..., Any]:
        return _DIGESTS[self]


_DIGESTS = {
    Algorithm.SHA1: hashlib.sha1,
    Algorithm.SHA256: hashlib.sha256,
    Algorithm.SHA512: hashlib.sha512,
}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TOTPGATE_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Shown in authenticator apps
    issuer: str = "totpgate"

    # Code parameters, must match what the authenticator app was provisioned with
    digits: int = Field(default=6, ge=6, le=8)
    step_seconds: int = Field(default=30, gt=0)
    algorithm: Algorithm = Algorithm.SHA1
    epoch_start: int = 0

    # Adjacent steps accepted on either side of the current one
    window: int = Field(default=1, ge=0, le=10)

    # Raw secret length, 20 bytes = 160 bits
    secret_bytes: int = Field(default=20, ge=16)

    @field_validator("algorithm", mode="before")
    @classmethod
    def _normalize_algorithm(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.replace("-", "").upper()
        return value
