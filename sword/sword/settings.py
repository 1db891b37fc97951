"""Application configuration loaded from environment variables.

| Variable             | Description                            | Default   |
|----------------------|----------------------------------------|-----------|
| `DATABASE_URL`       | SQLAlchemy async connection string     | required  |
| `APP_HOST`           | Server bind host                       | `0.0.0.0` |
| `APP_PORT`           | Server bind port                       | `3000`    |
| `DB_MAX_CONNECTIONS` | Maximum database connections           | `100`     |
| `DB_MIN_CONNECTIONS` | Minimum database connections           | `5`       |
| `DB_CONNECT_TIMEOUT` | Connection timeout in seconds          | `8`       |
| `DB_IDLE_TIMEOUT`    | Idle connection timeout in seconds     | `600`     |
| `DB_MAX_LIFETIME`    | Maximum connection lifetime in seconds | `1800`    |
"""

from __future__ import annotations

import re
from typing import Annotated, Any

from pydantic import BeforeValidator, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import InvalidNumericValue, MissingRequiredVariable

U16_MAX = 2**16 - 1
U32_MAX = 2**32 - 1
U64_MAX = 2**64 - 1

_UNSIGNED_DIGITS = re.compile(r"\+?[0-9]+")


def _parse_unsigned(value: Any) -> Any:
    # Optional leading "+" followed by decimal digits.
    if isinstance(value, str):
        if not _UNSIGNED_DIGITS.fullmatch(value):
            raise ValueError("must be an unsigned decimal integer")
        return int(value)
    return value


UnsignedInt = Annotated[int, BeforeValidator(_parse_unsigned)]


class AppConfig(BaseSettings):
    model_config = SettingsConfigDict(
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )

    host: str = Field(default="0.0.0.0", validation_alias="APP_HOST")
    port: UnsignedInt = Field(default=3000, ge=0, le=U16_MAX, validation_alias="APP_PORT")
    database_url: str = Field(min_length=1, validation_alias="DATABASE_URL")
    db_max_connections: UnsignedInt = Field(
        default=100, ge=0, le=U32_MAX, validation_alias="DB_MAX_CONNECTIONS"
    )
    db_min_connections: UnsignedInt = Field(
        default=5, ge=0, le=U32_MAX, validation_alias="DB_MIN_CONNECTIONS"
    )
    db_connect_timeout: UnsignedInt = Field(
        default=8, ge=0, le=U64_MAX, validation_alias="DB_CONNECT_TIMEOUT"
    )
    db_idle_timeout: UnsignedInt = Field(
        default=600, ge=0, le=U64_MAX, validation_alias="DB_IDLE_TIMEOUT"
    )
    db_max_lifetime: UnsignedInt = Field(
        default=1800, ge=0, le=U64_MAX, validation_alias="DB_MAX_LIFETIME"
    )

    def bind_address(self) -> str:
        """Return the server bind address in ``host:port`` format."""
        return f"{self.host}:{self.port}"


def _variable_name(loc: object) -> str:
    key = str(loc).lower()
    for name, field in AppConfig.model_fields.items():
        alias = str(field.validation_alias)
        if key in (name.lower(), alias.lower()):
            return alias
    return str(loc).upper()


def load_from_environment() -> AppConfig:
    """Load configuration from environment variables.

    Raises:
        MissingRequiredVariable: ``DATABASE_URL`` is unset or empty
        InvalidNumericValue: a numeric variable does not parse or is out of range
    """
    try:
        return AppConfig()
    except ValidationError as exc:
        errors = exc.errors()
        # A missing required variable wins over any parse failure.
        errors.sort(key=lambda err: err["type"] not in ("missing", "string_too_short"))
        first = errors[0]
        variable = _variable_name(first["loc"][0]) if first["loc"] else "DATABASE_URL"
        if first["type"] in ("missing", "string_too_short"):
            raise MissingRequiredVariable(variable) from exc
        raise InvalidNumericValue(variable, first.get("input")) from exc


__all__ = ["AppConfig", "load_from_environment"]
