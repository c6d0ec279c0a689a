"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, userlist.toml only contains overrides.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, HttpUrl, TypeAdapter, ValidationError, field_validator

from userlist.infrastructure.loader import DEFAULT_ENDPOINT, DEFAULT_TIMEOUT

_HTTP_URL = TypeAdapter(HttpUrl)


class LoaderConfig(BaseModel):
    """[loader] section."""

    model_config = {"frozen": True}

    endpoint: str = DEFAULT_ENDPOINT
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)

    @field_validator("endpoint")
    @classmethod
    def _absolute_url(cls, value: str) -> str:
        try:
            _HTTP_URL.validate_python(value)
        except ValidationError as exc:
            msg = f"endpoint must be an absolute http(s) URL, got {value!r}"
            raise ValueError(msg) from exc
        return value


class IdsConfig(BaseModel):
    """[ids] section."""

    model_config = {"frozen": True}

    strategy: Literal["uuid", "counter"] = "uuid"
    prefix: str = "local-"

