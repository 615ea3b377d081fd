"""Client configuration.

Settings are read from ``FIRECRAWL_*`` environment variables and can be
overridden per client::

    FIRECRAWL_API_KEY=fc-...          # required
    FIRECRAWL_API_URL=https://...     # default: https://api.firecrawl.dev
    FIRECRAWL_TIMEOUT=30              # seconds per HTTP call
    FIRECRAWL_MAX_RESPONSE_BYTES=...  # default: 10 MiB
    FIRECRAWL_POLL_INTERVAL=2         # seconds between job status checks
    FIRECRAWL_JOB_TIMEOUT=300         # overall budget when waiting for a job

Explicit values passed to the client win over the environment.
"""

import logging
from typing import Any, Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ._http import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, MAX_RESPONSE_BYTES
from .exceptions import ConfigError
from .polling import DEFAULT_JOB_TIMEOUT, DEFAULT_POLL_INTERVAL

logger = logging.getLogger(__name__)


class ClientSettings(BaseSettings):
    """Connection and polling settings shared by both clients."""

    model_config = SettingsConfigDict(env_prefix="FIRECRAWL_", extra="ignore")

    api_key: Optional[str] = None
    api_url: str = DEFAULT_BASE_URL
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    max_response_bytes: int = Field(default=MAX_RESPONSE_BYTES, gt=0)
    poll_interval: float = Field(default=DEFAULT_POLL_INTERVAL, gt=0)
    job_timeout: float = Field(default=DEFAULT_JOB_TIMEOUT, gt=0)

    @field_validator("api_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


def load_settings(**overrides: Any) -> ClientSettings:
    """Build settings from the environment plus explicit overrides.

    ``None`` overrides are ignored so that unset constructor arguments fall
    back to the environment.

    Raises:
        ConfigError: An override is unknown or a value is invalid, or no API
            key is configured.
    """
    valid_fields = set(ClientSettings.model_fields.keys())
    invalid = set(overrides.keys()) - valid_fields
    if invalid:
        raise ConfigError(
            f"Unknown config fields: {sorted(invalid)}. "
            f"Valid fields: {sorted(valid_fields)}"
        )

    explicit = {key: value for key, value in overrides.items() if value is not None}
    try:
        settings = ClientSettings(**explicit)
    except ValidationError as exc:
        raise ConfigError(f"Invalid client configuration: {exc}") from exc

    if not settings.api_key:
        raise ConfigError(
            "No API key configured. Pass api_key=... or set FIRECRAWL_API_KEY."
        )
    logger.debug("Loaded client settings for %s", settings.api_url)
    return settings
