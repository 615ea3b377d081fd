"""Configuration shared by the blocking and asyncio clients."""

import logging
from typing import Optional

from ._http import build_headers
from .config import load_settings


class BaseClient:
    """Resolves settings and holds the immutable per-client configuration.

    Subclasses add the connection pool. Nothing here changes after
    construction, so a client can be shared by concurrent callers.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        max_response_bytes: Optional[int] = None,
        poll_interval: Optional[float] = None,
        job_timeout: Optional[float] = None,
        logger: Optional[logging.Logger] = None,
    ):
        settings = load_settings(
            api_key=api_key,
            api_url=api_url,
            timeout=timeout,
            max_response_bytes=max_response_bytes,
            poll_interval=poll_interval,
            job_timeout=job_timeout,
        )
        self.api_key = settings.api_key
        self.api_url = settings.api_url
        self.timeout = settings.timeout
        self.max_response_bytes = settings.max_response_bytes
        self.poll_interval = settings.poll_interval
        self.job_timeout = settings.job_timeout
        self._headers = build_headers(self.api_key)
        self._logger = logger or logging.getLogger("firecrawl_client")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(api_url={self.api_url!r})"

    def _wait_settings(self, poll_interval: Optional[float], timeout: Optional[float]):
        return (
            self.poll_interval if poll_interval is None else poll_interval,
            self.job_timeout if timeout is None else timeout,
        )
