"""Wait for an asynchronous job (crawl, batch scrape, extract) to finish.

A job is polled by calling its status endpoint until the returned snapshot has
a terminal status (completed, failed or cancelled). Errors raised by the
status check are never retried here; they propagate to the caller.
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional, TypeVar

from .exceptions import JobTimeoutError

_log = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 2.0
DEFAULT_JOB_TIMEOUT = 300.0

SnapshotT = TypeVar("SnapshotT")


def _validate(poll_interval: float, timeout: float) -> None:
    if poll_interval <= 0:
        raise ValueError(f"poll_interval must be positive, got {poll_interval}")
    if timeout <= 0:
        raise ValueError(f"timeout must be positive, got {timeout}")


def is_terminal(snapshot) -> bool:
    """Whether a status snapshot is in a terminal state."""
    return snapshot.status.is_final


def wait_for_job(
    check: Callable[[str], SnapshotT],
    job_id: str,
    *,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
    timeout: float = DEFAULT_JOB_TIMEOUT,
    kind: str = "job",
    logger: Optional[logging.Logger] = None,
) -> SnapshotT:
    """Poll ``check(job_id)`` until it returns a terminal snapshot.

    Args:
        check: Status-check call, e.g. ``client.get_crawl_status``.
        job_id: Identifier returned by the start call.
        poll_interval: Seconds to sleep between checks.
        timeout: Overall budget in seconds.
        kind: Job kind used in log and error messages.
        logger: Logger for progress messages.

    Returns:
        The first snapshot whose status is terminal.

    Raises:
        JobTimeoutError: No terminal status was seen within ``timeout``.
        FirecrawlError: Any error raised by ``check``.
    """
    _validate(poll_interval, timeout)
    log = logger or _log
    started = time.monotonic()
    while time.monotonic() - started < timeout:
        snapshot = check(job_id)
        if is_terminal(snapshot):
            log.debug("%s %s finished with status %s", kind, job_id, snapshot.status.value)
            return snapshot
        log.debug("%s %s is %s, checking again in %ss", kind, job_id, snapshot.status.value, poll_interval)
        time.sleep(poll_interval)
    raise JobTimeoutError(job_id, timeout, kind)


async def async_wait_for_job(
    check: Callable[[str], Awaitable[SnapshotT]],
    job_id: str,
    *,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
    timeout: float = DEFAULT_JOB_TIMEOUT,
    kind: str = "job",
    logger: Optional[logging.Logger] = None,
) -> SnapshotT:
    """Async version of :func:`wait_for_job`.

    Sleeps with ``asyncio.sleep``, so cancelling the awaiting task (directly or
    through ``asyncio.wait_for``) stops polling between checks.
    """
    _validate(poll_interval, timeout)
    log = logger or _log
    started = time.monotonic()
    while time.monotonic() - started < timeout:
        snapshot = await check(job_id)
        if is_terminal(snapshot):
            log.debug("%s %s finished with status %s", kind, job_id, snapshot.status.value)
            return snapshot
        log.debug("%s %s is %s, checking again in %ss", kind, job_id, snapshot.status.value, poll_interval)
        await asyncio.sleep(poll_interval)
    raise JobTimeoutError(job_id, timeout, kind)
