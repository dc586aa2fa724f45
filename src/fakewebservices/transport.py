"""Retrying httpx transport.

Wraps another ``httpx`` transport (by default a plain
``httpx.HTTPTransport``) and re-sends a request when the connection
fails or the backend answers with a retryable status, sleeping between
attempts according to a :class:`RetryPolicy`.

Default policy: up to 4 retries, exponential backoff starting at 1s and
capped at 30s, retrying connection errors, 429 and every 5xx except 501.
An integer ``Retry-After`` header on 429/503 overrides the computed wait.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

import httpx

from fakewebservices.errors import TransportError

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 4
DEFAULT_WAIT_MIN = 1.0
DEFAULT_WAIT_MAX = 30.0


def default_retryable_status(status_code: int) -> bool:
    """Return True for 429 and for 5xx other than 501 Not Implemented."""
    return status_code == 429 or (status_code >= 500 and status_code != 501)


def default_backoff(
    attempt: int,
    wait_min: float,
    wait_max: float,
    response: httpx.Response | None,
) -> float:
    """Exponential backoff (``wait_min * 2**attempt``) capped at ``wait_max``."""
    if response is not None and response.status_code in (429, 503):
        retry_after = response.headers.get("Retry-After", "")
        if retry_after.isdigit():
            return float(retry_after)
    return min(wait_min * 2**attempt, wait_max)


def _never(status_code: int) -> bool:
    return False


@dataclass
class RetryPolicy:
    """How often and how patiently the transport retries.

    Args:
        max_retries: Retries after the first attempt; 0 sends once.
        wait_min: Base delay in seconds.
        wait_max: Upper bound for a single delay in seconds.
        retryable_status: Predicate selecting response statuses worth retrying.
        backoff: ``(attempt, wait_min, wait_max, response) -> seconds``.
    """

    max_retries: int = DEFAULT_MAX_RETRIES
    wait_min: float = DEFAULT_WAIT_MIN
    wait_max: float = DEFAULT_WAIT_MAX
    retryable_status: Callable[[int], bool] = default_retryable_status
    backoff: Callable[[int, float, float, httpx.Response | None], float] = default_backoff

    @classmethod
    def disabled(cls) -> RetryPolicy:
        """A policy that sends once and hands every response back as-is."""
        return cls(max_retries=0, retryable_status=_never)

    def wait(self, attempt: int, response: httpx.Response | None = None) -> float:
        return self.backoff(attempt, self.wait_min, self.wait_max, response)


class RetryTransport(httpx.BaseTransport):
    """httpx transport layer adding retries on top of ``transport``.

    Raises ``TransportError`` once the policy's retries are exhausted,
    whether the last attempt failed to connect or returned a retryable
    status.
    """

    def __init__(
        self,
        transport: httpx.BaseTransport | None = None,
        policy: RetryPolicy | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._transport = transport or httpx.HTTPTransport()
        self.policy = policy or RetryPolicy()
        self._sleep = sleep

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        attempt = 0
        while True:
            remaining = self.policy.max_retries - attempt
            try:
                response = self._transport.handle_request(request)
            except httpx.TransportError as exc:
                if remaining <= 0:
                    raise TransportError(
                        f"{request.method} {request.url} giving up after "
                        f"{attempt + 1} attempt(s): {exc}"
                    ) from exc
                wait = self.policy.wait(attempt)
                reason = str(exc) or type(exc).__name__
            else:
                if not self.policy.retryable_status(response.status_code):
                    return response
                response.close()
                if remaining <= 0:
                    raise TransportError(
                        f"{request.method} {request.url} giving up after "
                        f"{attempt + 1} attempt(s)"
                    )
                wait = self.policy.wait(attempt, response)
                reason = f"status {response.status_code}"

            logger.warning(
                "%s %s failed (%s), retrying in %.1fs (%d left)",
                request.method,
                request.url,
                reason,
                wait,
                remaining,
            )
            self._sleep(wait)
            attempt += 1

    def close(self) -> None:
        self._transport.close()
