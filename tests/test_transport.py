"""Tests for the retrying transport in fakewebservices.transport.

Backends are simulated with ``httpx.MockTransport``; sleeping is replaced
by a recorder so the backoff curve can be asserted without waiting.
"""

from __future__ import annotations

import httpx
import pytest

from fakewebservices.errors import GenericAPIError, TransportError
from fakewebservices.schemas.server import Server
from fakewebservices.transport import (
    RetryPolicy,
    RetryTransport,
    default_backoff,
    default_retryable_status,
)


class Backend:
    """Replays a scripted sequence of responses (or exceptions)."""

    def __init__(self, *outcomes: httpx.Response | Exception) -> None:
        self.outcomes = list(outcomes)
        self.calls = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        outcome = self.outcomes[min(self.calls, len(self.outcomes) - 1)]
        self.calls += 1
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _send(transport: httpx.BaseTransport) -> httpx.Response:
    with httpx.Client(transport=transport) as client:
        return client.get("https://example.test/api/fake-resources/servers")


class TestDefaults:
    @pytest.mark.parametrize("status_code", [429, 500, 502, 503, 504])
    def test_retryable(self, status_code: int) -> None:
        assert default_retryable_status(status_code)

    @pytest.mark.parametrize("status_code", [200, 400, 401, 404, 422, 501])
    def test_not_retryable(self, status_code: int) -> None:
        assert not default_retryable_status(status_code)

    def test_exponential_backoff(self) -> None:
        assert [default_backoff(n, 1.0, 30.0, None) for n in range(6)] == [
            1.0, 2.0, 4.0, 8.0, 16.0, 30.0,
        ]

    def test_retry_after_header(self) -> None:
        response = httpx.Response(429, headers={"Retry-After": "7"})
        assert default_backoff(0, 1.0, 30.0, response) == 7.0

    def test_retry_after_ignored_for_other_statuses(self) -> None:
        response = httpx.Response(500, headers={"Retry-After": "7"})
        assert default_backoff(1, 1.0, 30.0, response) == 2.0


class TestRetryTransport:
    def test_retries_until_success(self) -> None:
        backend = Backend(httpx.Response(503), httpx.Response(502), httpx.Response(200))
        waits: list[float] = []
        transport = RetryTransport(httpx.MockTransport(backend), sleep=waits.append)

        response = _send(transport)

        assert response.status_code == 200
        assert backend.calls == 3
        assert waits == [1.0, 2.0]

    def test_gives_up_after_max_retries(self) -> None:
        backend = Backend(httpx.Response(500))
        waits: list[float] = []
        transport = RetryTransport(
            httpx.MockTransport(backend), RetryPolicy(max_retries=2), sleep=waits.append
        )

        with pytest.raises(TransportError, match=r"giving up after 3 attempt\(s\)"):
            _send(transport)
        assert backend.calls == 3
        assert waits == [1.0, 2.0]

    def test_connection_errors_are_retried(self) -> None:
        backend = Backend(httpx.ConnectError("refused"), httpx.Response(200))
        transport = RetryTransport(httpx.MockTransport(backend), sleep=lambda _: None)

        assert _send(transport).status_code == 200
        assert backend.calls == 2

    def test_connection_error_cause_is_kept(self) -> None:
        backend = Backend(httpx.ReadTimeout("slow"))
        transport = RetryTransport(
            httpx.MockTransport(backend), RetryPolicy(max_retries=1), sleep=lambda _: None
        )

        with pytest.raises(TransportError) as exc_info:
            _send(transport)
        assert isinstance(exc_info.value.__cause__, httpx.ReadTimeout)
        assert backend.calls == 2

    def test_non_retryable_status_is_returned(self) -> None:
        backend = Backend(httpx.Response(501))
        transport = RetryTransport(httpx.MockTransport(backend), sleep=lambda _: None)

        assert _send(transport).status_code == 501
        assert backend.calls == 1

    def test_disabled_policy_sends_once(self) -> None:
        backend = Backend(httpx.Response(500))
        transport = RetryTransport(httpx.MockTransport(backend), RetryPolicy.disabled())

        assert _send(transport).status_code == 500
        assert backend.calls == 1

    def test_custom_predicate_and_backoff(self) -> None:
        backend = Backend(httpx.Response(409), httpx.Response(409), httpx.Response(201))
        waits: list[float] = []
        policy = RetryPolicy(
            retryable_status=lambda status_code: status_code == 409,
            backoff=lambda attempt, wait_min, wait_max, response: 0.25,
        )
        transport = RetryTransport(httpx.MockTransport(backend), policy, sleep=waits.append)

        assert _send(transport).status_code == 201
        assert waits == [0.25, 0.25]


class TestClientIntegration:
    def test_exhausted_retries_surface_transport_error(self, make_client) -> None:
        backend = Backend(httpx.Response(503))
        transport = RetryTransport(
            httpx.MockTransport(backend), RetryPolicy(max_retries=1), sleep=lambda _: None
        )
        client = make_client(backend, transport=transport)

        with pytest.raises(TransportError):
            client.do(client.new_request("GET", "servers/srv-1"), Server())

    def test_disabled_retries_reach_the_classifier(self, make_client) -> None:
        backend = Backend(httpx.Response(500, json={"errors": [{"title": "Database offline"}]}))
        transport = RetryTransport(httpx.MockTransport(backend), RetryPolicy.disabled())
        client = make_client(backend, transport=transport)

        with pytest.raises(GenericAPIError, match="Database offline"):
            client.do(client.new_request("GET", "servers/srv-1"), Server())
