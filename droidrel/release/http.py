"""HTTP client abstraction for the GitHub API.

This module provides:
- HttpClient: Protocol for HTTP operations (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Mock implementation for testing

Requests are sent once. There is no retry and, unless configured, no
timeout.
"""

from __future__ import annotations

import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from droidrel import __version__
from droidrel.core.result import Err, Ok, Result

__all__ = [
    "HttpClient",
    "HttpError",
    "HttpResponse",
    "MockHttpClient",
    "RealHttpClient",
]


@dataclass(frozen=True, slots=True)
class HttpError:
    """Transport failure (no HTTP response at all).

    Attributes:
        url: The URL that failed
        message: Human-readable error message
    """

    url: str
    message: str

    def __str__(self) -> str:
        return f"{self.message} ({self.url})"


@dataclass(frozen=True, slots=True)
class HttpResponse:
    """An HTTP response, successful or not."""

    status: int
    body: bytes

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP operations."""

    def request(
        self,
        method: str,
        url: str,
        *,
        body: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> Result[HttpResponse, HttpError]:
        """Send one request.

        Returns:
            Ok(HttpResponse) for any HTTP status, Err(HttpError) when no
            response was received.
        """
        ...


class RealHttpClient:
    """HTTP client using urllib with system certificates."""

    def __init__(
        self,
        timeout: float | None = None,
        user_agent: str = f"droidrel/{__version__}",
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def request(
        self,
        method: str,
        url: str,
        *,
        body: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> Result[HttpResponse, HttpError]:
        all_headers = {"User-Agent": self.user_agent, **(headers or {})}
        req = urllib.request.Request(url, data=body, headers=all_headers, method=method)
        try:
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                return Ok(HttpResponse(status=response.status, body=response.read()))
        except urllib.error.HTTPError as e:
            # GitHub puts error details in the body
            return Ok(HttpResponse(status=e.code, body=e.read() or b""))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, message="Request timed out"))
        except (ValueError, OSError) as e:
            return Err(HttpError(url=url, message=str(e)))


@dataclass(frozen=True, slots=True)
class RecordedRequest:
    method: str
    url: str
    body: bytes | None
    headers: dict[str, str]


def _empty_requests() -> list[RecordedRequest]:
    return []


def _empty_responses() -> dict[tuple[str, str], list[HttpResponse | HttpError]]:
    return {}


@dataclass
class MockHttpClient:
    """Mock HTTP client for testing.

    Responses are queued per (method, url). The last queued response for a
    key is reused once the queue is down to one.

    Usage:
        client = MockHttpClient()
        client.set_json("POST", "https://api.github.com/repos/o/p/releases", {"id": 1})
        result = client.request("POST", "https://api.github.com/repos/o/p/releases")
    """

    calls: list[RecordedRequest] = field(default_factory=_empty_requests)
    _responses: dict[tuple[str, str], list[HttpResponse | HttpError]] = field(
        default_factory=_empty_responses
    )

    def set_response(self, method: str, url: str, response: HttpResponse | HttpError) -> None:
        self._responses.setdefault((method, url), []).append(response)

    def set_json(self, method: str, url: str, payload: object, status: int = 200) -> None:
        import json

        body = json.dumps(payload).encode("utf-8")
        self.set_response(method, url, HttpResponse(status=status, body=body))

    def request(
        self,
        method: str,
        url: str,
        *,
        body: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> Result[HttpResponse, HttpError]:
        self.calls.append(RecordedRequest(method, url, body, dict(headers or {})))

        queue = self._responses.get((method, url))
        if not queue:
            return Ok(HttpResponse(status=404, body=b'{"message": "Not Found (mock)"}'))

        response = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)
