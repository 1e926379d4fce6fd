"""HTTP thing service.

This service resolves things from a remote HTTP API exposing
``GET /things/{thing_id}``. It encapsulates transport concerns (base URL,
headers, timeouts, retries) and collapses every transport or payload fault
into a :class:`~lookup_cache.services.NotFound` result, so the cache in front
of it never sees an exception for an ordinary failure.

Notes
-----
- Timeouts and network errors are retried. Protocol errors, a 404 or any
  other non-2xx status are final for the current call.
- The retry budget applies to a single ``try_read``; the cache decides
  nothing about retries and simply calls again on the next miss.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Optional, Union
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from ..domain.models import Thing
from . import Found, NotFound

logger = logging.getLogger(__name__)


class HttpThingService:
    """Thing service backed by an HTTP API.

    Parameters
    ----------
    endpoint: str
        Base URL of the thing API (e.g., "http://localhost:8000").
    api_key: Optional[str]
        Optional bearer token for authenticating requests.
    timeout: int
        Request timeout in seconds for all HTTP operations.
    max_retries: int
        Extra attempts after a timeout or network error.
    backoff_initial_ms: int
        Delay before the first retry, in milliseconds.
    backoff_multiplier: float
        Factor applied to the delay for every further retry.

    Attributes
    ----------
    _client: httpx.Client
        Shared client configured with base URL, timeout, and headers.
    """

    def __init__(
        self,
        endpoint: str,
        api_key: Optional[str] = None,
        timeout: int = 30,
        *,
        max_retries: int = 1,
        backoff_initial_ms: int = 200,
        backoff_multiplier: float = 2.0,
    ) -> None:
        self._client = httpx.Client(
            base_url=endpoint, timeout=timeout, headers=self._headers(api_key)
        )
        self._max_retries = max(0, int(max_retries))
        self._backoff_initial_ms = max(0, int(backoff_initial_ms))
        self._backoff_multiplier = max(1.0, float(backoff_multiplier))
        self._timeout_seconds = timeout
        logger.info(
            "thing_service.http.init",
            extra={"endpoint": endpoint, "timeout_seconds": timeout},
        )

    def inject_http_client_for_testing(self, client: Any) -> None:
        """Replace underlying HTTP client (testing only).

        This allows unit tests to provide a client built on
        ``httpx.MockTransport``.
        """
        self._client = client

    def close(self) -> None:
        """Release the underlying HTTP connection pool."""
        self._client.close()

    def try_read(self, thing_id: str) -> Union[Found[Thing], NotFound]:
        """Fetch a thing by identifier.

        Parameters
        ----------
        thing_id: str
            Identifier of the thing; URL-escaped into the request path.

        Returns
        -------
        Union[Found[Thing], NotFound]
            ``Found`` with the validated thing, or ``NotFound`` tagged with
            "not_found", "unavailable", "http_<status>" or "invalid_payload".
        """
        path = f"/things/{quote(thing_id, safe='')}"
        attempt = 0
        while True:
            try:
                resp = self._client.get(path)
                resp.raise_for_status()
                break
            except (httpx.TimeoutException, httpx.NetworkError) as exc:
                logger.warning(
                    "thing_service.http.timeout"
                    if isinstance(exc, httpx.TimeoutException)
                    else "thing_service.http.network_error",
                    extra={
                        "path": path,
                        "attempt": attempt + 1,
                        "max_retries": self._max_retries,
                        "timeout_seconds": self._timeout_seconds,
                    },
                )
                if attempt >= self._max_retries:
                    return NotFound("unavailable")
                time.sleep(self._backoff_delay(attempt))
                attempt += 1
            except httpx.HTTPStatusError as exc:
                status = exc.response.status_code
                if status == 404:
                    logger.debug(
                        "thing_service.http.not_found", extra={"thing_id": thing_id}
                    )
                    return NotFound("not_found")
                logger.error(
                    "thing_service.http.status_error",
                    extra={
                        "path": path,
                        "status": status,
                        "body_preview": self._body_preview(exc.response),
                    },
                )
                return NotFound(f"http_{status}")
            except httpx.RequestError as exc:
                logger.error(
                    "thing_service.http.transport_error",
                    extra={"path": path, "error": type(exc).__name__},
                )
                return NotFound("unavailable")

        try:
            thing = Thing.model_validate(resp.json())
        except (ValueError, ValidationError):
            logger.error(
                "thing_service.http.invalid_payload",
                extra={"path": path, "status_code": resp.status_code},
            )
            return NotFound("invalid_payload")
        if thing.thing_id != thing_id:
            logger.error(
                "thing_service.http.id_mismatch",
                extra={"path": path, "thing_id": thing_id, "got": thing.thing_id},
            )
            return NotFound("invalid_payload")
        logger.debug(
            "thing_service.http.response",
            extra={"path": path, "status_code": resp.status_code},
        )
        return Found(thing)

    def _backoff_delay(self, attempt: int) -> float:
        return (self._backoff_initial_ms / 1000.0) * (
            self._backoff_multiplier**attempt
        )

    @staticmethod
    def _body_preview(response: httpx.Response) -> str:
        """Return the response body truncated for diagnostics."""
        text = response.text
        return text if len(text) <= 500 else text[:500] + "..."

    @staticmethod
    def _headers(api_key: Optional[str]) -> dict:
        """Build default headers.

        Parameters
        ----------
        api_key: Optional[str]
            Bearer token to attach as an Authorization header.

        Returns
        -------
        dict
            A dictionary of HTTP headers suitable for JSON requests.
        """
        headers = {"Accept": "application/json"}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        return headers
