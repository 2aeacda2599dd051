"""
Cross-service call client.

Wraps outbound HTTP calls between the library services and folds the three
possible outcomes into a single `UpstreamResult`:

1. Transport failure (refused, DNS, timeout) -> `UpstreamUnreachable`
2. Remote error status -> `UpstreamRejected(status, message)`
3. Success -> the raw `httpx.Response`

Transport exceptions never escape `ServiceClient.call`.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import httpx

from ..exceptions import UpstreamError, UpstreamRejected, UpstreamUnreachable

logger = logging.getLogger(__name__)


@dataclass
class UpstreamResult:
    """Outcome of a single cross-service call."""

    response: Optional[httpx.Response] = None
    error: Optional[UpstreamError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> httpx.Response:
        """Return the response, or raise the normalized failure."""
        if self.error is not None:
            raise self.error
        return self.response


def extract_message(response: httpx.Response, service_name: str) -> str:
    """Pick the remote error message, falling back to a generic description."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        for field in ("message", "detail"):
            value = body.get(field)
            if isinstance(value, str) and value:
                return value

    return f"{service_name} responded with {response.status_code} {response.reason_phrase}".rstrip()


class ServiceClient:
    """Single-attempt HTTP client for calls to another library service."""

    def __init__(
        self,
        base_url: str,
        service_name: str,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            base_url: Base URL of the upstream service, including its root path
            service_name: Human readable name used in logs and messages
            timeout: Seconds before a call is abandoned as unreachable
            transport: Optional httpx transport, used to stub the network
        """
        self.base_url = base_url.rstrip("/")
        self.service_name = service_name
        self.timeout = timeout
        self.transport = transport

    async def call(
        self,
        method: str,
        path: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> UpstreamResult:
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                logger.debug(f"Calling {self.service_name}: {method} {url}")
                response = await client.request(
                    method, url, headers=headers, json=json, params=params
                )
        except httpx.TimeoutException as e:
            logger.error(f"Timed out calling {self.service_name} at {url}: {e!r}")
            return UpstreamResult(error=UpstreamUnreachable(self.service_name))
        except httpx.HTTPError as e:
            logger.error(f"Error connecting to {self.service_name} at {url}: {e!r}")
            return UpstreamResult(error=UpstreamUnreachable(self.service_name))

        if response.is_error:
            message = extract_message(response, self.service_name)
            logger.warning(
                f"{self.service_name} rejected {method} {url}: "
                f"{response.status_code} - {message}"
            )
            return UpstreamResult(
                response=response,
                error=UpstreamRejected(self.service_name, response.status_code, message),
            )

        return UpstreamResult(response=response)
