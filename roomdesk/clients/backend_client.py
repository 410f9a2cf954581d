"""Room-management backend API client."""

from typing import Any, Optional

import httpx
from structlog import get_logger

from roomdesk import __version__
from roomdesk.clients.endpoint import EndpointResolution

logger = get_logger(__name__)

NETWORK_ERROR_MESSAGE = "Network error. Could not reach the backend."


class GatewayError(Exception):
    """Base exception for backend client errors."""

    pass


class ConfigurationError(GatewayError):
    """Raised when the backend base URL is missing or still a placeholder."""

    pass


class RequestError(GatewayError):
    """Raised when the backend answers with a non-success status."""

    def __init__(self, method: str, path: str, status_code: int, message: str):
        super().__init__(message)
        self.method = method
        self.path = path
        self.status_code = status_code
        self.message = message


class NetworkError(GatewayError):
    """Raised when no response was received at all."""

    pass


def bearer_headers(credential: Optional[str]) -> dict[str, str]:
    """Authorization header for a bearer credential; empty when there is none."""
    if not credential:
        return {}
    return {"Authorization": f"Bearer {credential}"}


def parse_body(response: httpx.Response) -> Any:
    """Parse a response body as JSON, falling back to an empty object."""
    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError:
        return {}


def extract_message(payload: Any, method: str, path: str, status_code: int) -> str:
    """Pick the human-readable error message out of an error payload."""
    if isinstance(payload, dict):
        for field in ("message", "error"):
            value = payload.get(field)
            if isinstance(value, str) and value.strip():
                return value
    return f"{method} {path} failed ({status_code})"


class BackendClient:
    """Client for the room-management backend.

    Every call is a single attempt; there is no retry and no caching.
    """

    def __init__(
        self,
        endpoint: EndpointResolution,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            endpoint: Resolved backend base URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.endpoint = endpoint
        self.timeout = timeout
        self.transport = transport

    def _get_headers(self, credential: Optional[str] = None) -> dict[str, str]:
        """Get default headers, adding the bearer credential when given."""
        headers = {
            "Accept": "application/json",
            "User-Agent": f"roomdesk/{__version__}",
        }
        headers.update(bearer_headers(credential))
        return headers

    async def _make_request(
        self,
        method: str,
        path: str,
        data: Optional[dict[str, Any]] = None,
        credential: Optional[str] = None,
    ) -> Any:
        """Make one HTTP request to the backend.

        Args:
            method: HTTP method (GET, POST)
            path: API path (without base URL)
            data: JSON request body (POST only)
            credential: Bearer token to send, if any

        Returns:
            Parsed JSON response ({} when the body is empty or not JSON)

        Raises:
            ConfigurationError: If the base URL is invalid; nothing is sent
            RequestError: If the backend answers with a non-2xx status
            NetworkError: If the request could not be completed
        """
        if not self.endpoint.valid:
            raise ConfigurationError("Missing backend base URL")

        url = f"{self.endpoint.base_url}{path}"
        headers = self._get_headers(credential)

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.request(
                    method=method,
                    url=url,
                    headers=headers,
                    json=data,
                )
        except httpx.RequestError as e:
            logger.error(
                "Backend request failed",
                method=method,
                path=path,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise NetworkError(NETWORK_ERROR_MESSAGE) from e

        payload = parse_body(response)

        if not response.is_success:
            message = extract_message(payload, method, path, response.status_code)
            logger.warning(
                "Backend returned an error",
                method=method,
                path=path,
                status_code=response.status_code,
                message=message,
            )
            raise RequestError(method, path, response.status_code, message)

        logger.debug(
            "Backend request successful",
            method=method,
            path=path,
            status_code=response.status_code,
        )
        return payload

    async def get(self, path: str, credential: Optional[str] = None) -> Any:
        """Issue a GET request and return the parsed body."""
        return await self._make_request("GET", path, credential=credential)

    async def post(
        self, path: str, body: dict[str, Any], credential: Optional[str] = None
    ) -> Any:
        """Issue a POST request with a JSON body and return the parsed body."""
        return await self._make_request("POST", path, data=body, credential=credential)
