"""API clients package."""

from roomdesk.clients.backend_client import (
    BackendClient,
    ConfigurationError,
    GatewayError,
    NetworkError,
    RequestError,
)
from roomdesk.clients.endpoint import EndpointResolution, resolve, resolve_from_settings

__all__ = [
    "BackendClient",
    "GatewayError",
    "ConfigurationError",
    "RequestError",
    "NetworkError",
    "EndpointResolution",
    "resolve",
    "resolve_from_settings",
]
