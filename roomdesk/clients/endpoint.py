"""Backend base URL resolution and validation."""

from typing import Optional

from pydantic import BaseModel, ConfigDict
from structlog import get_logger

from roomdesk.config import settings
from roomdesk.config.settings import BackendSettings

logger = get_logger(__name__)

# Values left in deploy templates that were never filled in
PLACEHOLDER_TOKENS = ("YOUR_RENDER_BACKEND_URL", "PASTE")


class EndpointResolution(BaseModel):
    """Normalized backend base URL and whether it can be used."""

    base_url: str
    valid: bool
    status_message: str

    model_config = ConfigDict(frozen=True)


def resolve(raw_value: str) -> EndpointResolution:
    """Normalize a configured backend base URL.

    Exactly one trailing slash is stripped; the rest of the value is kept
    as-is. Empty values and values still holding a template placeholder
    are reported invalid.

    Args:
        raw_value: Base URL as configured

    Returns:
        EndpointResolution with the normalized URL and a diagnostic message
    """
    raw_value = raw_value or ""
    base_url = raw_value[:-1] if raw_value.endswith("/") else raw_value

    if not raw_value.strip() or any(token in raw_value for token in PLACEHOLDER_TOKENS):
        return EndpointResolution(
            base_url=base_url,
            valid=False,
            status_message=(
                f"Backend URL is not configured (got {raw_value!r}). Set API_BASE_URL."
            ),
        )

    return EndpointResolution(
        base_url=base_url,
        valid=True,
        status_message=f"Using backend {base_url}",
    )


def resolve_from_settings(
    backend_settings: Optional[BackendSettings] = None,
) -> EndpointResolution:
    """Resolve the configured base URL and log the outcome.

    Args:
        backend_settings: Settings to read; defaults to the global settings
    """
    backend_settings = backend_settings or settings.backend
    resolution = resolve(backend_settings.base_url)
    if resolution.valid:
        logger.info(resolution.status_message, base_url=resolution.base_url)
    else:
        logger.warning(resolution.status_message)
    return resolution
