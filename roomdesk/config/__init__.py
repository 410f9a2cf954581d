"""Configuration package."""

from roomdesk.config.logging import configure_logging, get_logger
from roomdesk.config.settings import Settings, settings

__all__ = ["settings", "Settings", "configure_logging", "get_logger"]
