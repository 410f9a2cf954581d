"""Client core for the roomdesk hotel/room dashboard."""

__version__ = "0.1.0"
