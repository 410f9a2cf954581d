"""Business services package."""

from roomdesk.services.auth import AuthFlow, AuthFormState, extract_token
from roomdesk.services.dashboard import Dashboard
from roomdesk.services.room_directory import RoomDirectory, ValidationError
from roomdesk.services.session import Session, SessionState, SessionStore

__all__ = [
    "AuthFlow",
    "AuthFormState",
    "extract_token",
    "Dashboard",
    "RoomDirectory",
    "ValidationError",
    "Session",
    "SessionState",
    "SessionStore",
]
