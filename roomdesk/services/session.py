"""Session credential state machine with durable persistence."""

from enum import Enum
from typing import Callable

import redis
from pydantic import BaseModel
from structlog import get_logger

from roomdesk.clients.backend_client import bearer_headers
from roomdesk.storage import KeyValueStore

logger = get_logger(__name__)

NO_TOKEN_MESSAGE = "Login succeeded but no token returned by backend."


class SessionState(str, Enum):
    """The two session states."""

    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


class Session(BaseModel):
    """Current credential and the last authentication error."""

    credential: str = ""
    auth_error: str = ""


class SessionStore:
    """Owns the Session record.

    A non-empty credential means authenticated, an empty one anonymous.
    Every transition into Authenticated writes the credential to the
    durable store; logout removes it.
    """

    def __init__(self, store: KeyValueStore, storage_key: str = "token"):
        """Initialize the store and rehydrate any persisted credential.

        Args:
            store: Durable key-value store
            storage_key: Key the credential is kept under
        """
        self.store = store
        self.storage_key = storage_key
        self.session = Session()
        self._logout_listeners: list[Callable[[], None]] = []
        self.restore()

    @property
    def credential(self) -> str:
        return self.session.credential

    @property
    def auth_error(self) -> str:
        return self.session.auth_error

    @property
    def state(self) -> SessionState:
        if self.session.credential:
            return SessionState.AUTHENTICATED
        return SessionState.ANONYMOUS

    @property
    def is_authenticated(self) -> bool:
        return self.state is SessionState.AUTHENTICATED

    @property
    def auth_headers(self) -> dict[str, str]:
        """Authorization header for the current credential, derived on each access.

        Presenters read this to show or forward the header; BackendClient
        builds the same header from the credential it is given.
        """
        return bearer_headers(self.session.credential)

    def restore(self) -> SessionState:
        """Rehydrate the credential from durable storage."""
        try:
            stored = self.store.get(self.storage_key)
        except (OSError, redis.RedisError) as e:
            logger.warning("Could not read stored session", error=str(e))
            stored = None

        self.session = Session(credential=stored or "")
        if self.is_authenticated:
            logger.info("Restored session from storage")
        return self.state

    def login_success(self, credential: str) -> bool:
        """Move to Authenticated with the given credential.

        Returns:
            False (and records an auth error, keeping any current
            credential) if the credential is empty
        """
        if not credential:
            self.fail(NO_TOKEN_MESSAGE)
            logger.warning("Login response carried no token")
            return False

        self.session = Session(credential=credential)
        self._persist(credential)
        logger.info("Session authenticated")
        return True

    def fail(self, message: str) -> None:
        """Record an authentication error without changing state."""
        self.session = self.session.model_copy(update={"auth_error": message})

    def clear_error(self) -> None:
        self.fail("")

    def logout(self) -> None:
        """Drop the credential and notify dependents to discard derived state."""
        self.session = Session()
        try:
            self.store.remove(self.storage_key)
        except (OSError, redis.RedisError) as e:
            logger.warning("Failed to remove stored session", error=str(e))
        logger.info("Session cleared")

        for listener in self._logout_listeners:
            listener()

    def on_logout(self, callback: Callable[[], None]) -> None:
        """Register a callback run after every logout."""
        self._logout_listeners.append(callback)

    def _persist(self, credential: str) -> None:
        try:
            self.store.set(self.storage_key, credential)
        except (OSError, redis.RedisError) as e:
            # Session stays valid in memory
            logger.warning("Failed to persist session", error=str(e))
