"""Login and registration against the backend."""

from typing import Any, Literal

from pydantic import BaseModel
from structlog import get_logger

from roomdesk.clients import (
    BackendClient,
    ConfigurationError,
    NetworkError,
    RequestError,
)
from roomdesk.config.settings import BackendSettings
from roomdesk.services.session import SessionStore

logger = get_logger(__name__)

# Checked in order; the first non-empty string wins
TOKEN_FIELDS = ("token", "accessToken", "jwt")

LOGIN_NETWORK_ERROR = "Network error during login."
REGISTER_NETWORK_ERROR = "Network error during registration."
REGISTER_SUCCESS_NOTICE = "Registration successful. Please log in."


class AuthFormState(BaseModel):
    """Which form is shown and any confirmation message."""

    mode: Literal["login", "register"] = "login"
    notice: str = ""


def extract_token(payload: Any) -> str:
    """Return the credential from a login response, or "" if there is none."""
    if not isinstance(payload, dict):
        return ""
    for field in TOKEN_FIELDS:
        value = payload.get(field)
        if isinstance(value, str) and value:
            return value
    return ""


class AuthFlow:
    """Runs login/register calls and updates the session store."""

    def __init__(
        self,
        client: BackendClient,
        session: SessionStore,
        backend_settings: BackendSettings,
    ):
        self.client = client
        self.session = session
        self.login_path = backend_settings.login_path
        self.register_path = backend_settings.register_path
        self.state = AuthFormState()

    def switch_mode(self, mode: Literal["login", "register"]) -> None:
        self.state = AuthFormState(mode=mode)
        self.session.clear_error()

    async def login(self, email: str, password: str) -> bool:
        """Log in and store the returned credential.

        Returns:
            True when the session ended up authenticated
        """
        self.session.clear_error()
        self.state = self.state.model_copy(update={"notice": ""})

        try:
            payload = await self.client.post(
                self.login_path, {"email": email, "password": password}
            )
        except RequestError as e:
            logger.info("Login rejected", status_code=e.status_code)
            self.session.fail(e.message)
            return False
        except (NetworkError, ConfigurationError) as e:
            logger.warning("Login could not reach backend", error=str(e))
            self.session.fail(LOGIN_NETWORK_ERROR)
            return False

        return self.session.login_success(extract_token(payload))

    async def register(self, email: str, password: str) -> bool:
        """Create an account; on success switch the form back to login.

        Registration never authenticates the session by itself.
        """
        self.session.clear_error()
        self.state = self.state.model_copy(update={"notice": ""})

        try:
            await self.client.post(
                self.register_path, {"email": email, "password": password}
            )
        except RequestError as e:
            logger.info("Registration rejected", status_code=e.status_code)
            self.session.fail(e.message)
            return False
        except (NetworkError, ConfigurationError) as e:
            logger.warning("Registration could not reach backend", error=str(e))
            self.session.fail(REGISTER_NETWORK_ERROR)
            return False

        logger.info("Registration successful")
        self.state = AuthFormState(mode="login", notice=REGISTER_SUCCESS_NOTICE)
        return True
