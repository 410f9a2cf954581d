"""Tests for the login/registration flow."""

import pytest

from roomdesk.clients import BackendClient, resolve
from roomdesk.services import AuthFlow, SessionState, SessionStore, extract_token
from roomdesk.services.auth import (
    LOGIN_NETWORK_ERROR,
    REGISTER_NETWORK_ERROR,
    REGISTER_SUCCESS_NOTICE,
)
from roomdesk.services.session import NO_TOKEN_MESSAGE


@pytest.fixture
def session(memory_store):
    return SessionStore(memory_store)


@pytest.fixture
def auth(client, session, backend_settings):
    return AuthFlow(client, session, backend_settings)


class TestExtractToken:
    """Tests for extract_token()."""

    @pytest.mark.parametrize(
        "payload,expected",
        [
            ({"token": "a"}, "a"),
            ({"accessToken": "b"}, "b"),
            ({"jwt": "c"}, "c"),
            ({"token": "", "accessToken": "b", "jwt": "c"}, "b"),
            ({"token": "a", "jwt": "c"}, "a"),
            ({"user": {"token": "nested"}}, ""),
            ({"token": 123}, ""),
            ([], ""),
            ({}, ""),
        ],
    )
    def test_field_order(self, payload, expected):
        assert extract_token(payload) == expected


class TestLogin:
    """Tests for AuthFlow.login()."""

    @pytest.mark.asyncio
    async def test_login_success(self, auth, session, backend, memory_store):
        """A token in the response authenticates the session."""
        backend.add("POST", "/auth/login", body={"token": "abc"})

        assert await auth.login("me@example.com", "secret") is True

        assert session.state is SessionState.AUTHENTICATED
        assert session.credential == "abc"
        assert memory_store.get("token") == "abc"
        request = backend.calls("POST", "/auth/login")[0]
        assert backend.json_body(request) == {"email": "me@example.com", "password": "secret"}

    @pytest.mark.asyncio
    async def test_login_rejected(self, auth, session, backend):
        """A 401 surfaces the server message and leaves the session anonymous."""
        backend.add("POST", "/auth/login", status_code=401, body={"message": "bad credentials"})

        assert await auth.login("me@example.com", "wrong") is False

        assert session.state is SessionState.ANONYMOUS
        assert session.auth_error == "bad credentials"

    @pytest.mark.asyncio
    async def test_login_without_token(self, auth, session, backend):
        """A success response with no token is reported as such."""
        backend.add("POST", "/auth/login", body={"user": {"id": 1}})

        assert await auth.login("me@example.com", "secret") is False

        assert session.state is SessionState.ANONYMOUS
        assert session.auth_error == NO_TOKEN_MESSAGE

    @pytest.mark.asyncio
    async def test_login_network_error(self, auth, session, backend):
        """Transport failures use a generic message."""
        backend.fail("POST", "/auth/login")

        assert await auth.login("me@example.com", "secret") is False

        assert session.auth_error == LOGIN_NETWORK_ERROR

    @pytest.mark.asyncio
    async def test_login_misconfigured(self, transport, session, backend, backend_settings):
        """A missing base URL is reported like a network error."""
        auth = AuthFlow(BackendClient(resolve(""), transport=transport), session, backend_settings)

        assert await auth.login("me@example.com", "secret") is False

        assert session.auth_error == LOGIN_NETWORK_ERROR
        assert backend.requests == []

    @pytest.mark.asyncio
    async def test_login_clears_previous_error(self, auth, session, backend):
        """Each attempt starts from a clean error and re-evaluates input."""
        backend.add("POST", "/auth/login", status_code=401, body={"message": "bad credentials"})
        await auth.login("me@example.com", "wrong")

        backend.add("POST", "/auth/login", body={"accessToken": "xyz"})
        assert await auth.login("me@example.com", "right") is True

        assert session.auth_error == ""
        assert session.credential == "xyz"


class TestRegister:
    """Tests for AuthFlow.register()."""

    @pytest.mark.asyncio
    async def test_register_success_switches_to_login(self, auth, session, backend):
        """Registration confirms and asks for a login without authenticating."""
        auth.switch_mode("register")
        backend.add("POST", "/auth/register", status_code=201, body={"id": 7, "token": "ignored"})

        assert await auth.register("new@example.com", "secret") is True

        assert auth.state.mode == "login"
        assert auth.state.notice == REGISTER_SUCCESS_NOTICE
        assert session.state is SessionState.ANONYMOUS
        request = backend.calls("POST", "/auth/register")[0]
        assert backend.json_body(request) == {"email": "new@example.com", "password": "secret"}

    @pytest.mark.asyncio
    async def test_register_conflict(self, auth, session, backend):
        """Server messages are surfaced as the auth error."""
        auth.switch_mode("register")
        backend.add("POST", "/auth/register", status_code=409, body={"message": "Email already registered"})

        assert await auth.register("new@example.com", "secret") is False

        assert session.auth_error == "Email already registered"
        assert auth.state.mode == "register"
        assert auth.state.notice == ""

    @pytest.mark.asyncio
    async def test_register_network_error(self, auth, session, backend):
        backend.fail("POST", "/auth/register")

        assert await auth.register("new@example.com", "secret") is False

        assert session.auth_error == REGISTER_NETWORK_ERROR

    def test_switch_mode_clears_messages(self, auth, session):
        session.fail("old error")

        auth.switch_mode("register")

        assert auth.state.mode == "register"
        assert session.auth_error == ""
