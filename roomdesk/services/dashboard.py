"""Wires the client core together for a presentation layer."""

from typing import Any, Optional

import httpx

from roomdesk.clients import BackendClient, resolve_from_settings
from roomdesk.config.settings import Settings
from roomdesk.models import RoomDraft
from roomdesk.services.auth import AuthFlow
from roomdesk.services.room_directory import RoomDirectory
from roomdesk.services.session import SessionStore
from roomdesk.storage import KeyValueStore, create_store


class Dashboard:
    """Session, auth and room directory sharing one backend client.

    Room operations use the session credential; logging out clears the
    room directory.
    """

    def __init__(
        self,
        client: BackendClient,
        session: SessionStore,
        auth: AuthFlow,
        rooms: RoomDirectory,
    ):
        self.client = client
        self.session = session
        self.auth = auth
        self.rooms = rooms
        self.session.on_logout(self.rooms.clear)

    @classmethod
    def from_settings(
        cls,
        app_settings: Settings,
        store: Optional[KeyValueStore] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "Dashboard":
        """Build a dashboard from settings.

        Args:
            app_settings: Application settings
            store: Session store override (defaults to SESSION_STORAGE)
            transport: httpx transport override for tests

        Returns:
            A ready Dashboard
        """
        endpoint = resolve_from_settings(app_settings.backend)
        client = BackendClient(
            endpoint,
            timeout=app_settings.backend.request_timeout,
            transport=transport,
        )
        if store is None:
            store = create_store(app_settings.session, app_settings.redis)
        session = SessionStore(store, app_settings.session.storage_key)
        return cls(
            client=client,
            session=session,
            auth=AuthFlow(client, session, app_settings.backend),
            rooms=RoomDirectory(client, app_settings.backend),
        )

    async def login(self, email: str, password: str) -> bool:
        return await self.auth.login(email, password)

    async def register(self, email: str, password: str) -> bool:
        return await self.auth.register(email, password)

    def logout(self) -> None:
        self.session.logout()

    async def load_rooms(self, hotel_id: str) -> bool:
        return await self.rooms.load_rooms(hotel_id, self.session.credential or None)

    async def create_room(self, hotel_id: str, fields: Optional[RoomDraft] = None) -> bool:
        return await self.rooms.create_room(hotel_id, self.session.credential, fields)

    def snapshot(self) -> dict[str, Any]:
        """Observable state as plain data for presenters."""
        return {
            "backend": self.client.endpoint.status_message,
            "session": {
                "state": self.session.state.value,
                "auth_error": self.session.auth_error,
            },
            "auth": self.auth.state.model_dump(),
            "rooms": self.rooms.state.model_dump(by_alias=True, exclude_none=True),
        }
