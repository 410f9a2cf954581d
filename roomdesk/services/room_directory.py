"""Room listing and creation scoped by hotel id."""

import math
from typing import Any, Optional, Union
from urllib.parse import quote

from structlog import get_logger

from roomdesk.clients import BackendClient, GatewayError
from roomdesk.config.settings import BackendSettings
from roomdesk.models import RoomDirectoryState, RoomDraft, normalize_rooms

logger = get_logger(__name__)

HOTEL_ID_REQUIRED = "Enter a Hotel ID first."
TOKEN_REQUIRED = "Enter a token (required to create rooms)."
ROOM_NUMBER_REQUIRED = "Room number is required."
PRICE_NOT_A_NUMBER = "Price must be a number."


class ValidationError(Exception):
    """Raised when a required input is missing; no request is sent."""

    pass


def parse_price(text: str) -> Optional[Union[int, float]]:
    """Coerce the price input to a number, or None when left blank.

    Raises:
        ValidationError: If the input is not a finite number
    """
    text = text.strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError as e:
        raise ValidationError(PRICE_NOT_A_NUMBER) from e
    if not math.isfinite(value):
        raise ValidationError(PRICE_NOT_A_NUMBER)
    return int(value) if value.is_integer() else value


class RoomDirectory:
    """Keeps the in-memory room list in step with the backend.

    The list is replaced wholesale on every successful fetch. Overlapping
    calls are not serialized: whichever response arrives last wins, and
    the loading flag drops once no call is outstanding. Responses to calls
    started before the last clear() are discarded.
    """

    def __init__(self, client: BackendClient, backend_settings: BackendSettings):
        self.client = client
        self.list_path = backend_settings.rooms_list_path
        self.create_path = backend_settings.rooms_create_path
        self.state = RoomDirectoryState()
        self._pending = 0
        self._generation = 0

    def _begin(self) -> int:
        self._pending += 1
        self.state.loading = True
        return self._generation

    def _end(self, generation: int) -> None:
        if generation != self._generation:
            return
        self._pending = max(0, self._pending - 1)
        self.state.loading = self._pending > 0

    def _rooms_path(self, hotel_id: str) -> str:
        return self.list_path.format(hotel_id=quote(hotel_id, safe=""))

    async def load_rooms(self, hotel_id: str, credential: Optional[str] = None) -> bool:
        """Fetch the hotel's rooms and replace the current list.

        Args:
            hotel_id: Hotel scope
            credential: Bearer token, sent when present

        Returns:
            True on success; on failure the message is in state.error
        """
        hotel_id = (hotel_id or "").strip()
        if not hotel_id:
            self.state.error = HOTEL_ID_REQUIRED
            return False

        self.state.error = ""
        generation = self._begin()
        try:
            payload = await self.client.get(self._rooms_path(hotel_id), credential=credential)
            if generation != self._generation:
                logger.info("Discarding rooms loaded before clear", hotel_id=hotel_id)
                return False
            self.state.rooms = normalize_rooms(payload)
            logger.info("Loaded rooms", hotel_id=hotel_id, room_count=len(self.state.rooms))
            return True
        except GatewayError as e:
            logger.warning("Failed to load rooms", hotel_id=hotel_id, error=str(e))
            if generation == self._generation:
                self.state.error = str(e)
            return False
        finally:
            self._end(generation)

    def _build_payload(self, hotel_id: str, credential: str) -> dict[str, Any]:
        """Check inputs in order and build the create body.

        Raises:
            ValidationError: For the first missing or malformed input
        """
        draft = self.state.draft
        if not hotel_id:
            raise ValidationError(HOTEL_ID_REQUIRED)
        if not credential:
            raise ValidationError(TOKEN_REQUIRED)
        room_number = draft.room_number.strip()
        if not room_number:
            raise ValidationError(ROOM_NUMBER_REQUIRED)

        payload: dict[str, Any] = {
            "hotelId": hotel_id,
            "roomNumber": room_number,
            "roomType": draft.room_type.strip(),
        }
        price = parse_price(draft.price)
        if price is not None:
            payload["price"] = price
        return payload

    async def create_room(
        self,
        hotel_id: str,
        credential: Optional[str],
        fields: Optional[RoomDraft] = None,
    ) -> bool:
        """Create a room, then reload the list from the backend.

        The create response is not used as the new list. On failure the
        draft is left as typed so it can be corrected and resubmitted.

        Args:
            hotel_id: Hotel scope
            credential: Bearer token; required
            fields: Form inputs; replaces the current draft when given

        Returns:
            True when the room was created
        """
        if fields is not None:
            self.state.draft = fields
        hotel_id = (hotel_id or "").strip()

        try:
            payload = self._build_payload(hotel_id, credential or "")
        except ValidationError as e:
            self.state.error = str(e)
            return False

        self.state.error = ""
        generation = self._begin()
        try:
            await self.client.post(self.create_path, payload, credential=credential)
        except GatewayError as e:
            logger.warning("Failed to create room", hotel_id=hotel_id, error=str(e))
            if generation == self._generation:
                self.state.error = str(e)
            return False
        finally:
            self._end(generation)

        logger.info("Created room", hotel_id=hotel_id, room_number=payload["roomNumber"])
        if generation != self._generation:
            # Cleared while the request was out; nothing to refresh
            return True
        self.state.draft = RoomDraft()
        await self.load_rooms(hotel_id, credential)
        return True

    def clear(self) -> None:
        """Forget rooms, error and draft (used on logout)."""
        self._generation += 1
        self._pending = 0
        self.state = RoomDirectoryState()
