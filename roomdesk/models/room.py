"""Pydantic models for rooms and the room directory state."""

from typing import Any, Optional, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)
from structlog import get_logger

logger = get_logger(__name__)


class Room(BaseModel):
    """One bookable unit as returned by the backend."""

    id: Optional[Union[int, str]] = Field(
        None,
        validation_alias=AliasChoices("id", "_id"),
        description="Server-assigned identifier",
    )
    room_number: str = Field(default="", alias="roomNumber")
    room_type: str = Field(default="", alias="roomType")
    price: Optional[float] = Field(None, description="Nightly price")
    hotel_id: Optional[Union[int, str]] = Field(None, alias="hotelId")

    model_config = ConfigDict(populate_by_name=True, extra="allow", coerce_numbers_to_str=True)

    @field_validator("room_number", "room_type", mode="before")
    @classmethod
    def null_to_empty(cls, value: Any) -> Any:
        """Nullable columns come back as null; treat them as blank."""
        return "" if value is None else value


class RoomDraft(BaseModel):
    """Raw text inputs of the create-room form."""

    room_number: str = ""
    room_type: str = ""
    price: str = ""


class RoomDirectoryState(BaseModel):
    """Everything a presenter needs to render the room list."""

    rooms: list[Room] = Field(default_factory=list)
    loading: bool = False
    error: str = ""
    draft: RoomDraft = Field(default_factory=RoomDraft)


def normalize_rooms(payload: Any) -> list[Room]:
    """Turn a list response into Room models.

    Accepts a bare array or an object with a ``rooms`` array; any other
    shape yields an empty list. Entries that are not objects are skipped.
    """
    if isinstance(payload, dict):
        payload = payload.get("rooms")
    if not isinstance(payload, list):
        return []

    rooms = []
    for item in payload:
        if not isinstance(item, dict):
            continue
        try:
            rooms.append(Room.model_validate(item))
        except ValidationError as e:
            logger.warning("Skipping malformed room", room=item, error=str(e))
    return rooms
