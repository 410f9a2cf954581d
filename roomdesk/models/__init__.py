"""Data models."""

from roomdesk.models.room import Room, RoomDirectoryState, RoomDraft, normalize_rooms

__all__ = [
    "Room",
    "RoomDraft",
    "RoomDirectoryState",
    "normalize_rooms",
]
