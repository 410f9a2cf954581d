"""Command-line front end for the roomdesk client core."""

import argparse
import asyncio
import getpass
import json
import sys
from typing import Any, Optional

from roomdesk.config import configure_logging, get_logger, settings
from roomdesk.models import RoomDraft
from roomdesk.services import Dashboard

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="roomdesk", description="Manage hotel rooms on the roomdesk backend"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("status", help="Show backend and session status")

    for name in ("login", "register"):
        auth = commands.add_parser(name, help=f"{name.capitalize()} with email and password")
        auth.add_argument("email", type=str)
        auth.add_argument(
            "--password",
            type=str,
            default=None,
            help="Password (prompted when omitted)",
        )

    commands.add_parser("logout", help="Forget the stored session")

    rooms = commands.add_parser("rooms", help="List or create rooms")
    room_commands = rooms.add_subparsers(dest="room_command", required=True)

    list_rooms = room_commands.add_parser("list", help="List rooms of a hotel")
    list_rooms.add_argument("--hotel-id", type=str, default=settings.hotel_id)

    create = room_commands.add_parser("create", help="Create a room")
    create.add_argument("--hotel-id", type=str, default=settings.hotel_id)
    create.add_argument("--room-number", type=str, required=True)
    create.add_argument("--room-type", type=str, default="")
    create.add_argument("--price", type=str, default="")

    return parser


async def run(args: argparse.Namespace, dashboard: Dashboard) -> tuple[bool, dict[str, Any]]:
    """Dispatch one command.

    Returns:
        Success flag and the state snapshot to print
    """
    if args.command == "status":
        ok = dashboard.client.endpoint.valid
    elif args.command == "logout":
        dashboard.logout()
        ok = True
    elif args.command in ("login", "register"):
        password = args.password
        if password is None:
            password = getpass.getpass("Password: ")
        if args.command == "login":
            ok = await dashboard.login(args.email, password)
        else:
            ok = await dashboard.register(args.email, password)
    elif args.room_command == "list":
        ok = await dashboard.load_rooms(args.hotel_id)
    else:
        ok = await dashboard.create_room(
            args.hotel_id,
            RoomDraft(
                room_number=args.room_number,
                room_type=args.room_type,
                price=args.price,
            ),
        )
    return ok, dashboard.snapshot()


async def main(argv: Optional[list[str]] = None, dashboard: Optional[Dashboard] = None) -> int:
    """Parse arguments, run the command and print the resulting state as JSON.

    Returns:
        0 on success, 1 otherwise
    """
    args = build_parser().parse_args(argv)
    if dashboard is None:
        dashboard = Dashboard.from_settings(settings)

    try:
        ok, snapshot = await run(args, dashboard)
    except Exception as e:
        logger.error("Command failed", command=args.command, error=str(e), exc_info=True)
        print(json.dumps({"success": False, "error": str(e)}))
        return 1

    print(json.dumps({"success": ok, **snapshot}, indent=2, default=str))
    return 0 if ok else 1


def run_sync() -> int:
    """Run the async main function synchronously.

    Returns:
        Exit code from main()
    """
    configure_logging()
    return asyncio.run(main())


if __name__ == "__main__":
    sys.exit(run_sync())
