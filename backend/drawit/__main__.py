"""Administrative commands for the room/user store.

Usage:
    python -m drawit provision   # create the PostgreSQL schema if missing
    python -m drawit stats       # print room and user counts
    python -m drawit stats --log-dir logs/drawit

The backend is chosen by DRAWIT_REPOSITORY_TYPE exactly as the service
chooses it.
"""

import argparse
import sys

import structlog
from pydantic import ValidationError

from drawit.db.errors import DatabaseError
from drawit.logging import setup_logging
from drawit.wiring import Repositories, create_repositories

logger = structlog.get_logger()


def _provision(repositories: Repositories) -> None:
    if repositories.connections is None:
        print("In-memory backend selected; nothing to provision.")
        return
    with repositories.connections.connection():
        pass
    print("Schema is ready.")


def _stats(repositories: Repositories) -> None:
    rooms = repositories.rooms.get_all()
    users = repositories.users.get_all()
    seated = sum(1 for u in users if u.room_id is not None)
    print(f"rooms: {len(rooms)}")
    print(f"users: {len(users)} ({seated} in a room)")


_COMMANDS = {"provision": _provision, "stats": _stats}


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="python -m drawit", description=__doc__.splitlines()[0])
    parser.add_argument("command", choices=sorted(_COMMANDS))
    parser.add_argument("--log-dir", help="also write a timestamped log file to this directory")
    args = parser.parse_args(argv)

    setup_logging(log_dir=args.log_dir)

    try:
        repositories = create_repositories()
        _COMMANDS[args.command](repositories)
    except ValidationError as exc:
        print(f"Error: invalid configuration: {exc}", file=sys.stderr)
        return 1
    except DatabaseError as exc:
        logger.error("database command failed", command=args.command, exc_info=exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
