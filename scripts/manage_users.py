"""
Back-office account management.

Usage:
    python scripts/manage_users.py create <username> <email> <password>
    python scripts/manage_users.py passwd <username> <password>
    python scripts/manage_users.py list
    python scripts/manage_users.py activate <username>
    python scripts/manage_users.py deactivate <username>
    python scripts/manage_users.py seed-examples
"""
import argparse
import asyncio
import logging
import sys
from datetime import datetime, timezone

from pydantic import ValidationError

from app.database import get_db_session
from app.models.user import UserStatus
from app.schemas.auth import UserCreate
from app.services.user_service import UserService, UserServiceError


EXAMPLE_USERS = [
    ("admin", "admin@example.com", "admin123"),
    ("manager", "manager@example.com", "manager123"),
    ("inventory", "inventory@example.com", "inventory123"),
    ("sales", "sales@example.com", "sales123"),
    ("accounts", "accounts@example.com", "accounts123"),
]


async def create(args) -> None:
    try:
        data = UserCreate(username=args.username, email=args.email, password=args.password)
    except ValidationError as e:
        raise UserServiceError("; ".join(err["msg"] for err in e.errors())) from e

    async with get_db_session() as db:
        user = await UserService(db).create_user(data.username, data.email, data.password)
        print(f"User created: {user.username} <{user.email}> (id={user.id})")


async def passwd(args) -> None:
    async with get_db_session() as db:
        await UserService(db).set_password(args.username, args.password)
    print(f"Password updated for {args.username}")


async def list_users(args) -> None:
    async with get_db_session() as db:
        users = await UserService(db).list_users()

    if not users:
        print("No users found. Run 'seed-examples' to create example accounts.")
        return

    for user in users:
        status = "active" if user.status == UserStatus.ACTIVE else "inactive"
        created = datetime.fromtimestamp(user.created_at, tz=timezone.utc).date().isoformat()
        print(f"{user.id:>4}  {user.username:<16} {user.email:<32} {status:<9} {created}")


async def activate(args) -> None:
    async with get_db_session() as db:
        await UserService(db).activate(args.username)
    print(f"{args.username} activated")


async def deactivate(args) -> None:
    async with get_db_session() as db:
        await UserService(db).deactivate(args.username)
    print(f"{args.username} deactivated")


async def seed_examples(args) -> None:
    """Create the example accounts, skipping any that already exist."""
    async with get_db_session() as db:
        service = UserService(db)
        for username, email, password in EXAMPLE_USERS:
            try:
                await service.create_user(username, email, password)
            except UserServiceError as e:
                print(f"Skipped {username}: {e}")
                continue
            print(f"Created {username} / {password}")

    print("Change these default passwords after first login.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage back-office user accounts")
    commands = parser.add_subparsers(dest="command", required=True)

    p = commands.add_parser("create", help="Create an active user")
    p.add_argument("username")
    p.add_argument("email")
    p.add_argument("password")
    p.set_defaults(handler=create)

    p = commands.add_parser("passwd", help="Set a user's password")
    p.add_argument("username")
    p.add_argument("password")
    p.set_defaults(handler=passwd)

    p = commands.add_parser("list", help="List all users")
    p.set_defaults(handler=list_users)

    p = commands.add_parser("activate", help="Allow a user to sign in")
    p.add_argument("username")
    p.set_defaults(handler=activate)

    p = commands.add_parser("deactivate", help="Block a user from signing in")
    p.add_argument("username")
    p.set_defaults(handler=deactivate)

    p = commands.add_parser("seed-examples", help="Create the example accounts")
    p.set_defaults(handler=seed_examples)

    return parser


def main(argv=None) -> int:
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s [%(name)s] %(message)s")
    args = build_parser().parse_args(argv)
    try:
        asyncio.run(args.handler(args))
    except UserServiceError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
