"""Account provisioning and the manage_users script."""
from contextlib import asynccontextmanager

import pytest

from app.core.security import verify_password
from app.models import UserStatus
from app.services.user_service import UserService, UserServiceError
from scripts import manage_users


async def test_create_user_hashes_password(db_session):
    service = UserService(db_session)

    user = await service.create_user("manager", "manager@example.com", "manager123")

    assert user.id is not None
    assert user.status == UserStatus.ACTIVE
    assert user.password_hash != "manager123"
    assert user.password_hash.startswith("$2")
    assert verify_password("manager123", user.password_hash)
    assert len(user.auth_key) == 32
    assert user.auth_key.isalnum()
    assert user.created_at > 0


async def test_duplicate_username_or_email_is_refused(db_session):
    service = UserService(db_session)
    await service.create_user("sales", "sales@example.com", "sales123")

    with pytest.raises(UserServiceError):
        await service.create_user("sales", "other@example.com", "x")
    with pytest.raises(UserServiceError):
        await service.create_user("other", "sales@example.com", "x")


async def test_password_and_status_changes(db_session):
    service = UserService(db_session)
    await service.create_user("inventory", "inventory@example.com", "old-pass")

    user = await service.set_password("inventory", "new-pass")
    assert verify_password("new-pass", user.password_hash)
    assert not verify_password("old-pass", user.password_hash)

    assert (await service.deactivate("inventory")).is_active is False
    assert (await service.activate("inventory")).is_active is True

    with pytest.raises(UserServiceError):
        await service.deactivate("nobody")


async def test_list_users_in_creation_order(db_session):
    service = UserService(db_session)
    for name in ("b-user", "a-user"):
        await service.create_user(name, f"{name}@example.com", "secret")

    assert [u.username for u in await service.list_users()] == ["b-user", "a-user"]


def test_cli_parser():
    parser = manage_users.build_parser()

    args = parser.parse_args(["create", "admin", "admin@example.com", "admin123"])
    assert args.handler is manage_users.create
    assert (args.username, args.email, args.password) == ("admin", "admin@example.com", "admin123")

    assert parser.parse_args(["seed-examples"]).handler is manage_users.seed_examples
    assert parser.parse_args(["deactivate", "sales"]).handler is manage_users.deactivate

    with pytest.raises(SystemExit):
        parser.parse_args([])


async def test_seed_examples_skips_existing_accounts(session_factory, monkeypatch, capsys):
    @asynccontextmanager
    async def session_scope():
        async with session_factory() as session:
            yield session
            await session.commit()

    monkeypatch.setattr(manage_users, "get_db_session", session_scope)

    await manage_users.seed_examples(None)
    await manage_users.seed_examples(None)

    out = capsys.readouterr().out
    assert out.count("Created ") == len(manage_users.EXAMPLE_USERS)
    assert out.count("Skipped ") == len(manage_users.EXAMPLE_USERS)

    async with session_factory() as session:
        users = await UserService(session).list_users()
    assert [u.username for u in users] == [username for username, _, _ in manage_users.EXAMPLE_USERS]


async def test_cli_create_rejects_bad_input_before_touching_the_database(monkeypatch):
    def no_session():
        raise AssertionError("database should not be opened")

    monkeypatch.setattr(manage_users, "get_db_session", no_session)
    args = manage_users.build_parser().parse_args(["create", "ab", "not-an-email", "123"])

    with pytest.raises(UserServiceError):
        await manage_users.create(args)
