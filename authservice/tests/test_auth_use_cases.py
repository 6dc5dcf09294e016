from __future__ import annotations

import pytest

from authservice.application.services.credentials import CredentialService
from authservice.application.use_cases.users.delete_user import DeleteUserUseCase
from authservice.application.use_cases.users.get_user import GetUserUseCase
from authservice.application.use_cases.users.list_users import ListUsersUseCase
from authservice.application.use_cases.users.login_user import LoginUserUseCase
from authservice.application.use_cases.users.logout_user import LogoutUserUseCase
from authservice.application.use_cases.users.register_user import RegisterUserUseCase
from authservice.domain.users.exceptions import (
    InvalidCredentialsError,
    InvalidTokenError,
    UserAlreadyExistsError,
    UserNotFoundError,
)


@pytest.fixture()
def register(users, credentials: CredentialService) -> RegisterUserUseCase:
    return RegisterUserUseCase(users=users, credentials=credentials)


@pytest.fixture()
def login(users, credentials: CredentialService) -> LoginUserUseCase:
    return LoginUserUseCase(users=users, credentials=credentials)


def test_register_user_success(register, users, credentials) -> None:
    user, token = register.execute("alice@example.com", "pw123")

    assert user.email == "alice@example.com"
    assert users.find_by_email("alice@example.com") is not None
    assert credentials.validate_token(token) == user.id


def test_register_distinct_emails_get_their_own_tokens(register, credentials) -> None:
    issued = [register.execute(f"user{i}@example.com", "pw") for i in range(3)]

    assert len({user.id for user, _ in issued}) == 3
    for user, token in issued:
        assert credentials.validate_token(token) == user.id


def test_register_user_duplicate_raises(register, users) -> None:
    register.execute("alice@example.com", "pw123")

    with pytest.raises(UserAlreadyExistsError):
        register.execute("alice@example.com", "other")

    assert len(users.list_all()) == 1


def test_register_never_stores_plaintext(register) -> None:
    user, _ = register.execute("alice@example.com", "pw123")

    assert user.password_hash != "pw123"


def test_login_user_success(register, login, credentials) -> None:
    user, _ = register.execute("alice@example.com", "pw123")

    token = login.execute("alice@example.com", "pw123")

    assert credentials.validate_token(token) == user.id


def test_login_user_invalid_password(register, login) -> None:
    register.execute("alice@example.com", "pw123")

    with pytest.raises(InvalidCredentialsError):
        login.execute("alice@example.com", "wrong")


def test_login_unknown_email(login) -> None:
    with pytest.raises(InvalidCredentialsError):
        login.execute("nobody@example.com", "pw123")


def test_logout_user_revokes_token(register, login, credentials) -> None:
    register.execute("alice@example.com", "pw123")
    token = login.execute("alice@example.com", "pw123")
    logout = LogoutUserUseCase(credentials=credentials)

    logout.execute(token)

    with pytest.raises(InvalidTokenError):
        credentials.validate_token(token)


def test_logout_only_revokes_the_presented_token(register, login, credentials) -> None:
    _, first = register.execute("alice@example.com", "pw123")
    second = login.execute("alice@example.com", "pw123")

    LogoutUserUseCase(credentials=credentials).execute(second)

    assert credentials.validate_token(first) > 0


def test_list_users_in_insertion_order(register, users) -> None:
    for email in ("c@example.com", "a@example.com", "b@example.com"):
        register.execute(email, "pw")

    listed = ListUsersUseCase(users=users).execute()

    assert [u.email for u in listed] == ["c@example.com", "a@example.com", "b@example.com"]


def test_get_user(register, users) -> None:
    user, _ = register.execute("alice@example.com", "pw123")
    get_user = GetUserUseCase(users=users)

    assert get_user.execute(user.id) == user
    with pytest.raises(UserNotFoundError):
        get_user.execute(999)


def test_delete_user_removes_from_listing(register, users) -> None:
    alice, _ = register.execute("alice@example.com", "pw123")
    bob, _ = register.execute("bob@example.com", "pw123")

    deleted = DeleteUserUseCase(users=users).execute(alice.id)

    assert deleted == alice
    assert [u.id for u in ListUsersUseCase(users=users).execute()] == [bob.id]


def test_delete_missing_user_raises(users) -> None:
    with pytest.raises(UserNotFoundError) as info:
        DeleteUserUseCase(users=users).execute(42)

    assert info.value.to_dict() == {"error": "user_not_found", "context": {"user_id": 42}}
