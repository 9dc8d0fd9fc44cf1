"""
Name: Auth Use Case Tests

Responsibilities:
  - Register: duplicates -> CONFLICT (pre-check and race path)
  - Login: unknown email and wrong password -> the same error
"""

from unittest.mock import Mock, patch

import pytest

from taskvault.application.usecases.auth import (
    INVALID_CREDENTIALS,
    USER_CONFLICT,
    LoginUserInput,
    LoginUserUseCase,
    RegisterUserInput,
    RegisterUserUseCase,
)
from taskvault.crosscutting.exceptions import UserAlreadyExistsError
from taskvault.identity.credentials import DUMMY_HASH
from taskvault.identity.tokens import verify_token

pytestmark = pytest.mark.unit

ALICE = RegisterUserInput(username="alice123", email="a@x.com", password="longenough1")


def test_register_stores_hash_not_password(user_repository):
    result = RegisterUserUseCase(user_repository).execute(ALICE)

    assert result.error is None
    stored = user_repository.get_user_by_email("a@x.com")
    assert stored.password_hash != "longenough1"
    assert stored.password_hash.startswith("$argon2id$")


def test_register_duplicate_is_conflict(user_repository):
    RegisterUserUseCase(user_repository).execute(ALICE)

    result = RegisterUserUseCase(user_repository).execute(
        RegisterUserInput(username="alice123", email="b@x.com", password="longenough1")
    )

    assert result.error == USER_CONFLICT


def test_register_race_on_insert_is_conflict():
    repo = Mock()
    repo.find_user_by_username_or_email.return_value = None
    repo.create_user.side_effect = UserAlreadyExistsError("duplicate")

    result = RegisterUserUseCase(repo).execute(ALICE)

    assert result.error == USER_CONFLICT


def test_login_returns_verifiable_token(user_repository):
    registered = RegisterUserUseCase(user_repository).execute(ALICE).user

    result = LoginUserUseCase(user_repository).execute(
        LoginUserInput(email="a@x.com", password="longenough1")
    )

    assert result.error is None
    assert verify_token(result.token).user_id == registered.id


def test_login_failures_are_indistinguishable(user_repository):
    RegisterUserUseCase(user_repository).execute(ALICE)
    use_case = LoginUserUseCase(user_repository)

    wrong_password = use_case.execute(LoginUserInput(email="a@x.com", password="nope"))
    unknown_email = use_case.execute(
        LoginUserInput(email="ghost@x.com", password="longenough1")
    )

    assert wrong_password.error == unknown_email.error == INVALID_CREDENTIALS
    assert wrong_password.token is None and unknown_email.token is None


def test_login_unknown_email_still_verifies_a_hash(user_repository):
    with patch(
        "taskvault.application.usecases.auth.login_user.verify_password",
        return_value=False,
    ) as verify:
        LoginUserUseCase(user_repository).execute(
            LoginUserInput(email="ghost@x.com", password="whatever")
        )

    verify.assert_called_once_with("whatever", DUMMY_HASH)
