"""
Name: User Bootstrap Script

Responsibilities:
  - Create a user from the command line (idempotent on username/email)
  - Apply the same validation and normalization as POST /auth/register
  - Hash passwords with Argon2 and store the user in PostgreSQL
"""

from __future__ import annotations

import argparse
import getpass
import os
import sys

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from taskvault.application.usecases.auth import (  # noqa: E402
    AuthErrorCode,
    RegisterUserInput,
    RegisterUserUseCase,
)
from taskvault.infrastructure.db.pool import close_pool, init_pool  # noqa: E402
from taskvault.infrastructure.repositories import PostgresUserRepository  # noqa: E402
from taskvault.interfaces.api.http.schemas.auth import RegisterRequest  # noqa: E402
from taskvault.interfaces.api.http.validation import (  # noqa: E402
    PayloadValidationError,
    validate_payload,
)


def _require_database_url() -> str:
    db_url = os.getenv("DATABASE_URL")
    if not db_url:
        raise SystemExit("DATABASE_URL is required to create a user.")
    return db_url


def _prompt_password() -> str:
    password = getpass.getpass("Password: ")
    if not password:
        raise SystemExit("Password is required.")
    confirm = getpass.getpass("Confirm password: ")
    if password != confirm:
        raise SystemExit("Passwords do not match.")
    return password


def _parse_args() -> argparse.Namespace:
    argv = sys.argv[1:]
    if argv and argv[0] == "--":
        argv = argv[1:]
    parser = argparse.ArgumentParser(description="Create a TaskVault user.")
    parser.add_argument("--username", required=True, help="Username (trimmed)")
    parser.add_argument("--email", required=True, help="User email (will be normalized)")
    parser.add_argument(
        "--password",
        help="User password (omit to be prompted securely)",
    )
    return parser.parse_args(argv)


def main() -> None:
    args = _parse_args()
    db_url = _require_database_url()
    password = args.password or _prompt_password()

    try:
        req = validate_payload(
            RegisterRequest,
            {"username": args.username, "email": args.email, "password": password},
        )
    except PayloadValidationError as exc:
        for error in exc.errors:
            print(f"{error['field']}: {error['message']}", file=sys.stderr)
        raise SystemExit(2) from exc

    init_pool(database_url=db_url, min_size=1, max_size=1)
    try:
        result = RegisterUserUseCase(PostgresUserRepository()).execute(
            RegisterUserInput(
                username=req.username, email=req.email, password=req.password
            )
        )
    finally:
        close_pool()

    if result.error is not None:
        if result.error.code == AuthErrorCode.CONFLICT:
            print(f"User already exists: username={req.username} email={req.email}")
            return
        raise SystemExit(result.error.message)

    print(f"Created user: id={result.user.id} email={result.user.email}")


if __name__ == "__main__":
    main()
