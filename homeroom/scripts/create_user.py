"""
Create an account (e.g. the first teacher). Run from project root:
  python -m homeroom.scripts.create_user USERNAME PASSWORD [--admin] [--first-name NAME] [--last-name NAME]
Example:
  python -m homeroom.scripts.create_user teacher your-secure-password --admin
"""
import argparse
import sys

from homeroom.core.config import get_settings
from homeroom.core.database import SessionLocal
from homeroom.core.exceptions import HomeroomError
from homeroom.core.logging import configure_logging
from homeroom.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)
from homeroom.services.credential_store import CredentialStore


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Homeroom account.")
    parser.add_argument("username", help=f"Username ({USERNAME_MIN_LEN}-{USERNAME_MAX_LEN} chars)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("--admin", action="store_true", help="Create a teacher (admin) account")
    parser.add_argument("--first-name", default="")
    parser.add_argument("--last-name", default="")
    args = parser.parse_args(argv)

    configure_logging(get_settings().LOG_LEVEL)

    username = args.username
    if username != username.strip() or not (USERNAME_MIN_LEN <= len(username) <= USERNAME_MAX_LEN):
        print("Invalid username.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        user = CredentialStore(db).create_user(
            username=username,
            password=args.password,
            first_name=args.first_name.strip(),
            last_name=args.last_name.strip(),
            is_admin=args.admin,
        )
    except HomeroomError as e:
        print(f"Could not create '{username}': {e.message}", file=sys.stderr)
        return 1
    finally:
        db.close()
    role = "teacher" if user.is_admin else "student"
    print(f"Created {role} '{user.username}' (id {user.id}).")
    return 0


if __name__ == "__main__":
    sys.exit(main())
