"""
Command-line client. Examples:
  homeroom-client signup alice --first-name Alice
  homeroom-client login teacher
  homeroom-client assign alice "Essay 1" 2024-10-01
  homeroom-client whoami
"""
import argparse
import asyncio
import getpass
import sys
from datetime import date

from homeroom.client.errors import ApiError, LoginInProgressError
from homeroom.client.session import SessionContext, SessionManager
from homeroom.client.views import render_dashboard, render_error, render_student_assignments
from homeroom.core.logging import configure_logging


def _password(args: argparse.Namespace) -> str:
    return args.password if args.password is not None else getpass.getpass("Password: ")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="homeroom-client", description="Homeroom API client.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log requests and retries")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("signup", help="Create an account")
    p.add_argument("username")
    p.add_argument("--password")
    p.add_argument("--first-name", default="")
    p.add_argument("--last-name", default="")
    p.add_argument("--teacher", action="store_true", help="Create a teacher (admin) account")

    p = sub.add_parser("login", help="Log in and save the token")
    p.add_argument("username")
    p.add_argument("--password")

    sub.add_parser("logout", help="Forget the saved token")
    sub.add_parser("whoami", help="Restore the saved login and show the dashboard")
    sub.add_parser("assignments", help="List your own assignments")

    p = sub.add_parser("assign", help="Assign an item to a student (teachers)")
    p.add_argument("student")
    p.add_argument("name")
    p.add_argument("due_date", type=date.fromisoformat, help="YYYY-MM-DD")

    p = sub.add_parser("update", help="Change an assignment (teachers)")
    p.add_argument("assignment_id", type=int)
    p.add_argument("--name")
    p.add_argument("--due-date", type=date.fromisoformat)

    p = sub.add_parser("delete", help="Delete an assignment (teachers)")
    p.add_argument("assignment_id", type=int)
    return parser


async def _students_for(manager: SessionManager, session: SessionContext):
    return await manager.list_students(session) if session.is_admin else None


async def run(args: argparse.Namespace, manager: SessionManager) -> int:
    if args.command == "signup":
        user = await manager.signup(
            args.username,
            _password(args),
            first_name=args.first_name,
            last_name=args.last_name,
            is_admin=args.teacher,
        )
        print(f"Created account '{user.username}'. Log in to continue.")
        return 0

    if args.command == "login":
        session = await manager.login(args.username, _password(args))
        text, _ = render_dashboard(session, await _students_for(manager, session))
        print(text)
        return 0

    if args.command == "logout":
        # Local only: the saved token is dropped even when the server is unreachable.
        token, username = manager.cookie_store.load()
        manager.logout(SessionContext(token=token, username=username))
        print("Logged out.")
        return 0

    session = await manager.restore()
    if not session.authenticated:
        print("Not logged in.", file=sys.stderr)
        return 1

    try:
        if args.command == "whoami":
            text, session = render_dashboard(session, await _students_for(manager, session))
            print(text)
        elif args.command == "assignments":
            session = await manager.refresh_assignments(session)
            text, session = render_dashboard(session)
            print(text)
        elif args.command == "assign":
            user = await manager.assign(session, args.student, args.name, args.due_date)
            print(render_student_assignments(user))
        elif args.command == "update":
            a = await manager.update_assignment(
                session, args.assignment_id, name=args.name, due_date=args.due_date
            )
            print(f"Updated [{a.id}] {a.name} (due {a.due_date.isoformat()})")
        elif args.command == "delete":
            await manager.delete_assignment(session, args.assignment_id)
            print(f"Deleted assignment {args.assignment_id}.")
    except ApiError as e:
        manager.handle_error(session, e)
        raise
    return 0


async def amain(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging("INFO" if args.verbose else "WARNING")
    manager = SessionManager.from_settings()
    try:
        return await run(args, manager)
    except ApiError as e:
        print(render_error(e), file=sys.stderr)
        return 1
    except LoginInProgressError as e:
        print(str(e), file=sys.stderr)
        return 1
    finally:
        await manager.aclose()


def main() -> int:
    return asyncio.run(amain())


if __name__ == "__main__":
    sys.exit(main())
