# cli/cli.py
"""
Operator commands for the TourLead offers service.

    tourlead init-db
    tourlead check-conflict --guide <id> --start 2024-06-01 --end 2024-06-03
    tourlead api-health --api-url http://localhost:8000
    tourlead issue-token <user-id>
"""
from __future__ import annotations

import argparse
import asyncio
import os
import sys
from datetime import date, timedelta
from typing import Callable, Dict, Optional

import httpx

from tourlead.core.config import settings
from tourlead.core.exceptions import PersistenceError
from tourlead.db import session as db_session
from tourlead.services.auth import create_access_token
from tourlead.services.commitment_store import CommitmentStore
from tourlead.services.conflicts import find_conflicting_commitments


def _supports_color() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


SUPPORTS_COLOR = _supports_color()

GREEN = '\033[92m' if SUPPORTS_COLOR else ''
RED = '\033[91m' if SUPPORTS_COLOR else ''
BLUE = '\033[94m' if SUPPORTS_COLOR else ''
RESET = '\033[0m' if SUPPORTS_COLOR else ''


def print_success(message: str):
    print(f"{GREEN}[✓]{RESET} {message}")


def print_error(message: str):
    print(f"{RED}[✗]{RESET} {message}")


def print_info(message: str):
    print(f"{BLUE}[i]{RESET} {message}")


async def cmd_init_db(args: argparse.Namespace) -> int:
    """Command: create every table."""
    print_info(f"Creating tables on {settings.database_url.split('@')[-1]}...")
    try:
        await db_session.init_models()
    finally:
        await db_session.dispose_engine()
    print_success("Tables created")
    return 0


async def cmd_check_conflict(args: argparse.Namespace) -> int:
    """Command: list commitments of a guide that overlap a date range."""
    if args.end < args.start:
        print_error("--end must not be before --start")
        return 2

    db_session.create_database_engine()
    try:
        async with db_session.AsyncSessionLocal() as session:
            conflicts = await find_conflicting_commitments(
                CommitmentStore(session), args.guide, args.start, args.end
            )
    except PersistenceError as e:
        print_error(e.message)
        return 1
    finally:
        await db_session.dispose_engine()

    if not conflicts:
        print_success(f"No commitments overlap {args.start} to {args.end}")
        return 0

    print_error(f"{len(conflicts)} overlapping commitment(s):")
    for c in conflicts:
        print(f"  #{c.id} {c.job_type}: {c.start_date} to {c.end_date} (company {c.company_id})")
    return 3


async def cmd_api_health(args: argparse.Namespace) -> int:
    """Command: call the health endpoint of a running API."""
    url = f"{args.api_url.rstrip('/')}{settings.api_prefix}/health"
    print_info(f"GET {url}")
    try:
        async with httpx.AsyncClient(timeout=args.timeout) as client:
            response = await client.get(url)
    except httpx.RequestError as e:
        print_error(f"API unreachable: {e}")
        return 1

    body = response.json() if response.headers.get("content-type", "").startswith("application/json") else {}
    for name, check in body.get("checks", {}).items():
        print_info(f"  {name}: {check.get('status')}")
    if response.status_code == 200 and body.get("status") == "healthy":
        print_success("API healthy")
        return 0
    print_error(f"API status: {body.get('status', response.status_code)}")
    return 1


async def cmd_issue_token(args: argparse.Namespace) -> int:
    """Command: print a bearer token for local testing."""
    print(create_access_token(args.user_id, expires_delta=timedelta(minutes=args.minutes)))
    return 0


COMMANDS: Dict[str, Callable] = {
    'init-db': cmd_init_db,
    'check-conflict': cmd_check_conflict,
    'api-health': cmd_api_health,
    'issue-token': cmd_issue_token,
}


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='TourLead offers CLI',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest='command', help='Command to execute')

    subparsers.add_parser('init-db', help='Create all tables')

    conflict_parser = subparsers.add_parser('check-conflict', help='Show commitments overlapping a range')
    conflict_parser.add_argument('--guide', required=True, help='Guide id')
    conflict_parser.add_argument('--start', required=True, type=date.fromisoformat, help='YYYY-MM-DD')
    conflict_parser.add_argument('--end', required=True, type=date.fromisoformat, help='YYYY-MM-DD')

    health_parser = subparsers.add_parser('api-health', help='Check a running API')
    health_parser.add_argument('--api-url', default='http://localhost:8000', help='API URL')
    health_parser.add_argument('--timeout', type=float, default=5.0, help='Seconds')

    token_parser = subparsers.add_parser('issue-token', help='Print a bearer token for a user id')
    token_parser.add_argument('user_id')
    token_parser.add_argument('--minutes', type=int, default=60)

    return parser


def main(args: Optional[list] = None) -> int:
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 1

    command_func = COMMANDS[parsed_args.command]
    try:
        return asyncio.run(command_func(parsed_args))
    except KeyboardInterrupt:
        print_error("\nInterrupted by user")
        return 130
    except Exception as e:
        print_error(f"Error executing command: {str(e)}")
        if os.getenv('DEBUG'):
            import traceback
            traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
