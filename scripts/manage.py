#!/usr/bin/env python3
"""
manage.py - Operator commands for the chore tracker database.

Usage examples:
  python scripts/manage.py migrate
  python scripts/manage.py create-user --username parent --password 'correct horse'
  python scripts/manage.py list-users
  python scripts/manage.py list-users --json
  python scripts/manage.py rotate-key --username parent

Flags:
  --env-file PATH
    Load environment variables from PATH before connecting (default: .env, skipped when missing).
"""
import argparse
import getpass
import json
import os
import sys
import textwrap
from pathlib import Path
from typing import List, Sequence

from dotenv import load_dotenv
from tabulate import tabulate

BACKEND_DIR = Path(__file__).resolve().parents[1] / "backend"
sys.path.append(str(BACKEND_DIR))

from chorechart.core.logging import setup_logging  # noqa: E402
from chorechart.core.migrations import RunMigrations  # noqa: E402
from chorechart.db import GetSession  # noqa: E402
from chorechart.modules.auth.models import User  # noqa: E402
from chorechart.modules.children import models as children_models  # noqa: E402,F401
from chorechart.modules.chores import models as chores_models  # noqa: E402,F401
from chorechart.modules.tasks import models as tasks_models  # noqa: E402,F401
from chorechart.modules.users.services import CreateUser, ListUsers, RotateApiKey  # noqa: E402

DEFAULT_ENV_PATH = ".env"


# Load .env for local/dev workflows; the default file is optional.
def LoadEnvFile(EnvPath: str) -> None:
    if not EnvPath:
        return
    if not os.path.exists(EnvPath):
        if EnvPath == DEFAULT_ENV_PATH:
            return
        raise RuntimeError(f"Env file not found: {EnvPath}")
    load_dotenv(dotenv_path=EnvPath)


def PrintTable(Headers: List[str], Rows: Sequence[Sequence[object]]) -> None:
    print(tabulate(Rows, headers=Headers, tablefmt="github"))


def FindUserByUsername(Db, Username: str) -> User:
    Record = Db.query(User).filter(User.Username == Username).first()
    if Record is None:
        raise RuntimeError(f"User not found: {Username}")
    return Record


def RunMigrate(Args: argparse.Namespace) -> int:
    RunMigrations()
    return 0


def RunCreateUser(Args: argparse.Namespace) -> int:
    Password = Args.password
    if Password is None and not Args.no_password:
        Password = getpass.getpass("Password (for GET /token): ")
    Values = {"username": Args.username.strip()}
    if Password:
        Values["password"] = Password
    Db = GetSession()
    try:
        Record = CreateUser(Db, Values)
        PrintTable(["id", "username", "api_key"], [[Record.Id, Record.Username, Record.ApiKey]])
    finally:
        Db.close()
    return 0


def RunListUsers(Args: argparse.Namespace) -> int:
    Db = GetSession()
    try:
        Rows = [
            [Record.Id, Record.Username, Record.CreatedAt.isoformat() if Record.CreatedAt else ""]
            for Record in ListUsers(Db)
        ]
    finally:
        Db.close()
    if Args.json:
        print(json.dumps([dict(zip(["id", "username", "created_at"], Row)) for Row in Rows], indent=2))
    else:
        PrintTable(["id", "username", "created_at"], Rows)
    return 0


def RunRotateKey(Args: argparse.Namespace) -> int:
    Db = GetSession()
    try:
        Record = RotateApiKey(Db, FindUserByUsername(Db, Args.username).Id)
        PrintTable(["id", "username", "api_key"], [[Record.Id, Record.Username, Record.ApiKey]])
    finally:
        Db.close()
    return 0


def ParseArgs() -> argparse.Namespace:
    Parser = argparse.ArgumentParser(description="Manage the chore tracker database and API users.")
    Parser.add_argument(
        "--env-file",
        default=DEFAULT_ENV_PATH,
        help=f"Path to .env file (default: {DEFAULT_ENV_PATH}).",
    )
    Commands = Parser.add_subparsers(dest="command", required=True)

    Migrate = Commands.add_parser("migrate", help="Run alembic migrations up to head.")
    Migrate.set_defaults(handler=RunMigrate)

    Create = Commands.add_parser("create-user", help="Create an API user and print its key.")
    Create.add_argument("--username", required=True)
    Create.add_argument("--password", help="Password for GET /token (prompted when omitted).")
    Create.add_argument("--no-password", action="store_true", help="Create a key-only user.")
    Create.set_defaults(handler=RunCreateUser)

    ListCommand = Commands.add_parser("list-users", help="List API users.")
    ListCommand.add_argument("--json", action="store_true", help="Output results as JSON.")
    ListCommand.set_defaults(handler=RunListUsers)

    Rotate = Commands.add_parser("rotate-key", help="Issue a new api key for a user.")
    Rotate.add_argument("--username", required=True)
    Rotate.set_defaults(handler=RunRotateKey)

    Args = Parser.parse_args()
    if Args.command == "create-user" and Args.password and Args.no_password:
        Parser.error("Choose only one of --password or --no-password.")
    return Args


def Main() -> int:
    Args = ParseArgs()
    try:
        LoadEnvFile(Args.env_file)
        setup_logging()
        return Args.handler(Args)
    except KeyboardInterrupt:
        return 0
    except Exception as Ex:
        print("\nError:")
        print(textwrap.indent(str(Ex), "  "))
        return 1


if __name__ == "__main__":
    raise SystemExit(Main())
