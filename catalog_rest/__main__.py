"""Command line entry point: ``python -m catalog_rest``."""

from __future__ import annotations

import argparse
import getpass
import os
import sys
from typing import Optional
from typing import Sequence

import uvicorn

from .app import create_app
from .security import hash_password
from .settings import CONFIG_PATH_ENV_VAR
from .settings import load_catalog_settings


def _build_arg_parser() -> argparse.ArgumentParser:
    """Construct the command-line parser."""

    parser = argparse.ArgumentParser(
        prog="catalog-rest",
        description="Run the catalog REST service.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    commands = parser.add_subparsers(dest="command", required=True)

    serve = commands.add_parser(
        "serve",
        help="Serve the HTTP API.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    serve.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve.add_argument("--port", type=int, default=8080, help="Port to listen on.")
    serve.add_argument(
        "--config-path",
        dest="config_path",
        help="JSON configuration file overriding the default lookup.",
    )
    serve.add_argument(
        "--database-url",
        dest="database_url",
        help="SQLAlchemy database URL or SQLite file path.",
    )

    hasher = commands.add_parser(
        "hash-password",
        help="Print an argon2id hash for an account password.",
    )
    hasher.add_argument(
        "password",
        nargs="?",
        help="Password to hash; prompted for when omitted.",
    )
    return parser


def _serve(args: argparse.Namespace) -> None:
    if args.config_path:
        os.environ[CONFIG_PATH_ENV_VAR] = args.config_path
    settings = load_catalog_settings()
    if args.database_url:
        settings = settings.model_copy(update={"database_url": args.database_url})
    app = create_app(settings)
    uvicorn.run(app, host=args.host, port=args.port, log_level=settings.log_level.lower())


def _hash_password(args: argparse.Namespace) -> None:
    password = args.password or getpass.getpass("Password: ")
    print(hash_password(password))


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Dispatch the selected sub-command."""

    args = _build_arg_parser().parse_args(argv)
    if args.command == "serve":
        _serve(args)
    else:
        _hash_password(args)


if __name__ == "__main__":
    main(sys.argv[1:])
