"""
Hero Manager: command line entry point.

Usage:
    python -m app serve                       # run the API on port 4000
    python -m app serve --port 8080 --env production
    python -m app init-db                     # create the heroes table
    python -m app init-db --database-url sqlite:///heroes.db

Command line flags override the matching environment variables.
"""

import argparse
import logging
import sys
from typing import Optional

from app.core.config import Environment, Settings

logger = logging.getLogger("hero_manager")

DEFAULT_PORT = 4000


def _settings_from_args(args: argparse.Namespace) -> Settings:
    overrides = {}
    if args.env:
        overrides["environment"] = Environment(args.env)
    if args.database_url:
        overrides["database_url"] = args.database_url
    return Settings(**overrides)


def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    from app.main import create_app

    settings = _settings_from_args(args)
    app = create_app(settings)
    logger.info("Listening on %s:%d", args.host, args.port)
    uvicorn.run(app, host=args.host, port=args.port, log_config=None)
    return 0


def _init_db(args: argparse.Namespace) -> int:
    from app.infrastructure.database import build_engine, create_schema
    from app.shared.logging import configure_logging

    settings = _settings_from_args(args)
    configure_logging(settings.log_level)
    engine = build_engine(settings.get_database_url())
    try:
        create_schema(engine)
    finally:
        engine.dispose()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hero-manager", description="Hero Manager API")
    subparsers = parser.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-e", "--env",
        choices=[e.value for e in Environment],
        help="Deployment environment (default: ENVIRONMENT or development)",
    )
    common.add_argument(
        "-d", "--database-url",
        help="SQLAlchemy database URL (default: DATABASE_URL)",
    )

    serve = subparsers.add_parser("serve", parents=[common], help="Run the HTTP API")
    serve.add_argument("-p", "--port", type=int, default=DEFAULT_PORT, help="Port (default 4000)")
    serve.add_argument("--host", default="0.0.0.0", help="Bind address (default 0.0.0.0)")
    serve.set_defaults(handler=_serve)

    init_db = subparsers.add_parser("init-db", parents=[common], help="Create the heroes table")
    init_db.set_defaults(handler=_init_db)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
