"""ContactDesk command line.

Usage:
    contactdesk serve [--host HOST] [--port PORT] [--reload]
    contactdesk migrate
    contactdesk seed
"""

from __future__ import annotations

import argparse
import logging
import sys

from contactdesk.config import Settings, load_settings
from contactdesk.db.seed import seed_database
from contactdesk.db.session import get_session, init_db

logger = logging.getLogger(__name__)


def cmd_serve(args: argparse.Namespace, settings: Settings) -> int:
    import uvicorn

    host = args.host or settings.host
    port = args.port or settings.port
    logger.info("Starting ContactDesk API on %s:%s (env=%s)", host, port, settings.app_env)
    uvicorn.run(
        "contactdesk.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=args.reload,
    )
    return 0


def cmd_migrate(args: argparse.Namespace, settings: Settings) -> int:
    init_db(settings.database_url)
    logger.info("Schema created for %s", settings.database_url)
    return 0


def cmd_seed(args: argparse.Namespace, settings: Settings) -> int:
    init_db(settings.database_url)
    session = get_session(settings.database_url)
    try:
        summary = seed_database(session)
    except Exception:
        session.rollback()
        logger.exception("Seeding failed")
        return 1
    finally:
        session.close()

    print(f"{summary.contacts} contacts created")
    print(f"{summary.projects} projects created")
    print(f"{summary.members} members assigned")
    print(f"{summary.tasks} tasks created")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="contactdesk", description="ContactDesk backend")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the API server")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    serve.set_defaults(func=cmd_serve)

    migrate = sub.add_parser("migrate", help="Create database tables")
    migrate.set_defaults(func=cmd_migrate)

    seed = sub.add_parser("seed", help="Reset the database with demo data")
    seed.set_defaults(func=cmd_seed)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    return args.func(args, settings)


if __name__ == "__main__":
    sys.exit(main())
