"""Clickwrap CLI: serve the site and inspect its content.

Entry point registered as ``clickwrap`` in ``pyproject.toml``::

    [project.scripts]
    clickwrap = "clickwrap.cli:main"

Every command reads its configuration from the environment
(``DIRECTORY``, ``PRODUCTION``, ``STRIPE_WEBHOOK_SECRET`` ...).
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``clickwrap`` command."""
    parser = argparse.ArgumentParser(
        prog="clickwrap",
        description="Clickwrap: documents behind a click-through agreement.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- clickwrap run ----------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start the server")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument(
        "--reload",
        action="store_true",
        help="Restart on file changes (development only)",
    )
    run_parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker count (0=auto-detect)",
    )

    # -- clickwrap routes -------------------------------------------------
    subparsers.add_parser("routes", help="List the site's routes")

    # -- clickwrap versions -----------------------------------------------
    subparsers.add_parser("versions", help="List published versions")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from clickwrap.cli._run import run

        run(args)
    elif args.command == "routes":
        from clickwrap.cli._routes import run_routes

        run_routes(args)
    elif args.command == "versions":
        from clickwrap.cli._versions import run_versions

        run_versions(args)
