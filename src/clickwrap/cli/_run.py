"""``clickwrap run`` — start pounce with the configured site."""

import argparse

from clickwrap.cli._load import load_config, load_site


def run(args: argparse.Namespace) -> None:
    """Start the server; CLI flags override ``HOST`` and ``PORT``."""
    config = load_config()
    site = load_site(config)

    from clickwrap.server.run import run_server

    run_server(
        site,
        host=args.host or config.host,
        port=args.port or config.port,
        reload=args.reload and not config.production,
        workers=args.workers,
    )
