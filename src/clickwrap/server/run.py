"""Serve a Site with pounce.

Development runs a single worker with auto-reload; production runs
multiple workers with the configured log level and format.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from clickwrap.app import Site


def run_server(
    site: Site,
    host: str,
    port: int,
    *,
    reload: bool = False,
    workers: int | None = None,
) -> None:
    """Start pounce with the live Site object.

    Args:
        site: The ASGI callable to serve.
        host: Bind host address.
        port: Bind port number.
        reload: Restart on file changes (development only; forces one worker).
        workers: Worker count; ``None`` means one worker in development and
            auto-detect (0) in production.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = site.config
    if reload:
        workers = 1
    elif workers is None:
        workers = 0 if config.production else 1

    server_config = ServerConfig(
        host=host,
        port=port,
        workers=workers,
        reload=reload,
        reload_include=(".md", ".yml", ".html", ".css") if reload else (),
        log_level=config.log_level,
        log_format=config.log_format,
    )
    Server(server_config, site).run()
