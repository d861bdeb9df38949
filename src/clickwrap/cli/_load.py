"""Build the site from the environment, turning startup errors into exit 1."""

import sys

from clickwrap.app import Site
from clickwrap.config import SiteConfig
from clickwrap.errors import ConfigurationError


def load_config() -> SiteConfig:
    try:
        return SiteConfig.from_env()
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


def load_site(config: SiteConfig) -> Site:
    from clickwrap.site import create_site

    try:
        return create_site(config)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
