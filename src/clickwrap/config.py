"""Site configuration.

SiteConfig is a frozen dataclass: immutable after creation, no string-key
dict lookups at request time. ``SiteConfig.from_env()`` reads the deployment
environment once at startup.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from clickwrap.errors import ConfigurationError

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"", "0", "false", "no", "off"})
_LOG_LEVELS = frozenset({"debug", "info", "warning", "error", "critical"})


@dataclass(frozen=True, slots=True)
class SiteConfig:
    """Site configuration. Immutable after creation.

    All fields have defaults suitable for local development::

        config = SiteConfig(directory="./site", production=False)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    production: bool = False

    # Content root: about.md, agreement.md, versions/, static/
    directory: str | Path = "."

    # Stripe
    stripe_secret_key: str = ""
    stripe_webhook_secret: str = ""
    webhook_tolerance: int = 300  # seconds
    max_webhook_body: int = 32768

    # Gate cookie
    cookie_name: str = "agreed"
    cookie_max_age_days: int = 30

    # Site identity, used by the shared page layout
    site_name: str = "Clickwrap"
    slogan: str = "Agreements you can read."
    support_email: str = "support@example.com"
    twitter: str = "clickwrap"
    base_href: str = ""

    # Files served verbatim from ``static_dir``
    static_files: tuple[str, ...] = (
        "ads.txt",
        "styles.css",
        "normalize.css",
        "credits.txt",
        "security.txt",
        "logo.svg",
        "logo-on-white-100.png",
    )

    # Logging, handed to pounce
    log_level: str = "info"
    log_format: str = "json"

    @property
    def root(self) -> Path:
        """Content root as a Path."""
        return Path(self.directory)

    @property
    def versions_dir(self) -> Path:
        return self.root / "versions"

    @property
    def static_dir(self) -> Path:
        return self.root / "static"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "SiteConfig":
        """Build a config from environment variables.

        Raises ``ConfigurationError`` for unparseable values, and when
        ``STRIPE_WEBHOOK_SECRET`` is missing in production.
        """
        env = os.environ if environ is None else environ

        production = _parse_bool(env.get("PRODUCTION", ""), "PRODUCTION") or (
            env.get("NODE_ENV", "").lower() == "production"
        )

        port_raw = env.get("PORT", "8000")
        try:
            port = int(port_raw)
        except ValueError:
            msg = f"PORT must be an integer, got {port_raw!r}"
            raise ConfigurationError(msg) from None

        log_level = env.get("LOG_LEVEL", "info").lower()
        if log_level not in _LOG_LEVELS:
            msg = f"LOG_LEVEL must be one of {sorted(_LOG_LEVELS)}, got {log_level!r}"
            raise ConfigurationError(msg)

        log_format = env.get("LOG_FORMAT", "json").lower()
        if log_format not in ("json", "text"):
            msg = f"LOG_FORMAT must be 'json' or 'text', got {log_format!r}"
            raise ConfigurationError(msg)

        webhook_secret = env.get("STRIPE_WEBHOOK_SECRET", "")
        if production and not webhook_secret:
            msg = "STRIPE_WEBHOOK_SECRET is required in production"
            raise ConfigurationError(msg)

        return cls(
            host=env.get("HOST", "127.0.0.1"),
            port=port,
            production=production,
            directory=env.get("DIRECTORY", "."),
            stripe_secret_key=env.get("STRIPE_SECRET_KEY", ""),
            stripe_webhook_secret=webhook_secret,
            base_href=env.get("BASE_HREF", ""),
            log_level=log_level,
            log_format=log_format,
        )


def _parse_bool(value: str, name: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    msg = f"{name} must be a boolean, got {value!r}"
    raise ConfigurationError(msg)
