"""Shared fixtures: a throwaway content directory and a site built on it."""

import hashlib
import hmac
import time
from pathlib import Path

import pytest

from clickwrap.app import Site
from clickwrap.config import SiteConfig
from clickwrap.content import SiteContent, load_site_content
from clickwrap.site import create_site
from clickwrap.testing import TestClient

WEBHOOK_SECRET = "whsec_test_secret"

AGREEMENT = """\
---
version: 2024-01-01
title: Terms of Use
description: The terms for reading the documentation.
---
You agree to **read carefully**.
"""

ABOUT = """\
# About

Documents behind a _click-through_ agreement.
"""


def sign(payload: bytes, secret: str = WEBHOOK_SECRET, timestamp: int | None = None) -> str:
    """A ``Stripe-Signature`` header value for *payload*."""
    timestamp = int(time.time()) if timestamp is None else timestamp
    signed = f"{timestamp}.".encode() + payload
    digest = hmac.new(secret.encode(), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={digest}"


def write_version(root: Path, name: str) -> Path:
    directory = root / "versions" / name
    directory.mkdir(parents=True)
    (directory / "prompts.yml").write_text("company:\n  label: Company name\n", encoding="utf-8")
    (directory / "order.md").write_text(f"Order form for {name}\n", encoding="utf-8")
    (directory / "terms.md").write_text(f"Terms for {name}\n", encoding="utf-8")
    return directory


@pytest.fixture
def site_dir(tmp_path: Path) -> Path:
    (tmp_path / "agreement.md").write_text(AGREEMENT, encoding="utf-8")
    (tmp_path / "about.md").write_text(ABOUT, encoding="utf-8")
    write_version(tmp_path, "1.2.3")
    write_version(tmp_path, "1.0.0")
    write_version(tmp_path, "2.0.0-alpha.1")
    static = tmp_path / "static"
    static.mkdir()
    (static / "styles.css").write_text("body { margin: 0 }\n", encoding="utf-8")
    (static / "credits.txt").write_text("Thanks.\n", encoding="utf-8")
    return tmp_path


@pytest.fixture
def config(site_dir: Path) -> SiteConfig:
    return SiteConfig(directory=site_dir, stripe_webhook_secret=WEBHOOK_SECRET)


@pytest.fixture
def content(config: SiteConfig) -> SiteContent:
    return load_site_content(config)


@pytest.fixture
def site(config: SiteConfig, content: SiteContent) -> Site:
    return create_site(config, content)


@pytest.fixture
def client(site: Site) -> TestClient:
    return TestClient(site)
