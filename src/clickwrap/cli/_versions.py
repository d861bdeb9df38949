"""``clickwrap versions`` — list published versions, newest first."""

import argparse

from clickwrap.cli._load import load_config
from clickwrap.versions import latest_release, list_versions


def run_versions(args: argparse.Namespace) -> None:
    config = load_config()
    versions = list_versions(config.versions_dir)
    if not versions:
        print(f"No versions published under {config.versions_dir}")
        return

    latest = latest_release(versions)
    for version in versions:
        marker = "  (latest)" if version == latest else ""
        print(f"{version}{marker}")
