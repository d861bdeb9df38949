"""Published documentation versions.

Every directory under ``versions/`` whose name is a valid Semantic Version
(``MAJOR.MINOR.PATCH`` with optional ``-prerelease`` and ``+build``) is
published. The list is sorted newest first by SemVer precedence; the
latest version without a pre-release tag is the one the site points
readers at.
"""

import logging
from pathlib import Path

from semver import Version

logger = logging.getLogger("clickwrap.content")


def parse_version(name: str) -> Version | None:
    """Return the parsed version for a directory name, or None if it isn't one.

    ``1.2``, ``v1.2.3``, ``1.2.3rc1`` and ``1.2.3.post1`` are rejected;
    ``1.2.3-1`` and ``1.2.3-alpha.1`` are pre-releases.
    """
    if not Version.is_valid(name):
        return None
    return Version.parse(name)


def list_versions(directory: Path) -> tuple[str, ...]:
    """Version directory names under *directory*, newest first.

    A missing directory publishes nothing.
    """
    if not directory.is_dir():
        logger.warning("versions directory %s does not exist", directory)
        return ()
    found = [
        (parsed, entry.name)
        for entry in directory.iterdir()
        if entry.is_dir() and (parsed := parse_version(entry.name)) is not None
    ]
    found.sort(key=lambda item: item[0], reverse=True)
    return tuple(name for _, name in found)


def latest_release(versions: tuple[str, ...]) -> str | None:
    """The newest version in *versions* that is not a pre-release."""
    for name in versions:
        parsed = parse_version(name)
        if parsed is not None and parsed.prerelease is None:
            return name
    return None
