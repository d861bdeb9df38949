"""The click-through agreement document.

``agreement.md`` is markdown with a YAML front-matter block::

    ---
    version: 2024-01-01
    title: Terms of Use
    description: The terms for using the documentation.
    ---
    Body text in markdown.

The version is compared verbatim with the gate cookie, so it is kept as
the exact string written in the file.
"""

import datetime
import re
from dataclasses import dataclass
from pathlib import Path

import yaml

from clickwrap.errors import ConfigurationError

_FRONT_MATTER = re.compile(r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)(.*)\Z", re.DOTALL)


@dataclass(frozen=True, slots=True)
class AgreementRecord:
    """The current agreement. Loaded once at startup, never mutated."""

    version: str
    title: str
    description: str
    body: str


def parse_agreement(text: str) -> AgreementRecord:
    """Parse an agreement document.

    Raises ``ConfigurationError`` when the front matter is missing, is not
    a mapping, or lacks a version or title.
    """
    match = _FRONT_MATTER.match(text)
    if match is None:
        msg = "Agreement document has no '---' front matter block"
        raise ConfigurationError(msg)

    front, body = match.groups()
    try:
        data = yaml.safe_load(front)
    except yaml.YAMLError as exc:
        msg = f"Agreement front matter is not valid YAML: {exc}"
        raise ConfigurationError(msg) from exc
    if not isinstance(data, dict):
        msg = "Agreement front matter must be a mapping"
        raise ConfigurationError(msg)

    version = data.get("version")
    title = data.get("title")
    if version in (None, "") or not title:
        msg = "Agreement front matter needs 'version' and 'title'"
        raise ConfigurationError(msg)

    # YAML reads an unquoted 2024-01-01 as a date
    if isinstance(version, datetime.date):
        version = version.isoformat()

    return AgreementRecord(
        version=str(version),
        title=str(title),
        description=str(data.get("description") or ""),
        body=body.strip(),
    )


def load_agreement(path: Path) -> AgreementRecord:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot read agreement document {path}: {exc}"
        raise ConfigurationError(msg) from exc
    return parse_agreement(text)
