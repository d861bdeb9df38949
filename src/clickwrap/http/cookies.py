"""Cookie parsing and SetCookie serialization.

Consolidates the read side (parse_cookies, used by Request) and the
write side (SetCookie, used by Response) in one module. Values are
percent-encoded on write and percent-decoded on read so a cookie
written by ``SetCookie`` parses back to the same value.

Cookie values carry no signature. The gate trusts a cookie only by
comparing its value with the server-held agreement version.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from email.utils import format_datetime
from urllib.parse import quote, unquote

# RFC 6265 cookie-octet minus the characters ``quote`` already leaves alone
_VALUE_SAFE = "!#$&'()*+-./:<>?@[]^_`{|}~"

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def parse_cookies(header: str | None) -> dict[str, str]:
    """Parse a ``Cookie`` header value into a name-value dict.

    Returns an empty dict for empty or missing headers. The first
    occurrence of a name wins, matching browser ordering (most specific
    path first).
    """
    if not header:
        return {}
    cookies: dict[str, str] = {}
    for pair in header.split(";"):
        pair = pair.strip()
        if "=" not in pair:
            continue
        key, _, value = pair.partition("=")
        key = key.strip()
        if key in cookies:
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] == '"':
            value = value[1:-1]
        cookies[key] = unquote(value)
    return cookies


def http_date(moment: datetime) -> str:
    """Format a datetime as an RFC 7231 HTTP-date (``Thu, 01 Jan 1970 00:00:00 GMT``)."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return format_datetime(moment.astimezone(UTC), usegmt=True)


@dataclass(frozen=True, slots=True)
class SetCookie:
    """A ``Set-Cookie`` directive attached to a Response.

    ``httponly`` and ``samesite="Strict"`` are the defaults; ``secure``
    is turned on by the caller in production.
    """

    name: str
    value: str
    expires: datetime | None = None
    path: str = "/"
    secure: bool = False
    httponly: bool = True
    samesite: str = "Strict"

    def to_header_value(self) -> str:
        """Serialize to a ``Set-Cookie`` header value string."""
        parts = [f"{self.name}={quote(self.value, safe=_VALUE_SAFE)}"]
        if self.path:
            parts.append(f"Path={self.path}")
        if self.expires is not None:
            parts.append(f"Expires={http_date(self.expires)}")
        if self.httponly:
            parts.append("HttpOnly")
        if self.samesite:
            parts.append(f"SameSite={self.samesite}")
        if self.secure:
            parts.append("Secure")
        return "; ".join(parts)
