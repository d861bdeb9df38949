"""HTTP response with chainable .with_*() transformation API.

Each transformation returns a new Response. Immutable by convention,
built incrementally by design.
"""

from dataclasses import dataclass, replace

from clickwrap.http.cookies import SetCookie

# Headers sent on pages that must never be served from a cache
NO_CACHE_HEADERS: tuple[tuple[str, str], ...] = (
    ("Cache-Control", "no-store, no-cache, must-revalidate, proxy-revalidate"),
    ("Pragma", "no-cache"),
    ("Expires", "0"),
    ("Surrogate-Control", "no-store"),
)


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations.

    Construct with a body, then chain ``.with_*()`` calls to set
    headers and cookies.
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/html; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()
    cookies: tuple[SetCookie, ...] = ()

    def with_header(self, name: str, value: str) -> "Response":
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_cookie(self, cookie: SetCookie) -> "Response":
        """Return a new Response carrying an additional Set-Cookie.

        A later cookie with the same name replaces an earlier one, so a
        response never tells the browser two different things.
        """
        kept = tuple(c for c in self.cookies if c.name != cookie.name)
        return replace(self, cookies=(*kept, cookie))

    def without_caching(self) -> "Response":
        """Return a new Response that forbids caching by browsers and proxies."""
        return replace(self, headers=(*self.headers, *NO_CACHE_HEADERS))

    def header(self, name: str) -> str | None:
        """First value of a response header, case-insensitive."""
        wanted = name.lower()
        for key, value in self.headers:
            if key.lower() == wanted:
                return value
        return None

    @property
    def body_bytes(self) -> bytes:
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body


def empty(status: int) -> Response:
    """A bodyless response, used for the validation-class failures."""
    return Response(body=b"", status=status, content_type="text/plain; charset=utf-8")


@dataclass(frozen=True, slots=True)
class Redirect:
    """A redirect response. Defaults to 303 See Other."""

    url: str
    status: int = 303
    headers: tuple[tuple[str, str], ...] = ()
    cookies: tuple[SetCookie, ...] = ()

    def with_cookie(self, cookie: SetCookie) -> "Redirect":
        kept = tuple(c for c in self.cookies if c.name != cookie.name)
        return replace(self, cookies=(*kept, cookie))

    def to_response(self) -> Response:
        return Response(
            body=b"",
            status=self.status,
            headers=(("Location", self.url), *self.headers),
            cookies=self.cookies,
        )
