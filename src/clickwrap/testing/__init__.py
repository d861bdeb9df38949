"""Testing utilities for clickwrap sites.

Usage::

    from clickwrap.testing import TestClient

    async with TestClient(site) as client:
        response = await client.get("/")
        assert response.status == 200
"""

from clickwrap.testing.client import TestClient, set_cookies

__all__ = ["TestClient", "set_cookies"]
