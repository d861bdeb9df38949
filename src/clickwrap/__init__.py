"""Clickwrap: a small site that gates documents behind a click-through agreement.

Basic usage::

    from clickwrap import SiteConfig, create_site

    site = create_site(SiteConfig(directory="./site"))
    site.run()

Or from the shell, configured by environment variables::

    DIRECTORY=./site clickwrap run
"""

__version__ = "0.1.0"
__all__ = [
    "AgreementGate",
    "ClickwrapError",
    "ConfigurationError",
    "HTTPError",
    "Redirect",
    "Request",
    "Response",
    "Site",
    "SiteConfig",
    "Template",
    "create_site",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import clickwrap`` fast while providing a clean top-level API.
    """
    if name == "Site":
        from clickwrap.app import Site

        return Site

    if name == "create_site":
        from clickwrap.site import create_site

        return create_site

    if name == "SiteConfig":
        from clickwrap.config import SiteConfig

        return SiteConfig

    if name == "AgreementGate":
        from clickwrap.security.gate import AgreementGate

        return AgreementGate

    if name == "Request":
        from clickwrap.http.request import Request

        return Request

    if name in ("Response", "Redirect"):
        from clickwrap.http import response

        return getattr(response, name)

    if name == "Template":
        from clickwrap.templating import Template

        return Template

    if name in ("ClickwrapError", "ConfigurationError", "HTTPError"):
        from clickwrap import errors

        return getattr(errors, name)

    msg = f"module 'clickwrap' has no attribute {name!r}"
    raise AttributeError(msg)
