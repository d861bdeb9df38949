"""Access control for protected pages.

The agreement gate is the only access control on the site: protected
pages require a cookie showing the reader agreed to the current terms.
"""

from clickwrap.security.gate import AgreementGate, safe_destination

__all__ = ["AgreementGate", "safe_destination"]
