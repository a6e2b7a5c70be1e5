"""Application-level exception types.

Convention:
- ``InternalServerError``: for errors whose details must never reach clients
  (an index that failed to load, unreadable content directory, etc.).
  The global handler logs the full message at ERROR and returns a generic
  "Internal server error" (500) to the client.
- ``ValueError``: for validation errors that are safe to forward to clients
  (invalid ``site.toml`` values, unknown view names, bad dates).  The global
  ``ValueError`` handler returns ``str(exc)`` as the 422 detail.
"""

from __future__ import annotations


class InternalServerError(Exception):
    """Raised for internal errors whose details must not be exposed to clients.

    The global exception handler in ``docshelf/main.py`` catches this, logs
    the full message server-side, and returns HTTP 500 with a generic
    ``"Internal server error"`` detail.
    """
