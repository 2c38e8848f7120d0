"""Product domain exceptions.

Raised by the Service Layer.  The API layer (Views) catches these and
translates them into HTTP responses: ``ProductNotFound`` to 404 and
``ProductBadRequest`` to 400.  Gateway errors never reach the views.
"""

from __future__ import annotations


class ProductNotFound(Exception):
    """No product exists with the requested code."""

    def __init__(self, code: int) -> None:
        self.code = code
        super().__init__(f"Product with code {code} not found")


class ProductBadRequest(Exception):
    """Validation failure or generic failure of a product operation.

    Messages are safe to show to API clients; the underlying database
    error, when there is one, is kept as ``__cause__``.
    """
