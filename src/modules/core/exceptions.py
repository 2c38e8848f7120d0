"""Infrastructure exceptions shared by every module.

Domain modules never let these reach the API layer: services translate
them into their own exceptions and keep the original as ``__cause__``.
"""

from __future__ import annotations


class GatewayError(Exception):
    """A stored procedure call could not be executed.

    Covers lost connectivity as well as errors raised by the procedure
    itself.  ``procedure`` names the call that failed.
    """

    def __init__(self, procedure: str, message: str = "") -> None:
        self.procedure = procedure
        super().__init__(message or f"Stored procedure {procedure} failed.")
