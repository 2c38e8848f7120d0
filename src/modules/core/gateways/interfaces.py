"""Stored procedure gateway interface.

Repositories that persist through database-side routines depend on
``IProcedureGateway`` only, never on a concrete connection.  This keeps
the Service Layer testable with an in-memory gateway.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, NamedTuple, Sequence


class ProcedureParam(NamedTuple):
    """A named stored procedure parameter (without the ``@`` prefix)."""

    name: str
    value: Any


Row = Dict[str, Any]


class IProcedureGateway(ABC):
    """Executes named stored procedures against the shared connection pool."""

    @abstractmethod
    def execute(self, procedure: str, params: Sequence[ProcedureParam] = ()) -> List[Row]:
        """Run ``procedure`` with ``params`` and return its rows.

        Rows are dictionaries keyed by column name.  A procedure that
        produces no result set returns an empty list.

        Raises:
            GatewayError: if the call cannot be executed.
        """
