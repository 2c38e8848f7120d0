"""Django implementation of the stored procedure gateway.

Calls go through ``django.db.connections``, so connection reuse and
timeouts follow the ``DATABASES`` configuration of the project.

Two call styles are supported:

- ``exec``: T-SQL ``EXEC proc @Name = %s, ...`` (SQL Server via
  mssql-django / pyodbc, which has no ``callproc``).
- ``callproc``: DB-API ``cursor.callproc`` (PostgreSQL, MySQL, Oracle).
"""

from __future__ import annotations

import re
from typing import Any, List, Optional, Sequence

import structlog
from django.conf import settings
from django.db import Error as DatabaseError
from django.db import connections

from modules.core.exceptions import GatewayError
from modules.core.gateways.interfaces import IProcedureGateway, ProcedureParam, Row

logger = structlog.get_logger(__name__)

CALL_STYLE_EXEC = "exec"
CALL_STYLE_CALLPROC = "callproc"
CALL_STYLES = (CALL_STYLE_EXEC, CALL_STYLE_CALLPROC)

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")


def _check_identifier(name: str) -> str:
    # Names are interpolated into the statement; values never are.
    if not _IDENTIFIER.match(name):
        raise ValueError(f"Invalid SQL identifier: {name!r}")
    return name


def build_exec_statement(procedure: str, params: Sequence[ProcedureParam]) -> str:
    """Build ``EXEC proc @A = %s, @B = %s`` with placeholders for values."""
    statement = f"EXEC {_check_identifier(procedure)}"
    if params:
        assignments = ", ".join(
            f"@{_check_identifier(param.name)} = %s" for param in params
        )
        statement = f"{statement} {assignments}"
    return statement


class DjangoProcedureGateway(IProcedureGateway):
    """Concrete gateway backed by a Django database connection."""

    def __init__(
        self,
        using: str = "default",
        call_style: str = CALL_STYLE_EXEC,
        connection: Optional[Any] = None,
    ) -> None:
        if call_style not in CALL_STYLES:
            raise ValueError(
                f"Unsupported call style {call_style!r}; expected one of {CALL_STYLES}."
            )
        self._using = using
        self._call_style = call_style
        self._connection = connection

    @property
    def connection(self):
        if self._connection is not None:
            return self._connection
        return connections[self._using]

    def execute(self, procedure: str, params: Sequence[ProcedureParam] = ()) -> List[Row]:
        log = logger.bind(procedure=procedure, using=self._using)
        values = [param.value for param in params]

        try:
            with self.connection.cursor() as cursor:
                if self._call_style == CALL_STYLE_EXEC:
                    cursor.execute(build_exec_statement(procedure, params), values)
                    rows = self._fetch_rows(cursor, skip_counts=True)
                else:
                    cursor.callproc(_check_identifier(procedure), values)
                    rows = self._fetch_rows(cursor)
        except (DatabaseError, ValueError, TypeError, OverflowError) as exc:
            # Identifier checks and driver-side conversion errors included.
            log.error("gateway.procedure_failed", error=str(exc))
            raise GatewayError(procedure) from exc

        log.debug("gateway.procedure_executed", row_count=len(rows))
        return rows

    @staticmethod
    def _fetch_rows(cursor, skip_counts: bool = False) -> List[Row]:
        # No description means the procedure produced no result set.
        # SQL Server reports row counts of statements run without
        # SET NOCOUNT ON as result sets of their own, ahead of the rows.
        while not cursor.description:
            if not skip_counts or not cursor.nextset():
                return []
        columns = [column[0] for column in cursor.description]
        return [dict(zip(columns, row)) for row in cursor.fetchall()]


def get_gateway() -> DjangoProcedureGateway:
    """Build the gateway configured in settings."""
    return DjangoProcedureGateway(
        using=settings.SQL_GATEWAY_DB_ALIAS,
        call_style=settings.SQL_GATEWAY_CALL_STYLE,
    )
