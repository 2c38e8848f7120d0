import re

import pytest

from rest_framework.test import APIClient

from modules.core.exceptions import GatewayError
from modules.core.gateways.interfaces import IProcedureGateway
from modules.products.constants import (
    COL_CODE,
    COL_DESCRIPTION,
    PROC_DELETE,
    PROC_FETCH_BY_CODE,
    PROC_SEARCH_BY_DESCRIPTION,
    PROC_UPSERT,
)


def _like(pattern: str) -> re.Pattern:
    """Translate a SQL LIKE pattern into a case-insensitive 'contains' regex."""
    translated = "".join(
        ".*" if ch == "%" else "." if ch == "_" else re.escape(ch) for ch in pattern
    )
    return re.compile(translated, re.IGNORECASE | re.DOTALL)


class InMemoryProcedureGateway(IProcedureGateway):
    """Emulates the four Sp*Produto procedures over a dict.

    ``upsert_returns_row`` toggles whether SpGrProduto echoes the affected
    row.  Procedure names added to ``failing`` raise ``GatewayError``.
    """

    def __init__(self, upsert_returns_row: bool = True) -> None:
        self.rows: dict[int, str] = {}
        self.calls: list[tuple[str, dict]] = []
        self.failing: set[str] = set()
        self.upsert_returns_row = upsert_returns_row

    def seed(self, code: int, description: str) -> None:
        self.rows[code] = description

    def calls_to(self, procedure: str) -> list[dict]:
        return [values for name, values in self.calls if name == procedure]

    def _row(self, code: int) -> dict:
        return {COL_CODE: code, COL_DESCRIPTION: self.rows[code]}

    def execute(self, procedure, params=()):
        values = {param.name: param.value for param in params}
        self.calls.append((procedure, values))
        if procedure in self.failing:
            raise GatewayError(procedure)

        if procedure == PROC_FETCH_BY_CODE:
            code = values[COL_CODE]
            return [self._row(code)] if code in self.rows else []

        if procedure == PROC_SEARCH_BY_DESCRIPTION:
            matcher = _like(values[COL_DESCRIPTION])
            return [
                self._row(code)
                for code in sorted(self.rows)
                if matcher.search(self.rows[code])
            ]

        if procedure == PROC_UPSERT:
            code = values[COL_CODE]
            self.rows[code] = values[COL_DESCRIPTION]
            return [self._row(code)] if self.upsert_returns_row else []

        if procedure == PROC_DELETE:
            self.rows.pop(values[COL_CODE], None)
            return []

        raise GatewayError(procedure, f"Unknown procedure {procedure}")


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def gateway():
    """In-memory stand-in for the stored procedures."""
    return InMemoryProcedureGateway()


@pytest.fixture()
def product_api(api_client, gateway, monkeypatch):
    """APIClient whose views talk to the in-memory gateway."""
    monkeypatch.setattr("modules.products.views.get_gateway", lambda: gateway)
    return api_client


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid
