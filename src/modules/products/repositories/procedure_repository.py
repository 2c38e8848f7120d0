"""Stored procedure implementation of the Product repository.

Satisfies ``IProductRepository`` by delegating every call to an
``IProcedureGateway``.  ``GatewayError`` propagates untouched: the
Service Layer decides how to present it.
"""

from __future__ import annotations

from typing import List, Optional

import structlog

from modules.core.gateways.interfaces import IProcedureGateway, ProcedureParam
from modules.products.constants import (
    COL_CODE,
    COL_DESCRIPTION,
    PROC_DELETE,
    PROC_FETCH_BY_CODE,
    PROC_SEARCH_BY_DESCRIPTION,
    PROC_UPSERT,
)
from modules.products.dtos import ProductOutputDTO
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductProcedureRepository(IProductRepository):
    """Concrete Product repository backed by the Sp*Produto procedures."""

    def __init__(self, gateway: IProcedureGateway) -> None:
        self._gateway = gateway

    def fetch_by_code(self, code: int) -> Optional[ProductOutputDTO]:
        rows = self._gateway.execute(
            PROC_FETCH_BY_CODE, [ProcedureParam(COL_CODE, code)]
        )
        if not rows:
            return None
        return ProductOutputDTO.from_row(rows[0])

    def fetch_by_description(self, pattern: str) -> List[ProductOutputDTO]:
        rows = self._gateway.execute(
            PROC_SEARCH_BY_DESCRIPTION, [ProcedureParam(COL_DESCRIPTION, pattern)]
        )
        return [ProductOutputDTO.from_row(row) for row in rows]

    def upsert(self, code: int, description: str) -> Optional[ProductOutputDTO]:
        rows = self._gateway.execute(
            PROC_UPSERT,
            [
                ProcedureParam(COL_CODE, code),
                ProcedureParam(COL_DESCRIPTION, description),
            ],
        )
        logger.info("product.upserted", code=code, returned_row=bool(rows))
        if not rows:
            return None
        return ProductOutputDTO.from_row(rows[0])

    def delete(self, code: int) -> None:
        self._gateway.execute(PROC_DELETE, [ProcedureParam(COL_CODE, code)])
        logger.info("product.deleted", code=code)
