"""Product repository interface.

The Produto table is only reachable through four stored procedures, so
the contract mirrors them instead of a generic CRUD repository.  "Zero
rows" is a normal result (``None`` / empty list); only failures to
execute a call raise.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from modules.products.dtos import ProductOutputDTO


class IProductRepository(ABC):
    """Repository contract for the Product entity."""

    @abstractmethod
    def fetch_by_code(self, code: int) -> Optional[ProductOutputDTO]:
        """Return the product with ``code``, or ``None``."""

    @abstractmethod
    def fetch_by_description(self, pattern: str) -> List[ProductOutputDTO]:
        """Return products whose description matches ``pattern``.

        ``pattern`` follows SQL LIKE semantics; ``"%"`` matches everything.
        """

    @abstractmethod
    def upsert(self, code: int, description: str) -> Optional[ProductOutputDTO]:
        """Insert or update a product.

        The procedure may or may not return the affected row.
        """

    @abstractmethod
    def delete(self, code: int) -> None:
        """Delete the product with ``code``."""
