"""Product service layer (Use Cases).

Orchestrates the four Produto stored procedures, delegating persistence
to the injected ``IProductRepository``.

Rules enforced here:
- Codes are unique: checked before every write, since the upsert
  procedure would silently overwrite an existing product.
- Codes not supplied by the caller are drawn at random with a bounded
  number of attempts.
- Database errors never reach the caller.  Each operation replaces them
  with a generic ``ProductBadRequest`` and keeps the original as the
  exception cause for operators.

Existence checks and writes are separate round trips and are not
wrapped in a transaction: two concurrent creates with the same explicit
code can both pass the check.
"""

from __future__ import annotations

import random
from contextlib import contextmanager
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional, Tuple, Type

import structlog

from modules.products.constants import CODE_MAX, CODE_MIN, MATCH_ALL, MAX_CODE_ATTEMPTS
from modules.products.exceptions import ProductBadRequest, ProductNotFound

if TYPE_CHECKING:
    from modules.products.dtos import (
        CreateProductDTO,
        ProductOutputDTO,
        UpdateProductDTO,
    )
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

_DOMAIN_ERRORS: Tuple[Type[Exception], ...] = (ProductNotFound, ProductBadRequest)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection.  The
    random source and the code generation bounds are injectable so that
    code generation can be tested deterministically.
    """

    def __init__(
        self,
        repository: IProductRepository,
        rng: Optional[random.Random] = None,
        max_code_attempts: int = MAX_CODE_ATTEMPTS,
        code_range: Tuple[int, int] = (CODE_MIN, CODE_MAX),
    ) -> None:
        if max_code_attempts < 1:
            raise ValueError("max_code_attempts must be at least 1.")
        low, high = code_range
        if low > high:
            raise ValueError("code_range lower bound exceeds upper bound.")
        self._repo = repository
        self._rng = rng or random.Random()
        self._max_code_attempts = max_code_attempts
        self._code_range = code_range

    @contextmanager
    def _translate_failures(
        self,
        message: str,
        operation: str,
        passthrough: Tuple[Type[Exception], ...] = _DOMAIN_ERRORS,
        **context,
    ) -> Iterator[None]:
        """Replace any unexpected error with ``ProductBadRequest(message)``."""
        try:
            yield
        except passthrough:
            raise
        except Exception as exc:
            logger.warning(
                "product.operation_failed",
                operation=operation,
                error=repr(exc),
                exc_info=True,
                **context,
            )
            raise ProductBadRequest(message) from exc

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_by_code(self, code: int) -> ProductOutputDTO:
        """Retrieve a single product by code.

        Raises:
            ProductNotFound: if no product has this code.
            ProductBadRequest: if the lookup could not be executed.
        """
        with self._translate_failures(
            "error fetching product by code", "find_by_code", code=code
        ):
            product = self._repo.fetch_by_code(code)
        if product is None:
            raise ProductNotFound(code)
        return product

    def find_by_description(self, text: str) -> List[ProductOutputDTO]:
        """Return products matching ``text``; an empty list is not an error."""
        with self._translate_failures(
            "error searching products by description",
            "find_by_description",
            passthrough=(),
        ):
            return self._repo.fetch_by_description(text)

    def find_all(self) -> List[ProductOutputDTO]:
        """List every product through an unrestricted description search."""
        with self._translate_failures(
            "error listing products", "find_all", passthrough=()
        ):
            return self.find_by_description(MATCH_ALL)

    def generate_unique_code(self) -> int:
        """Draw random codes until one is free.

        Raises:
            ProductBadRequest: after ``max_code_attempts`` collisions, or
                if an existence check fails.
        """
        low, high = self._code_range
        for attempt in range(1, self._max_code_attempts + 1):
            candidate = self._rng.randint(low, high)
            try:
                self.find_by_code(candidate)
            except ProductNotFound:
                return candidate
            logger.info("product.code_collision", code=candidate, attempt=attempt)

        logger.warning(
            "product.code_generation_exhausted", attempts=self._max_code_attempts
        )
        raise ProductBadRequest("could not generate unique code")

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create(self, dto: CreateProductDTO) -> ProductOutputDTO:
        """Create a product, never overwriting an existing one.

        Raises:
            ProductBadRequest: if ``dto.code`` is already taken, or on
                any database failure.
        """
        with self._translate_failures("error creating product", "create"):
            if dto.code is not None:
                self._ensure_code_is_free(dto.code)
                code = dto.code
            else:
                code = self.generate_unique_code()

            product = self._repo.upsert(code, dto.description)
            if product is None:
                product = self.find_by_code(code)

        logger.info("product.created", code=product.code)
        return product

    def update(self, dto: UpdateProductDTO) -> ProductOutputDTO:
        """Update an existing product and return it as persisted.

        Raises:
            ProductNotFound: if the product does not exist.
            ProductBadRequest: if ``dto.code`` is missing, or on any
                database failure.
        """
        with self._translate_failures("error updating product", "update"):
            if dto.code is None:
                raise ProductBadRequest("code is required for update")

            self.find_by_code(dto.code)
            self._repo.upsert(dto.code, dto.description)
            product = self.find_by_code(dto.code)

        logger.info("product.updated", code=product.code)
        return product

    def create_or_update(self, dto: CreateProductDTO) -> ProductOutputDTO:
        """Update the product with ``dto.code``, or create one without a code.

        A supplied code that does not exist is rejected: only the
        code-less path creates.

        Raises:
            ProductBadRequest: if the supplied code does not exist, or on
                any database failure.
        """
        with self._translate_failures(
            "error creating/updating product", "create_or_update"
        ):
            if dto.code is not None:
                try:
                    self.find_by_code(dto.code)
                except ProductNotFound:
                    raise ProductBadRequest(
                        f"product with code {dto.code} does not exist "
                        "and cannot be updated"
                    ) from None
                code = dto.code
            else:
                code = self.generate_unique_code()

            product = self._repo.upsert(code, dto.description)
            if product is None:
                if dto.code is not None:
                    product = self.find_by_code(dto.code)
                else:
                    matches = self.find_by_description(dto.description)
                    if not matches:
                        raise ProductBadRequest("error creating/updating product")
                    product = matches[0]

        logger.info("product.saved", code=product.code, created=dto.code is None)
        return product

    def remove(self, code: int) -> Dict[str, str]:
        """Delete a product permanently.

        Raises:
            ProductNotFound: if the product does not exist.
            ProductBadRequest: on any database failure.
        """
        with self._translate_failures(
            "error deleting product",
            "remove",
            passthrough=(ProductNotFound,),
            code=code,
        ):
            self.find_by_code(code)
            self._repo.delete(code)

        logger.info("product.removed", code=code)
        return {"message": f"Product with code {code} deleted successfully"}

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _ensure_code_is_free(self, code: int) -> None:
        try:
            self.find_by_code(code)
        except ProductNotFound:
            return
        logger.warning("product.duplicate_code", code=code)
        raise ProductBadRequest(f"product with code {code} already exists")
