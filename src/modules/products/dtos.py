"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Views) and the
Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateProductDTO``: input for creation and create-or-update.
- ``UpdateProductDTO``: input for updating an existing product.
- ``ProductOutputDTO``: a product as stored.
"""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, StrictInt, field_validator

from modules.products.constants import COL_CODE, COL_DESCRIPTION, DESCRIPTION_MAX_LENGTH


def _validate_description(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("Description must not be empty.")
    if len(v) > DESCRIPTION_MAX_LENGTH:
        raise ValueError(
            f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters."
        )
    return v


def _validate_code(v: int | None) -> int | None:
    if v is not None and v < 1:
        raise ValueError("Code must be a positive integer.")
    return v


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests.

    ``code`` is optional: when omitted the service generates one.
    """

    model_config = ConfigDict(frozen=True)

    description: str
    code: StrictInt | None = None

    @field_validator("description")
    @classmethod
    def description_must_be_valid(cls, v: str) -> str:
        return _validate_description(v)

    @field_validator("code")
    @classmethod
    def code_must_be_positive(cls, v: int | None) -> int | None:
        return _validate_code(v)


class UpdateProductDTO(BaseModel):
    """Immutable DTO for product update requests.

    The view fills ``code`` from the URL; the service rejects a missing one.
    """

    model_config = ConfigDict(frozen=True)

    description: str
    code: StrictInt | None = None

    @field_validator("description")
    @classmethod
    def description_must_be_valid(cls, v: str) -> str:
        return _validate_description(v)

    @field_validator("code")
    @classmethod
    def code_must_be_positive(cls, v: int | None) -> int | None:
        return _validate_code(v)


# ---------------------------------------------------------------------------
# Output DTO
# ---------------------------------------------------------------------------


class ProductOutputDTO(BaseModel):
    """Immutable DTO for product API responses."""

    model_config = ConfigDict(frozen=True)

    code: int
    description: str

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> ProductOutputDTO:
        """Build an output DTO from a stored procedure row."""
        return cls(code=row[COL_CODE], description=row[COL_DESCRIPTION])
