"""Unit tests for Product DTOs.

Covers:
- CreateProductDTO / UpdateProductDTO: description rules, optional code,
  frozen immutability.
- ProductOutputDTO: from_row factory.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from modules.products.dtos import CreateProductDTO, ProductOutputDTO, UpdateProductDTO

pytestmark = pytest.mark.unit


class TestCreateProductDTO:
    def test_code_is_optional(self):
        dto = CreateProductDTO(description="Notebook Dell Inspiron")
        assert dto.code is None
        assert dto.description == "Notebook Dell Inspiron"

    def test_accepts_explicit_code(self):
        assert CreateProductDTO(code=123, description="Widget").code == 123

    def test_description_is_stripped(self):
        assert CreateProductDTO(description="  Widget  ").description == "Widget"

    def test_blank_description_rejected(self):
        with pytest.raises(ValidationError, match="must not be empty"):
            CreateProductDTO(description="   ")

    def test_missing_description_rejected(self):
        with pytest.raises(ValidationError):
            CreateProductDTO(code=1)

    def test_description_max_80_characters(self):
        assert len(CreateProductDTO(description="x" * 80).description) == 80
        with pytest.raises(ValidationError, match="at most 80"):
            CreateProductDTO(description="x" * 81)

    def test_non_positive_code_rejected(self):
        with pytest.raises(ValidationError, match="positive"):
            CreateProductDTO(code=0, description="Widget")

    def test_non_integer_code_rejected(self):
        with pytest.raises(ValidationError):
            CreateProductDTO(code="abc", description="Widget")

    @pytest.mark.parametrize("code", [True, "42", 42.0])
    def test_code_is_not_coerced(self, code):
        with pytest.raises(ValidationError):
            CreateProductDTO(code=code, description="Widget")

    def test_is_frozen(self):
        dto = CreateProductDTO(description="Widget")
        with pytest.raises(ValidationError):
            dto.description = "Other"


class TestUpdateProductDTO:
    def test_code_may_be_missing(self):
        assert UpdateProductDTO(description="Widget").code is None

    def test_description_rules_apply(self):
        with pytest.raises(ValidationError):
            UpdateProductDTO(code=1, description="")

    def test_boolean_code_rejected(self):
        with pytest.raises(ValidationError):
            UpdateProductDTO(code=True, description="Widget")


class TestProductOutputDTO:
    def test_from_row(self):
        dto = ProductOutputDTO.from_row({"CodProd": 9, "DescrProd": "Teclado"})
        assert dto == ProductOutputDTO(code=9, description="Teclado")
