"""Product API views.

Exposes the ``ProductService`` via HTTP using a DRF ViewSet.
Domain exceptions are caught and translated into HTTP status codes:
``ProductNotFound`` becomes 404 and ``ProductBadRequest`` becomes 400.
The service already hides database errors, so nothing else is caught.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Optional

from django.conf import settings
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiExample, OpenApiParameter, extend_schema
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.gateways import get_gateway
from modules.products.dtos import CreateProductDTO, UpdateProductDTO
from modules.products.exceptions import ProductBadRequest, ProductNotFound
from modules.products.repositories.procedure_repository import ProductProcedureRepository
from modules.products.serializers import (
    ErrorSerializer,
    MessageSerializer,
    ProductSearchSerializer,
    ProductSerializer,
    ProductUpdateSerializer,
    ProductWriteSerializer,
)
from modules.products.services import ProductService

_INTEGER = re.compile(r"-?\d+")

INVALID_CODE_MESSAGE = "Validation failed (numeric string is expected)"

CODE_PARAMETER = OpenApiParameter(
    name="id",
    type=OpenApiTypes.INT,
    location=OpenApiParameter.PATH,
    description="Product code",
)


def build_product_service() -> ProductService:
    """Wire the service to the configured stored procedure gateway."""
    return ProductService(
        repository=ProductProcedureRepository(gateway=get_gateway()),
        max_code_attempts=settings.PRODUCTS_CODE_MAX_ATTEMPTS,
        code_range=(settings.PRODUCTS_CODE_MIN, settings.PRODUCTS_CODE_MAX),
    )


def _parse_code(value: Optional[str]) -> Optional[int]:
    if value is None or not _INTEGER.fullmatch(value):
        return None
    return int(value)


def _error(exc: Exception, status_code: int) -> Response:
    return Response({"detail": str(exc)}, status=status_code)


def _invalid_code() -> Response:
    return Response(
        {"detail": INVALID_CODE_MESSAGE},
        status=status.HTTP_400_BAD_REQUEST,
    )


def _body(request: Request) -> Mapping[str, Any]:
    data = request.data
    if not isinstance(data, Mapping):
        raise ValueError("Request body must be a JSON object.")
    return data


@extend_schema(tags=["Produtos"])
class ProductViewSet(GenericViewSet):
    """ViewSet for Product operations.

    Uses ``ProductService`` with ``ProductProcedureRepository``.  There
    is no queryset: every read and write goes through the stored
    procedures.
    """

    serializer_class = ProductSerializer
    lookup_url_kwarg = "id"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = build_product_service()

    # ------------------------------------------------------------------
    # List / Search / Retrieve
    # ------------------------------------------------------------------

    @extend_schema(
        summary="List all products",
        responses={200: ProductSerializer(many=True), 400: ErrorSerializer},
    )
    def list(self, request: Request) -> Response:
        """GET /produtos"""
        try:
            products = self._service.find_all()
        except ProductBadRequest as exc:
            return _error(exc, status.HTTP_400_BAD_REQUEST)
        return Response(ProductSerializer(products, many=True).data)

    @extend_schema(
        summary="Search products by description",
        parameters=[ProductSearchSerializer],
        responses={200: ProductSerializer(many=True), 400: ErrorSerializer},
    )
    @action(detail=False, methods=["get"], url_path="search")
    def search(self, request: Request) -> Response:
        """GET /produtos/search?descricao=<text>"""
        query = ProductSearchSerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        try:
            products = self._service.find_by_description(
                query.validated_data["descricao"]
            )
        except ProductBadRequest as exc:
            return _error(exc, status.HTTP_400_BAD_REQUEST)
        return Response(ProductSerializer(products, many=True).data)

    @extend_schema(
        summary="Retrieve a product by code",
        parameters=[CODE_PARAMETER],
        responses={200: ProductSerializer, 404: ErrorSerializer, 400: ErrorSerializer},
    )
    def retrieve(self, request: Request, id: str | None = None) -> Response:
        """GET /produtos/{id}"""
        code = _parse_code(id)
        if code is None:
            return _invalid_code()
        try:
            product = self._service.find_by_code(code)
        except ProductNotFound as exc:
            return _error(exc, status.HTTP_404_NOT_FOUND)
        except ProductBadRequest as exc:
            return _error(exc, status.HTTP_400_BAD_REQUEST)
        return Response(ProductSerializer(product).data)

    # ------------------------------------------------------------------
    # Create / Update / Save / Destroy
    # ------------------------------------------------------------------

    @extend_schema(
        summary="Create a product",
        request=ProductWriteSerializer,
        responses={201: ProductSerializer, 400: ErrorSerializer},
        examples=[
            OpenApiExample(
                "Generated code",
                value={"description": "Notebook Dell Inspiron"},
                request_only=True,
            ),
        ],
    )
    def create(self, request: Request) -> Response:
        """POST /produtos"""
        try:
            data = _body(request)
            dto = CreateProductDTO(
                code=data.get("code"),
                description=data.get("description"),
            )
        except (PydanticValidationError, ValueError) as exc:
            return _error(exc, status.HTTP_400_BAD_REQUEST)

        try:
            product = self._service.create(dto)
        except (ProductNotFound, ProductBadRequest) as exc:
            return _error(exc, status.HTTP_400_BAD_REQUEST)

        out = ProductSerializer(product)
        return Response(out.data, status=status.HTTP_201_CREATED)

    @extend_schema(
        summary="Update a product",
        parameters=[CODE_PARAMETER],
        request=ProductUpdateSerializer,
        responses={200: ProductSerializer, 404: ErrorSerializer, 400: ErrorSerializer},
    )
    def update(self, request: Request, id: str | None = None) -> Response:
        """PUT /produtos/{id}"""
        code = _parse_code(id)
        if code is None:
            return _invalid_code()

        try:
            data = _body(request)
            dto = UpdateProductDTO(code=code, description=data.get("description"))
        except (PydanticValidationError, ValueError) as exc:
            return _error(exc, status.HTTP_400_BAD_REQUEST)

        try:
            product = self._service.update(dto)
        except ProductNotFound as exc:
            return _error(exc, status.HTTP_404_NOT_FOUND)
        except ProductBadRequest as exc:
            return _error(exc, status.HTTP_400_BAD_REQUEST)

        return Response(ProductSerializer(product).data)

    @extend_schema(
        summary="Create or update a product",
        description=(
            "Without a code a new product is created. With a code the "
            "product must already exist and is updated."
        ),
        request=ProductWriteSerializer,
        responses={200: ProductSerializer, 400: ErrorSerializer},
        examples=[
            OpenApiExample(
                "Create",
                value={"description": "Novo Produto"},
                request_only=True,
            ),
            OpenApiExample(
                "Update",
                value={"code": 123, "description": "Produto Atualizado"},
                request_only=True,
            ),
        ],
    )
    @action(detail=False, methods=["post"], url_path="save")
    def save(self, request: Request) -> Response:
        """POST /produtos/save"""
        try:
            data = _body(request)
            dto = CreateProductDTO(
                code=data.get("code"),
                description=data.get("description"),
            )
        except (PydanticValidationError, ValueError) as exc:
            return _error(exc, status.HTTP_400_BAD_REQUEST)

        try:
            product = self._service.create_or_update(dto)
        except (ProductNotFound, ProductBadRequest) as exc:
            return _error(exc, status.HTTP_400_BAD_REQUEST)

        return Response(ProductSerializer(product).data)

    @extend_schema(
        summary="Delete a product",
        parameters=[CODE_PARAMETER],
        responses={200: MessageSerializer, 404: ErrorSerializer, 400: ErrorSerializer},
    )
    def destroy(self, request: Request, id: str | None = None) -> Response:
        """DELETE /produtos/{id}"""
        code = _parse_code(id)
        if code is None:
            return _invalid_code()
        try:
            result = self._service.remove(code)
        except ProductNotFound as exc:
            return _error(exc, status.HTTP_404_NOT_FOUND)
        except ProductBadRequest as exc:
            return _error(exc, status.HTTP_400_BAD_REQUEST)
        return Response(result, status=status.HTTP_200_OK)
