"""Product DRF serializers for API input/output.

The serializers operate at the Interface layer (API Views) and
describe the wire shapes for drf-spectacular.  Business validation
lives in the Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.products.constants import DESCRIPTION_MAX_LENGTH


class ProductSerializer(serializers.Serializer):
    """Read serializer for the Product resource."""

    code = serializers.IntegerField(read_only=True)
    description = serializers.CharField(read_only=True)


class ProductWriteSerializer(serializers.Serializer):
    """Request body for ``POST /produtos`` and ``POST /produtos/save``."""

    code = serializers.IntegerField(required=False, min_value=1)
    description = serializers.CharField(max_length=DESCRIPTION_MAX_LENGTH)


class ProductUpdateSerializer(serializers.Serializer):
    """Request body for ``PUT /produtos/{id}``; the code comes from the URL."""

    description = serializers.CharField(max_length=DESCRIPTION_MAX_LENGTH)


class ProductSearchSerializer(serializers.Serializer):
    """Query string for ``GET /produtos/search``."""

    descricao = serializers.CharField(
        max_length=DESCRIPTION_MAX_LENGTH, allow_blank=True, trim_whitespace=False
    )


class MessageSerializer(serializers.Serializer):
    message = serializers.CharField()


class ErrorSerializer(serializers.Serializer):
    detail = serializers.CharField()
