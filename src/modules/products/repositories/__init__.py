"""Product repositories package."""

from modules.products.repositories.interfaces import IProductRepository
from modules.products.repositories.procedure_repository import ProductProcedureRepository

__all__ = ["IProductRepository", "ProductProcedureRepository"]
