"""SQL gateway package."""

from modules.core.gateways.django_gateway import DjangoProcedureGateway, get_gateway
from modules.core.gateways.interfaces import IProcedureGateway, ProcedureParam

__all__ = ["DjangoProcedureGateway", "IProcedureGateway", "ProcedureParam", "get_gateway"]
