"""Backend RPC infrastructure."""

from prostock.infrastructure.backend.gas_client import GASClient
from prostock.infrastructure.backend.gateway import (
    BackendGateway,
    get_backend_gateway,
    reset_backend_gateway,
)

__all__ = [
    "GASClient",
    "BackendGateway",
    "get_backend_gateway",
    "reset_backend_gateway",
]
