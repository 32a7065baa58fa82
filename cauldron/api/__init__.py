"""
API Module - HTTP interface to the decision engine.

Exposes one decision per request: the client posts the turn's actions
and inventory, the engine answers with the command to play.

No state is kept between requests.
"""

from .schemas import (
    # Requests
    DecideRequest,
    # Responses
    DecideResponse,
    ErrorResponse,
    HealthResponse,
    # Shared
    ActionInfo,
    InventoryInfo,
    ErrorCode,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "DecideRequest",
    # Responses
    "DecideResponse",
    "ErrorResponse",
    "HealthResponse",
    # Shared
    "ActionInfo",
    "InventoryInfo",
    "ErrorCode",
    # Service
    "APIService",
    "create_app",
]
