"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract for asking the engine for one decision
over HTTP. A request carries the same information as one turn of the
text protocol.

Error Codes:
- INVALID_SNAPSHOT: Turn snapshot is inconsistent (duplicate ids, bad counts)
- INVALID_CONFIG: Unknown strategy or scoring preset
- VALIDATION_ERROR: Request body does not match the schema
- INTERNAL_ERROR: Unexpected failure during the search
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field, field_validator


# =============================================================================
# Enums
# =============================================================================

class ActionKindName(str, Enum):
    """Action kinds accepted in a snapshot."""
    CAST = "CAST"
    OPPONENT_CAST = "OPPONENT_CAST"
    LEARN = "LEARN"
    BREW = "BREW"


class StrategyName(str, Enum):
    """Frontier disciplines."""
    BREADTH_FIRST = "breadth_first"
    BEST_FIRST = "best_first"


class ErrorCode(str, Enum):
    """Structured error codes."""
    INVALID_SNAPSHOT = "INVALID_SNAPSHOT"
    INVALID_CONFIG = "INVALID_CONFIG"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class ActionInfo(BaseModel):
    """One action line of the turn."""
    action_id: int
    kind: ActionKindName
    delta: tuple[int, int, int, int] = Field(
        (0, 0, 0, 0), description="Ingredient change per tier"
    )
    price: int = Field(0, ge=0, description="Rupees earned (BREW only)")
    tome_index: int = Field(0, ge=0, description="Tier-0 cost of learning (LEARN only)")
    tax_count: int = Field(0, ge=0, description="Tier-0 bonus when learning (LEARN only)")
    castable: bool = Field(True, description="False if the spell is exhausted (CAST only)")
    repeatable: bool = False

    model_config = {"from_attributes": True}


class InventoryInfo(BaseModel):
    """Ingredients and rupees of one side."""
    ingredients: tuple[int, int, int, int]
    rupees: int = Field(0, ge=0)

    @field_validator("ingredients")
    @classmethod
    def ingredients_non_negative(cls, value: tuple[int, int, int, int]) -> tuple[int, int, int, int]:
        if min(value) < 0:
            raise ValueError("ingredient counts must be non-negative")
        return value


# =============================================================================
# Request Models
# =============================================================================

class DecideRequest(BaseModel):
    """Request body for POST /api/v1/decide."""
    actions: list[ActionInfo] = Field(default_factory=list)
    inventory: InventoryInfo
    opponent: Optional[InventoryInfo] = None

    # Per-request overrides of the server configuration
    timeout_ms: Optional[int] = Field(None, ge=0, le=1000, description="Search budget in ms")
    max_depth: Optional[int] = Field(None, ge=1, le=10)
    strategy: Optional[StrategyName] = None
    weights: Optional[str] = Field(None, description="Scoring preset name")


# =============================================================================
# Response Models
# =============================================================================

class DecideResponse(BaseModel):
    """The engine's decision for one turn."""
    command: str = Field(..., description="Command text, e.g. 'BREW 42' or 'WAIT'")
    action_id: int
    kind: Optional[str] = Field(None, description="rest, cast, learn, brew; null for WAIT")
    times: int = Field(1, ge=1, description="Repeat count for a CAST")
    score: Optional[float] = None
    evaluated_nodes: int = 0
    timed_out: bool = False
    explanation: str = ""
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
