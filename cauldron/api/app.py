"""
FastAPI Application - REST API for asking the engine for a decision.

Endpoints:
    POST   /api/v1/decide    Run one search for a posted turn snapshot
    GET    /health           Health check
    GET    /                 API info

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Optional, Union
import os

from ..config import SearchConfig

# Environment configuration
CAULDRON_ENV = os.getenv("CAULDRON_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

API_VERSION = "1.0.0"


def create_app(service=None, config: Optional[SearchConfig] = None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)
        config: Search configuration for a new service (defaults to the
            CAULDRON_* environment)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, Request
        from fastapi.exceptions import RequestValidationError
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .service import APIService
    from .schemas import (
        DecideRequest,
        DecideResponse,
        ErrorCode,
        ErrorResponse,
        HealthResponse,
    )

    app = FastAPI(
        title="Cauldron Decision API",
        description="""
Time-boxed decision engine for the potion brewing puzzle.

Post the turn's actions and inventory to `POST /api/v1/decide` and receive
the command to play (`BREW <id>`, `CAST <id> <times>`, `LEARN <id>`, `REST` or
`WAIT`).

## Error Codes

| Code | Description |
|------|-------------|
| `INVALID_SNAPSHOT` | Snapshot is inconsistent (e.g. duplicate action ids) |
| `INVALID_CONFIG` | Unknown strategy or scoring preset |
| `VALIDATION_ERROR` | Request body does not match the schema (422) |
| `INTERNAL_ERROR` | Unexpected failure during the search (500) |
""",
        version=API_VERSION,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService(config=config or SearchConfig.from_env())

    def make_error_response(error: ErrorResponse) -> JSONResponse:
        status_code = 500 if error.error_code == ErrorCode.INTERNAL_ERROR else 400
        return JSONResponse(status_code=status_code, content=error.model_dump(mode="json"))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        error = ErrorResponse(
            error="Request body does not match the schema",
            error_code=ErrorCode.VALIDATION_ERROR,
            details={
                "errors": [
                    {"loc": [str(part) for part in err["loc"]], "msg": err["msg"]}
                    for err in exc.errors()
                ]
            },
        )
        return JSONResponse(status_code=422, content=error.model_dump(mode="json"))

    # =========================================================================
    # Decision Endpoint
    # =========================================================================

    @app.post(
        "/api/v1/decide",
        response_model=DecideResponse,
        responses={
            400: {"model": ErrorResponse},
            422: {"model": ErrorResponse},
            500: {"model": ErrorResponse},
        },
        tags=["Engine"],
        summary="Choose the action for one turn",
    )
    def decide(request: DecideRequest) -> Union[DecideResponse, JSONResponse]:
        """
        Search the turn's state space and return the best command.

        Runs in the threadpool: the search blocks for up to its time budget.
        """
        response = api_service.decide(request)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    # =========================================================================
    # System Endpoints
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="cauldron-engine",
            version=API_VERSION,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Cauldron Decision API",
            "version": API_VERSION,
            "environment": CAULDRON_ENV,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app
