"""Main FastAPI application for the Account Rules Service."""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse

from account_rules.api.routes import accounts, health
from account_rules.core.database import get_database
from account_rules.core.settings import get_settings
from account_rules.middleware.logging import LoggingMiddleware, configure_logging
from account_rules.schemas.base import JSONAPIError, JSONAPIErrorResponse

# Initialize logging
configure_logging()

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management."""
    # Startup
    await get_database().connect()
    yield
    # Shutdown
    await get_database().disconnect()


app = FastAPI(
    title="Account Rules Service",
    description="Subscription limits, downgrade eligibility and yearly statistics for CRM accounts",
    version=health.SERVICE_VERSION,
    lifespan=lifespan,
    docs_url="/docs" if not settings.is_production else None,
    redoc_url="/redoc" if not settings.is_production else None,
    openapi_url="/openapi.json" if not settings.is_production else None,
)

# Security middleware
app.add_middleware(
    TrustedHostMiddleware,
    allowed_hosts=settings.allowed_hosts
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.add_middleware(LoggingMiddleware)


def error_response(status_code: int, error: JSONAPIError) -> JSONResponse:
    """Render a JSON:API error envelope."""
    body = JSONAPIErrorResponse(errors=[error])
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
    )


# Exception handlers
@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions with JSON:API format."""
    detail = exc.detail if isinstance(exc.detail, dict) else {"message": str(exc.detail)}
    message = detail.get("message", "HTTP Error")
    return error_response(
        exc.status_code,
        JSONAPIError(
            status=str(exc.status_code),
            code=detail.get("code", "HTTP_ERROR"),
            title=message,
            detail=message,
            source={"pointer": request.url.path},
        ),
    )


@app.exception_handler(404)
async def not_found_handler(request: Request, exc):
    """Handle 404 errors with JSON:API format."""
    # Status handlers take precedence over class handlers for HTTPException
    if isinstance(exc, HTTPException) and isinstance(exc.detail, dict):
        return await http_exception_handler(request, exc)
    return error_response(
        404,
        JSONAPIError(
            status="404",
            code="RESOURCE_NOT_FOUND",
            title="Resource Not Found",
            detail="The requested resource was not found",
            source={"pointer": request.url.path},
        ),
    )


@app.exception_handler(500)
async def internal_error_handler(request: Request, exc):
    """Handle 500 errors with JSON:API format."""
    return error_response(
        500,
        JSONAPIError(
            status="500",
            code="INTERNAL_SERVER_ERROR",
            title="Internal Server Error",
            detail="An unexpected error occurred",
        ),
    )


# Routes
app.include_router(health.router, prefix="", tags=["system"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": health.SERVICE_NAME,
        "version": health.SERVICE_VERSION,
        "status": "running",
        "api": {
            "docs": "/docs" if not settings.is_production else None,
            "openapi": "/openapi.json" if not settings.is_production else None
        }
    }


app.include_router(accounts.router, prefix=f"{settings.api_v1_prefix}/accounts", tags=["accounts"])


if __name__ == "__main__":
    uvicorn.run(
        "account_rules.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
    )
