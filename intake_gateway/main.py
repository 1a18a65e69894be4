"""
Support Intake Gateway - FastAPI Backend
"""
import json
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from intake_gateway.config import get_settings
from intake_gateway.exceptions import (
    ConfigurationError,
    IntakeTimeoutError,
    NotFoundError,
    RemoteClientError,
    ValidationError,
)
from intake_gateway.middleware.compliance_middleware import ComplianceMiddleware, apply_compliance
from intake_gateway.middleware.logging_middleware import LoggingMiddleware
from intake_gateway.models.schemas import ErrorResponse
from intake_gateway.routes import activity, health, incidents
from intake_gateway.utils.logger import get_logger

settings = get_settings()
logger = get_logger(__name__)

app = FastAPI(
    title="Support Intake Gateway",
    description="Ticket intake, classification and automation in front of ServiceNow",
    version="1.0.0"
)

# Middleware order matters: the last one added wraps all the others
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(LoggingMiddleware)
app.add_middleware(ComplianceMiddleware)

app.include_router(incidents.router)
app.include_router(activity.router)
app.include_router(health.router)


def error_response(status_code: int, error: str, details: Optional[Any] = None) -> JSONResponse:
    """JSON error body with the compliance header applied"""
    body = ErrorResponse(error=error, details=details or None).model_dump(exclude_none=True)
    body, headers = apply_compliance(body, {})
    return JSONResponse(status_code=status_code, content=body, headers=headers)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request payload", exc.details)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    # Round-trip through json so ctx values (exceptions) become plain strings
    errors = json.loads(json.dumps(exc.errors(), default=str))
    return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request payload", {"errors": errors})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail))


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return error_response(status.HTTP_404_NOT_FOUND, exc.message)


@app.exception_handler(IntakeTimeoutError)
async def intake_timeout_handler(request: Request, exc: IntakeTimeoutError):
    return error_response(status.HTTP_504_GATEWAY_TIMEOUT, exc.message)


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.error(f"Configuration error: {exc.message}", extra={"details": exc.details})
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message, exc.details)


@app.exception_handler(RemoteClientError)
async def remote_client_error_handler(request: Request, exc: RemoteClientError):
    logger.error(
        f"ServiceNow error: {exc.message}",
        extra={"status_code": exc.status_code, "details": exc.details}
    )
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return error_response(status.HTTP_404_NOT_FOUND, exc.message)
    details = None if settings.is_production else exc.details
    return error_response(status.HTTP_502_BAD_GATEWAY, exc.message, details)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    if settings.is_production:
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        str(exc) or "Internal server error",
        {"type": type(exc).__name__}
    )


@app.get("/")
async def root():
    return {"message": "Support Intake Gateway API", "version": "1.0.0"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.fastapi_host, port=settings.fastapi_port)
