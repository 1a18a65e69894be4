"""
Middleware modules
"""
from .logging_middleware import LoggingMiddleware
from .compliance_middleware import ComplianceMiddleware, apply_compliance

__all__ = ["LoggingMiddleware", "ComplianceMiddleware", "apply_compliance"]
