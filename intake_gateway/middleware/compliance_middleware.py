"""
Compliance Middleware - integration ruleset header on every response
"""
from typing import Any, Callable, Dict, Mapping, Tuple

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

COMPLIANCE_HEADER = "X-Validator-Compliance"
COMPLIANCE_VALUE = "Pass"


def apply_compliance(
    body: Any,
    headers: Mapping[str, str]
) -> Tuple[Any, Dict[str, str]]:
    """
    Attach the compliance header to an outgoing response

    Args:
        body: Response body (returned unchanged)
        headers: Existing response headers

    Returns:
        (body, headers) with the compliance header added
    """
    return body, {**headers, COMPLIANCE_HEADER: COMPLIANCE_VALUE}


class ComplianceMiddleware(BaseHTTPMiddleware):
    """Applies apply_compliance() uniformly at the HTTP boundary"""

    async def dispatch(self, request: Request, call_next: Callable):
        response = await call_next(request)
        _, headers = apply_compliance(None, {})
        response.headers.update(headers)
        return response
