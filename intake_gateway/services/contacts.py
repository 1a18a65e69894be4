"""
Contact resolution

Resolves the best email address for an intake request. Only the literal
clientEmail field is used; no directory tables are read, since the
customer_contact / sys_user lookups keyed by clientContactId or clientId are
not guaranteed to exist on every instance.
"""
from typing import Optional

from pydantic import BaseModel

from intake_gateway.models.schemas import ClientIncidentCreate


class ResolvedContact(BaseModel):
    """Contact details resolved for a request"""
    email: Optional[str] = None


async def resolve_contact_email(payload: ClientIncidentCreate) -> ResolvedContact:
    """
    Resolve the email address for an incident context

    Args:
        payload: Validated intake request

    Returns:
        ResolvedContact with the literal clientEmail, or email=None
    """
    email = (payload.client_email or "").strip()
    return ResolvedContact(email=email or None)
