"""
Incident intake, listing and resolution routes
"""
import json
from typing import Optional

import pydantic
from fastapi import APIRouter, Depends, status

from intake_gateway.config import get_settings
from intake_gateway.exceptions import ValidationError
from intake_gateway.models.schemas import (
    ClientIncidentCreate,
    ClientIncidentResponse,
    IncidentListQuery,
    IncidentListResponse,
    ResolvedIncident,
    ResolveRequest,
)
from intake_gateway.routes.dependencies import get_intake_service, get_resolution_service
from intake_gateway.services.intake import IntakeService
from intake_gateway.services.resolution import ResolutionService

settings = get_settings()

router = APIRouter(tags=["incidents"])


@router.post(
    "/incident",
    response_model=ClientIncidentResponse,
    status_code=status.HTTP_201_CREATED
)
async def create_incident(
    payload: ClientIncidentCreate,
    service: IntakeService = Depends(get_intake_service)
):
    """
    Create an incident and return it enriched with topic, recommended
    resources and the automation outcome (if the category is automated)
    """
    return await service.create_client_incident(payload)


@router.get("/incidents", response_model=IncidentListResponse)
async def list_incidents(
    state: str = "open",
    limit: int = 20,
    offset: int = 0,
    source: Optional[str] = None,
    service: IntakeService = Depends(get_intake_service)
):
    """
    List incidents, newest first

    `source` equal to the configured intake key restricts the list to
    tickets submitted through the intake form.
    """
    try:
        query = IncidentListQuery(state=state, limit=limit, offset=offset)
    except pydantic.ValidationError as e:
        raise ValidationError("Invalid query parameters", details={"errors": json.loads(e.json())})

    filter_by_source = source == settings.intake_source_key
    incidents = await service.list_incidents(query, filter_by_source)
    return IncidentListResponse(incidents=incidents)


@router.post("/incident/{sys_id}/resolve", response_model=ResolvedIncident)
async def resolve_incident(
    sys_id: str,
    body: Optional[ResolveRequest] = None,
    service: ResolutionService = Depends(get_resolution_service)
):
    """
    Resolve an incident (idempotent)

    Already resolved or canceled incidents are returned unchanged with
    alreadyResolved=true.
    """
    note = body.resolution_note if body else None
    return await service.resolve_incident(sys_id, note)
