"""
Incident Intake Service

Coordinates one intake request end to end.

Workflow:
1. Resolve the contact email
2. Create the incident with mapped fields
3. Run the category automation if one is registered,
   otherwise classify and write a generic work note
4. Assemble the enriched response

Work note failures never fail the request; create failures always do.
Only the create step is bounded by request_timeout_seconds, so a timeout
never reports failure for a ticket that already exists.
"""
import asyncio
from typing import Any, Dict, List, Optional

from intake_gateway.config import Settings, get_settings
from intake_gateway.exceptions import IntakeTimeoutError, TerminalRemoteError
from intake_gateway.models.schemas import (
    PRIORITY_CODES,
    ClientIncidentCreate,
    ClientIncidentListItem,
    ClientIncidentResponse,
    IncidentListQuery,
    IncidentState,
    StateFilter,
)
from intake_gateway.services.automation import AutomationDispatcher
from intake_gateway.services.classification import classify
from intake_gateway.services.contacts import resolve_contact_email
from intake_gateway.services.servicenow import ServiceNowClient
from intake_gateway.services.work_notes import (
    INCIDENT_TABLE,
    build_classification_note,
    try_write_work_note,
)
from intake_gateway.utils.logger import get_logger
from intake_gateway.utils.validators import extract_client, sanitize_input

logger = get_logger(__name__)

CREATE_FIELDS = ("sys_id", "number", "state", "priority", "category")
LIST_FIELDS = (
    "sys_id", "number", "short_description", "description",
    "state", "priority", "category", "sys_created_on",
)
CLIENT_MARKER_QUERY = "descriptionLIKEClient:"
NEWEST_FIRST = "ORDERBYDESCsys_created_on"


def build_description(payload: ClientIncidentCreate) -> str:
    """
    Compose the incident long text

    The `Client:` line is always last; listing and activity queries match
    on it and parse the client name from it.
    """
    parts = []
    if payload.detailed_description:
        parts.append(sanitize_input(payload.detailed_description))
    if payload.error_code:
        parts.append(f"Error Code: {sanitize_input(payload.error_code)}")
    client = " ".join(sanitize_input(payload.client).split())
    parts.append(f"Client: {client}")
    return "\n\n".join(p for p in parts if p)


def _as_text(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def build_state_query(state: str) -> Optional[str]:
    """Encoded query clause for a validated state selector"""
    if state == StateFilter.OPEN.value:
        return f"state<{IncidentState.RESOLVED.value}"
    if state == StateFilter.RESOLVED.value:
        return f"state={IncidentState.RESOLVED.value}"
    if state == StateFilter.ALL.value:
        return None
    return f"state={state}"


class IntakeService:
    """
    Service layer for client incident intake and listing
    """

    def __init__(
        self,
        client: ServiceNowClient,
        dispatcher: Optional[AutomationDispatcher] = None,
        settings: Optional[Settings] = None
    ):
        self.client = client
        self.dispatcher = dispatcher or AutomationDispatcher(client)
        self.settings = settings or get_settings()

    def _build_incident_record(
        self,
        payload: ClientIncidentCreate,
        resolved_email: Optional[str]
    ) -> Dict[str, Any]:
        """Map an intake payload to incident fields"""
        record: Dict[str, Any] = {
            "short_description": sanitize_input(payload.short_description, max_length=160),
            "category": payload.category,
            "state": IncidentState.NEW.value,
            "contact_type": "self-service",
            "u_source": self.settings.intake_source_label,
            "description": build_description(payload),
            "u_client": payload.client,
        }

        if payload.priority:
            record["priority"] = PRIORITY_CODES[payload.priority.value]
        # Custom field; never read back by this service
        if resolved_email:
            record["u_client_email"] = resolved_email

        return record

    async def create_client_incident(
        self,
        payload: ClientIncidentCreate
    ) -> ClientIncidentResponse:
        """
        Create an incident and enrich the response

        Args:
            payload: Validated intake request

        Returns:
            ClientIncidentResponse with topic, resources and automation outcome

        Raises:
            RemoteClientError: If the incident could not be created
            IntakeTimeoutError: If the create call outlived request_timeout_seconds
        """
        logger.info(
            "Creating client incident",
            extra={
                "client": payload.client,
                "category": payload.category,
                "short_description": payload.short_description,
            }
        )

        contact = await resolve_contact_email(payload)
        logger.debug(
            "Resolved contact email",
            extra={
                "email": "***REDACTED***" if contact.email else None,
                "has_client_id": bool(payload.client_id),
                "has_client_contact_id": bool(payload.client_contact_id),
            }
        )

        record = self._build_incident_record(payload, contact.email)
        timeout = self.settings.request_timeout_seconds
        try:
            incident = await asyncio.wait_for(
                self.client.create(INCIDENT_TABLE, record, fields=CREATE_FIELDS),
                timeout=timeout
            )
        except asyncio.TimeoutError:
            logger.error(f"Incident create timed out after {timeout}s", extra={"client": payload.client})
            raise IntakeTimeoutError(
                "Incident intake timed out",
                details={"timeout_seconds": timeout}
            )

        sys_id = incident.get("sys_id")
        if not sys_id:
            raise TerminalRemoteError(
                "Incident create returned no sys_id",
                details={"table": INCIDENT_TABLE}
            )
        number = incident.get("number")
        logger.info(f"Incident created: {number} ({sys_id})")

        automation = None
        if self.dispatcher.has_automation(payload.category):
            logger.info(f"Running automation for category {payload.category}")
            automation = await self.dispatcher.run_automation(
                payload, sys_id, number, contact.email
            )
            enrichment = automation.enrichment
        else:
            enrichment = classify(
                payload.category,
                payload.short_description,
                payload.detailed_description,
                payload.error_code
            )
            note = build_classification_note(enrichment.topic, enrichment.resources, contact.email)
            await try_write_work_note(self.client, sys_id, note)

        logger.info(
            "Incident created with classification",
            extra={
                "sys_id": sys_id,
                "number": number,
                "topic": enrichment.topic,
                "resource_count": len(enrichment.resources),
                "automation_ran": automation is not None,
            }
        )

        return ClientIncidentResponse(
            sys_id=sys_id,
            number=number,
            client=payload.client,
            category=payload.category,
            short_description=payload.short_description,
            detailed_description=payload.detailed_description,
            state=str(incident.get("state") or IncidentState.NEW.value),
            priority=payload.priority,
            topic=enrichment.topic,
            recommended_resources=list(enrichment.resources),
            automation=automation.summary() if automation else None
        )

    async def list_incidents(
        self,
        query: Optional[IncidentListQuery] = None,
        filter_by_source: bool = False
    ) -> List[ClientIncidentListItem]:
        """
        List incidents, newest first

        Args:
            query: State selector and pagination
            filter_by_source: Only incidents carrying the `Client:` marker

        Returns:
            Incidents with the client parsed from the description
        """
        query = query or IncidentListQuery()
        logger.info(
            "Listing incidents",
            extra={"state": query.state, "limit": query.limit, "offset": query.offset,
                   "filter_by_source": filter_by_source}
        )

        clauses = []
        state_clause = build_state_query(query.state)
        if state_clause:
            clauses.append(state_clause)
        if filter_by_source:
            clauses.append(CLIENT_MARKER_QUERY)
        clauses.append(NEWEST_FIRST)

        records = await self.client.list(
            INCIDENT_TABLE,
            "^".join(clauses),
            fields=LIST_FIELDS,
            limit=query.limit,
            offset=query.offset
        )

        incidents = [
            ClientIncidentListItem(
                **{k: _as_text(record.get(k)) for k in LIST_FIELDS},
                client=extract_client(record.get("description"))
            )
            for record in records
        ]
        logger.info(f"Retrieved {len(incidents)} incidents")
        return incidents
