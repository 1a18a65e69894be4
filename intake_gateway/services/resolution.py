"""
Incident resolution

Idempotently moves an incident to Resolved (6) with the configured close
code. Incidents already Resolved (6) or Canceled (7) are returned unchanged
and flagged alreadyResolved, without issuing another update.
"""
from typing import Optional

from intake_gateway.config import Settings, get_settings
from intake_gateway.exceptions import ConfigurationError, NotFoundError, TerminalRemoteError
from intake_gateway.models.schemas import TERMINAL_STATES, IncidentState, ResolvedIncident
from intake_gateway.services.servicenow import ServiceNowClient
from intake_gateway.services.work_notes import INCIDENT_TABLE
from intake_gateway.utils.logger import get_logger
from intake_gateway.utils.validators import validate_sys_id

logger = get_logger(__name__)

RESOLUTION_FIELDS = (
    "sys_id", "number", "state", "close_code", "close_notes", "resolved_at",
)


def _to_resolved(record: dict, **overrides) -> ResolvedIncident:
    data = {k: (None if record.get(k) is None else str(record.get(k))) for k in RESOLUTION_FIELDS}
    data.update(overrides)
    return ResolvedIncident(**data)


class ResolutionService:
    """Resolves incidents with an idempotency guard"""

    def __init__(self, client: ServiceNowClient, settings: Optional[Settings] = None):
        self.client = client
        self.settings = settings or get_settings()

    async def resolve_incident(
        self,
        sys_id: str,
        resolution_note: Optional[str] = None
    ) -> ResolvedIncident:
        """
        Resolve an incident

        Args:
            sys_id: Incident sys_id
            resolution_note: Close notes (defaults to resolution_default_note)

        Returns:
            ResolvedIncident with state "6", or the unchanged terminal record
            with already_resolved=True

        Raises:
            NotFoundError: Unknown or malformed sys_id
            ConfigurationError: The instance rejected the configured close code
        """
        logger.info(f"Resolving incident {sys_id}")

        if not validate_sys_id(sys_id):
            raise NotFoundError("Incident", sys_id)

        current = await self.client.list(
            INCIDENT_TABLE,
            f"sys_id={sys_id}",
            fields=RESOLUTION_FIELDS,
            limit=1
        )
        if not current:
            raise NotFoundError("Incident", sys_id)

        incident = current[0]
        if str(incident.get("state")) in TERMINAL_STATES:
            logger.info(
                "Incident already resolved/closed",
                extra={"sys_id": sys_id, "number": incident.get("number"), "state": incident.get("state")}
            )
            return _to_resolved(incident, already_resolved=True)

        if resolution_note is None:
            resolution_note = self.settings.resolution_default_note
        changes = {
            "state": IncidentState.RESOLVED.value,
            "close_code": self.settings.resolution_close_code,
            "close_notes": resolution_note,
        }

        try:
            updated = await self.client.update(
                INCIDENT_TABLE, sys_id, changes, fields=RESOLUTION_FIELDS
            )
        except TerminalRemoteError as e:
            if e.status_code == 400:
                raise ConfigurationError(
                    "ServiceNow rejected the resolution update; check that "
                    f"close code '{self.settings.resolution_close_code}' exists on the instance",
                    details=e.details
                ) from e
            raise

        logger.info(
            "Incident resolved",
            extra={"sys_id": sys_id, "number": updated.get("number") or incident.get("number")}
        )

        # The PATCH echo can lag behind business rules; report the state we set
        return _to_resolved(
            {**incident, **updated},
            state=IncidentState.RESOLVED.value,
            already_resolved=False
        )
