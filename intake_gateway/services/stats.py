"""
Intake statistics
"""
from collections import Counter

from intake_gateway.models.schemas import IncidentState, IncidentStats
from intake_gateway.services.intake import CLIENT_MARKER_QUERY
from intake_gateway.services.servicenow import ServiceNowClient
from intake_gateway.services.work_notes import INCIDENT_TABLE
from intake_gateway.utils.logger import get_logger

logger = get_logger(__name__)

STATS_SAMPLE_LIMIT = 1000
OPEN_STATES = {
    IncidentState.NEW.value,
    IncidentState.IN_PROGRESS.value,
    IncidentState.ON_HOLD.value,
    IncidentState.AWAITING.value,
    IncidentState.PENDING_RESOLUTION.value,
}


async def get_stats(client: ServiceNowClient, sample_limit: int = STATS_SAMPLE_LIMIT) -> IncidentStats:
    """
    Count intake incidents by lifecycle bucket

    Only the state field is fetched, bounded by sample_limit.
    """
    records = await client.list(
        INCIDENT_TABLE,
        CLIENT_MARKER_QUERY,
        fields=("state",),
        limit=sample_limit
    )
    counts = Counter(str(r.get("state")) for r in records)

    resolved = counts[IncidentState.RESOLVED.value]
    canceled = counts[IncidentState.CANCELED.value]
    stats = IncidentStats(
        total=len(records),
        open=sum(counts[s] for s in OPEN_STATES),
        resolved=resolved,
        canceled=canceled,
        closed=resolved + canceled,
        sampled=len(records) >= sample_limit
    )
    logger.info(f"Computed stats over {stats.total} incidents")
    return stats
