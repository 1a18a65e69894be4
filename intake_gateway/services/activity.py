"""
Automation activity feed

Reconstructs automation activity from incident work notes. Nothing is
stored separately; the feed is rebuilt from ServiceNow on every read.
"""
from datetime import datetime, timezone
from typing import List

from dateutil import parser as date_parser

from intake_gateway.models.schemas import ActivityEntry
from intake_gateway.services.intake import CLIENT_MARKER_QUERY
from intake_gateway.services.servicenow import ServiceNowClient
from intake_gateway.services.work_notes import AUTO_MARKER, INCIDENT_TABLE, extract_auto_lines
from intake_gateway.utils.logger import get_logger
from intake_gateway.utils.validators import extract_client

logger = get_logger(__name__)

ACTIVITY_FIELDS = ("sys_id", "number", "description", "work_notes", "sys_updated_on")
RECENTLY_UPDATED_FIRST = "ORDERBYDESCsys_updated_on"
_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def _sort_key(entry: ActivityEntry) -> datetime:
    """Timezone-aware timestamp; unparseable values sort last"""
    try:
        parsed = date_parser.parse(entry.timestamp)
    except (ValueError, OverflowError):
        logger.warning(f"Unparseable activity timestamp on {entry.incident_number}: {entry.timestamp!r}")
        return _OLDEST
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def build_activity_entries(record: dict) -> List[ActivityEntry]:
    """One entry per [AUTO] line of a single incident, in log order"""
    summaries = extract_auto_lines(record.get("work_notes"))
    if not summaries:
        return []

    client = extract_client(record.get("description"))
    timestamp = record.get("sys_updated_on") or datetime.now(timezone.utc).isoformat()
    return [
        ActivityEntry(
            timestamp=str(timestamp),
            incident_number=str(record.get("number") or "N/A"),
            client=client,
            summary=summary,
            sys_id=str(record.get("sys_id"))
        )
        for summary in summaries
    ]


class ActivityService:
    """Reads the automation activity feed"""

    def __init__(self, client: ServiceNowClient):
        self.client = client

    async def get_automation_activity(self, limit: int = 50) -> List[ActivityEntry]:
        """
        Get automation activity, most recent first

        Args:
            limit: Maximum incidents scanned and entries returned

        Returns:
            ActivityEntry list sorted by timestamp descending
        """
        logger.info("Fetching automation activity", extra={"limit": limit})

        records = await self.client.list(
            INCIDENT_TABLE,
            f"work_notesLIKE{AUTO_MARKER}^{CLIENT_MARKER_QUERY}^{RECENTLY_UPDATED_FIRST}",
            fields=ACTIVITY_FIELDS,
            limit=limit
        )

        activities: List[ActivityEntry] = []
        for record in records:
            activities.extend(build_activity_entries(record))

        # sorted() is stable, so entries from one incident keep log order
        activities = sorted(activities, key=_sort_key, reverse=True)[:limit]
        logger.info(f"Retrieved {len(activities)} automation activities")
        return activities
