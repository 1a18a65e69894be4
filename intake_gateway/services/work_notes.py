"""
Work note (annotation) helpers

Automation activity is persisted as work notes on the incident. Lines that
start with the [AUTO] marker are later read back into the activity feed.
"""
from typing import Iterable, List, Optional

from intake_gateway.exceptions import AnnotationWriteError, RemoteClientError
from intake_gateway.models.classification import Resource
from intake_gateway.services.servicenow import ServiceNowClient
from intake_gateway.utils.logger import get_logger

logger = get_logger(__name__)

AUTO_MARKER = "[AUTO]"
INCIDENT_TABLE = "incident"


def format_resource_list(resources: Iterable[Resource]) -> str:
    """Bulleted `  • label (type)` lines"""
    return "\n".join(f"  • {r.label} ({r.type})" for r in resources)


def build_automation_note(
    topic: str,
    resources: Iterable[Resource],
    email_sent: bool,
    resolved_email: Optional[str] = None
) -> str:
    """Work note written by a category automation"""
    if email_sent and resolved_email:
        email_status = f"Acknowledgement email sent to {resolved_email}."
    elif email_sent:
        email_status = "Acknowledgement email sent to client."
    else:
        email_status = "Acknowledgement email not sent (no email provider configured)."

    return (
        f"{AUTO_MARKER} Classified as '{topic}'\n"
        f"{email_status}\n\n"
        f"Recommended self-service resources:\n{format_resource_list(resources)}"
    )


def build_classification_note(
    topic: str,
    resources: Iterable[Resource],
    resolved_email: Optional[str] = None
) -> str:
    """Generic work note for requests without a category automation"""
    lines = [f"{AUTO_MARKER} Classified as '{topic}'"]
    if resolved_email:
        lines.append(
            f"{AUTO_MARKER} Contact on file: {resolved_email} (no acknowledgement sent for this category)."
        )
    resource_list = format_resource_list(resources)
    if resource_list:
        lines.append(f"Recommended resources:\n{resource_list}")
    return "\n".join(lines)


def extract_auto_lines(work_notes: Optional[str]) -> List[str]:
    """
    Pull [AUTO] summaries out of a work notes blob, in log order

    Args:
        work_notes: Raw work_notes text (journal entries joined by newlines)

    Returns:
        Summaries with the marker stripped; empty summaries are dropped
    """
    if not work_notes:
        return []

    summaries = []
    for line in work_notes.split("\n"):
        line = line.strip()
        if not line.startswith(AUTO_MARKER):
            continue
        summary = line[len(AUTO_MARKER):].strip()
        if summary:
            summaries.append(summary)
    return summaries


async def write_work_note(client: ServiceNowClient, sys_id: str, note: str) -> None:
    """
    Append a work note to an incident

    Raises:
        AnnotationWriteError: If the partial update fails
    """
    try:
        await client.update(INCIDENT_TABLE, sys_id, {"work_notes": note}, fields=("sys_id",))
    except RemoteClientError as e:
        raise AnnotationWriteError(
            f"Failed to write work note on {sys_id}",
            details={"sys_id": sys_id, "status_code": e.status_code}
        ) from e


async def try_write_work_note(client: ServiceNowClient, sys_id: str, note: str) -> bool:
    """
    Append a work note, downgrading failure to a warning

    Returns:
        True if the note was written
    """
    try:
        await write_work_note(client, sys_id, note)
    except AnnotationWriteError as e:
        logger.warning(f"{e.message}: {e.__cause__}", extra={"sys_id": sys_id})
        return False

    logger.debug(f"Work note written on {sys_id}")
    return True
