"""
Category automations

Categories listed in AUTOMATIONS bypass the generic classification engine:
the automation owns its topic and resources, attempts an acknowledgement to
the resolved contact, and writes one structured work note. Only
"Google Workspace – Account Access" is automated today.
"""
from types import MappingProxyType
from typing import Awaitable, Callable, Mapping, Optional

from intake_gateway.models.classification import ClassificationResult
from intake_gateway.models.schemas import AutomationResult, ClientIncidentCreate
from intake_gateway.services.classification_rules import (
    GOOGLE_WORKSPACE_ACCOUNT_ACCESS,
    GOOGLE_WORKSPACE_ACCOUNT_ACCESS_RESOURCES,
)
from intake_gateway.services.mailer import AcknowledgementMailer, DeliveryReceipt
from intake_gateway.services.servicenow import ServiceNowClient
from intake_gateway.services.work_notes import build_automation_note, try_write_work_note
from intake_gateway.utils.logger import get_logger

logger = get_logger(__name__)

AutomationFn = Callable[
    [ServiceNowClient, AcknowledgementMailer, ClientIncidentCreate, str, Optional[str], Optional[str]],
    Awaitable[AutomationResult]
]


async def automate_google_workspace_account_access(
    client: ServiceNowClient,
    mailer: AcknowledgementMailer,
    payload: ClientIncidentCreate,
    sys_id: str,
    incident_number: Optional[str] = None,
    resolved_email: Optional[str] = None
) -> AutomationResult:
    """
    Automate Google Workspace – Account Access tickets

    Args:
        client: ServiceNow client used for the work note
        mailer: Acknowledgement mailer
        payload: Validated intake request
        sys_id: Created incident sys_id
        incident_number: Created incident number
        resolved_email: Contact email from contact resolution

    Returns:
        AutomationResult with the lane's fixed topic and resources
    """
    logger.info(
        "Running Google Workspace – Account Access automation",
        extra={
            "sys_id": sys_id,
            "incident_number": incident_number,
            "client": payload.client,
            "has_resolved_email": bool(resolved_email),
        }
    )

    topic = "Google Workspace Account Access"
    resources = GOOGLE_WORKSPACE_ACCOUNT_ACCESS_RESOURCES

    receipt = DeliveryReceipt(sent=False)
    if resolved_email:
        receipt = await mailer.send(resolved_email, incident_number or "N/A", topic, resources)
    else:
        logger.debug("No resolved email, skipping acknowledgement")

    note = build_automation_note(topic, resources, receipt.sent, resolved_email)
    work_note_added = await try_write_work_note(client, sys_id, note)

    return AutomationResult(
        classified=True,
        topic=topic,
        email_sent=receipt.sent,
        email_provider=receipt.provider,
        work_note_added=work_note_added,
        enrichment=ClassificationResult(topic=topic, resources=resources)
    )


AUTOMATIONS: Mapping[str, AutomationFn] = MappingProxyType({
    GOOGLE_WORKSPACE_ACCOUNT_ACCESS: automate_google_workspace_account_access,
})


class AutomationDispatcher:
    """Looks up and runs the automation registered for a category"""

    def __init__(
        self,
        client: ServiceNowClient,
        mailer: Optional[AcknowledgementMailer] = None,
        registry: Mapping[str, AutomationFn] = AUTOMATIONS
    ):
        self.client = client
        self.mailer = mailer or AcknowledgementMailer()
        self.registry = registry

    def has_automation(self, category: str) -> bool:
        return category in self.registry

    async def run_automation(
        self,
        payload: ClientIncidentCreate,
        sys_id: str,
        incident_number: Optional[str] = None,
        resolved_email: Optional[str] = None
    ) -> AutomationResult:
        """
        Run the automation for payload.category

        Raises:
            KeyError: If no automation is registered for the category
        """
        automation = self.registry[payload.category]
        return await automation(
            self.client, self.mailer, payload, sys_id, incident_number, resolved_email
        )
