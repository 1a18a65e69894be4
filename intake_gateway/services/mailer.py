"""
Acknowledgement mailer

No email provider is wired up: send() renders and logs the message and
reports sent=False so callers record an explicit "not sent".
"""
from typing import Iterable, Optional

from pydantic import BaseModel

from intake_gateway.models.classification import Resource
from intake_gateway.utils.logger import get_logger

logger = get_logger(__name__)


class DeliveryReceipt(BaseModel):
    """Outcome of an acknowledgement attempt"""
    sent: bool
    provider: Optional[str] = None


def render_acknowledgement(ticket_number: str, topic: str, resources: Iterable[Resource]) -> str:
    """Plain-text acknowledgement body"""
    resource_lines = "\n".join(f"• {r.label}: {r.url}" for r in resources)
    return (
        "Hello,\n\n"
        f"We've received your request regarding \"{topic}\" (Ticket #{ticket_number}).\n\n"
        "While we review your request, here are some self-service resources that may help:\n\n"
        f"{resource_lines}\n\n"
        "We'll update you as soon as we have more information.\n\n"
        "Best regards,\n"
        "Support Team"
    )


class AcknowledgementMailer:
    """Stub mailer; provider is None until a real integration exists"""

    provider: Optional[str] = None

    async def send(
        self,
        to: str,
        ticket_number: str,
        topic: str,
        resources: Iterable[Resource]
    ) -> DeliveryReceipt:
        """
        Attempt to send an acknowledgement

        Args:
            to: Recipient address
            ticket_number: Incident number shown to the client
            topic: Classified topic
            resources: Recommended resources to include

        Returns:
            DeliveryReceipt (always sent=False for the stub)
        """
        resources = list(resources)
        logger.info(
            "Email acknowledgement (stub)",
            extra={
                "recipient": "***REDACTED***" if to else None,
                "incident_number": ticket_number,
                "topic": topic,
                "resource_count": len(resources),
            }
        )
        logger.debug(f"Email content (stub):\n{render_acknowledgement(ticket_number, topic, resources)}")
        return DeliveryReceipt(sent=False, provider=self.provider)
