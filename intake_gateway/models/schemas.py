"""
Pydantic models for the Support Intake Gateway

Request/response schemas for the HTTP surface plus the ephemeral results
passed between pipeline stages. Incoming intake payloads use camelCase keys;
fields read back from ServiceNow keep the platform's snake_case names.
"""
import re
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from intake_gateway.models.classification import ClassificationResult, Resource


EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


# ============================================================================
# Enums
# ============================================================================

class IncidentState(str, Enum):
    """ServiceNow incident lifecycle states"""
    NEW = "1"
    IN_PROGRESS = "2"
    ON_HOLD = "3"
    AWAITING = "4"
    PENDING_RESOLUTION = "5"
    RESOLVED = "6"
    CANCELED = "7"


TERMINAL_STATES = frozenset({IncidentState.RESOLVED.value, IncidentState.CANCELED.value})


class PriorityLabel(str, Enum):
    """Priority labels offered by the intake form"""
    LOW = "Low"
    NORMAL = "Normal"
    HIGH = "High"


PRIORITY_CODES: Dict[str, str] = {
    PriorityLabel.HIGH.value: "2",
    PriorityLabel.NORMAL.value: "3",
    PriorityLabel.LOW.value: "4",
}


class StateFilter(str, Enum):
    """Named state selectors for listing"""
    OPEN = "open"
    RESOLVED = "resolved"
    ALL = "all"


# ============================================================================
# Intake
# ============================================================================

class ClientIncidentCreate(BaseModel):
    """
    Support request submitted from the client form.

    Attributes:
        client: Client organisation name, written as the `Client:` marker line
        category: Category label (drives classification and automation dispatch)
        error_code: Optional error code reported by the client
        short_description: One-line summary (ServiceNow short_description limit)
        detailed_description: Free-text description
        priority: Low / Normal / High
        client_email: Contact address for acknowledgements
        client_id: Reserved for directory lookups
        client_contact_id: Reserved for directory lookups
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    client: str = Field(..., min_length=1, max_length=100)
    category: str = Field(..., min_length=1, max_length=100)
    error_code: Optional[str] = Field(None, max_length=100)
    short_description: str = Field(..., min_length=1, max_length=160)
    detailed_description: Optional[str] = Field(None, max_length=4000)
    priority: Optional[PriorityLabel] = None
    client_email: Optional[str] = Field(None, max_length=254)
    client_id: Optional[str] = Field(None, max_length=64)
    client_contact_id: Optional[str] = Field(None, max_length=64)

    @field_validator(
        "error_code", "detailed_description",
        "client_email", "client_id", "client_contact_id",
        mode="before"
    )
    @classmethod
    def blank_to_none(cls, v):
        """Treat empty optional form fields as absent"""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("client", "category", "short_description")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Field must not be blank")
        return v

    @field_validator("client_email")
    @classmethod
    def validate_client_email(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not EMAIL_PATTERN.match(v.strip()):
            raise ValueError("clientEmail must be a valid email address")
        return v.strip() if v else v


class AutomationSummary(BaseModel):
    """Automation outcome echoed to the client"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    classified: bool
    email_sent: bool
    email_provider: Optional[str] = None
    work_note_added: bool


class AutomationResult(BaseModel):
    """Result of a category-specific automation run"""
    classified: bool
    topic: str
    email_sent: bool
    email_provider: Optional[str] = None
    work_note_added: bool
    enrichment: ClassificationResult

    def summary(self) -> AutomationSummary:
        return AutomationSummary(
            classified=self.classified,
            email_sent=self.email_sent,
            email_provider=self.email_provider,
            work_note_added=self.work_note_added
        )


class ClientIncidentResponse(BaseModel):
    """Created incident enriched with classification and automation outcome"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    sys_id: str = Field(..., alias="sys_id")
    number: Optional[str] = None
    client: str
    category: str
    short_description: str
    detailed_description: Optional[str] = None
    state: str = IncidentState.NEW.value
    priority: Optional[PriorityLabel] = None
    topic: str
    recommended_resources: List[Resource] = Field(default_factory=list)
    automation: Optional[AutomationSummary] = None


# ============================================================================
# Listing
# ============================================================================

class IncidentListQuery(BaseModel):
    """Query parameters for GET /incidents"""
    state: str = StateFilter.OPEN.value
    limit: int = Field(20, ge=1, le=10000)
    offset: int = Field(0, ge=0)

    @field_validator("state")
    @classmethod
    def validate_state(cls, v: str) -> str:
        v = v.strip().lower()
        if v in {f.value for f in StateFilter}:
            return v
        if v in {s.value for s in IncidentState}:
            return v
        raise ValueError("state must be open, resolved, all, or a state code 1-7")


class ClientIncidentListItem(BaseModel):
    """Incident row with the client parsed from the description"""
    sys_id: str
    number: Optional[str] = None
    short_description: Optional[str] = None
    description: Optional[str] = None
    state: Optional[str] = None
    priority: Optional[str] = None
    category: Optional[str] = None
    sys_created_on: Optional[str] = None
    client: Optional[str] = None


class IncidentListResponse(BaseModel):
    incidents: List[ClientIncidentListItem]


# ============================================================================
# Resolution
# ============================================================================

class ResolveRequest(BaseModel):
    """Body of POST /incident/{sys_id}/resolve"""
    resolution_note: Optional[str] = Field(None, max_length=4000)


class ResolvedIncident(BaseModel):
    """Incident after (or already in) a terminal state"""
    model_config = ConfigDict(populate_by_name=True)

    sys_id: str
    number: Optional[str] = None
    state: str
    close_code: Optional[str] = None
    close_notes: Optional[str] = None
    resolved_at: Optional[str] = None
    already_resolved: bool = Field(False, alias="alreadyResolved")


# ============================================================================
# Activity & stats
# ============================================================================

class ActivityEntry(BaseModel):
    """One [AUTO] line reconstructed from an incident's work notes"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    timestamp: str
    incident_number: str
    client: Optional[str] = None
    summary: str
    sys_id: str = Field(..., alias="sys_id")


class ActivityFeed(BaseModel):
    activities: List[ActivityEntry]
    count: int


class IncidentStats(BaseModel):
    """Ticket counts by lifecycle bucket"""
    total: int = 0
    open: int = 0
    resolved: int = 0
    canceled: int = 0
    closed: int = 0
    sampled: bool = False


class ErrorResponse(BaseModel):
    """Error body returned by exception handlers"""
    error: str
    details: Optional[Any] = None
