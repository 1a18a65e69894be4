"""
Pydantic models for the Support Intake Gateway
"""

from intake_gateway.models.classification import (
    ResourceType,
    Resource,
    ClassificationRule,
    ClassificationResult,
)
from intake_gateway.models.retry import RetryPolicy
from intake_gateway.models.schemas import (
    # Enums
    IncidentState,
    PriorityLabel,
    StateFilter,
    TERMINAL_STATES,
    PRIORITY_CODES,

    # Intake
    ClientIncidentCreate,
    ClientIncidentResponse,
    AutomationResult,
    AutomationSummary,

    # Listing / resolution / activity
    IncidentListQuery,
    ClientIncidentListItem,
    IncidentListResponse,
    ResolveRequest,
    ResolvedIncident,
    ActivityEntry,
    ActivityFeed,
    IncidentStats,
    ErrorResponse,
)

__all__ = [
    # Classification
    "ResourceType",
    "Resource",
    "ClassificationRule",
    "ClassificationResult",

    # Retry
    "RetryPolicy",

    # Enums
    "IncidentState",
    "PriorityLabel",
    "StateFilter",
    "TERMINAL_STATES",
    "PRIORITY_CODES",

    # Intake
    "ClientIncidentCreate",
    "ClientIncidentResponse",
    "AutomationResult",
    "AutomationSummary",

    # Listing / resolution / activity
    "IncidentListQuery",
    "ClientIncidentListItem",
    "IncidentListResponse",
    "ResolveRequest",
    "ResolvedIncident",
    "ActivityEntry",
    "ActivityFeed",
    "IncidentStats",
    "ErrorResponse",
]
