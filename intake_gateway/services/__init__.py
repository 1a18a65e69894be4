"""
Business Logic Services
"""
from .servicenow import ServiceNowClient
from .classification import classify
from .automation import AutomationDispatcher
from .intake import IntakeService
from .resolution import ResolutionService
from .activity import ActivityService

__all__ = [
    "ServiceNowClient",
    "classify",
    "AutomationDispatcher",
    "IntakeService",
    "ResolutionService",
    "ActivityService",
]
