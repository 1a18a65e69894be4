"""
Service providers for route handlers (overridable in tests)
"""
from functools import lru_cache

from fastapi import Depends

from intake_gateway.services.activity import ActivityService
from intake_gateway.services.intake import IntakeService
from intake_gateway.services.resolution import ResolutionService
from intake_gateway.services.servicenow import ServiceNowClient


@lru_cache()
def get_servicenow_client() -> ServiceNowClient:
    """Shared client; holds only read-only configuration"""
    return ServiceNowClient()


def get_intake_service(
    client: ServiceNowClient = Depends(get_servicenow_client)
) -> IntakeService:
    return IntakeService(client)


def get_resolution_service(
    client: ServiceNowClient = Depends(get_servicenow_client)
) -> ResolutionService:
    return ResolutionService(client)


def get_activity_service(
    client: ServiceNowClient = Depends(get_servicenow_client)
) -> ActivityService:
    return ActivityService(client)
