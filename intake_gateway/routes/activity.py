"""
Automation activity and statistics routes
"""
from fastapi import APIRouter, Depends, Query

from intake_gateway.models.schemas import ActivityFeed, IncidentStats
from intake_gateway.routes.dependencies import get_activity_service, get_servicenow_client
from intake_gateway.services.activity import ActivityService
from intake_gateway.services.servicenow import ServiceNowClient
from intake_gateway.services.stats import get_stats

router = APIRouter(tags=["activity"])


@router.get("/automation-activity", response_model=ActivityFeed)
async def get_automation_activity(
    limit: int = Query(50, ge=1, le=500),
    service: ActivityService = Depends(get_activity_service)
):
    """
    Automation activity reconstructed from [AUTO] work note lines,
    most recent first
    """
    activities = await service.get_automation_activity(limit)
    return ActivityFeed(activities=activities, count=len(activities))


@router.get("/stats", response_model=IncidentStats)
async def stats(client: ServiceNowClient = Depends(get_servicenow_client)):
    """Intake ticket counts by lifecycle bucket"""
    return await get_stats(client)
