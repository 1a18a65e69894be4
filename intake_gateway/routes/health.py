"""
Health check endpoint
"""
from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health")
async def health():
    """Liveness probe; does not contact ServiceNow"""
    return {"status": "ok"}
