"""
Pytest configuration and fixtures
"""
import pytest
from typing import Dict, Any


@pytest.fixture
def sample_intake_request() -> Dict[str, Any]:
    """Sample intake form submission (camelCase, as posted by the form)"""
    return {
        "client": "Acme Builders",
        "category": "Google Workspace – Account Access",
        "errorCode": "AUTH-401",
        "shortDescription": "Cannot login after password reset",
        "detailedDescription": "User is locked out since this morning.",
        "priority": "High",
        "clientEmail": "ops@acme.com",
    }


@pytest.fixture
def sample_incident_record() -> Dict[str, Any]:
    """Sample incident row as returned by the Table API"""
    return {
        "sys_id": "9d385017c611228701d22104cc95c371",
        "number": "INC0010001",
        "short_description": "Cannot login after password reset",
        "description": "User is locked out since this morning.\n\nClient: Acme Builders",
        "state": "1",
        "priority": "2",
        "category": "Google Workspace – Account Access",
        "sys_created_on": "2024-05-01 10:00:00",
    }
