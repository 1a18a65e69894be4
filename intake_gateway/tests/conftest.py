"""
Shared fixtures for intake gateway tests
"""
import json
from typing import Any, Callable, Dict, List

import httpx
import pytest
from unittest.mock import AsyncMock

from intake_gateway.config import Settings
from intake_gateway.models.schemas import ClientIncidentCreate
from intake_gateway.services.classification_rules import GOOGLE_WORKSPACE_ACCOUNT_ACCESS, OTHER
from intake_gateway.services.servicenow import ServiceNowClient

SYS_ID = "9d385017c611228701d22104cc95c371"


@pytest.fixture
def test_settings() -> Settings:
    """Deterministic settings: no .env, no jitter"""
    return Settings(
        _env_file=None,
        fastapi_env="test",
        servicenow_instance="https://dev12345.service-now.com/",
        servicenow_user="integration.user",
        servicenow_password="secret",
        retry_base_delay_seconds=0.5,
        retry_factor=2.0,
        retry_max_attempts=5,
        retry_jitter=0.0,
    )


class RecordingTransport:
    """
    httpx.MockTransport wrapper that replays canned responses in order
    and records every request it sees
    """

    def __init__(self, responses: List[Any]):
        self._responses = list(responses)
        self.requests: List[httpx.Request] = []
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        item = self._responses.pop(0) if len(self._responses) > 1 else self._responses[0]
        if isinstance(item, Exception):
            raise item
        if isinstance(item, int):
            return httpx.Response(item, json={"error": {"message": f"status {item}"}})
        return item

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def body(self, index: int = -1) -> Dict[str, Any]:
        return json.loads(self.requests[index].content)


@pytest.fixture
def make_client(test_settings) -> Callable[..., tuple]:
    """Build a ServiceNowClient backed by a RecordingTransport"""

    def _make(responses: List[Any], settings: Settings = None):
        recorder = RecordingTransport(responses)
        client = ServiceNowClient(settings=settings or test_settings, transport=recorder.transport)
        return client, recorder

    return _make


@pytest.fixture
def mock_servicenow() -> AsyncMock:
    """ServiceNowClient stand-in for service-level tests"""
    client = AsyncMock(spec=ServiceNowClient)
    client.create.return_value = {"sys_id": SYS_ID, "number": "INC0010001", "state": "1"}
    client.update.return_value = {"sys_id": SYS_ID}
    client.list.return_value = []
    return client


@pytest.fixture
def workspace_payload() -> ClientIncidentCreate:
    """Intake request for the automated Google Workspace category"""
    return ClientIncidentCreate(
        client="Acme Builders",
        category=GOOGLE_WORKSPACE_ACCOUNT_ACCESS,
        shortDescription="Cannot login after password reset",
        detailedDescription="User jane@acme.com is locked out since this morning.",
        priority="High",
        clientEmail="ops@acme.com",
    )


@pytest.fixture
def other_payload() -> ClientIncidentCreate:
    """Intake request for the generic Other category"""
    return ClientIncidentCreate(
        client="Acme Builders",
        category=OTHER,
        shortDescription="Question about invoice",
    )
