"""
Tests for category automations and the dispatcher
"""
import pytest
from unittest.mock import AsyncMock

from intake_gateway.exceptions import TerminalRemoteError
from intake_gateway.models.schemas import AutomationResult
from intake_gateway.services.automation import (
    AUTOMATIONS,
    AutomationDispatcher,
    automate_google_workspace_account_access,
)
from intake_gateway.services.classification_rules import (
    GOOGLE_WORKSPACE_ACCOUNT_ACCESS,
    GOOGLE_WORKSPACE_ACCOUNT_ACCESS_RESOURCES,
    OTHER,
)
from intake_gateway.services.mailer import AcknowledgementMailer, DeliveryReceipt

SYS_ID = "9d385017c611228701d22104cc95c371"


@pytest.fixture
def mailer() -> AsyncMock:
    mailer = AsyncMock(spec=AcknowledgementMailer)
    mailer.send.return_value = DeliveryReceipt(sent=False)
    return mailer


class TestGoogleWorkspaceAutomation:

    @pytest.mark.asyncio
    async def test_result_shape(self, mock_servicenow, mailer, workspace_payload):
        result = await automate_google_workspace_account_access(
            mock_servicenow, mailer, workspace_payload, SYS_ID, "INC0010001", "ops@acme.com"
        )

        assert result.classified is True
        assert result.topic == "Google Workspace Account Access"
        assert result.email_sent is False
        assert result.email_provider is None
        assert result.work_note_added is True
        assert result.enrichment.resources == GOOGLE_WORKSPACE_ACCOUNT_ACCESS_RESOURCES

    @pytest.mark.asyncio
    async def test_mailer_called_with_resolved_email(self, mock_servicenow, mailer, workspace_payload):
        await automate_google_workspace_account_access(
            mock_servicenow, mailer, workspace_payload, SYS_ID, "INC0010001", "ops@acme.com"
        )

        mailer.send.assert_awaited_once_with(
            "ops@acme.com",
            "INC0010001",
            "Google Workspace Account Access",
            GOOGLE_WORKSPACE_ACCOUNT_ACCESS_RESOURCES
        )

    @pytest.mark.asyncio
    async def test_no_email_skips_mailer(self, mock_servicenow, mailer, workspace_payload):
        result = await automate_google_workspace_account_access(
            mock_servicenow, mailer, workspace_payload, SYS_ID, "INC0010001", None
        )

        mailer.send.assert_not_awaited()
        assert result.email_sent is False
        assert result.work_note_added is True

    @pytest.mark.asyncio
    async def test_work_note_content(self, mock_servicenow, mailer, workspace_payload):
        await automate_google_workspace_account_access(
            mock_servicenow, mailer, workspace_payload, SYS_ID, "INC0010001", "ops@acme.com"
        )

        table, sys_id, changes = mock_servicenow.update.await_args.args
        note = changes["work_notes"]
        assert (table, sys_id) == ("incident", SYS_ID)
        assert note.startswith("[AUTO] Classified as 'Google Workspace Account Access'")
        assert "Acknowledgement email not sent (no email provider configured)." in note
        assert "Reset Google Workspace User Password" in note

    @pytest.mark.asyncio
    async def test_sent_receipt_reported(self, mock_servicenow, mailer, workspace_payload):
        mailer.send.return_value = DeliveryReceipt(sent=True, provider="smtp")

        result = await automate_google_workspace_account_access(
            mock_servicenow, mailer, workspace_payload, SYS_ID, "INC0010001", "ops@acme.com"
        )

        assert result.email_sent is True
        assert result.email_provider == "smtp"
        note = mock_servicenow.update.await_args.args[2]["work_notes"]
        assert "Acknowledgement email sent to ops@acme.com." in note

    @pytest.mark.asyncio
    async def test_work_note_failure_is_not_fatal(self, mock_servicenow, mailer, workspace_payload):
        mock_servicenow.update.side_effect = TerminalRemoteError("forbidden", status_code=403)

        result = await automate_google_workspace_account_access(
            mock_servicenow, mailer, workspace_payload, SYS_ID, "INC0010001", None
        )

        assert result.classified is True
        assert result.work_note_added is False

    @pytest.mark.asyncio
    async def test_stub_mailer_never_sends(self, mock_servicenow, workspace_payload):
        result = await automate_google_workspace_account_access(
            mock_servicenow, AcknowledgementMailer(), workspace_payload, SYS_ID, "INC0010001", "ops@acme.com"
        )
        assert result.email_sent is False


class TestAutomationDispatcher:

    def test_registry_contents(self):
        assert list(AUTOMATIONS) == [GOOGLE_WORKSPACE_ACCOUNT_ACCESS]

    def test_registry_is_read_only(self):
        with pytest.raises(TypeError):
            AUTOMATIONS[OTHER] = automate_google_workspace_account_access

    def test_has_automation(self, mock_servicenow):
        dispatcher = AutomationDispatcher(mock_servicenow)

        assert dispatcher.has_automation(GOOGLE_WORKSPACE_ACCOUNT_ACCESS)
        assert not dispatcher.has_automation(OTHER)

    @pytest.mark.asyncio
    async def test_run_automation(self, mock_servicenow, mailer, workspace_payload):
        dispatcher = AutomationDispatcher(mock_servicenow, mailer)

        result = await dispatcher.run_automation(workspace_payload, SYS_ID, "INC0010001", "ops@acme.com")

        assert isinstance(result, AutomationResult)
        assert result.topic == "Google Workspace Account Access"

    @pytest.mark.asyncio
    async def test_run_unknown_category(self, mock_servicenow, other_payload):
        dispatcher = AutomationDispatcher(mock_servicenow)

        with pytest.raises(KeyError):
            await dispatcher.run_automation(other_payload, SYS_ID)

    @pytest.mark.asyncio
    async def test_custom_registry(self, mock_servicenow, mailer, other_payload):
        expected = AsyncMock()
        dispatcher = AutomationDispatcher(mock_servicenow, mailer, registry={OTHER: expected})

        await dispatcher.run_automation(other_payload, SYS_ID, "INC0010002", None)

        expected.assert_awaited_once_with(
            mock_servicenow, mailer, other_payload, SYS_ID, "INC0010002", None
        )
