"""
Tests for idempotent incident resolution
"""
import pytest

from intake_gateway.exceptions import (
    ConfigurationError,
    NotFoundError,
    RetryableRemoteError,
    TerminalRemoteError,
)
from intake_gateway.services.resolution import RESOLUTION_FIELDS, ResolutionService

SYS_ID = "9d385017c611228701d22104cc95c371"


@pytest.fixture
def service(mock_servicenow, test_settings) -> ResolutionService:
    return ResolutionService(mock_servicenow, settings=test_settings)


def open_incident(**overrides):
    record = {"sys_id": SYS_ID, "number": "INC0010001", "state": "2"}
    record.update(overrides)
    return record


class TestResolveIncident:

    @pytest.mark.asyncio
    async def test_resolves_open_incident(self, service, mock_servicenow):
        mock_servicenow.list.return_value = [open_incident()]
        mock_servicenow.update.return_value = open_incident(
            state="2", close_code="Solution provided", close_notes="Fixed"
        )

        result = await service.resolve_incident(SYS_ID, "Fixed")

        assert result.state == "6"
        assert result.already_resolved is False
        assert result.close_code == "Solution provided"
        mock_servicenow.update.assert_awaited_once_with(
            "incident",
            SYS_ID,
            {"state": "6", "close_code": "Solution provided", "close_notes": "Fixed"},
            fields=RESOLUTION_FIELDS
        )

    @pytest.mark.asyncio
    async def test_lookup_query(self, service, mock_servicenow):
        mock_servicenow.list.return_value = [open_incident()]

        await service.resolve_incident(SYS_ID)

        args = mock_servicenow.list.await_args
        assert args.args == ("incident", f"sys_id={SYS_ID}")
        assert args.kwargs["limit"] == 1

    @pytest.mark.asyncio
    async def test_default_note(self, service, mock_servicenow):
        mock_servicenow.list.return_value = [open_incident()]

        await service.resolve_incident(SYS_ID)

        changes = mock_servicenow.update.await_args.args[2]
        assert changes["close_notes"] == "Resolved via knowledge deflection."

    @pytest.mark.asyncio
    async def test_explicit_empty_note_is_kept(self, service, mock_servicenow):
        mock_servicenow.list.return_value = [open_incident()]

        await service.resolve_incident(SYS_ID, "")

        changes = mock_servicenow.update.await_args.args[2]
        assert changes["close_notes"] == ""

    @pytest.mark.asyncio
    async def test_second_call_is_idempotent(self, service, mock_servicenow):
        """Resolving twice issues exactly one update"""
        mock_servicenow.list.return_value = [open_incident()]
        first = await service.resolve_incident(SYS_ID)

        mock_servicenow.list.return_value = [open_incident(state="6", close_code="Solution provided")]
        second = await service.resolve_incident(SYS_ID)

        assert first.already_resolved is False
        assert second.already_resolved is True
        assert second.state == "6"
        assert mock_servicenow.update.await_count == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("state", ["6", "7", 6, 7])
    async def test_terminal_states_not_updated(self, service, mock_servicenow, state):
        mock_servicenow.list.return_value = [open_incident(state=state)]

        result = await service.resolve_incident(SYS_ID)

        assert result.already_resolved is True
        assert result.state == str(state)
        mock_servicenow.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_incident(self, service, mock_servicenow):
        mock_servicenow.list.return_value = []

        with pytest.raises(NotFoundError) as exc_info:
            await service.resolve_incident(SYS_ID)

        assert exc_info.value.message == f"Incident {SYS_ID} not found"
        mock_servicenow.update.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("sys_id", ["", "abc", "9D385017C611228701D22104CC95C371", "../incident"])
    async def test_malformed_sys_id_skips_remote(self, service, mock_servicenow, sys_id):
        with pytest.raises(NotFoundError):
            await service.resolve_incident(sys_id)

        mock_servicenow.list.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rejected_close_code(self, service, mock_servicenow):
        mock_servicenow.list.return_value = [open_incident()]
        mock_servicenow.update.side_effect = TerminalRemoteError("bad request", status_code=400)

        with pytest.raises(ConfigurationError) as exc_info:
            await service.resolve_incident(SYS_ID)

        assert "Solution provided" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_other_update_failures_propagate(self, service, mock_servicenow):
        mock_servicenow.list.return_value = [open_incident()]
        mock_servicenow.update.side_effect = RetryableRemoteError("unavailable", status_code=503)

        with pytest.raises(RetryableRemoteError):
            await service.resolve_incident(SYS_ID)
