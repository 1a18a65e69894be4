"""
ServiceNow Table API Client

Provides resilient access to the ServiceNow record API for:
- Listing records with explicit filter, field selection and pagination
- Creating records
- Partial updates (PATCH, changed fields only)
- Deleting records

All four operations share one retry loop: 429 and 5xx responses are retried
with exponential backoff and jitter up to the configured attempt ceiling;
every other failure propagates immediately.
"""
import asyncio
from typing import Any, Dict, List, Optional, Sequence

import httpx

from intake_gateway.config import Settings, get_settings
from intake_gateway.exceptions import (
    RemoteClientError,
    RetryableRemoteError,
    TerminalRemoteError,
)
from intake_gateway.utils.logger import get_logger

logger = get_logger(__name__)

RETRYABLE_STATUS_CODES = frozenset({429})
DEFAULT_RECORD_FIELDS = ("sys_id", "number", "state")
MAX_PAGE_SIZE = 10000


def is_retryable_status(status_code: int) -> bool:
    """429 and every 5xx are transient; everything else is terminal"""
    return status_code in RETRYABLE_STATUS_CODES or 500 <= status_code <= 599


class ServiceNowClient:
    """
    ServiceNow Table API integration with retry logic and error handling
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        settings = settings or get_settings()
        self.base_url = settings.SERVICENOW_TABLE_URL
        self.timeout = settings.servicenow_timeout_seconds
        self.retry_policy = settings.retry_policy
        self.headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": settings.servicenow_user_agent
        }
        self.auth: Optional[tuple] = None

        if settings.servicenow_auth_mode == "basic":
            self.auth = (settings.servicenow_user, settings.servicenow_password)
        elif settings.servicenow_auth_mode == "oauth":
            self.headers["Authorization"] = f"Bearer {settings.servicenow_oauth_token}"
        elif settings.servicenow_auth_mode == "api_key":
            self.headers["x-sn-apikey"] = settings.servicenow_api_key

        self._transport = transport

    @staticmethod
    def _error_from_response(
        method: str,
        endpoint: str,
        response: httpx.Response
    ) -> RemoteClientError:
        """Classify a non-2xx response as retryable or terminal"""
        details: Dict[str, Any] = {"method": method, "endpoint": endpoint}
        try:
            body = response.json()
            error = body.get("error") if isinstance(body, dict) else None
            if isinstance(error, dict):
                details["remote_message"] = error.get("message")
                details["remote_detail"] = error.get("detail")
        except ValueError:
            pass

        message = f"ServiceNow {method} {endpoint} returned {response.status_code}"
        if is_retryable_status(response.status_code):
            return RetryableRemoteError(message, response.status_code, details)
        return TerminalRemoteError(message, response.status_code, details)

    async def _make_request(
        self,
        method: str,
        endpoint: str,
        **kwargs
    ) -> Dict[str, Any]:
        """
        Make HTTP request with retry logic

        Args:
            method: HTTP method (GET, POST, PATCH, DELETE)
            endpoint: Path below /api/now/table
            **kwargs: Additional arguments for httpx

        Returns:
            Response JSON (empty dict for bodiless responses)

        Raises:
            RetryableRemoteError: 429/5xx after the final attempt
            TerminalRemoteError: Any other failure, raised on first occurrence
        """
        url = f"{self.base_url}/{endpoint}"
        max_attempts = self.retry_policy.max_attempts

        for attempt in range(1, max_attempts + 1):
            try:
                async with httpx.AsyncClient(
                    timeout=self.timeout,
                    transport=self._transport
                ) as client:
                    response = await client.request(
                        method=method,
                        url=url,
                        auth=self.auth,
                        headers=self.headers,
                        **kwargs
                    )
                    response.raise_for_status()
                    if response.status_code == 204 or not response.content:
                        return {}
                    return response.json()

            except httpx.HTTPStatusError as e:
                error = self._error_from_response(method, endpoint, e.response)
                if not error.retryable:
                    logger.error(f"Request failed without retry: {error}")
                    raise error from e
                if not self.retry_policy.should_retry(attempt):
                    logger.error(
                        f"Request failed after {attempt} attempts, giving up: {error}"
                    )
                    raise error from e

                wait_time = self.retry_policy.backoff_delay(attempt)
                logger.warning(
                    f"Request failed (attempt {attempt}/{max_attempts}), "
                    f"retrying in {wait_time:.2f}s: {error}"
                )
                await asyncio.sleep(wait_time)

            except httpx.HTTPError as e:
                logger.error(f"Request failed: {method} {endpoint}: {e}")
                raise TerminalRemoteError(
                    f"ServiceNow {method} {endpoint} failed: {e}",
                    details={"method": method, "endpoint": endpoint}
                ) from e

            except ValueError as e:
                logger.error(f"Unreadable response from {method} {endpoint}: {e}")
                raise TerminalRemoteError(
                    f"ServiceNow {method} {endpoint} returned invalid JSON",
                    details={"method": method, "endpoint": endpoint}
                ) from e

        # Unreachable: the final attempt either returns or raises
        raise RetryableRemoteError(f"ServiceNow {method} {endpoint} exhausted retries")

    @staticmethod
    def _unwrap(payload: Dict[str, Any], expected: type, endpoint: str) -> Any:
        """Extract the `result` envelope returned by the Table API"""
        result = payload.get("result") if isinstance(payload, dict) else None
        if not isinstance(result, expected):
            raise TerminalRemoteError(
                f"ServiceNow {endpoint} response has no usable result",
                details={"endpoint": endpoint}
            )
        return result

    @staticmethod
    def _field_param(fields: Sequence[str]) -> str:
        if not fields:
            raise ValueError("An explicit field selection is required")
        return ",".join(fields)

    async def list(
        self,
        table: str,
        query: Optional[str],
        fields: Sequence[str],
        limit: int = 20,
        offset: int = 0
    ) -> List[Dict[str, Any]]:
        """
        List records matching an encoded query

        Args:
            table: Table name (e.g. "incident")
            query: Encoded query (sysparm_query); None or "" for no filter
            fields: Fields to return (never implicit)
            limit: Page size
            offset: Page offset

        Returns:
            List of record dictionaries
        """
        params: Dict[str, Any] = {
            "sysparm_fields": self._field_param(fields),
            "sysparm_limit": max(1, min(limit, MAX_PAGE_SIZE)),
            "sysparm_offset": max(0, offset),
            "sysparm_display_value": "false",
            "sysparm_exclude_reference_link": "true"
        }
        if query:
            params["sysparm_query"] = query

        logger.info(f"Listing {table} (limit={params['sysparm_limit']}, offset={params['sysparm_offset']})")
        payload = await self._make_request("GET", table, params=params)
        records = self._unwrap(payload, list, table)
        logger.info(f"Fetched {len(records)} {table} records")
        return records

    async def create(
        self,
        table: str,
        data: Dict[str, Any],
        fields: Sequence[str] = DEFAULT_RECORD_FIELDS
    ) -> Dict[str, Any]:
        """
        Create a record

        Args:
            table: Table name
            data: Field map for the new record
            fields: Fields to echo back

        Returns:
            Created record dictionary
        """
        logger.info(f"Creating {table} record with {len(data)} fields")
        payload = await self._make_request(
            "POST",
            table,
            params={"sysparm_fields": self._field_param(fields)},
            json=data
        )
        return self._unwrap(payload, dict, table)

    async def update(
        self,
        table: str,
        sys_id: str,
        changes: Dict[str, Any],
        fields: Sequence[str] = DEFAULT_RECORD_FIELDS
    ) -> Dict[str, Any]:
        """
        Partially update a record (only the given fields are sent)

        Args:
            table: Table name
            sys_id: Record sys_id
            changes: Changed fields only
            fields: Fields to echo back

        Returns:
            Updated record dictionary
        """
        if not changes:
            raise ValueError("A partial update needs at least one changed field")

        logger.info(f"Updating {table}/{sys_id} with {len(changes)} fields")
        payload = await self._make_request(
            "PATCH",
            f"{table}/{sys_id}",
            params={"sysparm_fields": self._field_param(fields)},
            json=changes
        )
        return self._unwrap(payload, dict, f"{table}/{sys_id}")

    async def delete(self, table: str, sys_id: str) -> None:
        """
        Delete a record

        Args:
            table: Table name
            sys_id: Record sys_id
        """
        logger.info(f"Deleting {table}/{sys_id}")
        await self._make_request("DELETE", f"{table}/{sys_id}")
