"""RemoteStore Client — async httpx wrapper over the employee/leave REST contract.

Invariants:
    - Every call is a single request: no retries, no cancellation, no queueing
    - Transport failures and undecodable read bodies → RemoteUnavailableError
    - Non-success responses → RemoteRejectedError carrying the decoded ErrorEnvelope
    - Successful bodies are decoded into core models before they leave this module
    - Any 2xx mutation is a success; an undecodable echo yields None, never an error

Design Decisions:
    - Wrapper over raw client: isolates wire concerns from loader/coordinator
    - No timeout of its own: None keeps httpx's default timeout behavior
    - transport injectable: tests swap in httpx.MockTransport
"""

import logging
from typing import Any

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError as SchemaValidationError

from leavesys.core.models import Employee, LeaveRequest
from leavesys.schemas.remote import (
    EmployeeList,
    EmployeeRecord,
    ErrorEnvelope,
    LeaveList,
    LeaveRecord,
    NewEmployeePayload,
    NewLeavePayload,
    StatusUpdatePayload,
    to_wire,
)

logger = logging.getLogger(__name__)


class RemoteStoreError(Exception):
    """Base for failures talking to RemoteStore."""

    def __init__(
        self, message: str, endpoint: str, status_code: int | None = None,
        envelope: ErrorEnvelope | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.endpoint = endpoint
        self.status_code = status_code
        self.envelope = envelope or ErrorEnvelope()


class RemoteRejectedError(RemoteStoreError):
    """RemoteStore answered with a non-success status."""


class RemoteUnavailableError(RemoteStoreError):
    """Request never completed, or the response body could not be decoded."""


class RemoteStoreClient:
    """Client for the RemoteStore employee/leave API.

    Supports async context manager protocol:
        async with RemoteStoreClient(url) as store:
            employees = await store.list_employees()
    """

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        kwargs: dict[str, Any] = {"base_url": base_url}
        if timeout_seconds is not None:
            kwargs["timeout"] = timeout_seconds
        if transport is not None:
            kwargs["transport"] = transport
        self.client = httpx.AsyncClient(**kwargs)

    async def __aenter__(self) -> "RemoteStoreClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    # --- Reads ----------------------------------------------------------------

    async def list_employees(self) -> list[Employee]:
        data = await self._request("GET", "/employees")
        records = self._decode(EmployeeList, data, "/employees")
        return [r.to_domain() for r in records]

    async def list_leaves(self) -> list[LeaveRequest]:
        data = await self._request("GET", "/leaves")
        records = self._decode(LeaveList, data, "/leaves")
        return [r.to_domain() for r in records]

    async def get_employee_balance(self, employee_id: int) -> Employee:
        endpoint = f"/employees/{employee_id}/balance"
        data = await self._request("GET", endpoint)
        return self._decode(_EMPLOYEE, data, endpoint).to_domain()

    # --- Mutations ------------------------------------------------------------

    async def create_employee(self, payload: NewEmployeePayload) -> Employee | None:
        return await self._mutate("POST", "/employees", _EMPLOYEE, to_wire(payload))

    async def create_leave(self, payload: NewLeavePayload) -> LeaveRequest | None:
        return await self._mutate("POST", "/leaves", _LEAVE, to_wire(payload))

    async def update_leave_status(
        self, leave_id: int, payload: StatusUpdatePayload,
    ) -> LeaveRequest | None:
        endpoint = f"/leaves/{leave_id}/status"
        return await self._mutate("PUT", endpoint, _LEAVE, to_wire(payload))

    # --- Plumbing -------------------------------------------------------------

    async def _mutate(
        self, method: str, endpoint: str, adapter: TypeAdapter, body: dict,
    ):
        """Send a mutation. Any 2xx is success; the echoed record is optional."""
        data = await self._request(method, endpoint, body, require_json=False)
        try:
            return adapter.validate_python(data).to_domain()
        except SchemaValidationError:
            logger.warning(
                "RemoteStore accepted the request without a usable record",
                extra={"endpoint": endpoint, "method": method},
            )
            return None

    async def _request(
        self, method: str, endpoint: str, body: dict | None = None,
        require_json: bool = True,
    ) -> Any:
        """Send one request and return the decoded JSON body."""
        try:
            response = await self.client.request(method, endpoint, json=body)
        except httpx.HTTPError as e:
            logger.warning(
                f"RemoteStore unreachable: {e}",
                extra={"endpoint": endpoint, "method": method},
            )
            raise RemoteUnavailableError(
                f"Could not reach RemoteStore: {e}", endpoint,
            ) from e

        if not response.is_success:
            envelope = ErrorEnvelope.from_body(_json_or_none(response))
            logger.info(
                f"RemoteStore rejected request: {envelope.message}",
                extra={
                    "endpoint": endpoint, "method": method,
                    "status_code": response.status_code,
                },
            )
            raise RemoteRejectedError(
                envelope.message_or(f"HTTP {response.status_code}"),
                endpoint, response.status_code, envelope,
            )

        if not require_json:
            return _json_or_none(response)
        try:
            return response.json()
        except ValueError as e:
            raise RemoteUnavailableError(
                "RemoteStore returned a non-JSON body", endpoint,
                response.status_code,
            ) from e

    def _decode(self, adapter: TypeAdapter, data: Any, endpoint: str):
        try:
            return adapter.validate_python(data)
        except SchemaValidationError as e:
            logger.error(
                f"Malformed RemoteStore payload: {e.error_count()} error(s)",
                extra={"endpoint": endpoint},
            )
            raise RemoteUnavailableError(
                "RemoteStore returned a malformed payload", endpoint,
            ) from e


_EMPLOYEE = TypeAdapter(EmployeeRecord)
_LEAVE = TypeAdapter(LeaveRecord)


def _json_or_none(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None
