"""REST client for the external user-profile store.

Usage:
    from intent_resolver.gateway import DatabaseGateway

    async with DatabaseGateway(base_url="http://profiles:27017") as gateway:
        profile = await gateway.get_details("u1")
        print(profile.details)
"""

import time
from typing import Any

import httpx
from pydantic import ValidationError

from intent_resolver.config.models.gateway import GatewayConfig
from intent_resolver.gateway.errors import GatewayError
from intent_resolver.gateway.models import LinkCode, UserProfile, WriteResult
from intent_resolver.observability.logging import get_logger
from intent_resolver.observability.metrics import GATEWAY_ERRORS, GATEWAY_LATENCY

logger = get_logger(__name__)


class DatabaseGateway:
    """Async client for the profile store REST API.

    Every call is awaited to completion. Transport failures, timeouts,
    error statuses and unexpected bodies all surface as GatewayError.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:27017",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            base_url: Base URL of the profile store
            timeout: Request timeout in seconds
            transport: Optional transport, e.g. httpx.MockTransport in tests
        """
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_config(
        cls,
        config: GatewayConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "DatabaseGateway":
        return cls(
            base_url=config.base_url,
            timeout=config.timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> "DatabaseGateway":
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        json: dict | None = None,
        params: dict | None = None,
        allow_not_found: bool = False,
    ) -> httpx.Response | None:
        """Send one request and check its status.

        Returns None for a 404 when allow_not_found is set.
        """
        start = time.perf_counter()
        try:
            response = await self._client.request(
                method=method,
                url=path,
                json=json,
                params=params,
            )
        except httpx.HTTPError as e:
            GATEWAY_ERRORS.labels(operation=operation).inc()
            logger.warning(
                "gateway_request_failed",
                operation=operation,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise GatewayError(
                f"{operation} failed: {type(e).__name__}",
                operation=operation,
            ) from e
        finally:
            GATEWAY_LATENCY.labels(operation=operation).observe(
                time.perf_counter() - start
            )

        if allow_not_found and response.status_code == 404:
            return None

        if response.status_code >= 400:
            GATEWAY_ERRORS.labels(operation=operation).inc()
            logger.warning(
                "gateway_error_status",
                operation=operation,
                status_code=response.status_code,
            )
            raise GatewayError(
                f"{operation} returned status {response.status_code}",
                operation=operation,
                status_code=response.status_code,
                details=response.text,
            )

        logger.debug("gateway_request_ok", operation=operation, status_code=response.status_code)
        return response

    def _json(self, response: httpx.Response, operation: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            GATEWAY_ERRORS.labels(operation=operation).inc()
            raise GatewayError(
                f"{operation} returned a non-JSON body",
                operation=operation,
                status_code=response.status_code,
            ) from e

    def _parse(self, model: type, data: Any, operation: str):
        try:
            return model.model_validate(data)
        except ValidationError as e:
            GATEWAY_ERRORS.labels(operation=operation).inc()
            raise GatewayError(
                f"{operation} returned an unexpected body",
                operation=operation,
                details=e.errors(),
            ) from e

    async def _write(
        self, operation: str, method: str, path: str, json: dict | None = None
    ) -> WriteResult:
        response = await self._request(operation, method, path, json=json)
        return self._parse(WriteResult, self._json(response, operation), operation)

    # Details
    async def get_details(self, user_id: str) -> UserProfile:
        """Fetch a user's profile including all details."""
        response = await self._request("get_details", "GET", f"/users/{user_id}/detail")
        return self._parse(UserProfile, self._json(response, "get_details"), "get_details")

    async def set_detail(self, user_id: str, detail: str, value: str) -> None:
        """Store a single detail."""
        await self._request(
            "set_detail",
            "POST",
            f"/users/{user_id}/detail",
            json={"detail": detail, "value": value},
        )

    async def remove_details(self, user_id: str) -> None:
        """Delete the whole detail collection of a user."""
        await self._request("remove_details", "DELETE", f"/users/{user_id}/detail")

    async def remove_detail(self, user_id: str, detail: str) -> None:
        """Delete a single detail."""
        await self._request(
            "remove_detail",
            "DELETE",
            f"/users/{user_id}/detail",
            params={"q": detail},
        )

    # Linking codes
    async def issue_code(self, user_id: str, code: str, timestamp: int) -> WriteResult:
        """Store a linking code.

        The store answers `{retry: true}` when the code is still active
        for someone else.
        """
        return await self._write(
            "issue_code",
            "POST",
            "/users/register/code",
            json={"id": user_id, "code": code, "timestamp": timestamp},
        )

    async def lookup_code(self, code: str) -> LinkCode | None:
        """Find the record for a linking code, or None if there is none."""
        response = await self._request(
            "lookup_code",
            "GET",
            f"/users/register/code/{code}",
            allow_not_found=True,
        )
        if response is None:
            return None
        data = self._json(response, "lookup_code")
        if not data:
            return None
        return self._parse(LinkCode, data, "lookup_code")

    # Accounts
    async def get_user(self, user_id: str) -> UserProfile:
        """Fetch a user record."""
        response = await self._request("get_user", "GET", f"/users/{user_id}")
        return self._parse(UserProfile, self._json(response, "get_user"), "get_user")

    async def merge_accounts(
        self, main: dict[str, Any], requesting: dict[str, Any]
    ) -> WriteResult:
        """Combine two account records into the main one."""
        return await self._write(
            "merge_accounts",
            "POST",
            "/users/register/merge/",
            json={"users": [main, requesting]},
        )

    async def link_account(
        self, user: dict[str, Any], messenger: str, messenger_id: str
    ) -> WriteResult:
        """Attach a messenger identity to an account."""
        return await self._write(
            "link_account",
            "POST",
            "/users/register/",
            json={
                "user": user,
                "accountData": {"messenger": messenger, "id": messenger_id},
            },
        )

    async def delete_user(self, user_id: str) -> None:
        """Delete a user record."""
        await self._request("delete_user", "DELETE", f"/users/{user_id}")

    async def unlink_messenger(self, user: dict[str, Any], messenger: str) -> WriteResult:
        """Detach a messenger identity from an account."""
        return await self._write(
            "unlink_messenger",
            "DELETE",
            "/users/register/",
            json={"user": user, "messenger": messenger},
        )
