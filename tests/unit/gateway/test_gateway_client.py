"""Tests for the profile store REST client."""

import json
from collections.abc import Callable

import httpx
import pytest

from intent_resolver.config.models.gateway import GatewayConfig
from intent_resolver.gateway import DatabaseGateway, GatewayError


class RecordingStore:
    """Canned profile store that records every request it receives."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []
        self._handler = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> dict:
        return json.loads(self.last.content)


def make_gateway(handler: Callable[[httpx.Request], httpx.Response]) -> tuple[DatabaseGateway, RecordingStore]:
    store = RecordingStore(handler)
    gateway = DatabaseGateway(base_url="http://db.test", transport=httpx.MockTransport(store))
    return gateway, store


class TestDetails:
    """Tests for detail operations."""

    @pytest.mark.asyncio
    async def test_get_details_parses_profile(self) -> None:
        """The profile body is parsed, including camelCase names."""
        gateway, store = make_gateway(
            lambda request: httpx.Response(
                200,
                json={
                    "id": "u1",
                    "firstName": "Ada",
                    "details": {"home": "Berlin"},
                    "messengerIdentities": [{"messenger": "telegram", "id": "tg"}],
                },
            )
        )
        async with gateway:
            profile = await gateway.get_details("u1")

        assert store.last.method == "GET"
        assert store.last.url.path == "/users/u1/detail"
        assert profile.first_name == "Ada"
        assert profile.details == {"home": "Berlin"}
        assert profile.to_record()["messengerIdentities"] == [
            {"messenger": "telegram", "id": "tg"}
        ]

    @pytest.mark.asyncio
    async def test_set_detail_posts_body(self) -> None:
        """Details are stored as {detail, value}."""
        gateway, store = make_gateway(lambda request: httpx.Response(200, text="OK"))
        async with gateway:
            await gateway.set_detail("u1", "home", "Berlin")

        assert store.last.method == "POST"
        assert store.last.url.path == "/users/u1/detail"
        assert store.last_json() == {"detail": "home", "value": "Berlin"}

    @pytest.mark.asyncio
    async def test_remove_single_detail_uses_query(self) -> None:
        """A single detail is addressed with ?q=<name>."""
        gateway, store = make_gateway(lambda request: httpx.Response(200))
        async with gateway:
            await gateway.remove_detail("u1", "home")

        assert store.last.method == "DELETE"
        assert store.last.url.path == "/users/u1/detail"
        assert store.last.url.params["q"] == "home"

    @pytest.mark.asyncio
    async def test_remove_all_details_has_no_query(self) -> None:
        """The whole collection is removed without a query."""
        gateway, store = make_gateway(lambda request: httpx.Response(200))
        async with gateway:
            await gateway.remove_details("u1")

        assert store.last.method == "DELETE"
        assert store.last.url.path == "/users/u1/detail"
        assert "q" not in store.last.url.params


class TestLinking:
    """Tests for code and account operations."""

    @pytest.mark.asyncio
    async def test_issue_code_acknowledged(self) -> None:
        """An acknowledged insert is reported as such."""
        gateway, store = make_gateway(
            lambda request: httpx.Response(200, json={"ok": 1, "insertedCount": 1})
        )
        async with gateway:
            result = await gateway.issue_code("u1", "004711", 1_700_000_000_000)

        assert store.last.url.path == "/users/register/code"
        assert store.last_json() == {"id": "u1", "code": "004711", "timestamp": 1_700_000_000_000}
        assert result.acknowledged_insert is True
        assert result.retry is False

    @pytest.mark.asyncio
    async def test_issue_code_retry_signal(self) -> None:
        """A collision is reported through the retry flag."""
        gateway, _ = make_gateway(lambda request: httpx.Response(200, json={"retry": True}))
        async with gateway:
            result = await gateway.issue_code("u1", "004711", 0)

        assert result.retry is True
        assert result.acknowledged_insert is False

    @pytest.mark.asyncio
    async def test_lookup_code_parses_record(self) -> None:
        """Code records map time/userid onto the model."""
        gateway, store = make_gateway(
            lambda request: httpx.Response(
                200, json={"code": 4711, "time": 1_700_000_000_000, "userid": "main"}
            )
        )
        async with gateway:
            record = await gateway.lookup_code("004711")

        assert store.last.url.path == "/users/register/code/004711"
        assert record.code == "4711"
        assert record.issued_at_millis == 1_700_000_000_000
        assert record.user_id == "main"

    @pytest.mark.asyncio
    async def test_lookup_code_not_found(self) -> None:
        """A 404 means there is no record."""
        gateway, _ = make_gateway(lambda request: httpx.Response(404))
        async with gateway:
            assert await gateway.lookup_code("123456") is None

    @pytest.mark.asyncio
    async def test_lookup_code_empty_body(self) -> None:
        """An empty record means there is no record."""
        gateway, _ = make_gateway(lambda request: httpx.Response(200, json={}))
        async with gateway:
            assert await gateway.lookup_code("123456") is None

    @pytest.mark.asyncio
    async def test_merge_accounts_body(self) -> None:
        """Merging sends both records, main first."""
        gateway, store = make_gateway(
            lambda request: httpx.Response(200, json={"ok": 1, "nModified": 1})
        )
        async with gateway:
            result = await gateway.merge_accounts({"id": "main"}, {"id": "shadow"})

        assert store.last.method == "POST"
        assert store.last.url.path == "/users/register/merge/"
        assert store.last_json() == {"users": [{"id": "main"}, {"id": "shadow"}]}
        assert result.acknowledged_update is True

    @pytest.mark.asyncio
    async def test_link_account_body(self) -> None:
        """Linking sends the main record and the identity to attach."""
        gateway, store = make_gateway(
            lambda request: httpx.Response(200, json={"ok": 1, "nModified": 0})
        )
        async with gateway:
            result = await gateway.link_account({"id": "main"}, "slack", "sl-1")

        assert store.last.url.path == "/users/register/"
        assert store.last_json() == {
            "user": {"id": "main"},
            "accountData": {"messenger": "slack", "id": "sl-1"},
        }
        assert result.acknowledged_update is False

    @pytest.mark.asyncio
    async def test_unlink_messenger_sends_delete_with_body(self) -> None:
        """Unlinking is a DELETE carrying {user, messenger}."""
        gateway, store = make_gateway(
            lambda request: httpx.Response(200, json={"ok": 1, "nModified": 1})
        )
        async with gateway:
            result = await gateway.unlink_messenger({"id": "u1"}, "telegram")

        assert store.last.method == "DELETE"
        assert store.last.url.path == "/users/register/"
        assert store.last_json() == {"user": {"id": "u1"}, "messenger": "telegram"}
        assert result.acknowledged_update is True

    @pytest.mark.asyncio
    async def test_delete_user(self) -> None:
        """Users are deleted by id."""
        gateway, store = make_gateway(lambda request: httpx.Response(200))
        async with gateway:
            await gateway.delete_user("shadow")

        assert store.last.method == "DELETE"
        assert store.last.url.path == "/users/shadow"


class TestErrors:
    """Tests for failure handling."""

    @pytest.mark.asyncio
    async def test_error_status_raises(self) -> None:
        """Statuses >= 400 raise GatewayError with the status."""
        gateway, _ = make_gateway(lambda request: httpx.Response(500, text="boom"))
        async with gateway:
            with pytest.raises(GatewayError) as exc_info:
                await gateway.get_user("u1")

        assert exc_info.value.status_code == 500
        assert exc_info.value.operation == "get_user"

    @pytest.mark.asyncio
    async def test_not_found_raises_outside_code_lookup(self) -> None:
        """Only the code lookup treats 404 as an empty result."""
        gateway, _ = make_gateway(lambda request: httpx.Response(404))
        async with gateway:
            with pytest.raises(GatewayError):
                await gateway.get_details("u1")

    @pytest.mark.asyncio
    async def test_transport_error_raises(self) -> None:
        """Network failures surface as GatewayError."""

        def fail(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        gateway, _ = make_gateway(fail)
        async with gateway:
            with pytest.raises(GatewayError, match="ConnectError"):
                await gateway.delete_user("u1")

    @pytest.mark.asyncio
    async def test_timeout_raises(self) -> None:
        """Late responses count as failures."""

        def hang(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("too slow", request=request)

        gateway, _ = make_gateway(hang)
        async with gateway:
            with pytest.raises(GatewayError):
                await gateway.issue_code("u1", "123456", 0)

    @pytest.mark.asyncio
    async def test_non_json_body_raises(self) -> None:
        """Bodies that should be JSON but are not raise GatewayError."""
        gateway, _ = make_gateway(lambda request: httpx.Response(200, text="<html>"))
        async with gateway:
            with pytest.raises(GatewayError, match="non-JSON"):
                await gateway.issue_code("u1", "123456", 0)

    @pytest.mark.asyncio
    async def test_unexpected_shape_raises(self) -> None:
        """Code records missing fields raise GatewayError."""
        gateway, _ = make_gateway(lambda request: httpx.Response(200, json={"code": "1"}))
        async with gateway:
            with pytest.raises(GatewayError, match="unexpected"):
                await gateway.lookup_code("1")


class TestFromConfig:
    """Tests for configuration-based construction."""

    def test_uses_configured_base_url(self) -> None:
        """Trailing slashes are dropped from the base URL."""
        gateway = DatabaseGateway.from_config(
            GatewayConfig(base_url="http://profiles:27017/", timeout_seconds=2.0)
        )
        assert gateway.base_url == "http://profiles:27017"
