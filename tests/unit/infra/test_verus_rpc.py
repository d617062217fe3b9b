"""Tests for VerusRpcClient: JSON-RPC over a mocked HTTP transport."""

import base64
import json

import httpx
import pytest

from verusconnect.domain.enums import ErrorKind
from verusconnect.exceptions import RpcError
from verusconnect.infra.rpc.client import VerusRpcClient


def _client(credentials, handler) -> VerusRpcClient:
    return VerusRpcClient(credentials, transport=httpx.MockTransport(handler))


def _reply(payload, status=200):
    def handler(request: httpx.Request) -> httpx.Response:
        if isinstance(payload, str):
            return httpx.Response(status, text=payload)
        return httpx.Response(status, json=payload)

    return handler


class TestRequestShape:
    async def test_body_headers_and_auth(self, credentials):
        seen: list[httpx.Request] = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"result": 42, "error": None, "id": "x"})

        async with _client(credentials, handler) as rpc:
            assert await rpc.call("getblockcount") == 42

        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == "http://127.0.0.1:27486/"
        assert request.headers["content-type"] == "application/json"
        expected = base64.b64encode(b"alice:secret").decode()
        assert request.headers["authorization"] == f"Basic {expected}"
        body = json.loads(request.content)
        assert body == {"jsonrpc": "1.0", "method": "getblockcount", "params": [], "id": "verusconnect_1"}

    async def test_object_params_pass_through(self, credentials):
        seen = []

        def handler(request):
            seen.append(json.loads(request.content))
            return httpx.Response(200, json={"result": True, "id": "x"})

        async with _client(credentials, handler) as rpc:
            await rpc.call("getcurrency", {"name": "VRSC"})
        assert seen[0]["params"] == {"name": "VRSC"}

    async def test_ids_strictly_increase(self, credentials):
        ids = []

        def handler(request):
            ids.append(json.loads(request.content)["id"])
            return httpx.Response(200, json={"result": None, "id": ids[-1]})

        async with _client(credentials, handler) as rpc:
            for _ in range(1000):
                await rpc.call("ping")

        numbers = [int(i.removeprefix("verusconnect_")) for i in ids]
        assert numbers == list(range(1, 1001))


class TestResponseHandling:
    async def test_error_wins_over_result(self, credentials):
        payload = {"result": 1, "error": {"code": -5, "message": "Invalid address"}, "id": "x"}
        async with _client(credentials, _reply(payload)) as rpc:
            with pytest.raises(RpcError) as exc_info:
                await rpc.call("getaddressbalance", [{"addresses": ["bogus"]}])
        assert exc_info.value.kind is ErrorKind.INVALID_ADDRESS
        assert exc_info.value.code == -5

    async def test_unknown_daemon_code(self, credentials):
        payload = {"result": None, "error": {"code": -999, "message": "Weird"}, "id": "x"}
        async with _client(credentials, _reply(payload)) as rpc:
            with pytest.raises(RpcError) as exc_info:
                await rpc.call("anything")
        assert exc_info.value.kind is ErrorKind.RPC_CALL
        assert exc_info.value.detail == "Code -999: Weird"

    async def test_missing_result_as_optional(self, credentials):
        async with _client(credentials, _reply({"id": "x"})) as rpc:
            assert await rpc.call("closeoffers", result_type=int | None) is None

    async def test_missing_result_as_int_fails(self, credentials):
        async with _client(credentials, _reply({"result": None, "id": "x"})) as rpc:
            with pytest.raises(RpcError, match="No result field found for method: getblockcount") as exc_info:
                await rpc.call("getblockcount", result_type=int)
        assert exc_info.value.kind is ErrorKind.JSON_PARSE

    async def test_result_type_mismatch(self, credentials):
        async with _client(credentials, _reply({"result": "abc", "id": "x"})) as rpc:
            with pytest.raises(RpcError, match="Failed to deserialize result for getblockcount"):
                await rpc.call("getblockcount", result_type=int)

    async def test_bare_body_fallback(self, credentials):
        async with _client(credentials, _reply("12345")) as rpc:
            assert await rpc.call("getblockcount", result_type=int) == 12345

    async def test_unparseable_body(self, credentials):
        async with _client(credentials, _reply("<html>oops</html>")) as rpc:
            with pytest.raises(RpcError, match="Failed to parse response for getinfo") as exc_info:
                await rpc.call("getinfo", result_type=dict)
        assert exc_info.value.kind is ErrorKind.JSON_PARSE

    async def test_http_error_status(self, credentials):
        body = {"result": None, "error": {"code": -6, "message": "Insufficient funds"}, "id": "x"}
        async with _client(credentials, _reply(body, status=500)) as rpc:
            with pytest.raises(RpcError, match="HTTP 500") as exc_info:
                await rpc.call("sendcurrency")
        assert exc_info.value.kind is ErrorKind.RPC_CALL

    async def test_unauthorized_status(self, credentials):
        async with _client(credentials, _reply("", status=401)) as rpc:
            with pytest.raises(RpcError, match="HTTP 401") as exc_info:
                await rpc.call("getinfo")
        assert exc_info.value.kind is ErrorKind.RPC_CALL


class TestTransportFailures:
    async def test_connection_refused(self, credentials):
        def handler(request):
            raise httpx.ConnectError("Connection refused", request=request)

        async with _client(credentials, handler) as rpc:
            with pytest.raises(RpcError) as exc_info:
                await rpc.call("getinfo")
        assert exc_info.value.kind is ErrorKind.DAEMON_OFFLINE
        assert exc_info.value.should_retry

    async def test_timeout(self, credentials):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        async with _client(credentials, handler) as rpc:
            with pytest.raises(RpcError, match="Request timeout") as exc_info:
                await rpc.call("getinfo")
        assert exc_info.value.kind is ErrorKind.NETWORK


class TestConnectionCheck:
    async def test_uses_getinfo(self, credentials):
        methods = []

        def handler(request):
            methods.append(json.loads(request.content)["method"])
            return httpx.Response(200, json={"result": {"blocks": 1}, "id": "x"})

        async with _client(credentials, handler) as rpc:
            assert await rpc.test_connection() is True
        assert methods == ["getinfo"]
