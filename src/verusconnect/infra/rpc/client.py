"""Verus daemon JSON-RPC client: authenticated JSON-RPC 1.0 over HTTP/1.1."""

import functools
import itertools
import logging
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from verusconnect.config import settings
from verusconnect.domain.enums import ErrorKind
from verusconnect.domain.models.credentials import Credentials
from verusconnect.domain.models.rpc import RpcRequestEnvelope, RpcResponseEnvelope
from verusconnect.exceptions import RpcError

logger = logging.getLogger(__name__)

REQUEST_ID_PREFIX = "verusconnect_"


@functools.lru_cache(maxsize=128)
def _adapter(result_type: Any) -> TypeAdapter:
    return TypeAdapter(result_type)


class VerusRpcClient:
    """One daemon, one set of credentials. Holds no lock; ids come from an atomic counter."""

    def __init__(
        self,
        credentials: Credentials,
        timeout: float | None = None,
        connect_timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._credentials = credentials
        self._url = f"http://{credentials.host}:{credentials.port}/"
        self._ids = itertools.count(1)
        total = timeout if timeout is not None else settings.rpc_timeout_seconds
        connect = connect_timeout if connect_timeout is not None else min(total, settings.rpc_connect_timeout_seconds)
        self._client = httpx.AsyncClient(
            http1=True,
            http2=False,
            timeout=httpx.Timeout(total, connect=connect),
            auth=httpx.BasicAuth(credentials.username, credentials.password),
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    @property
    def url(self) -> str:
        return self._url

    def next_request_id(self) -> str:
        return f"{REQUEST_ID_PREFIX}{next(self._ids)}"

    async def call(self, method: str, params: list | dict | None = None, result_type: Any = Any) -> Any:
        """Execute one call and return `result` validated as `result_type`.

        Tolerates the daemon's dialect: a body that is not an envelope is parsed
        directly as the result, and a missing result is validated as None.
        """
        request = RpcRequestEnvelope(
            method=method,
            params=params if params is not None else [],
            id=self.next_request_id(),
        )
        logger.debug("RPC %s id=%s -> %s", method, request.id, self._url)

        try:
            resp = await self._client.post(self._url, content=request.model_dump_json())
        except httpx.HTTPError as e:
            raise RpcError.from_transport_error(e) from e

        if not resp.is_success:
            raise RpcError(ErrorKind.RPC_CALL, f"HTTP {resp.status_code} {resp.reason_phrase}: {resp.text}")

        body = resp.text
        adapter = _adapter(result_type)

        try:
            envelope = RpcResponseEnvelope.model_validate_json(body)
        except ValidationError:
            try:
                return adapter.validate_json(body)
            except ValidationError as e:
                raise RpcError(ErrorKind.JSON_PARSE, f"Failed to parse response for {method}: {e}") from e

        if envelope.error is not None:
            raise RpcError.from_daemon_error(envelope.error.code, envelope.error.message)

        if envelope.result is not None:
            try:
                return adapter.validate_python(envelope.result)
            except ValidationError as e:
                raise RpcError(ErrorKind.JSON_PARSE, f"Failed to deserialize result for {method}: {e}") from e

        # Some calls (e.g. closeoffers) succeed without a result field.
        try:
            return adapter.validate_python(None)
        except ValidationError as e:
            raise RpcError(ErrorKind.JSON_PARSE, f"No result field found for method: {method}") from e

    async def test_connection(self) -> bool:
        """Lightweight liveness check (`getinfo`)."""
        await self.call("getinfo", [])
        return True

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "VerusRpcClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
