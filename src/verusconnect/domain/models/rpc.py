"""Wire envelopes for the daemon's JSON-RPC 1.0 dialect."""

from typing import Any

from pydantic import BaseModel, Field


class RpcRequestEnvelope(BaseModel):
    jsonrpc: str = "1.0"
    method: str
    params: list[Any] | dict[str, Any] = Field(default_factory=list)
    id: str | int | None


class RpcErrorObject(BaseModel):
    code: int
    message: str
    data: Any = None


class RpcResponseEnvelope(BaseModel):
    """Daemon response. Unlike the request, it carries no `jsonrpc` tag."""

    result: Any = None
    error: RpcErrorObject | None = None
    id: str | int | None
