"""ConnectionSlot: the single active RPC client the app talks to."""

import logging
from collections.abc import Callable
from typing import Any

import aiorwlock
from tenacity import AsyncRetrying, retry_if_exception, stop_after_attempt, wait_exponential
from tenacity.wait import wait_base

from verusconnect.discovery.chain_discovery import ChainDiscovery
from verusconnect.domain.enums import ErrorKind
from verusconnect.domain.models.chain import ChainIdentity
from verusconnect.domain.models.credentials import Credentials
from verusconnect.exceptions import RpcError
from verusconnect.infra.rpc.client import VerusRpcClient
from verusconnect.infra.vault.credential_vault import CredentialVault

logger = logging.getLogger(__name__)


def _should_retry(exc: BaseException) -> bool:
    return isinstance(exc, RpcError) and exc.should_retry


class ConnectionSlot:
    """Holds at most one connected client. Calls share the slot; connect/disconnect replace it."""

    def __init__(self, client_factory: Callable[..., VerusRpcClient] | None = None) -> None:
        self._client_factory = client_factory or VerusRpcClient
        self._lock = aiorwlock.RWLock()
        self._client: VerusRpcClient | None = None
        self._identity: ChainIdentity | None = None

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    @property
    def active_identity(self) -> ChainIdentity | None:
        return self._identity

    def active_credentials(self) -> dict[str, Any] | None:
        client = self._client
        return client.credentials.redacted() if client is not None else None

    async def connect_to_chain(self, discovery: ChainDiscovery, identity: ChainIdentity | str) -> None:
        """Connect using the credentials of a discovered, active chain."""
        identity = ChainIdentity.parse(identity)
        descriptor = await discovery.find(identity)
        if descriptor is None:
            available = ", ".join(c.name for c in await discovery.chains()) or "none"
            raise RpcError.configuration(f"Chain '{identity}' not found. Available: {available}")
        if not descriptor.is_active:
            raise RpcError(ErrorKind.CONNECTION, "Chain is not active/reachable")
        await self._swap_in(descriptor.identity, descriptor.credentials)

    async def connect_manual(self, credentials: Credentials, identity: ChainIdentity | str | None = None) -> None:
        CredentialVault.validate(credentials)
        await self._swap_in(ChainIdentity.parse(identity) if identity is not None else None, credentials)

    async def connect_stored(self, vault: CredentialVault, identity: ChainIdentity | str) -> None:
        identity = ChainIdentity.parse(identity)
        credentials = await vault.load(identity)
        CredentialVault.validate(credentials)
        await self._swap_in(identity, credentials)

    async def _swap_in(self, identity: ChainIdentity | None, credentials: Credentials) -> None:
        client = self._client_factory(credentials)
        try:
            await client.test_connection()
        except RpcError:
            await client.close()
            raise

        async with self._lock.writer:
            previous, self._client, self._identity = self._client, client, identity
        if previous is not None:
            await previous.close()
        logger.info("Connected to %s", identity or credentials.sanitize_for_logging())

    async def disconnect(self) -> None:
        async with self._lock.writer:
            previous, self._client, self._identity = self._client, None, None
        if previous is not None:
            await previous.close()
            logger.info("Disconnected")

    async def call(self, method: str, params: list | dict | None = None, result_type: Any = Any) -> Any:
        async with self._lock.reader:
            if self._client is None:
                raise RpcError(ErrorKind.CONNECTION, "No active RPC connection")
            return await self._client.call(method, params, result_type)

    async def call_with_retry(
        self,
        method: str,
        params: list | dict | None = None,
        result_type: Any = Any,
        attempts: int = 3,
        wait: wait_base | None = None,
    ) -> Any:
        """`call`, retried while the error kind says a retry may help."""
        async for attempt in AsyncRetrying(
            retry=retry_if_exception(_should_retry),
            stop=stop_after_attempt(attempts),
            wait=wait if wait is not None else wait_exponential(multiplier=1, min=1, max=10),
            reraise=True,
        ):
            with attempt:
                return await self.call(method, params, result_type)
