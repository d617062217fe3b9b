"""CredentialVault: RPC credentials in the OS keychain via `keyring`.

One record per chain under a fixed service name; the account name is derived
from the chain key (`verusidx-<key>`). The stored value is the credentials as
JSON. Keyring backends are blocking, so every storage call runs in a worker
thread.
"""

import asyncio
import logging

import keyring
from keyring.backend import KeyringBackend
from keyring.errors import KeyringError
from pydantic import ValidationError

from verusconnect.config import settings
from verusconnect.domain.enums import KnownChain
from verusconnect.domain.models.chain import ChainIdentity
from verusconnect.domain.models.credentials import Credentials
from verusconnect.exceptions import RpcError

logger = logging.getLogger(__name__)

ACCOUNT_PREFIX = "verusidx-"


class CredentialVault:
    """Store / load / clear credentials per chain identity."""

    def __init__(self, service_name: str | None = None, backend: KeyringBackend | None = None) -> None:
        self._service_name = service_name or settings.vault_service_name
        self._backend = backend

    @property
    def service_name(self) -> str:
        return self._service_name

    def _keyring(self) -> KeyringBackend:
        return self._backend if self._backend is not None else keyring.get_keyring()

    @staticmethod
    def account_name(identity: ChainIdentity | KnownChain | str) -> str:
        return f"{ACCOUNT_PREFIX}{ChainIdentity.parse(identity).key}"

    @staticmethod
    def validate(credentials: Credentials) -> None:
        """Precondition check before storing. Raises CONFIGURATION on the first problem."""
        if not credentials.username.strip():
            raise RpcError.configuration("Username cannot be empty")
        if not credentials.password.strip():
            raise RpcError.configuration("Password cannot be empty")
        if not credentials.host.strip():
            raise RpcError.configuration("Host cannot be empty")
        if not 1 <= credentials.port <= 65535:
            raise RpcError.configuration("Port must be between 1 and 65535")

    # ---- blocking primitives (run via asyncio.to_thread) ----

    def _store_sync(self, account: str, credentials: Credentials) -> None:
        payload = credentials.model_dump_json()
        try:
            self._keyring().set_password(self._service_name, account, payload)
        except KeyringError as e:
            raise RpcError.configuration(f"Failed to store credentials: {e}") from e

    def _load_sync(self, account: str) -> Credentials:
        try:
            payload = self._keyring().get_password(self._service_name, account)
        except KeyringError as e:
            raise RpcError.configuration(f"Failed to load credentials: {e}") from e
        if payload is None:
            raise RpcError.configuration(f"Failed to load credentials: no entry for {account}")
        try:
            return Credentials.model_validate_json(payload)
        except ValidationError as e:
            raise RpcError.configuration(f"Failed to decode stored credentials for {account}") from e

    def _clear_sync(self, account: str) -> None:
        try:
            self._keyring().delete_password(self._service_name, account)
        except KeyringError as e:
            raise RpcError.configuration(f"Failed to clear credentials: {e}") from e

    def _has_sync(self, account: str) -> bool:
        try:
            return self._keyring().get_password(self._service_name, account) is not None
        except KeyringError as e:
            raise RpcError.configuration(f"Failed to query credentials: {e}") from e

    # ---- public API ----

    async def store(self, identity: ChainIdentity | KnownChain | str, credentials: Credentials) -> None:
        self.validate(credentials)
        account = self.account_name(identity)
        await asyncio.to_thread(self._store_sync, account, credentials)
        logger.info("Stored credentials for %s", account)

    async def load(self, identity: ChainIdentity | KnownChain | str) -> Credentials:
        """Any CONFIGURATION failure here means "no usable stored credentials"."""
        return await asyncio.to_thread(self._load_sync, self.account_name(identity))

    async def load_redacted(self, identity: ChainIdentity | KnownChain | str) -> dict:
        credentials = await self.load(identity)
        return credentials.redacted()

    async def clear(self, identity: ChainIdentity | KnownChain | str) -> None:
        account = self.account_name(identity)
        await asyncio.to_thread(self._clear_sync, account)
        logger.info("Cleared credentials for %s", account)

    async def has(self, identity: ChainIdentity | KnownChain | str) -> bool:
        return await asyncio.to_thread(self._has_sync, self.account_name(identity))

    async def list_present(self) -> list[ChainIdentity]:
        """Known chains with a stored record. Sibling ids must be looked up explicitly."""
        present: list[ChainIdentity] = []
        for chain in KnownChain:
            identity = ChainIdentity.parse(chain)
            if await self.has(identity):
                present.append(identity)
        return present
