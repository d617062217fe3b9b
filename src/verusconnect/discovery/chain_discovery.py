"""ChainDiscovery: daemon configs on disk turned into connection descriptors."""

import asyncio
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

import aiorwlock

from verusconnect.config import settings
from verusconnect.domain.models.chain import MAIN_CHAIN, TEST_CHAIN, ChainDescriptor, ChainIdentity
from verusconnect.domain.models.credentials import Credentials
from verusconnect.exceptions import RpcError
from verusconnect.infra.daemon_config import parse_config_file
from verusconnect.infra.paths import PathResolver, get_path_resolver
from verusconnect.infra.rpc.client import VerusRpcClient

logger = logging.getLogger(__name__)

ClientFactory = Callable[..., VerusRpcClient]

# Mainnet sibling names, used where listcurrencies on the main chain gives none.
SIBLING_FALLBACK_NAMES: dict[str, str] = {
    "e9e10955b7d16031e3d6f55d9c908a038e3ae47d": "VARRR",
    "53fe39eea8c06bba32f1a4e20db67e5524f0309d": "VDEX",
    "f315367528394674d45277e369629605a1c3ce9f": "CHIPS",
}

SIBLING_QUERY = [{"systemtype": "pbaas"}]


def _default_resolver() -> PathResolver:
    return get_path_resolver(
        main_root=settings.main_root_override,
        sibling_root=settings.sibling_root_override,
    )


def _parse_name_map(result: Any) -> dict[str, str]:
    """currencyidhex → name from a listcurrencies result. Raises ValueError if not a list."""
    if not isinstance(result, list):
        raise ValueError(f"expected a list, got {type(result).__name__}")
    names: dict[str, str] = {}
    for currency in result:
        definition = currency.get("currencydefinition") if isinstance(currency, dict) else None
        if not isinstance(definition, dict):
            continue
        hex_id = definition.get("currencyidhex")
        name = definition.get("name")
        if isinstance(hex_id, str) and isinstance(name, str):
            names[hex_id.lower()] = name
    return names


class ChainDiscovery:
    """Holds the descriptor list of the latest discovery pass behind a read/write lock.

    Each `discover()` rebuilds the list and swaps it in whole; `probe_all()` swaps in
    copies carrying fresh `is_active` flags.
    """

    def __init__(
        self,
        resolver_factory: Callable[[], PathResolver] | None = None,
        client_factory: ClientFactory | None = None,
        probe_timeout: float | None = None,
        resolve_names: bool | None = None,
    ) -> None:
        self._resolver_factory = resolver_factory or _default_resolver
        self._client_factory = client_factory or VerusRpcClient
        self._probe_timeout = probe_timeout if probe_timeout is not None else settings.probe_timeout_seconds
        self._resolve_names = resolve_names if resolve_names is not None else settings.resolve_sibling_names
        self._lock = aiorwlock.RWLock()
        self._chains: list[ChainDescriptor] = []

    # ---- reads ----

    async def chains(self) -> list[ChainDescriptor]:
        async with self._lock.reader:
            return list(self._chains)

    async def active_chains(self) -> list[ChainDescriptor]:
        async with self._lock.reader:
            return [c for c in self._chains if c.is_active]

    async def find(self, identity: ChainIdentity | str) -> ChainDescriptor | None:
        """Case-insensitive lookup in the held list."""
        wanted = ChainIdentity.parse(identity)
        async with self._lock.reader:
            return next((c for c in self._chains if c.identity == wanted), None)

    # ---- discovery pass ----

    async def discover(self) -> list[ChainDescriptor]:
        """Scan both config roots and replace the held list.

        Only an unresolvable root (unsupported OS) fails the call; a missing,
        unreadable or incomplete config file just drops that entry.
        """
        resolver = self._resolver_factory()
        main_root = resolver.main_chain_root()
        sibling_root = resolver.sibling_chain_root()

        chains = await asyncio.to_thread(self._scan_main_chains, resolver)
        siblings = await asyncio.to_thread(self._scan_sibling_chains, resolver)
        if siblings:
            await self._name_siblings(chains, siblings)
        chains.extend(siblings)

        async with self._lock.writer:
            self._chains = chains
        logger.info(
            "Discovered %d chain(s) under %s and %s: %s",
            len(chains), main_root, sibling_root, [c.name for c in chains],
        )
        return list(chains)

    def _scan_main_chains(self, resolver: PathResolver) -> list[ChainDescriptor]:
        found: list[ChainDescriptor] = []
        for identity in (MAIN_CHAIN, TEST_CHAIN):
            descriptor = self._load_descriptor(resolver.config_file(identity), identity)
            if descriptor is not None:
                found.append(descriptor)
        return found

    def _scan_sibling_chains(self, resolver: PathResolver) -> list[ChainDescriptor]:
        root = resolver.sibling_chain_root()
        if not root.is_dir():
            logger.debug("Sibling chain root %s does not exist", root)
            return []
        try:
            entries = sorted(p for p in root.iterdir() if p.is_dir())
        except OSError as e:
            logger.warning("Cannot list sibling chain root %s: %s", root, e)
            return []

        found: list[ChainDescriptor] = []
        for entry in entries:
            try:
                identity = ChainIdentity.parse(entry.name)
            except ValueError:
                continue
            # Always <entry>/<entry>.conf, even when the name matches a main-chain key.
            descriptor = self._load_descriptor(entry / f"{entry.name}.conf", identity)
            if descriptor is not None:
                found.append(descriptor)
        return found

    def _load_descriptor(self, config_path: Path, identity: ChainIdentity) -> ChainDescriptor | None:
        if not config_path.is_file():
            logger.debug("No config for %s at %s", identity, config_path)
            return None
        try:
            credentials = parse_config_file(config_path, identity)
        except RpcError as e:
            logger.warning("Skipping %s: %s", config_path, e)
            return None
        logger.debug("Parsed %s: %s:%d", config_path, credentials.host, credentials.port)
        return ChainDescriptor.fresh(identity, credentials)

    async def _name_siblings(self, main_chains: list[ChainDescriptor], siblings: list[ChainDescriptor]) -> None:
        """Set friendly display names. Never raises; falls back to the built-in table."""
        names: dict[str, str] = {}
        main = next((c for c in main_chains if c.identity == MAIN_CHAIN), None)
        if not self._resolve_names:
            logger.debug("Sibling name resolution disabled, using fallback names")
        elif main is None:
            logger.info("Main chain config not found, using fallback names")
        else:
            try:
                names = await self._fetch_sibling_names(main.credentials)
            except (RpcError, ValueError) as e:
                logger.info("listcurrencies on main chain failed (%s), using fallback names", e)

        for descriptor in siblings:
            key = descriptor.identity.key
            friendly = names.get(key) or SIBLING_FALLBACK_NAMES.get(key)
            if friendly:
                descriptor.display_name = friendly

    async def _fetch_sibling_names(self, credentials: Credentials) -> dict[str, str]:
        async with self._client_factory(credentials, timeout=self._probe_timeout) as client:
            result = await client.call("listcurrencies", SIBLING_QUERY)
        return _parse_name_map(result)

    # ---- liveness ----

    async def _probe(self, descriptor: ChainDescriptor) -> bool:
        try:
            async with self._client_factory(descriptor.credentials, timeout=self._probe_timeout) as client:
                await asyncio.wait_for(client.test_connection(), timeout=self._probe_timeout)
        except asyncio.TimeoutError:
            logger.info("Chain %s unreachable: probe timed out after %ss", descriptor.name, self._probe_timeout)
            return False
        except RpcError as e:
            logger.info("Chain %s unreachable: %s", descriptor.name, e)
            return False
        return True

    async def probe_all(self) -> list[ChainDescriptor]:
        """Probe every held descriptor concurrently, one disposable client each."""
        async with self._lock.reader:
            snapshot = self._chains
        results = await asyncio.gather(*(self._probe(c) for c in snapshot))
        probed = [c.model_copy(update={"is_active": ok}) for c, ok in zip(snapshot, results)]

        async with self._lock.writer:
            if self._chains is not snapshot:
                logger.info("Chain list replaced during probing, discarding stale results")
                return list(self._chains)
            self._chains = probed
        return list(probed)

    async def refresh(self) -> list[ChainDescriptor]:
        """Discovery pass followed by a probe of every result."""
        await self.discover()
        return await self.probe_all()
