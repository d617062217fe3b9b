from dependency_injector import containers, providers

from verusconnect.config import Settings
from verusconnect.discovery.chain_discovery import ChainDiscovery
from verusconnect.infra.paths import get_path_resolver
from verusconnect.infra.vault.credential_vault import CredentialVault
from verusconnect.session.connection import ConnectionSlot


class Container(containers.DeclarativeContainer):
    settings = providers.Singleton(Settings)

    path_resolver = providers.Factory(
        get_path_resolver,
        main_root=settings.provided.main_root_override,
        sibling_root=settings.provided.sibling_root_override,
    )

    discovery = providers.Singleton(
        ChainDiscovery,
        resolver_factory=path_resolver.provider,
        probe_timeout=settings.provided.probe_timeout_seconds,
        resolve_names=settings.provided.resolve_sibling_names,
    )

    vault = providers.Singleton(
        CredentialVault,
        service_name=settings.provided.vault_service_name,
    )

    connection = providers.Singleton(ConnectionSlot)
