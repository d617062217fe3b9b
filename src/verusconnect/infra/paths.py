"""OS-specific locations of daemon config roots: one strategy per desktop OS."""

import platform
from abc import ABC, abstractmethod
from pathlib import Path

from platformdirs.macos import MacOS
from platformdirs.windows import Windows

from verusconnect.domain.enums import KnownChain
from verusconnect.domain.models.chain import ChainIdentity
from verusconnect.exceptions import RpcError

# Fixed directory (and file stem) names under the main-chain root.
CHAIN_DIR_NAMES: dict[KnownChain, str] = {
    KnownChain.VRSC: "VRSC",
    KnownChain.VRSCTEST: "vrsctest",
}


class PathResolver(ABC):
    """Strategy interface: main-chain root + sibling-chain root for one OS. No I/O."""

    os_name: str = ""

    def __init__(self, main_root: Path | None = None, sibling_root: Path | None = None) -> None:
        self._main_root = main_root
        self._sibling_root = sibling_root

    @abstractmethod
    def _default_main_root(self) -> Path: ...

    @abstractmethod
    def _default_sibling_root(self) -> Path: ...

    @abstractmethod
    def expected_config_paths(self) -> str:
        """Human-readable list of the expected config file paths on this OS."""

    def main_chain_root(self) -> Path:
        return self._main_root if self._main_root is not None else self._default_main_root()

    def sibling_chain_root(self) -> Path:
        return self._sibling_root if self._sibling_root is not None else self._default_sibling_root()

    def config_directory(self, identity: ChainIdentity) -> Path:
        known = identity.known
        if known in CHAIN_DIR_NAMES:
            return self.main_chain_root() / CHAIN_DIR_NAMES[known]
        return self.sibling_chain_root() / identity.raw

    def config_file(self, identity: ChainIdentity) -> Path:
        directory = self.config_directory(identity)
        return directory / f"{directory.name}.conf"


class LinuxPathResolver(PathResolver):
    os_name = "linux"

    def __init__(self, main_root: Path | None = None, sibling_root: Path | None = None, home: Path | None = None) -> None:
        super().__init__(main_root, sibling_root)
        self._home = home

    def _base(self) -> Path:
        if self._home is not None:
            return self._home
        try:
            return Path.home()
        except RuntimeError as e:
            raise RpcError.configuration("Could not determine Linux home directory") from e

    def _default_main_root(self) -> Path:
        return self._base() / ".komodo"

    def _default_sibling_root(self) -> Path:
        return self._base() / ".verus" / "pbaas"

    def expected_config_paths(self) -> str:
        return "\n".join([
            "~/.komodo/VRSC/VRSC.conf",
            "~/.komodo/vrsctest/vrsctest.conf",
            "~/.verus/pbaas/{currencyidhex}/{currencyidhex}.conf",
        ])


class MacOSPathResolver(PathResolver):
    os_name = "macos"

    def __init__(
        self, main_root: Path | None = None, sibling_root: Path | None = None, app_support: Path | None = None
    ) -> None:
        super().__init__(main_root, sibling_root)
        self._app_support = app_support

    def _base(self) -> Path:
        # ~/Library/Application Support
        return self._app_support if self._app_support is not None else MacOS().user_data_path

    def _default_main_root(self) -> Path:
        return self._base() / "Komodo"

    def _default_sibling_root(self) -> Path:
        return self._base() / "Verus" / "pbaas"

    def expected_config_paths(self) -> str:
        return "\n".join([
            "~/Library/Application Support/Komodo/VRSC/VRSC.conf",
            "~/Library/Application Support/Komodo/vrsctest/vrsctest.conf",
            "~/Library/Application Support/Verus/pbaas/{currencyidhex}/{currencyidhex}.conf",
        ])


class WindowsPathResolver(PathResolver):
    os_name = "windows"

    def __init__(
        self, main_root: Path | None = None, sibling_root: Path | None = None, app_data: Path | None = None
    ) -> None:
        super().__init__(main_root, sibling_root)
        self._app_data = app_data

    def _base(self) -> Path:
        # %APPDATA% (roaming profile)
        return self._app_data if self._app_data is not None else Windows(roaming=True).user_data_path

    def _default_main_root(self) -> Path:
        return self._base() / "Komodo"

    def _default_sibling_root(self) -> Path:
        return self._base() / "Verus" / "pbaas"

    def expected_config_paths(self) -> str:
        return "\n".join([
            "%AppData%\\Komodo\\VRSC\\VRSC.conf",
            "%AppData%\\Komodo\\vrsctest\\vrsctest.conf",
            "%AppData%\\Verus\\pbaas\\{currencyidhex}\\{currencyidhex}.conf",
        ])


_RESOLVERS: dict[str, type[PathResolver]] = {
    "Linux": LinuxPathResolver,
    "Darwin": MacOSPathResolver,
    "Windows": WindowsPathResolver,
}


def get_path_resolver(
    system: str | None = None,
    main_root: Path | None = None,
    sibling_root: Path | None = None,
) -> PathResolver:
    """Pick the strategy for `system` (defaults to `platform.system()`)."""
    system = system or platform.system()
    resolver_cls = _RESOLVERS.get(system)
    if resolver_cls is None:
        raise RpcError.configuration(f"Unsupported operating system: {system}")
    return resolver_cls(main_root=main_root, sibling_root=sibling_root)
