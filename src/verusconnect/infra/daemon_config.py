"""Daemon config file parser: `key=value` lines → Credentials."""

from pathlib import Path

from verusconnect.domain.enums import KnownChain
from verusconnect.domain.models.chain import ChainIdentity
from verusconnect.domain.models.credentials import LOOPBACK_HOST, Credentials
from verusconnect.exceptions import RpcError

DEFAULT_PORTS: dict[KnownChain, int] = {
    KnownChain.VRSC: 27486,
    KnownChain.VRSCTEST: 18843,
}

# Sibling chains are expected to carry rpcport in their own config; without it they
# get the main chain's default.
FALLBACK_PORT = DEFAULT_PORTS[KnownChain.VRSC]


def default_port(identity: ChainIdentity) -> int:
    known = identity.known
    if known is not None and known in DEFAULT_PORTS:
        return DEFAULT_PORTS[known]
    return FALLBACK_PORT


def _parse_port(value: str) -> int | None:
    if not (value.isascii() and value.isdigit()):
        return None
    port = int(value)
    return port if 1 <= port <= 65535 else None


def parse_config_text(text: str, identity: ChainIdentity) -> Credentials:
    """Extract rpcuser / rpcpassword / rpcport. Host is always loopback."""
    username: str | None = None
    password: str | None = None
    port: int | None = None

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        value = value.strip()
        if key == "rpcuser":
            username = value or None
        elif key == "rpcpassword":
            password = value or None
        elif key == "rpcport":
            port = _parse_port(value)

    if username is None:
        raise RpcError.configuration("rpcuser not found in config file")
    if password is None:
        raise RpcError.configuration("rpcpassword not found in config file")

    return Credentials(
        username=username,
        password=password,
        host=LOOPBACK_HOST,
        port=port if port is not None else default_port(identity),
    )


def parse_config_file(path: Path, identity: ChainIdentity) -> Credentials:
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise RpcError.configuration(f"Failed to read config file: {e}") from e
    return parse_config_text(text, identity)
