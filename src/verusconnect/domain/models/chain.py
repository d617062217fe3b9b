"""Chain identity and the per-pass discovery descriptor."""

from dataclasses import dataclass, field

from pydantic import BaseModel

from verusconnect.domain.enums import KnownChain
from verusconnect.domain.models.credentials import Credentials


@dataclass(frozen=True, order=True)
class ChainIdentity:
    """A known chain or an opaque sibling id (hex currency id).

    Equality, hashing and ordering use only the lowercased key; `raw` keeps the
    original spelling (the on-disk directory name for siblings).
    """

    key: str
    raw: str = field(compare=False)

    @classmethod
    def parse(cls, value: "str | KnownChain | ChainIdentity") -> "ChainIdentity":
        if isinstance(value, ChainIdentity):
            return value
        if isinstance(value, KnownChain):
            return cls(key=value.value, raw=value.value)
        raw = value.strip()
        if not raw:
            raise ValueError("chain identity cannot be empty")
        return cls(key=raw.lower(), raw=raw)

    @property
    def known(self) -> KnownChain | None:
        try:
            return KnownChain(self.key)
        except ValueError:
            return None

    @property
    def is_sibling(self) -> bool:
        return self.known is None

    @property
    def display_form(self) -> str:
        known = self.known
        return known.display_name if known is not None else self.raw

    def __str__(self) -> str:
        return self.key


MAIN_CHAIN = ChainIdentity.parse(KnownChain.VRSC)
TEST_CHAIN = ChainIdentity.parse(KnownChain.VRSCTEST)


class ChainDescriptor(BaseModel):
    """One discovered chain. Rebuilt on every discovery pass."""

    identity: ChainIdentity
    display_name: str
    credentials: Credentials
    is_active: bool = False

    @classmethod
    def fresh(cls, identity: ChainIdentity, credentials: Credentials) -> "ChainDescriptor":
        return cls(identity=identity, display_name=identity.display_form, credentials=credentials)

    @property
    def name(self) -> str:
        return self.identity.key

    def public_view(self) -> dict:
        return {
            "name": self.name,
            "display_name": self.display_name,
            "host": self.credentials.host,
            "port": self.credentials.port,
            "is_active": self.is_active,
        }
