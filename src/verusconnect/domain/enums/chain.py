from enum import Enum


class KnownChain(str, Enum):
    """Chains with a fixed identity. Values are the lowercase vault/lookup keys."""

    VRSC = "vrsc"
    VRSCTEST = "vrsctest"
    VARRR = "varrr"
    VDEX = "vdex"
    CHIPS = "chips"

    @property
    def display_name(self) -> str:
        return self.value.upper()
