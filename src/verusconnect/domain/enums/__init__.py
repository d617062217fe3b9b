from verusconnect.domain.enums.chain import KnownChain
from verusconnect.domain.enums.error_kind import ErrorKind

__all__ = [
    "ErrorKind",
    "KnownChain",
]
