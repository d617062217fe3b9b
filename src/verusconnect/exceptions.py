"""Error taxonomy: daemon codes and transport failures mapped to ErrorKind."""

from typing import Any, NamedTuple

import httpx

from verusconnect.domain.enums import ErrorKind


class KindInfo(NamedTuple):
    """Display and retry metadata for one ErrorKind."""

    title: str  # short technical form, str(err)
    user_message: str
    resolution_steps: tuple[str, ...]
    is_recoverable: bool
    should_retry: bool


_GENERIC_STEPS = (
    "Check your internet connection",
    "Verify daemon is running properly",
    "Try the operation again in a few moments",
)

_UNEXPECTED = "An unexpected error occurred. Please try again or contact support."

# `{detail}` is substituted with the error's detail string (empty when absent).
KIND_INFO: dict[ErrorKind, KindInfo] = {
    ErrorKind.CONNECTION: KindInfo(
        "Connection error: {detail}",
        "Connection error: {detail}. Please verify your daemon is running.",
        _GENERIC_STEPS,
        False,
        False,
    ),
    ErrorKind.AUTHENTICATION: KindInfo(
        "Authentication error: {detail}",
        "Invalid RPC credentials. Please check your username and password in the configuration.",
        (
            "Check your RPC username and password",
            "Verify your wallet configuration file",
            "Restart the wallet if credentials were recently changed",
        ),
        False,
        False,
    ),
    ErrorKind.RPC_CALL: KindInfo("RPC call failed: {detail}", _UNEXPECTED, _GENERIC_STEPS, False, False),
    ErrorKind.JSON_PARSE: KindInfo("JSON parsing error: {detail}", _UNEXPECTED, _GENERIC_STEPS, False, False),
    ErrorKind.NETWORK: KindInfo(
        "Network error: {detail}",
        "Network error: {detail}. Please check your internet connection.",
        _GENERIC_STEPS,
        True,
        True,
    ),
    ErrorKind.CONFIGURATION: KindInfo(
        "Configuration error: {detail}",
        "Configuration error: {detail}. Please check your settings.",
        _GENERIC_STEPS,
        False,
        False,
    ),
    ErrorKind.DAEMON_OFFLINE: KindInfo(
        "Daemon offline or unreachable",
        "The Verus daemon is not running or unreachable. Please start your Verus wallet and try again.",
        (
            "Start your Verus wallet application",
            "Wait for the daemon to fully load",
            "Check that RPC is enabled in your configuration",
        ),
        True,
        True,
    ),
    ErrorKind.INVALID_RESPONSE: KindInfo("Invalid response from daemon", _UNEXPECTED, _GENERIC_STEPS, False, False),
    ErrorKind.INSUFFICIENT_FUNDS: KindInfo(
        "Insufficient funds: {detail}",
        "Insufficient funds to complete this transaction. {detail}",
        (
            "Check your available balance",
            "Wait for pending transactions to confirm",
            "Consider reducing transaction amount or fees",
        ),
        False,
        False,
    ),
    ErrorKind.IDENTITY_NOT_FOUND: KindInfo(
        "Identity not found: {detail}",
        "Identity '{detail}' was not found. Please verify the identity name.",
        _GENERIC_STEPS,
        False,
        False,
    ),
    ErrorKind.CURRENCY_NOT_FOUND: KindInfo(
        "Currency not found: {detail}",
        "Currency '{detail}' was not found. Please verify the currency name.",
        _GENERIC_STEPS,
        False,
        False,
    ),
    ErrorKind.CHAIN_SYNCING: KindInfo(
        "Chain sync in progress",
        "The blockchain is still syncing. Please wait for sync to complete before trying again.",
        (
            "Wait for blockchain synchronization to complete",
            "Check sync progress in your wallet",
            "Ensure stable internet connection",
        ),
        True,
        True,
    ),
    ErrorKind.WALLET_LOCKED: KindInfo(
        "Wallet locked",
        "Your wallet is locked. Please unlock it with your passphrase to perform this operation.",
        (
            "Unlock your wallet with the passphrase",
            "Consider setting up automatic unlocking for staking",
        ),
        True,
        False,
    ),
    ErrorKind.INVALID_ADDRESS: KindInfo(
        "Invalid address: {detail}",
        "The address '{detail}' is not valid. Please check the address format.",
        (
            "Double-check the address format",
            "Copy address from a reliable source",
            "Verify you're using the correct chain address",
        ),
        False,
        False,
    ),
    ErrorKind.TRANSACTION_FAILED: KindInfo(
        "Transaction failed: {detail}",
        "Transaction failed: {detail}. Please check your inputs and try again.",
        _GENERIC_STEPS,
        False,
        False,
    ),
    ErrorKind.OFFER_NOT_FOUND: KindInfo(
        "Offer not found: {detail}",
        "Offer '{detail}' was not found or has expired.",
        _GENERIC_STEPS,
        False,
        False,
    ),
    ErrorKind.PERMISSION_DENIED: KindInfo(
        "Permission denied: {detail}",
        "Permission denied: {detail}. You may not have the required authority.",
        _GENERIC_STEPS,
        False,
        False,
    ),
    ErrorKind.RATE_LIMIT_EXCEEDED: KindInfo(
        "Rate limit exceeded",
        "Too many requests. Please wait a moment before trying again.",
        _GENERIC_STEPS,
        True,
        True,
    ),
    ErrorKind.VALIDATION: KindInfo(
        "Validation error: {detail}",
        "Validation error: {detail}. Please check your inputs.",
        _GENERIC_STEPS,
        False,
        False,
    ),
}

# Daemon error code → kind. Codes not listed → RPC_CALL.
DAEMON_ERROR_CODES: dict[int, ErrorKind] = {
    -1: ErrorKind.DAEMON_OFFLINE,
    -3: ErrorKind.AUTHENTICATION,
    -4: ErrorKind.WALLET_LOCKED,
    -5: ErrorKind.INVALID_ADDRESS,
    -6: ErrorKind.INSUFFICIENT_FUNDS,
    -8: ErrorKind.INVALID_ADDRESS,
    -13: ErrorKind.WALLET_LOCKED,
    -14: ErrorKind.WALLET_LOCKED,
    -15: ErrorKind.INVALID_ADDRESS,
    -17: ErrorKind.CHAIN_SYNCING,
    -18: ErrorKind.IDENTITY_NOT_FOUND,
    -19: ErrorKind.CURRENCY_NOT_FOUND,
    -20: ErrorKind.OFFER_NOT_FOUND,
    -21: ErrorKind.PERMISSION_DENIED,
    -22: ErrorKind.VALIDATION,
    -25: ErrorKind.TRANSACTION_FAILED,
}

# Kinds whose display text is fixed; the daemon message is not carried as detail.
_FIXED_DETAIL: dict[ErrorKind, str | None] = {
    ErrorKind.DAEMON_OFFLINE: None,
    ErrorKind.WALLET_LOCKED: None,
    ErrorKind.CHAIN_SYNCING: None,
    ErrorKind.AUTHENTICATION: "Invalid RPC credentials",
}


class RpcError(Exception):
    """Typed failure raised by every layer of the connection stack."""

    def __init__(self, kind: ErrorKind, detail: str | None = None, code: int | None = None) -> None:
        self.kind = kind
        self.detail = detail
        self.code = code
        super().__init__(self._render(KIND_INFO[kind].title))

    def _render(self, template: str) -> str:
        return template.format(detail=self.detail or "").strip()

    @property
    def user_message(self) -> str:
        return self._render(KIND_INFO[self.kind].user_message)

    @property
    def resolution_steps(self) -> list[str]:
        return list(KIND_INFO[self.kind].resolution_steps)

    @property
    def is_recoverable(self) -> bool:
        return KIND_INFO[self.kind].is_recoverable

    @property
    def should_retry(self) -> bool:
        return KIND_INFO[self.kind].should_retry

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": str(self),
            "user_message": self.user_message,
            "resolution_steps": self.resolution_steps,
            "is_recoverable": self.is_recoverable,
            "should_retry": self.should_retry,
            "code": self.code,
        }

    def __repr__(self) -> str:
        return f"RpcError(kind={self.kind.value}, detail={self.detail!r}, code={self.code!r})"

    @classmethod
    def configuration(cls, detail: str) -> "RpcError":
        return cls(ErrorKind.CONFIGURATION, detail)

    @classmethod
    def from_daemon_error(cls, code: int, message: str) -> "RpcError":
        """Translate a daemon `{code, message}` error object. Unknown codes keep both verbatim."""
        kind = DAEMON_ERROR_CODES.get(code)
        if kind is None:
            return cls(ErrorKind.RPC_CALL, f"Code {code}: {message}", code=code)
        detail = _FIXED_DETAIL[kind] if kind in _FIXED_DETAIL else message
        return cls(kind, detail, code=code)

    @classmethod
    def from_transport_error(cls, exc: Exception) -> "RpcError":
        """Classify an exception raised before a response was obtained."""
        if isinstance(exc, httpx.ConnectError):
            return cls(ErrorKind.DAEMON_OFFLINE)
        if isinstance(exc, httpx.TimeoutException):
            return cls(ErrorKind.NETWORK, "Request timeout")
        return cls(ErrorKind.NETWORK, str(exc) or type(exc).__name__)
