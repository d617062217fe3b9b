from enum import Enum


class ErrorKind(str, Enum):
    """Semantic failure categories for daemon and transport errors."""

    CONNECTION = "CONNECTION"
    AUTHENTICATION = "AUTHENTICATION"
    RPC_CALL = "RPC_CALL"
    JSON_PARSE = "JSON_PARSE"
    NETWORK = "NETWORK"
    CONFIGURATION = "CONFIGURATION"
    DAEMON_OFFLINE = "DAEMON_OFFLINE"
    INVALID_RESPONSE = "INVALID_RESPONSE"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
    IDENTITY_NOT_FOUND = "IDENTITY_NOT_FOUND"
    CURRENCY_NOT_FOUND = "CURRENCY_NOT_FOUND"
    CHAIN_SYNCING = "CHAIN_SYNCING"
    WALLET_LOCKED = "WALLET_LOCKED"
    INVALID_ADDRESS = "INVALID_ADDRESS"
    TRANSACTION_FAILED = "TRANSACTION_FAILED"
    OFFER_NOT_FOUND = "OFFER_NOT_FOUND"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    VALIDATION = "VALIDATION"
