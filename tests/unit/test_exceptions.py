"""Tests for the error taxonomy."""

import httpx
import pytest

from verusconnect.domain.enums import ErrorKind
from verusconnect.exceptions import DAEMON_ERROR_CODES, KIND_INFO, RpcError

RETRYABLE = {ErrorKind.NETWORK, ErrorKind.DAEMON_OFFLINE, ErrorKind.CHAIN_SYNCING, ErrorKind.RATE_LIMIT_EXCEEDED}
RECOVERABLE = RETRYABLE | {ErrorKind.WALLET_LOCKED}


class TestDaemonCodes:
    @pytest.mark.parametrize(
        "code,kind",
        [
            (-1, ErrorKind.DAEMON_OFFLINE),
            (-3, ErrorKind.AUTHENTICATION),
            (-4, ErrorKind.WALLET_LOCKED),
            (-5, ErrorKind.INVALID_ADDRESS),
            (-6, ErrorKind.INSUFFICIENT_FUNDS),
            (-8, ErrorKind.INVALID_ADDRESS),
            (-13, ErrorKind.WALLET_LOCKED),
            (-14, ErrorKind.WALLET_LOCKED),
            (-15, ErrorKind.INVALID_ADDRESS),
            (-17, ErrorKind.CHAIN_SYNCING),
            (-18, ErrorKind.IDENTITY_NOT_FOUND),
            (-19, ErrorKind.CURRENCY_NOT_FOUND),
            (-20, ErrorKind.OFFER_NOT_FOUND),
            (-21, ErrorKind.PERMISSION_DENIED),
            (-22, ErrorKind.VALIDATION),
            (-25, ErrorKind.TRANSACTION_FAILED),
        ],
    )
    def test_mapped_codes(self, code, kind):
        err = RpcError.from_daemon_error(code, "boom")
        assert err.kind is kind
        assert err.code == code

    def test_table_size(self):
        assert len(DAEMON_ERROR_CODES) == 16

    def test_unknown_code_keeps_code_and_message(self):
        err = RpcError.from_daemon_error(-999, "Weird failure")
        assert err.kind is ErrorKind.RPC_CALL
        assert err.code == -999
        assert err.detail == "Code -999: Weird failure"
        assert str(err) == "RPC call failed: Code -999: Weird failure"

    def test_insufficient_funds_carries_message(self):
        err = RpcError.from_daemon_error(-6, "Insufficient funds")
        assert err.detail == "Insufficient funds"

    def test_wallet_locked_drops_message(self):
        err = RpcError.from_daemon_error(-13, "Please enter the wallet passphrase")
        assert err.detail is None
        assert str(err) == "Wallet locked"

    def test_authentication_uses_fixed_detail(self):
        err = RpcError.from_daemon_error(-3, "anything")
        assert err.detail == "Invalid RPC credentials"


class TestTransportErrors:
    def test_connect_error_is_daemon_offline(self):
        err = RpcError.from_transport_error(httpx.ConnectError("refused"))
        assert err.kind is ErrorKind.DAEMON_OFFLINE
        assert err.should_retry

    def test_timeout_is_network(self):
        err = RpcError.from_transport_error(httpx.ReadTimeout("slow"))
        assert err.kind is ErrorKind.NETWORK
        assert err.detail == "Request timeout"

    def test_other_transport_error_is_network(self):
        err = RpcError.from_transport_error(httpx.RemoteProtocolError("bad framing"))
        assert err.kind is ErrorKind.NETWORK
        assert "bad framing" in err.detail


class TestKindInfo:
    def test_every_kind_has_info(self):
        assert set(KIND_INFO) == set(ErrorKind)

    @pytest.mark.parametrize("kind", list(ErrorKind))
    def test_flags(self, kind):
        err = RpcError(kind, "x")
        assert err.should_retry == (kind in RETRYABLE)
        assert err.is_recoverable == (kind in RECOVERABLE)
        assert err.resolution_steps
        assert err.user_message

    def test_to_dict(self):
        data = RpcError(ErrorKind.NETWORK, "Request timeout").to_dict()
        assert data["kind"] == "NETWORK"
        assert data["message"] == "Network error: Request timeout"
        assert data["should_retry"] is True
        assert data["code"] is None

    def test_configuration_helper(self):
        err = RpcError.configuration("rpcuser not found in config file")
        assert err.kind is ErrorKind.CONFIGURATION
        assert "rpcuser not found" in err.user_message
