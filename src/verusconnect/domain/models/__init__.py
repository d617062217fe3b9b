from verusconnect.domain.models.chain import MAIN_CHAIN, TEST_CHAIN, ChainDescriptor, ChainIdentity
from verusconnect.domain.models.credentials import LOOPBACK_HOST, Credentials
from verusconnect.domain.models.rpc import RpcErrorObject, RpcRequestEnvelope, RpcResponseEnvelope

__all__ = [
    "LOOPBACK_HOST",
    "MAIN_CHAIN",
    "TEST_CHAIN",
    "ChainDescriptor",
    "ChainIdentity",
    "Credentials",
    "RpcErrorObject",
    "RpcRequestEnvelope",
    "RpcResponseEnvelope",
]
