from selene.core.dispatcher import RequestDispatcher, classify_status, decode_body, default_value
from selene.core.exceptions import (
    BadRequest,
    DeserializationError,
    HeliusError,
    InternalError,
    InvalidFeeResponse,
    NotFound,
    ProviderMisconfigured,
    RpcError,
    TooManyRequests,
    TransportError,
    Unauthorized,
    UnknownStatus,
    UrlError,
)
from selene.core.fixtures import load_fixture, validate_fixture
from selene.core.request_spec import RequestSpec, RpcErrorResponse, RpcRequest, RpcResponse, canonicalize_query

__all__ = [
    "BadRequest",
    "DeserializationError",
    "HeliusError",
    "InternalError",
    "InvalidFeeResponse",
    "NotFound",
    "ProviderMisconfigured",
    "RequestDispatcher",
    "RequestSpec",
    "RpcError",
    "RpcErrorResponse",
    "RpcRequest",
    "RpcResponse",
    "TooManyRequests",
    "TransportError",
    "Unauthorized",
    "UnknownStatus",
    "UrlError",
    "canonicalize_query",
    "classify_status",
    "decode_body",
    "default_value",
    "load_fixture",
    "validate_fixture",
]
