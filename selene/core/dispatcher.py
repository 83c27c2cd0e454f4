from __future__ import annotations

import json
import logging
import typing
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from selene.core.exceptions import (
    BadRequest,
    DeserializationError,
    InternalError,
    NotFound,
    RpcError,
    TooManyRequests,
    TransportError,
    Unauthorized,
    UnknownStatus,
    UrlError,
)
from selene.core.request_spec import RequestSpec, RpcErrorResponse

T = TypeVar("T")

SCALAR_TYPES = (int, float, str, bool, bytes, Decimal)
SUCCESS_CODES = frozenset({200, 201, 202})
INTERNAL_ERROR_CODES = frozenset({500, 502, 503, 504})
DEFAULT_USER_AGENT = "selene/0.3.0"

_ADAPTERS: Dict[Any, TypeAdapter] = {}


def classify_status(path: str, status_code: int, text: str) -> str:
    """Return ``text`` for a success status, raise the matching error otherwise."""
    if status_code in SUCCESS_CODES:
        return text
    if status_code == 404:
        raise NotFound(path)
    if status_code == 400:
        raise BadRequest(path, text)
    if status_code == 401:
        raise Unauthorized(path, text)
    if status_code == 429:
        raise TooManyRequests(path)
    if status_code in INTERNAL_ERROR_CODES:
        raise InternalError(status_code, path, text)
    raise UnknownStatus(status_code, text)


def _adapter(response_type: Any) -> TypeAdapter:
    try:
        return _ADAPTERS[response_type]
    except KeyError:
        adapter = TypeAdapter(response_type)
        _ADAPTERS[response_type] = adapter
        return adapter
    except TypeError:
        # unhashable generic aliases are rebuilt each time
        return TypeAdapter(response_type)


def default_value(response_type: Any) -> Any:
    """Zero value used when a successful response carries no body.

    Scalars, containers and enums get their zero value, a non-optional union
    takes its first member's, and a model is built with every required field
    set to its own zero value.
    """
    if response_type is None or response_type is type(None) or response_type is Any:
        return None
    origin = typing.get_origin(response_type) or response_type
    if origin is typing.Annotated:
        return default_value(typing.get_args(response_type)[0])
    if origin in SCALAR_TYPES or origin in (list, tuple, set, frozenset):
        return origin()
    if origin is dict:
        return {}
    if origin is typing.Union:
        args = typing.get_args(response_type)
        if type(None) in args:
            return None
        return default_value(args[0])
    if isinstance(origin, type) and issubclass(origin, Enum):
        return next(iter(origin))
    if isinstance(origin, type) and issubclass(origin, BaseModel):
        zero = {
            field.alias or name: default_value(field.annotation)
            for name, field in response_type.model_fields.items()
            if field.is_required()
        }
        return response_type.model_validate(zero)
    raise TypeError(f"{response_type!r} has no default value")


def decode_body(text: str, response_type: Any) -> Any:
    """Decode ``text`` as ``response_type``, falling back to the RPC error shape."""
    if not text:
        try:
            return default_value(response_type)
        except (TypeError, ValidationError) as exc:
            raise DeserializationError(exc, text) from exc
    try:
        return _adapter(response_type).validate_json(text)
    except ValidationError as exc:
        failure = exc
    try:
        rpc_error = RpcErrorResponse.model_validate_json(text)
    except ValidationError:
        raise DeserializationError(failure, text) from failure
    raise RpcError(rpc_error.error.code, rpc_error.error.message)


def serialize_body(body: Any) -> Any:
    if isinstance(body, BaseModel):
        return body.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(body, (list, tuple)):
        return [serialize_body(item) for item in body]
    if isinstance(body, dict):
        return {key: serialize_body(value) for key, value in body.items()}
    return body


class RequestDispatcher:
    """Performs one HTTP round trip and decodes the body into a typed value.

    The dispatcher holds no per-call state; the wrapped ``httpx.AsyncClient``
    (timeouts, user agent, connection pool) is fixed at construction and is
    safe to share between concurrent calls.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        connect_timeout: float = 5.0,
        user_agent: str = DEFAULT_USER_AGENT,
        log_bodies: bool = False,
        async_client: Optional[httpx.AsyncClient] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.timeout = timeout
        self.connect_timeout = connect_timeout
        self.user_agent = user_agent
        self.log_bodies = log_bodies
        self.logger = logger or logging.getLogger(__name__)
        self._client = async_client
        self._owns_client = async_client is None

    async def __aenter__(self) -> "RequestDispatcher":
        self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout, connect=self.connect_timeout),
                headers={"User-Agent": self.user_agent},
            )
        return self._client

    async def send(
        self,
        method: str,
        url: str,
        body: Any = None,
        response_type: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        method = method.upper()
        try:
            target = httpx.URL(url)
        except httpx.InvalidURL as exc:
            raise UrlError(f"invalid url: {exc}") from exc
        if target.scheme not in ("http", "https") or not target.host:
            raise UrlError(f"invalid url: {url}")
        path = target.path

        payload = serialize_body(body) if body is not None else None
        if self.log_bodies and payload is not None:
            self.logger.debug("sending request %s %s %s", method, path, json.dumps(payload))
        else:
            self.logger.debug("sending request %s %s", method, path)

        client = self._ensure_client()
        try:
            resp = await client.request(method, target, json=payload, headers=headers or None)
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as exc:
            raise UrlError(f"invalid url: {exc}") from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"{method} {path} failed: {exc}", path=path) from exc

        text = classify_status(path, resp.status_code, resp.text)
        return decode_body(text, response_type)

    async def request(self, spec: RequestSpec, response_type: Any = None) -> Any:
        return await self.send(spec.method, spec.build_url(), spec.json, response_type, headers=spec.headers)

    async def get(self, url: str, response_type: Type[T]) -> T:
        return await self.send("GET", url, None, response_type)

    async def post(self, url: str, body: Any, response_type: Type[T]) -> T:
        return await self.send("POST", url, body, response_type)

    async def put(self, url: str, body: Any, response_type: Type[T]) -> T:
        return await self.send("PUT", url, body, response_type)

    async def patch(self, url: str, body: Any, response_type: Type[T]) -> T:
        return await self.send("PATCH", url, body, response_type)

    async def delete(self, url: str) -> None:
        await self.send("DELETE", url, None, None)


__all__ = [
    "RequestDispatcher",
    "classify_status",
    "decode_body",
    "default_value",
    "serialize_body",
]
