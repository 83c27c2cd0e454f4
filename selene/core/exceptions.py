from __future__ import annotations

from typing import Optional


class HeliusError(RuntimeError):
    def __init__(self, message: str, status_code: Optional[int] = None, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.path = path


class DeserializationError(HeliusError):
    def __init__(self, err: Exception, text: str) -> None:
        super().__init__(f"Deserialization Error: {err}. Response: {text}")
        self.err = err
        self.text = text


class TransportError(HeliusError):
    pass


class UrlError(HeliusError):
    pass


class NotFound(HeliusError):
    def __init__(self, path: str) -> None:
        super().__init__(f"{path} not found", status_code=404, path=path)


class BadRequest(HeliusError):
    def __init__(self, path: str, text: str) -> None:
        super().__init__(f"Bad Request for {path} {text}", status_code=400, path=path)
        self.text = text


class Unauthorized(HeliusError):
    def __init__(self, path: str, text: str) -> None:
        super().__init__(f"Unauthorized for {path} {text}", status_code=401, path=path)
        self.text = text


class TooManyRequests(HeliusError):
    def __init__(self, path: str) -> None:
        super().__init__(f"Too Many Requests: {path}", status_code=429, path=path)


class InternalError(HeliusError):
    def __init__(self, status_code: int, path: str, text: str) -> None:
        super().__init__(f"Internal Error. HTTP Code {status_code} {text}", status_code=status_code, path=path)
        self.text = text


class UnknownStatus(HeliusError):
    def __init__(self, status_code: int, text: str) -> None:
        super().__init__(f"Unknown Error HTTP Code: {status_code} {text}", status_code=status_code)
        self.text = text


class RpcError(HeliusError):
    def __init__(self, code: int, message: str) -> None:
        super().__init__(f"RPC Error code:{code} message:{message}")
        self.code = code
        self.message = message


class InvalidFeeResponse(HeliusError):
    def __init__(self, response: str) -> None:
        super().__init__(f"Invalid fee response type {response}")
        self.response = response


class ProviderMisconfigured(RuntimeError):
    pass
