"""Errors raised by the cgminer API client."""
import json
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from cgminer_api.models.response import APIStatus


class APIError(Exception):
    """Base error: a code/message pair reported back to the caller."""

    code: int = 0

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def to_json(self) -> str:
        """Encode as the wire error object, omitting empty members."""
        blob = {}
        if self.code:
            blob["code"] = self.code
        if self.message:
            blob["message"] = self.message
        return json.dumps(blob, separators=(",", ":"))


class APIConnectionError(APIError, ConnectionError):
    """The daemon could not be reached."""
    code = 1


class WriteError(APIError):
    """The request could not be fully transmitted."""
    code = 2


class ReadError(APIError):
    """The response could not be fully received."""
    code = 3


class DecodeError(APIError, ValueError):
    """The response is not a well-formed envelope."""
    code = 4


class UnknownStatusError(APIError):
    """The daemon answered with a status letter outside S/I/W/E/F."""
    code = 5

    def __init__(self, status: str):
        super().__init__(f"Unknown status code: {status!r}")
        self.status = status


class RemoteError(APIError):
    """The daemon itself reported an Error or Fatal status.

    ``message`` is the daemon's ``Msg`` verbatim and ``code`` its numeric
    sub-code, so callers can branch on either.
    """

    def __init__(self, status: "APIStatus"):
        super().__init__(status.msg or "", code=status.code)
        self.status = status
