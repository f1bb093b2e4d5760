"""
Client for the cgminer JSON API.

Each call opens a fresh TCP connection, writes one command, reads until the
daemon closes the stream and decodes the padded JSON reply:

    api = CgminerAPI("localhost", 4028)
    resp = api.send(APICommand("summary"))
    resp = api.send(APICommand("gpu", "0"))
"""
import logging
import socket
from typing import Optional, Union

from cgminer_api.config.settings import ClientSettings, DEFAULT_PORT, DEFAULT_TIMEOUT
from cgminer_api.errors import (
    APIConnectionError,
    ReadError,
    RemoteError,
    UnknownStatusError,
    WriteError,
)
from cgminer_api.models.command import APICommand
from cgminer_api.models.response import Response, StatusCode
from cgminer_api.utils.wire import MAX_RESPONSE_SIZE, decode_json, read_all

logger = logging.getLogger(__name__)


class CgminerAPI:
    """One command exchange per call; holds only immutable connection details."""

    def __init__(self, host: str, port: Union[int, str] = DEFAULT_PORT,
                 timeout: Optional[float] = DEFAULT_TIMEOUT, max_response_size: int = MAX_RESPONSE_SIZE):
        """
        Args:
            host: Daemon host name or IP
            port: Daemon API port
            timeout: Seconds allowed for connecting, and separately for writing
                and for reading the whole reply. None blocks indefinitely.
            max_response_size: Replies larger than this raise ReadError
        """
        self.host = host
        self.port = int(port)
        self.timeout = timeout
        self.max_response_size = max_response_size

    @classmethod
    def from_settings(cls, settings: ClientSettings) -> "CgminerAPI":
        return cls(settings.host, settings.port, timeout=settings.timeout)

    def __repr__(self):
        return f"CgminerAPI({self.host!r}, {self.port})"

    def send(self, command: APICommand) -> Response:
        """
        Send a command and return the decoded response.

        Args:
            command: Method name plus optional parameter

        Returns:
            The envelope, when the first status is Success, Informational or Warning

        Raises:
            APIConnectionError, WriteError, ReadError: transport failures
            DecodeError: reply is not a well-formed envelope
            RemoteError: daemon answered with an Error or Fatal status
            UnknownStatusError: status letter outside the known alphabet
        """
        addr = f"{self.host}:{self.port}"
        logger.debug("[CgminerAPI] Sending %s to %s", command.to_dict(), addr)

        try:
            sock = socket.create_connection((self.host, self.port), timeout=self.timeout)
        except OSError as e:
            logger.warning("[CgminerAPI] Cannot connect to %s: %s", addr, e)
            raise APIConnectionError(f"Cannot connect to {addr}: {e}") from e

        with sock:
            try:
                sock.sendall(command.encode())
            except OSError as e:
                logger.warning("[CgminerAPI] Write to %s failed: %s", addr, e)
                raise WriteError(f"Failed to send command to {addr}: {e}") from e

            try:
                raw = read_all(sock, self.timeout, self.max_response_size)
            except OSError as e:
                logger.warning("[CgminerAPI] Read from %s failed: %s", addr, e)
                raise ReadError(f"Failed to read response from {addr}: {e}") from e

        logger.debug("[CgminerAPI] Received %d bytes from %s", len(raw), addr)
        resp = Response.from_dict(decode_json(raw))

        status = resp.first_status
        code = status.status_code
        if code is None:
            raise UnknownStatusError(status.status)
        if not code.is_success:
            raise RemoteError(status)
        if code is not StatusCode.SUCCESS:
            logger.debug("[CgminerAPI] %s returned %s: %s", command.method, code.name, status.msg)
        return resp

    # Convenience wrappers, one exchange each

    def summary(self) -> Response:
        """Get rig summary."""
        return self.send(APICommand("summary"))

    def config(self) -> Response:
        """Get daemon configuration."""
        return self.send(APICommand("config"))

    def devs(self) -> Response:
        """Get all device details."""
        return self.send(APICommand("devs"))

    def gpu(self, index: int) -> Response:
        """Get details for one GPU."""
        return self.send(APICommand("gpu", str(index)))

    def version(self) -> Response:
        """Get daemon and API version."""
        return self.send(APICommand("version"))

    def pools(self) -> Response:
        """Get pool statistics."""
        return self.send(APICommand("pools"))
