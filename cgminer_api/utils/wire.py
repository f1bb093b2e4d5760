"""Low-level helpers for the cgminer wire format."""
import json
import socket
import time
from typing import Any, Optional

from cgminer_api.errors import DecodeError, ReadError

# The daemon pads fixed-size buffers with null bytes
PADDING = b" \x00"
RECV_SIZE = 4096
MAX_RESPONSE_SIZE = 16 * 1024 * 1024


def read_all(sock: socket.socket, timeout: Optional[float] = None,
             max_size: int = MAX_RESPONSE_SIZE) -> bytes:
    """
    Read until the peer closes the stream; there is no length prefix.

    Args:
        sock: Connected socket
        timeout: Overall deadline in seconds for the whole read, None for no deadline
        max_size: Largest response accepted before giving up with ReadError

    Raises:
        socket.timeout: deadline passed before the peer closed the stream
        ReadError: response grew past max_size
    """
    deadline = time.monotonic() + timeout if timeout is not None else None
    chunks = []
    size = 0
    while True:
        if deadline is not None:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise socket.timeout(f"No end of response within {timeout}s")
            sock.settimeout(remaining)
        chunk = sock.recv(RECV_SIZE)
        if not chunk:
            break
        size += len(chunk)
        if size > max_size:
            raise ReadError(f"Response exceeds {max_size} bytes")
        chunks.append(chunk)
    return b"".join(chunks)


def trim_padding(raw: bytes) -> bytes:
    return raw.strip(PADDING)


def decode_json(raw: bytes) -> Any:
    """Trim padding and parse the payload as JSON."""
    payload = trim_padding(raw)
    if not payload:
        raise DecodeError("Empty response from daemon")
    try:
        return json.loads(payload.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise DecodeError(f"Response is not valid UTF-8: {e}") from e
    except json.JSONDecodeError as e:
        raise DecodeError(f"JSON decode error: {e}") from e
    except RecursionError as e:
        raise DecodeError("Response nests too deeply to decode") from e
