import json
import socket
import threading

import pytest


class FakeDaemon:
    """Single-threaded TCP stand-in for cgminer: records requests, replies with canned bytes."""

    def __init__(self, reply: bytes = b"", chunk_size: int = 0, withhold: bool = False,
                 trickle_delay: float = 0.0):
        self.reply = reply
        self.chunk_size = chunk_size
        self.trickle_delay = trickle_delay
        self.withhold = withhold
        self.requests: list[dict] = []

        self._stop = threading.Event()
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self._sock.bind(("127.0.0.1", 0))
        self._sock.listen(5)
        self._sock.settimeout(0.05)
        self.host, self.port = self._sock.getsockname()

        self._thread = threading.Thread(target=self._serve, name="FakeDaemon", daemon=True)
        self._thread.start()

    def _serve(self):
        while not self._stop.is_set():
            try:
                conn, _ = self._sock.accept()
            except socket.timeout:
                continue
            except OSError:
                return
            with conn:
                conn.settimeout(2.0)
                self._handle(conn)

    def _handle(self, conn: socket.socket):
        buf = b""
        while True:
            try:
                chunk = conn.recv(4096)
            except OSError:
                return
            if not chunk:
                break
            buf += chunk
            try:
                self.requests.append(json.loads(buf))
                break
            except ValueError:
                continue

        if self.withhold:
            self._stop.wait(2.0)
            return

        if self.chunk_size:
            for i in range(0, len(self.reply), self.chunk_size):
                if self._stop.wait(self.trickle_delay):
                    return
                try:
                    conn.sendall(self.reply[i:i + self.chunk_size])
                except OSError:
                    return
        else:
            try:
                conn.sendall(self.reply)
            except OSError:
                return

    def close(self):
        self._stop.set()
        self._thread.join(timeout=3)
        self._sock.close()


@pytest.fixture
def daemon_factory():
    """Start fake daemons on ephemeral ports; all are shut down after the test."""
    daemons: list[FakeDaemon] = []

    def factory(reply, **kwargs) -> FakeDaemon:
        if isinstance(reply, (dict, list)):
            reply = json.dumps(reply).encode("utf-8")
        elif isinstance(reply, str):
            reply = reply.encode("utf-8")
        daemon = FakeDaemon(reply, **kwargs)
        daemons.append(daemon)
        return daemon

    yield factory

    for daemon in daemons:
        daemon.close()


@pytest.fixture
def closed_port():
    """A localhost port with nothing listening on it."""
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    s.bind(("127.0.0.1", 0))
    port = s.getsockname()[1]
    s.close()
    return port
