"""UDP server socket that collects datagrams from sensor clients."""

from __future__ import annotations

import socket
import sys

import psutil

DEFAULT_PORT = 8080
BUFFER_SIZE = 2048


def list_ipv4_interfaces() -> list[tuple[str, str]]:
    """Return (interface name, IPv4 address) pairs for this host."""
    return [
        (name, addr.address)
        for name, addresses in psutil.net_if_addrs().items()
        for addr in addresses
        if addr.family == socket.AF_INET
    ]


class Server:
    """A datagram socket bound on all interfaces that replies to the last sender."""

    def __init__(self, port: int = DEFAULT_PORT) -> None:
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            sock.bind(("", port))
        except OSError:
            sock.close()
            raise
        self._sock: socket.socket | None = sock
        self._client: tuple[str, int] | None = None

        print(f"[Server] Listening on port {port}")
        try:
            interfaces = list_ipv4_interfaces()
        except (OSError, RuntimeError) as exc:
            print(f"getifaddrs: {exc}", file=sys.stderr)
        else:
            for name, address in interfaces:
                print(f"  {name}: {address}")

    def _socket(self) -> socket.socket:
        if self._sock is None:
            raise OSError("server socket is closed")
        return self._sock

    @property
    def port(self) -> int:
        """The local port the socket is bound to."""
        return self._socket().getsockname()[1]

    @property
    def closed(self) -> bool:
        return self._sock is None

    def receive_binary_message(self) -> bytes:
        """Receive one datagram and remember its sender for replies."""
        data, address = self._socket().recvfrom(BUFFER_SIZE)
        self._client = address
        return data

    def receive_message(self) -> str:
        """Receive one datagram as text, cut at the first NUL byte."""
        data = self.receive_binary_message()
        return data.split(b"\0", 1)[0].decode("utf-8", errors="replace")

    def send_reply(self, message: str) -> None:
        """Send ``message`` to the sender of the most recent datagram."""
        sock = self._socket()
        if self._client is None:
            raise OSError("no client has sent a datagram yet")
        sock.sendto(message.encode(), self._client)

    def close(self) -> None:
        if self._sock is not None:
            print(f"[Server] Closing socket {self._sock.fileno()}")
            self._sock.close()
            self._sock = None

    def fileno(self) -> int:
        """The socket's descriptor, or -1 once closed."""
        return -1 if self._sock is None else self._sock.fileno()

    def __enter__(self) -> Server:
        return self

    def __exit__(self, *args) -> None:
        self.close()