"""UDP client that sends readings to the collection server."""

from __future__ import annotations

import socket
import sys

MAXLINE = 1024
RECEIVE_TIMEOUT = 3.0
_CONFIRM_FLAG = getattr(socket, "MSG_CONFIRM", 0)


class Client:
    """A datagram socket aimed at one server address."""

    def __init__(self, server_ip: str, server_port: int) -> None:
        self._address = (server_ip, server_port)
        self._sock: socket.socket | None = socket.socket(
            socket.AF_INET, socket.SOCK_DGRAM
        )
        self._sock.settimeout(RECEIVE_TIMEOUT)
        print(f"[Cliente] Conectado a {server_ip}:{server_port}")

    def _socket(self) -> socket.socket:
        if self._sock is None:
            raise OSError("client socket is closed")
        return self._sock

    def send_message(self, message: str) -> None:
        print(f"[Client] Sending Message: {message}")
        self._socket().sendto(message.encode(), _CONFIRM_FLAG, self._address)

    def send_binary_message(self, data: bytes) -> None:
        print(f"[Client] Sending Binary Message: ({len(data)} bytes)")
        try:
            self._socket().sendto(bytes(data), self._address)
        except OSError as exc:
            print(f"[Client] Error sending binary message: {exc}", file=sys.stderr)
            raise
        print("[Client] Binary message sent successfully!")

    def receive_message(self) -> str:
        """Wait for a reply; an empty string means none came before the timeout."""
        sock = self._socket()
        try:
            data, _ = sock.recvfrom(MAXLINE)
        except socket.timeout as exc:
            print(f"[Client] Error at reception: {exc}", file=sys.stderr)
            return ""
        message = data.split(b"\0", 1)[0].decode("utf-8", errors="replace")
        print(f"[Client] Message Received: {message}")
        return message

    def close(self) -> None:
        if self._sock is not None:
            print("[Client] Closing Socket.")
            self._sock.close()
            self._sock = None

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *args) -> None:
        self.close()