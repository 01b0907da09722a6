import socket

import pytest

from sensorlink.client import Client


@pytest.fixture
def peer():
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(2.0)
    yield sock
    sock.close()


def test_announces_target(peer, capsys):
    port = peer.getsockname()[1]
    with Client("127.0.0.1", port):
        pass
    out = capsys.readouterr().out
    assert f"[Cliente] Conectado a 127.0.0.1:{port}" in out
    assert "[Client] Closing Socket." in out


def test_text_message_arrives(peer):
    with Client("127.0.0.1", peer.getsockname()[1]) as client:
        client.send_message("hello")
        data, _ = peer.recvfrom(1024)
    assert data == b"hello"


def test_binary_message_arrives(peer, capsys):
    payload = bytes(range(256))
    with Client("127.0.0.1", peer.getsockname()[1]) as client:
        client.send_binary_message(payload)
        data, _ = peer.recvfrom(1024)
    assert data == payload
    assert "[Client] Binary message sent successfully!" in capsys.readouterr().out


def test_reply_round_trip(peer):
    with Client("127.0.0.1", peer.getsockname()[1]) as client:
        client.send_message("ping")
        _, addr = peer.recvfrom(1024)
        peer.sendto(b"ACK: OK", addr)
        assert client.receive_message() == "ACK: OK"


def test_reply_stops_at_nul(peer):
    with Client("127.0.0.1", peer.getsockname()[1]) as client:
        client.send_message("ping")
        _, addr = peer.recvfrom(1024)
        peer.sendto(b"ab\x00cd", addr)
        assert client.receive_message() == "ab"


def test_closed_client_raises(peer):
    client = Client("127.0.0.1", peer.getsockname()[1])
    client.close()
    with pytest.raises(OSError):
        client.send_binary_message(b"data")