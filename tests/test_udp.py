import io
import socket
import threading

import pytest

from osdemo.udp import (
    BUFFER_SIZE,
    fill_sock_addr,
    run_client,
    run_server,
    udp_close,
    udp_open,
    udp_read,
    udp_write,
)


def _free_port():
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


class _WatchedOutput(io.StringIO):
    def __init__(self):
        super().__init__()
        self.waiting = threading.Event()

    def write(self, text):
        if "server:: waiting..." in text:
            self.waiting.set()
        return super().write(text)


def test_write_read_round_trip():
    a = udp_open(0)
    b = udp_open(0)
    try:
        port = b.getsockname()[1]
        sent = udp_write(a, ("127.0.0.1", port), b"payload")
        assert sent == 7
        data, addr = udp_read(b, 100)
        assert data == b"payload"
        assert addr[1] == a.getsockname()[1]
    finally:
        udp_close(a)
        udp_close(b)


def test_close_marks_socket_closed():
    sock = udp_open(0)
    udp_close(sock)
    assert sock.fileno() == -1


def test_fill_sock_addr():
    assert fill_sock_addr("127.0.0.1", 5) == ("127.0.0.1", 5)
    assert fill_sock_addr(None, 5) == ("0.0.0.0", 0)


def test_open_on_busy_port_raises():
    sock = udp_open(0)
    try:
        with pytest.raises(OSError):
            udp_open(sock.getsockname()[1])
    finally:
        udp_close(sock)


def test_client_and_server_exchange():
    server_port = _free_port()
    client_port = _free_port()
    server_out = _WatchedOutput()
    result = {}

    def serve():
        result["handled"] = run_server(server_port, server_out, 1)

    t = threading.Thread(target=serve)
    t.start()
    assert server_out.waiting.wait(5)
    client_out = io.StringIO()
    reply = run_client("127.0.0.1", server_port, client_port, client_out)
    t.join(5)

    assert reply == "goodbye world"
    assert result["handled"] == 1
    assert "client:: send message [hello world]" in client_out.getvalue()
    assert (f"client:: got reply [size:{BUFFER_SIZE} contents:(goodbye world)"
            in client_out.getvalue())
    assert (f"server:: read message [size:{BUFFER_SIZE} contents:(hello world)]"
            in server_out.getvalue())
    assert "server:: reply" in server_out.getvalue()