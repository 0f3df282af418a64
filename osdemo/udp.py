"""Small UDP helpers with a matching client and server."""

import argparse
import socket
import sys

BUFFER_SIZE = 1000


def udp_open(port: int) -> socket.socket:
    """Create a UDP socket bound to ``port`` on all local interfaces."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        sock.bind(("", port))
    except OSError:
        sock.close()
        raise
    return sock


def fill_sock_addr(hostname, port: int) -> tuple[str, int]:
    """Resolve ``hostname`` to an IPv4 address; a None host gives a cleared address."""
    if hostname is None:
        return ("0.0.0.0", 0)
    return (socket.gethostbyname(hostname), port)


def udp_write(sock: socket.socket, addr, data: bytes) -> int:
    return sock.sendto(data, addr)


def udp_read(sock: socket.socket, n: int) -> tuple[bytes, tuple[str, int]]:
    return sock.recvfrom(n)


def udp_close(sock: socket.socket) -> None:
    sock.close()


def _pad(text: str) -> bytes:
    return text.encode().ljust(BUFFER_SIZE, b"\0")


def _text(data: bytes) -> str:
    return data.split(b"\0", 1)[0].decode(errors="replace")


def run_client(server_host, server_port: int, client_port: int, out) -> str:
    """Send "hello world" to the server and return the text of its reply."""
    sock = udp_open(client_port)
    try:
        addr = fill_sock_addr(server_host, server_port)
        message = "hello world"
        print(f"client:: send message [{message}]", file=out, flush=True)
        try:
            udp_write(sock, addr, _pad(message))
        except OSError:
            print("client:: failed to send", file=out, flush=True)
            raise
        print("client:: wait for reply...", file=out, flush=True)
        data, _ = udp_read(sock, BUFFER_SIZE)
        reply = _text(data)
        print(f"client:: got reply [size:{len(data)} contents:({reply})",
              file=out, flush=True)
        return reply
    finally:
        udp_close(sock)


def run_server(port: int, out, max_messages=None) -> int:
    """Answer each message with "goodbye world"; stop after ``max_messages`` if given."""
    sock = udp_open(port)
    handled = 0
    try:
        while max_messages is None or handled < max_messages:
            print("server:: waiting...", file=out, flush=True)
            data, addr = udp_read(sock, BUFFER_SIZE)
            print(f"server:: read message [size:{len(data)} contents:({_text(data)})]",
                  file=out, flush=True)
            if data:
                udp_write(sock, addr, _pad("goodbye world"))
                print("server:: reply", file=out, flush=True)
            handled += 1
    finally:
        udp_close(sock)
    return handled


def client_main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="udp-client")
    parser.add_argument("--host", default="localhost")
    parser.add_argument("--server-port", type=int, default=10000)
    parser.add_argument("--port", type=int, default=20000)
    args = parser.parse_args(argv)
    run_client(args.host, args.server_port, args.port, sys.stdout)
    return 0


def server_main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="udp-server")
    parser.add_argument("--port", type=int, default=10000)
    args = parser.parse_args(argv)
    run_server(args.port, sys.stdout, None)
    return 0