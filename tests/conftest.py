"""Pytest configuration and shared fixtures."""

import os
import socket
import socketserver
import tempfile
import threading

import pytest

from framerelay import ConnectionEndpoint, EndpointKind, Transport


class FakeHandle:
    def __init__(self, kind):
        self.kind = kind
        self.closed = False


class FakeTransport(Transport):
    """In-memory transport: records calls, serves scripted inbound bytes.

    `inbound` is what the peer "sent"; `max_chunk` caps how much one
    recv_exact call hands back, to mimic a fragmenting stream.
    """

    def __init__(self, inbound=b"", max_chunk=None):
        self.inbound = bytearray(inbound)
        self.max_chunk = max_chunk
        self.written = []
        self.calls = []
        self.handles = []
        self.fail_on = {}

    def _maybe_fail(self, name):
        self.calls.append(name)
        if name in self.fail_on:
            raise self.fail_on[name]

    def create(self, kind):
        self._maybe_fail("create")
        handle = FakeHandle(kind)
        self.handles.append(handle)
        return handle

    def connect(self, handle, endpoint):
        self._maybe_fail("connect")

    def send_all(self, handle, data):
        self._maybe_fail("send_all")
        self.written.append(bytes(data))
        return len(data)

    def recv_exact(self, handle, size):
        self._maybe_fail("recv_exact")
        if self.max_chunk is not None:
            size = min(size, self.max_chunk)
        data = bytes(self.inbound[:size])
        del self.inbound[:size]
        return data

    def close(self, handle):
        self._maybe_fail("close")
        handle.closed = True

    def count(self, name):
        return self.calls.count(name)


@pytest.fixture
def fake_transport():
    return FakeTransport()


@pytest.fixture
def make_transport():
    return FakeTransport


@pytest.fixture
def tcp_endpoint():
    return ConnectionEndpoint("127.0.0.1", 7000)


class _EchoHandler(socketserver.BaseRequestHandler):
    def handle(self):
        while True:
            data = self.request.recv(65536)
            if not data:
                return
            self.request.sendall(data)


class _TCPEcho(socketserver.ThreadingMixIn, socketserver.TCPServer):
    daemon_threads = True
    allow_reuse_address = True


def _serve(server):
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    return thread


@pytest.fixture
def tcp_echo_server():
    """Echo server on an ephemeral localhost port; yields its endpoint."""
    server = _TCPEcho(("127.0.0.1", 0), _EchoHandler)
    _serve(server)
    try:
        host, port = server.server_address
        yield ConnectionEndpoint(host, port)
    finally:
        server.shutdown()
        server.server_close()


@pytest.fixture
def unix_echo_server():
    """Echo server on a unix socket in a temp dir; yields its endpoint."""
    if not hasattr(socket, "AF_UNIX"):
        pytest.skip("unix sockets not available")

    class _UnixEcho(socketserver.ThreadingMixIn, socketserver.UnixStreamServer):
        daemon_threads = True

    # short path: AF_UNIX paths are limited to ~104 bytes on some platforms
    tmpdir = tempfile.mkdtemp(prefix="fr")
    path = os.path.join(tmpdir, "echo.sock")
    server = _UnixEcho(path, _EchoHandler)
    _serve(server)
    try:
        yield ConnectionEndpoint(path, kind=EndpointKind.LOCAL)
    finally:
        server.shutdown()
        server.server_close()
        os.unlink(path)
        os.rmdir(tmpdir)
