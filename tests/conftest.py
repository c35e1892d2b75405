"""Pytest configuration and shared fixtures."""

import socket

import pytest

from redix import Client
from redix.connection import SocketConnection
from tests.support.fakes import FakeSocket
from tests.support.server import RedisServer


@pytest.fixture
def fake_client():
    """
    Factory for a client wired to a FakeSocket.

    Usage:
        client, sock = fake_client(b":2\\r\\n")
    """
    def make(*replies: bytes, **socket_options):
        sock = FakeSocket(b"".join(replies), **socket_options)
        return Client(connection=SocketConnection(sock)), sock

    return make


@pytest.fixture
def unused_tcp_port():
    """A localhost port with nothing listening on it."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


@pytest.fixture(scope="session")
def server():
    """A RESP server on an ephemeral localhost port."""
    srv = RedisServer().start()
    yield srv
    srv.stop()


@pytest.fixture
def client(server):
    """A client connected to the test server, with an empty keyspace."""
    c = Client(host=server.host, port=server.port, socket_timeout=2.0)
    c.execute_command("FLUSHALL")
    yield c
    c.close()
