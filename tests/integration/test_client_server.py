"""End-to-end tests of the client against the in-process RESP server."""

import socket
import threading

import pytest

from redix import Client
from redix.errors import CommandError, ConnectionError, TimeoutError, WrongTypeError


class TestSetCommands:

    def test_add_members_and_cardinality(self, client):
        assert client.sadd("s", "a", "b", "a") == 2
        assert client.sadd("s", "b", "c") == 1
        assert client.scard("s") == 3
        assert sorted(client.smembers("s")) == [b"a", b"b", b"c"]

    def test_membership(self, client):
        client.sadd("s", "a", "b")
        assert client.sismember("s", "a") is True
        assert client.sismember("s", "z") is False
        assert client.smismember("s", "a", "z", "b") == [True, False, True]

    def test_remove(self, client):
        client.sadd("s", "a", "b")
        assert client.srem("s", "a", "nope") == 1
        assert client.smembers("s") == [b"b"]

    def test_missing_key_reads_as_empty(self, client):
        assert client.smembers("empty") == []
        assert client.scard("empty") == 0
        assert client.spop("empty") is None
        assert client.srandmember("empty") is None

    def test_pop(self, client):
        client.sadd("s", "a", "b", "c")

        popped = client.spop("s")
        assert popped in (b"a", b"b", b"c")
        assert client.scard("s") == 2

        rest = client.spop("s", 5)
        assert sorted(rest + [popped]) == [b"a", b"b", b"c"]
        assert client.exists("s") == 0

    def test_random_member_leaves_set_alone(self, client):
        client.sadd("s", "a", "b")
        assert client.srandmember("s") in (b"a", b"b")
        assert len(client.srandmember("s", -5)) == 5
        assert client.scard("s") == 2

    def test_move(self, client):
        client.sadd("src", "a")
        assert client.smove("src", "dst", "a") is True
        assert client.smove("src", "dst", "a") is False
        assert client.smembers("dst") == [b"a"]

    def test_algebra(self, client):
        client.sadd("x", "a", "b", "c")
        client.sadd("y", "b", "c", "d")

        assert sorted(client.sinter("x", "y")) == [b"b", b"c"]
        assert sorted(client.sunion("x", "y")) == [b"a", b"b", b"c", b"d"]
        assert client.sdiff("x", "y") == [b"a"]

        assert client.sinterstore("i", "x", "y") == 2
        assert client.sunionstore("u", "x", "y") == 4
        assert client.sdiffstore("d", "x", "y") == 1
        assert client.smembers("d") == [b"a"]

    def test_sintercard(self, client):
        client.sadd("x", "a", "b", "c")
        client.sadd("y", "a", "b", "c", "d")
        assert client.sintercard("x", "y") == 3
        assert client.sintercard("x", "y", limit=2) == 2

    def test_sscan_iter_walks_every_page(self, client):
        members = [f"m{n:03d}".encode() for n in range(45)]
        client.sadd("big", *members)

        assert sorted(client.sscan_iter("big", count=10)) == members
        assert sorted(client.sscan_iter("big", match="m00*")) == members[:10]

    def test_binary_members(self, client):
        client.sadd("bin", b"\x00\xff", b"a\r\nb")
        assert sorted(client.smembers("bin")) == [b"\x00\xff", b"a\r\nb"]


class TestErrors:

    def test_wrong_type(self, client):
        client.execute_command("SET", "str", "value")

        with pytest.raises(WrongTypeError) as exc_info:
            client.sadd("str", "m")

        assert exc_info.value.message == (
            "WRONGTYPE Operation against a key holding the wrong kind of value"
        )
        # Connection still usable afterwards
        assert client.ping() is True

    def test_unknown_command(self, client):
        with pytest.raises(CommandError, match="unknown command"):
            client.execute_command("NOSUCHCOMMAND")

    def test_reconnects_after_server_drops_connection(self, client, server):
        assert client.ping() is True
        server.drop_clients()

        with pytest.raises(ConnectionError):
            client.ping()
        assert not client.connection.is_connected

        assert client.ping() is True

    def test_read_timeout_discards_connection(self):
        with socket.create_server(("127.0.0.1", 0)) as silent:
            port = silent.getsockname()[1]
            client = Client(host="127.0.0.1", port=port, socket_timeout=0.2)

            with pytest.raises(TimeoutError):
                client.scard("s")
            assert not client.connection.is_connected


class TestPipelineAndProxy:

    def test_pipeline_round_trip(self, client):
        results = (
            client.pipeline()
            .sadd("p", "a", "b")
            .sismember("p", "a")
            .scard("p")
            .smembers("p")
            .execute()
        )
        assert results == [2, True, 2, [b"a", b"b"]]

    def test_set_proxy(self, client):
        tags = client.redis_set("post", 1, "tags")
        tags.add("python", "redis")

        assert "python" in tags
        assert len(tags) == 2
        assert sorted(tags) == [b"python", b"redis"]
        assert client.type("post:1:tags") == "set"


class TestConcurrency:

    def test_shared_client_across_threads(self, client):
        errors = []

        def worker(n):
            try:
                for i in range(20):
                    key = f"t{n}"
                    client.sadd(key, f"m{i}")
                    assert client.scard(key) == i + 1
            except AssertionError as e:
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=10)

        assert errors == []
        assert [client.scard(f"t{n}") for n in range(5)] == [20] * 5
