"""Unit tests for the RedisSet proxy."""

from unittest.mock import MagicMock

import pytest

from redix import Client, RedisSet


@pytest.fixture
def mock_client():
    return MagicMock(spec=Client)


class TestRedisSet:

    def test_key_parts_are_joined(self, mock_client):
        assert RedisSet(mock_client, "post", 123, "tags").key == "post:123:tags"

    def test_requires_a_key(self, mock_client):
        with pytest.raises(ValueError):
            RedisSet(mock_client)

    def test_add_and_remove_chain(self, mock_client):
        tags = RedisSet(mock_client, "tags")

        assert tags.add("a", "b").remove("a") is tags
        mock_client.sadd.assert_called_once_with("tags", "a", "b")
        mock_client.srem.assert_called_once_with("tags", "a")

    def test_membership_and_size(self, mock_client):
        mock_client.sismember.return_value = True
        mock_client.scard.return_value = 0
        tags = RedisSet(mock_client, "tags")

        assert "a" in tags
        assert len(tags) == 0
        assert tags.is_empty()
        mock_client.sismember.assert_called_once_with("tags", "a")

    def test_iteration_uses_sscan(self, mock_client):
        mock_client.sscan_iter.return_value = iter([b"a", b"b"])

        assert list(RedisSet(mock_client, "tags")) == [b"a", b"b"]
        mock_client.sscan_iter.assert_called_once_with("tags")

    def test_set_algebra_accepts_keys_and_proxies(self, mock_client):
        tags = RedisSet(mock_client, "tags")
        other = RedisSet(mock_client, "other")

        tags.intersection(other, "third")
        tags.union(other)
        tags.difference("third")

        mock_client.sinter.assert_called_once_with("tags", "other", "third")
        mock_client.sunion.assert_called_once_with("tags", "other")
        mock_client.sdiff.assert_called_once_with("tags", "third")

    def test_move_pop_random(self, mock_client):
        tags = RedisSet(mock_client, "tags")

        tags.move("a", RedisSet(mock_client, "archive"))
        tags.pop()
        tags.random(2)

        mock_client.smove.assert_called_once_with("tags", "archive", "a")
        mock_client.spop.assert_called_once_with("tags", None)
        mock_client.srandmember.assert_called_once_with("tags", 2)

    def test_exists_and_clear(self, mock_client):
        mock_client.exists.return_value = 1
        tags = RedisSet(mock_client, "tags")

        assert tags.exists()
        assert tags.clear() is tags
        mock_client.delete.assert_called_once_with("tags")

    def test_client_factory(self, fake_client):
        client, _ = fake_client()
        proxy = client.redis_set("user", 7, "roles")

        assert isinstance(proxy, RedisSet)
        assert proxy.client is client
        assert proxy.key == "user:7:roles"
