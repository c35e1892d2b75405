"""
Set Proxy

A set-like view over one Redis set key, so a set on the server can be
used much like a Python set:

    tags = client.redis_set("post", 123, "tags")
    tags.add("python", "redis")
    "python" in tags          # True
    len(tags)                 # 2
    sorted(tags)              # [b'python', b'redis']

Key parts are joined with ':'.
"""

from typing import Iterator, List, Optional


class RedisSet:
    """Proxy for the set stored at a single key."""

    def __init__(self, client, *key_parts):
        if not key_parts:
            raise ValueError("RedisSet needs at least one key part")
        self.client = client
        self.key = ":".join(str(part) for part in key_parts)

    def __repr__(self) -> str:
        return f"RedisSet({self.key!r})"

    def __contains__(self, member) -> bool:
        return self.client.sismember(self.key, member)

    def __len__(self) -> int:
        return self.client.scard(self.key)

    def __iter__(self) -> Iterator[bytes]:
        return self.client.sscan_iter(self.key)

    def add(self, *members) -> "RedisSet":
        self.client.sadd(self.key, *members)
        return self

    def remove(self, *members) -> "RedisSet":
        self.client.srem(self.key, *members)
        return self

    def members(self) -> List[bytes]:
        return self.client.smembers(self.key)

    def is_empty(self) -> bool:
        return len(self) == 0

    def exists(self) -> bool:
        return self.client.exists(self.key) == 1

    def clear(self) -> "RedisSet":
        self.client.delete(self.key)
        return self

    def pop(self, count: Optional[int] = None):
        return self.client.spop(self.key, count)

    def random(self, count: Optional[int] = None):
        return self.client.srandmember(self.key, count)

    def move(self, member, destination) -> bool:
        """Move member into destination (a key or another RedisSet)."""
        return self.client.smove(self.key, _key_of(destination), member)

    def intersection(self, *others) -> List[bytes]:
        return self.client.sinter(self.key, *(_key_of(other) for other in others))

    def union(self, *others) -> List[bytes]:
        return self.client.sunion(self.key, *(_key_of(other) for other in others))

    def difference(self, *others) -> List[bytes]:
        return self.client.sdiff(self.key, *(_key_of(other) for other in others))

    def scan(self, match=None, count: Optional[int] = None) -> Iterator[bytes]:
        return self.client.sscan_iter(self.key, match=match, count=count)


def _key_of(value):
    if isinstance(value, RedisSet):
        return value.key
    return value
