"""
Redix Client

The public entry point. A Client owns one connection, reached through a
Dispatcher, and exposes one method per supported command:

    client = Client(Config(host="localhost", port=6379))
    client.sadd("myset", "a", "b")     # 2
    client.smembers("myset")           # [b'a', b'b']

    with Client.from_url("unix:///tmp/redis.sock") as client:
        client.sismember("myset", "a")  # True

A single client may be shared between threads; calls are serialized on its
connection.
"""

import logging
from typing import Any, Iterator, Optional

from redix.commands import GenericCommands, SetCommands
from redix.commands.base import Converter
from redix.config import Config
from redix.connection import Connection, connection_from_config
from redix.core.dispatcher import Dispatcher
from redix.pipeline import Pipeline
from redix.protocol.resp import Command
from redix.set_proxy import RedisSet

logger = logging.getLogger(__name__)


class Client(GenericCommands, SetCommands):
    """Redis client for a single connection."""

    def __init__(self, config: Optional[Config] = None,
                 connection: Optional[Connection] = None, **options):
        """
        Initialize the client.

        Args:
            config: Connection settings; built from options when omitted
            connection: Use this connection instead of one made from config
            **options: Config fields (host, port, path, socket_timeout, ...)
        """
        if config is not None and options:
            raise TypeError("Pass either a Config or keyword options, not both")

        self.config = config or Config(**options)
        self.connection = connection or connection_from_config(self.config)
        self._dispatcher = Dispatcher(self.connection)

    @classmethod
    def from_url(cls, url: str, **overrides) -> "Client":
        return cls(Config.from_url(url, **overrides))

    def __repr__(self) -> str:
        return f"<Client {self.connection.describe()}>"

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def _execute(self, command: Command, convert: Converter) -> Any:
        reply = self._dispatcher.call(command.name, *command.args)
        return convert(reply)

    def close(self) -> None:
        self._dispatcher.close()

    def pipeline(self, raise_on_error: bool = True) -> Pipeline:
        return Pipeline(self._dispatcher, raise_on_error=raise_on_error)

    def redis_set(self, *key_parts) -> RedisSet:
        """Set-like view over the key made by joining key_parts with ':'."""
        return RedisSet(self, *key_parts)

    def sscan_iter(self, key, match=None, count: Optional[int] = None) -> Iterator[bytes]:
        """
        Iterate over every member of a set using SSCAN.

        The server may return a member more than once across pages, as
        SSCAN itself allows.
        """
        cursor = 0
        while True:
            cursor, members = self.sscan(key, cursor, match=match, count=count)
            yield from members
            if cursor == 0:
                logger.debug("Client: sscan of %r finished", key)
                return
