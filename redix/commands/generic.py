"""Connection and keyspace commands used alongside the set commands."""

from typing import Union

from redix.commands.base import CommandsBase
from redix.commands.conversions import to_int, to_member, to_pong, to_status


class GenericCommands(CommandsBase):

    def ping(self, message=None) -> Union[bool, bytes]:
        """True on PONG; with a message, the echoed message."""
        if message is None:
            return self._command("PING", convert=to_pong)
        return self._command("PING", message, convert=to_pong)

    def echo(self, message) -> bytes:
        return self._command("ECHO", message, convert=to_member)

    def delete(self, *keys) -> int:
        """DEL: returns the number of keys removed."""
        return self._command("DEL", *keys, convert=to_int)

    def exists(self, *keys) -> int:
        return self._command("EXISTS", *keys, convert=to_int)

    def type(self, key) -> str:
        return self._command("TYPE", key, convert=to_status)
