"""
Set Commands

One method per Redis set command. Each method only shapes arguments and
picks the reply converter; validation happens against the command table.

Members come back as bytes, multi-member results as lists in server order.
"""

from typing import List, Optional, Tuple

from redix.commands.base import CommandsBase
from redix.commands.conversions import (
    to_bool,
    to_bool_list,
    to_int,
    to_members,
    to_optional_member,
    to_scan,
)
from redix.commands.table import COMMANDS, check_integer


class SetCommands(CommandsBase):
    """Redis set commands."""

    def sadd(self, key, *members) -> int:
        """Add members to a set. Returns how many were not already present."""
        return self._command("SADD", key, *members, convert=to_int)

    def srem(self, key, *members) -> int:
        """Remove members from a set. Returns how many were present."""
        return self._command("SREM", key, *members, convert=to_int)

    def smembers(self, key) -> List[bytes]:
        return self._command("SMEMBERS", key, convert=to_members)

    def sismember(self, key, member) -> bool:
        return self._command("SISMEMBER", key, member, convert=to_bool)

    def smismember(self, key, *members) -> List[bool]:
        return self._command("SMISMEMBER", key, *members, convert=to_bool_list)

    def scard(self, key) -> int:
        return self._command("SCARD", key, convert=to_int)

    def spop(self, key, count: Optional[int] = None):
        """
        Remove and return random members.

        Args:
            key: The set key
            count: If given, pop up to this many members

        Returns:
            Without count: one member, or None if the set is empty.
            With count: a list of members, possibly empty.
        """
        if count is None:
            return self._command("SPOP", key, convert=to_optional_member)
        check_integer("count", count, minimum=0)
        return self._command("SPOP", key, count, convert=to_members)

    def srandmember(self, key, count: Optional[int] = None):
        """
        Return random members without removing them.

        A negative count allows the same member to be returned more than
        once, as the server defines it.
        """
        if count is None:
            return self._command("SRANDMEMBER", key, convert=to_optional_member)
        check_integer("count", count)
        return self._command("SRANDMEMBER", key, count, convert=to_members)

    def smove(self, source, destination, member) -> bool:
        return self._command("SMOVE", source, destination, member, convert=to_bool)

    def sdiff(self, *keys) -> List[bytes]:
        return self._command("SDIFF", *keys, convert=to_members)

    def sinter(self, *keys) -> List[bytes]:
        return self._command("SINTER", *keys, convert=to_members)

    def sunion(self, *keys) -> List[bytes]:
        return self._command("SUNION", *keys, convert=to_members)

    def sdiffstore(self, destination, *keys) -> int:
        return self._command("SDIFFSTORE", destination, *keys, convert=to_int)

    def sinterstore(self, destination, *keys) -> int:
        return self._command("SINTERSTORE", destination, *keys, convert=to_int)

    def sunionstore(self, destination, *keys) -> int:
        return self._command("SUNIONSTORE", destination, *keys, convert=to_int)

    def sscan(self, key, cursor: int = 0, match=None,
              count: Optional[int] = None) -> Tuple[int, List[bytes]]:
        """
        Incrementally iterate set members.

        Args:
            key: The set key
            cursor: 0 to start, then the cursor from the previous call
            match: Optional glob-style pattern
            count: Optional hint for members per call

        Returns:
            tuple: (next_cursor, members); next_cursor 0 means done
        """
        check_integer("cursor", cursor, minimum=0)
        args = [key, cursor]
        if match is not None:
            args.extend(["MATCH", match])
        if count is not None:
            check_integer("count", count, minimum=1)
            args.extend(["COUNT", count])
        return self._command("SSCAN", *args, convert=to_scan)

    def sintercard(self, *keys, limit: Optional[int] = None) -> int:
        """Cardinality of the intersection, stopping early at limit if given."""
        if not keys:
            COMMANDS["SINTERCARD"].check_arity(())
        args = [len(keys), *keys]
        if limit is not None:
            check_integer("limit", limit, minimum=0)
            args.extend(["LIMIT", limit])
        return self._command("SINTERCARD", *args, convert=to_int)
