"""
Command Table

Static description of every command the client knows, keyed by its
uppercase wire name. Each entry records the accepted number of wire
arguments (everything after the command name). validate() checks a call
against its entry before anything is sent.
"""

from dataclasses import dataclass
from typing import Any, Optional, Sequence

from redix.errors import EncodingError
from redix.protocol.resp import encode_argument


@dataclass(frozen=True)
class CommandSpec:
    """Arity of one command, counted in wire arguments."""
    name: str
    min_args: int
    max_args: Optional[int] = None

    def check_arity(self, args: Sequence[Any]) -> None:
        if len(args) < self.min_args or (self.max_args is not None and len(args) > self.max_args):
            raise EncodingError(f"wrong number of arguments for '{self.name.lower()}' command")


COMMANDS = {spec.name: spec for spec in (
    # Sets
    CommandSpec("SADD", 2),
    CommandSpec("SREM", 2),
    CommandSpec("SMEMBERS", 1, 1),
    CommandSpec("SISMEMBER", 2, 2),
    CommandSpec("SMISMEMBER", 2),
    CommandSpec("SCARD", 1, 1),
    CommandSpec("SPOP", 1, 2),
    CommandSpec("SRANDMEMBER", 1, 2),
    CommandSpec("SMOVE", 3, 3),
    CommandSpec("SDIFF", 1),
    CommandSpec("SINTER", 1),
    CommandSpec("SUNION", 1),
    CommandSpec("SDIFFSTORE", 2),
    CommandSpec("SINTERSTORE", 2),
    CommandSpec("SUNIONSTORE", 2),
    CommandSpec("SSCAN", 2, 6),
    # numkeys, then at least one key, then optionally LIMIT n
    CommandSpec("SINTERCARD", 2),
    # Generic
    CommandSpec("PING", 0, 1),
    CommandSpec("ECHO", 1, 1),
    CommandSpec("DEL", 1),
    CommandSpec("EXISTS", 1),
    CommandSpec("TYPE", 1, 1),
)}


def validate(name: str, args: Sequence[Any]) -> None:
    """
    Check a call against the command table.

    Commands missing from the table are only checked for encodable
    arguments, so the generic escape hatch can reach any server command.

    Raises:
        EncodingError: On an arity violation or an argument with no wire form
    """
    spec = COMMANDS.get(name.upper())
    if spec is not None:
        spec.check_arity(args)

    for arg in args:
        encode_argument(arg)


def check_integer(option: str, value: Any, minimum: Optional[int] = None) -> int:
    """Validate a numeric option such as a SPOP count or SSCAN cursor."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise EncodingError(f"{option} must be an integer, got {type(value).__name__}")
    if minimum is not None and value < minimum:
        raise EncodingError(f"{option} must be >= {minimum}, got {value}")
    return value
