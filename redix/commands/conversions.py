"""
Reply conversions.

Each command names the converter for the reply shapes it accepts. A reply
of any other shape is a protocol violation and raises ProtocolError rather
than being coerced.
"""

from typing import Any, List, Optional, Tuple, Union

from redix.errors import ProtocolError, command_error_from_message
from redix.protocol.resp import (
    Array,
    BulkString,
    Error,
    Integer,
    NullArray,
    NullBulkString,
    Reply,
    SimpleString,
)


def _unexpected(reply: Reply, expected: str) -> ProtocolError:
    return ProtocolError(f"Expected {expected} reply, got {reply!r}")


def to_int(reply: Reply) -> int:
    if isinstance(reply, Integer):
        return reply.value
    raise _unexpected(reply, "integer")


def to_bool(reply: Reply) -> bool:
    """Integer 1/0 replies such as SISMEMBER and SMOVE."""
    if isinstance(reply, Integer) and reply.value in (0, 1):
        return reply.value == 1
    raise _unexpected(reply, "integer 0 or 1")


def to_bool_list(reply: Reply) -> List[bool]:
    if isinstance(reply, Array):
        return [to_bool(item) for item in reply.items]
    raise _unexpected(reply, "array of integers")


def to_member(reply: Reply) -> bytes:
    if isinstance(reply, BulkString):
        return reply.value
    raise _unexpected(reply, "bulk string")


def to_optional_member(reply: Reply) -> Optional[bytes]:
    """A single member, or None when the set is empty or missing."""
    if isinstance(reply, NullBulkString):
        return None
    return to_member(reply)


def to_members(reply: Reply) -> List[bytes]:
    """An array of members; a null array counts as empty."""
    if isinstance(reply, NullArray):
        return []
    if isinstance(reply, Array):
        return [to_member(item) for item in reply.items]
    raise _unexpected(reply, "array of bulk strings")


def to_scan(reply: Reply) -> Tuple[int, List[bytes]]:
    """SSCAN: a two element array of cursor and members."""
    if not isinstance(reply, Array) or len(reply.items) != 2:
        raise _unexpected(reply, "two element scan")

    raw_cursor = to_member(reply.items[0])
    if not raw_cursor.isdigit():
        raise ProtocolError(f"Invalid scan cursor: {raw_cursor!r}")
    return int(raw_cursor), to_members(reply.items[1])


def to_status(reply: Reply) -> str:
    if isinstance(reply, SimpleString):
        return reply.value
    raise _unexpected(reply, "simple string")


def to_pong(reply: Reply) -> Union[bool, bytes]:
    """PING answers +PONG, or echoes its message as a bulk string."""
    if isinstance(reply, SimpleString):
        return reply.value == "PONG"
    return to_member(reply)


def _scalar_to_python(reply: Reply) -> Any:
    if isinstance(reply, SimpleString):
        return reply.value
    if isinstance(reply, (Integer, BulkString)):
        return reply.value
    if isinstance(reply, (NullBulkString, NullArray)):
        return None
    if isinstance(reply, Error):
        return command_error_from_message(reply.message)
    raise _unexpected(reply, "RESP")


def to_python(reply: Reply) -> Any:
    """Generic conversion for commands without a dedicated converter."""
    if not isinstance(reply, Array):
        return _scalar_to_python(reply)

    # Nested arrays are walked with a stack, so any depth converts
    result = []
    stack = [(iter(reply.items), result)]
    while stack:
        items, out = stack[-1]
        for item in items:
            if isinstance(item, Array):
                child = []
                out.append(child)
                stack.append((iter(item.items), child))
                break
            out.append(_scalar_to_python(item))
        else:
            stack.pop()
    return result
