"""
RESP (REdis Serialization Protocol) Codec

This module handles encoding of client commands and decoding of server
replies. Requests are always sent as an array of bulk strings:

    *<argc>\\r\\n$<len>\\r\\n<arg>\\r\\n...

Replies are one of the RESP2 types, identified by their first byte:

    +  simple string        -  error
    :  integer              $  bulk string ($-1 is null)
    *  array (*-1 is null, elements may be arrays to any depth)

The decoder never blocks and never raises on short input: when the buffer
ends before a full reply it returns INCOMPLETE, and the caller retries once
more bytes have been read.
"""

from dataclasses import dataclass
from typing import Any, Union

from redix.errors import EncodingError, ProtocolError

CRLF = b"\r\n"

SIMPLE_STRING = b"+"
ERROR = b"-"
INTEGER = b":"
BULK_STRING = b"$"
ARRAY = b"*"

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

# Server-side proto-max-bulk-len default
MAX_BULK_LENGTH = 512 * 1024 * 1024


@dataclass(frozen=True)
class Command:
    """A command name plus its ordered arguments."""
    name: str
    args: tuple = ()


class Reply:
    """Base class of the decoded reply variants."""

    __slots__ = ()


@dataclass(frozen=True)
class SimpleString(Reply):
    value: str


@dataclass(frozen=True)
class Error(Reply):
    message: str


@dataclass(frozen=True)
class Integer(Reply):
    value: int


@dataclass(frozen=True)
class BulkString(Reply):
    value: bytes


@dataclass(frozen=True)
class NullBulkString(Reply):
    pass


@dataclass(frozen=True)
class Array(Reply):
    items: tuple = ()


@dataclass(frozen=True)
class NullArray(Reply):
    pass


NULL_BULK_STRING = NullBulkString()
NULL_ARRAY = NullArray()


class _Incomplete:
    """Marker for a buffer that does not yet hold a whole reply."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "INCOMPLETE"

    def __bool__(self) -> bool:
        return False


INCOMPLETE = _Incomplete()

DecodeResult = Union[tuple[Reply, int], _Incomplete]


# ----------------------------------------------------------------------------
# Requests
# ----------------------------------------------------------------------------

def encode_argument(value: Any) -> bytes:
    """
    Convert a single command argument to the bytes sent on the wire.

    Args:
        value: bytes-like, str, int or float

    Returns:
        The raw argument bytes

    Raises:
        EncodingError: If the value has no wire representation
    """
    # bool is an int subclass; True/False have no agreed wire form
    if isinstance(value, bool):
        raise EncodingError(f"Invalid argument type {type(value).__name__}: {value!r}")
    if isinstance(value, bytes):
        return value
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, int):
        return str(value).encode()
    if isinstance(value, float):
        return repr(value).encode()
    raise EncodingError(f"Invalid argument type {type(value).__name__}: {value!r}")


def encode_command(command: Command) -> bytes:
    """
    Encode a command as a RESP array of bulk strings.

    Args:
        command: The command to serialize (left untouched)

    Returns:
        RESP-encoded request bytes
    """
    if not isinstance(command.name, str) or not command.name:
        raise EncodingError(f"Invalid command name: {command.name!r}")

    parts = [encode_argument(command.name)]
    parts.extend(encode_argument(arg) for arg in command.args)

    out = [f"*{len(parts)}\r\n".encode()]
    for part in parts:
        out.append(f"${len(part)}\r\n".encode())
        out.append(part)
        out.append(CRLF)
    return b"".join(out)


# ----------------------------------------------------------------------------
# Replies
# ----------------------------------------------------------------------------

def _parse_integer(header: bytes) -> int:
    digits = header[1:] if header[:1] in (b"-", b"+") else header
    if not digits or not digits.isdigit():
        raise ProtocolError(f"Invalid integer in reply: {header!r}")

    value = int(header)
    if not INT64_MIN <= value <= INT64_MAX:
        raise ProtocolError(f"Integer out of 64-bit range: {header!r}")
    return value


def _parse_length(header: bytes) -> int:
    length = _parse_integer(header)
    if length < -1:
        raise ProtocolError(f"Invalid length in reply: {length}")
    return length


def _parse_text(header: bytes) -> str:
    try:
        return header.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ProtocolError(f"Invalid UTF-8 in status line: {header!r}") from e


def decode(buffer: bytes, offset: int = 0) -> DecodeResult:
    """
    Decode one reply from a byte buffer.

    Args:
        buffer: Bytes received so far (bytes or bytearray)
        offset: Position of the first byte of the reply

    Returns:
        tuple: (reply, offset just past the reply)
               INCOMPLETE if the buffer ends before the reply does

    Raises:
        ProtocolError: If the bytes are not valid RESP
    """
    # Arrays still being filled, innermost last: (items so far, expected count)
    open_arrays = []
    position = offset

    while True:
        if position >= len(buffer):
            return INCOMPLETE

        prefix = bytes(buffer[position:position + 1])
        if prefix not in (SIMPLE_STRING, ERROR, INTEGER, BULK_STRING, ARRAY):
            raise ProtocolError(f"Unknown reply type byte: {prefix!r}")

        line_end = buffer.find(CRLF, position + 1)
        if line_end == -1:
            return INCOMPLETE

        header = bytes(buffer[position + 1:line_end])
        position = line_end + 2

        if prefix == SIMPLE_STRING:
            reply = SimpleString(_parse_text(header))
        elif prefix == ERROR:
            reply = Error(_parse_text(header))
        elif prefix == INTEGER:
            reply = Integer(_parse_integer(header))
        elif prefix == BULK_STRING:
            length = _parse_length(header)
            if length > MAX_BULK_LENGTH:
                raise ProtocolError(f"Bulk string length {length} exceeds {MAX_BULK_LENGTH}")
            if length == -1:
                reply = NULL_BULK_STRING
            else:
                content_end = position + length
                if content_end + 2 > len(buffer):
                    return INCOMPLETE
                if buffer[content_end:content_end + 2] != CRLF:
                    raise ProtocolError("Bulk string not terminated by CRLF")
                reply = BulkString(bytes(buffer[position:content_end]))
                position = content_end + 2
        else:
            count = _parse_length(header)
            if count > 0:
                open_arrays.append(([], count))
                continue
            reply = NULL_ARRAY if count == -1 else Array(())

        # Hand the finished reply to its enclosing arrays, closing any that fill up
        while open_arrays:
            items, count = open_arrays[-1]
            items.append(reply)
            if len(items) < count:
                break
            open_arrays.pop()
            reply = Array(tuple(items))
        else:
            return reply, position


# ----------------------------------------------------------------------------
# Server-side encoders
# ----------------------------------------------------------------------------

def encode_simple_string(s: str) -> bytes:
    """Encode a simple string in RESP format."""
    return f"+{s}\r\n".encode()


def encode_error(error_msg: str) -> bytes:
    """Encode an error message in RESP format."""
    return f"-{error_msg}\r\n".encode()


def encode_integer(n: int) -> bytes:
    """Encode an integer in RESP format."""
    return f":{n}\r\n".encode()


def encode_bulk_string(s: Union[str, bytes]) -> bytes:
    """
    Encode a bulk string in RESP format.

    Args:
        s: String or bytes to encode

    Returns:
        RESP-encoded bulk string
    """
    s_bytes = s.encode() if isinstance(s, str) else bytes(s)
    return f"${len(s_bytes)}\r\n".encode() + s_bytes + CRLF


def encode_null_bulk_string() -> bytes:
    """Encode a null bulk string in RESP format."""
    return b"$-1\r\n"


def encode_null_array() -> bytes:
    """Encode a null array in RESP format."""
    return b"*-1\r\n"


def encode_reply(reply: Reply) -> bytes:
    """
    Encode a reply the way a server would send it.

    Args:
        reply: Any Reply variant; arrays are encoded recursively

    Returns:
        RESP-encoded reply bytes
    """
    if isinstance(reply, SimpleString):
        return encode_simple_string(reply.value)
    if isinstance(reply, Error):
        return encode_error(reply.message)
    if isinstance(reply, Integer):
        return encode_integer(reply.value)
    if isinstance(reply, BulkString):
        return encode_bulk_string(reply.value)
    if isinstance(reply, NullBulkString):
        return encode_null_bulk_string()
    if isinstance(reply, Array):
        return f"*{len(reply.items)}\r\n".encode() + b"".join(
            encode_reply(item) for item in reply.items
        )
    if isinstance(reply, NullArray):
        return encode_null_array()
    raise EncodingError(f"Not a reply: {reply!r}")
