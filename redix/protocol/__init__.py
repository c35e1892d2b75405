"""Protocol package - RESP protocol implementation."""

from .reader import ReplyReader
from .resp import (
    INCOMPLETE,
    NULL_ARRAY,
    NULL_BULK_STRING,
    Array,
    BulkString,
    Command,
    Error,
    Integer,
    NullArray,
    NullBulkString,
    Reply,
    SimpleString,
    decode,
    encode_command,
    encode_reply,
)

__all__ = [
    'INCOMPLETE',
    'NULL_ARRAY',
    'NULL_BULK_STRING',
    'Array',
    'BulkString',
    'Command',
    'Error',
    'Integer',
    'NullArray',
    'NullBulkString',
    'Reply',
    'ReplyReader',
    'SimpleString',
    'decode',
    'encode_command',
    'encode_reply',
]
