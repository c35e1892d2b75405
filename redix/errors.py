"""
Redix Errors

Every failure the client can surface derives from RedixError:

    EncodingError    - an argument cannot be serialized, or a command was
                       called with the wrong arity / argument domain
    ProtocolError    - bytes from the server are not valid RESP, or a reply
                       has a shape the command does not accept
    CommandError     - the server answered with a RESP error reply
    ConnectionError  - the transport failed (reset, EOF, refused)
    TimeoutError     - the transport timed out
"""

import builtins


class RedixError(Exception):
    """Base class for all client errors."""


class EncodingError(RedixError, ValueError):
    """A command argument cannot be represented on the wire."""


class ProtocolError(RedixError):
    """Malformed or unexpected data was received from the server."""


class CommandError(RedixError):
    """
    The server returned an error reply.

    The message is kept exactly as sent by the server, e.g.
    ``WRONGTYPE Operation against a key holding the wrong kind of value``.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def code(self) -> str:
        """The leading error word (``ERR``, ``WRONGTYPE``, ...)."""
        return self.message.split(" ", 1)[0] if self.message else ""


class WrongTypeError(CommandError):
    """The key holds a value of a different type than the command expects."""


class ConnectionError(RedixError, builtins.ConnectionError):
    """The connection to the server failed or was lost."""


class TimeoutError(ConnectionError, builtins.TimeoutError):
    """A socket operation did not finish within its timeout."""


def command_error_from_message(message: str) -> CommandError:
    """Build the most specific CommandError for a server error message."""
    if message.startswith("WRONGTYPE"):
        return WrongTypeError(message)
    return CommandError(message)
