"""
Command Dispatcher Module

Turns a command name and arguments into one request/reply round trip on a
connection.

Ordering:
    Replies on a connection come back in the order the requests were sent.
    The dispatcher holds its lock for the whole write-then-read cycle, so
    two threads sharing a client can never interleave requests or steal
    each other's replies.

Failure policy:
    An error reply from the server is raised as CommandError and leaves the
    connection usable. A protocol or transport failure leaves the stream at
    an unknown position, so the connection is closed and discarded; the next
    call opens a fresh one. Nothing is retried.
"""

import logging
import threading
from typing import Iterable, List

from redix.connection import Connection
from redix.errors import ConnectionError, ProtocolError, command_error_from_message
from redix.protocol.resp import Command, Error, Reply, encode_command

logger = logging.getLogger(__name__)


class Dispatcher:
    """Serializes command round trips over a single connection."""

    def __init__(self, connection: Connection):
        self.connection = connection
        self._lock = threading.Lock()

    def call(self, name: str, *args) -> Reply:
        """
        Send one command and wait for its reply.

        Args:
            name: The command name (e.g., 'SADD')
            *args: Command arguments

        Returns:
            The decoded reply

        Raises:
            EncodingError: If an argument cannot be encoded (nothing is sent)
            CommandError: If the server replies with an error
            ProtocolError, ConnectionError: On stream failure
        """
        request = encode_command(Command(name, args))
        logger.debug("Dispatcher: %s with %d argument(s)", name, len(args))

        with self._lock:
            reply = self._round_trip(request, 1)[0]

        if isinstance(reply, Error):
            raise command_error_from_message(reply.message)
        return reply

    def call_many(self, commands: Iterable[Command]) -> List[Reply]:
        """
        Send several commands in one write and read one reply per command.

        Error replies are returned in place rather than raised, so the
        caller can attribute each of them to its command.
        """
        commands = list(commands)
        if not commands:
            return []

        payload = b"".join(encode_command(command) for command in commands)
        logger.debug("Dispatcher: pipeline of %d command(s)", len(commands))

        with self._lock:
            return self._round_trip(payload, len(commands))

    def close(self) -> None:
        with self._lock:
            self.connection.disconnect()

    def _round_trip(self, payload: bytes, expected: int) -> List[Reply]:
        try:
            self.connection.send(payload)
            return [self.connection.read_reply() for _ in range(expected)]
        except (ProtocolError, ConnectionError) as e:
            logger.warning("Dispatcher: discarding connection to %s: %s",
                           self.connection.describe(), e)
            self.connection.disconnect()
            raise
        except BaseException:
            # Interrupted between request and reply: stream position unknown
            self.connection.disconnect()
            raise
