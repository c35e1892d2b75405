"""
Connection Module

Byte-stream transports for the client. A connection owns one socket and
the ReplyReader buffering what has been received on it. It knows nothing
about commands: it sends bytes and hands back whole decoded replies.

Socket failures are translated into redix ConnectionError / TimeoutError
here, so nothing above this layer deals with OSError.
"""

import logging
import socket
from typing import Optional

from redix.config import Config
from redix.errors import ConnectionError, TimeoutError
from redix.protocol.reader import ReplyReader
from redix.protocol.resp import INCOMPLETE, Reply

logger = logging.getLogger(__name__)


class Connection:
    """Base class for a single socket connection to a server."""

    READ_SIZE = 4096

    def __init__(self, socket_timeout: Optional[float] = None,
                 socket_connect_timeout: Optional[float] = None):
        self.socket_timeout = socket_timeout
        self.socket_connect_timeout = socket_connect_timeout
        self._sock: Optional[socket.socket] = None
        self._reader = ReplyReader()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.describe()}>"

    def describe(self) -> str:
        return "socket"

    def _connect(self) -> socket.socket:
        raise NotImplementedError

    @property
    def is_connected(self) -> bool:
        return self._sock is not None

    def connect(self) -> None:
        """Open the socket if it is not open yet."""
        if self._sock is not None:
            return

        try:
            sock = self._connect()
        except socket.timeout as e:
            raise TimeoutError(f"Timeout connecting to {self.describe()}") from e
        except OSError as e:
            raise ConnectionError(f"Error connecting to {self.describe()}: {e}") from e

        sock.settimeout(self.socket_timeout)
        self._sock = sock
        self._reader.clear()
        logger.info("Connection: connected to %s", self.describe())

    def disconnect(self) -> None:
        """Close the socket and drop anything still buffered."""
        if self._sock is None:
            return

        self._sock.close()
        self._sock = None
        self._reader.clear()
        logger.info("Connection: disconnected from %s", self.describe())

    def send(self, data: bytes) -> None:
        """Write all of data, connecting first if needed."""
        self.connect()
        try:
            self._sock.sendall(data)
        except socket.timeout as e:
            raise TimeoutError(f"Timeout writing to {self.describe()}") from e
        except OSError as e:
            raise ConnectionError(f"Error writing to {self.describe()}: {e}") from e

    def read_reply(self) -> Reply:
        """
        Block until one whole reply has been received.

        Returns:
            The next decoded reply on this connection

        Raises:
            ProtocolError: If the received bytes are not valid RESP
            ConnectionError: On EOF or socket failure
            TimeoutError: If the socket timeout expires first
        """
        if self._sock is None:
            raise ConnectionError(f"Not connected to {self.describe()}")

        while True:
            reply = self._reader.get_reply()
            if reply is not INCOMPLETE:
                return reply

            try:
                data = self._sock.recv(self.READ_SIZE)
            except socket.timeout as e:
                raise TimeoutError(f"Timeout reading from {self.describe()}") from e
            except OSError as e:
                raise ConnectionError(f"Error reading from {self.describe()}: {e}") from e

            if not data:
                if self._reader.pending():
                    raise ConnectionError(f"Connection to {self.describe()} closed mid-reply")
                raise ConnectionError(f"Connection closed by {self.describe()}")

            self._reader.feed(data)


class TCPConnection(Connection):
    """Connection over TCP."""

    def __init__(self, host: str = "localhost", port: int = 6379, **kwargs):
        super().__init__(**kwargs)
        self.host = host
        self.port = port

    def describe(self) -> str:
        return f"{self.host}:{self.port}"

    def _connect(self) -> socket.socket:
        sock = socket.create_connection((self.host, self.port), timeout=self.socket_connect_timeout)
        sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
        return sock


class UnixConnection(Connection):
    """Connection over a Unix domain socket."""

    def __init__(self, path: str, **kwargs):
        super().__init__(**kwargs)
        self.path = path

    def describe(self) -> str:
        return f"unix://{self.path}"

    def _connect(self) -> socket.socket:
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        sock.settimeout(self.socket_connect_timeout)
        try:
            sock.connect(self.path)
        except OSError:
            sock.close()
            raise
        return sock


class SocketConnection(Connection):
    """
    Connection around a socket that is already connected.

    Once disconnected it cannot be reopened, since there is no address to
    dial again.
    """

    def __init__(self, sock: socket.socket, **kwargs):
        super().__init__(**kwargs)
        self._initial: Optional[socket.socket] = sock
        self.connect()

    def _connect(self) -> socket.socket:
        if self._initial is None:
            raise ConnectionError("Socket connection was closed and cannot be reopened")
        sock, self._initial = self._initial, None
        return sock


def connection_from_config(config: Config) -> Connection:
    """Create the connection type matching a Config."""
    options = {
        "socket_timeout": config.socket_timeout,
        "socket_connect_timeout": config.socket_connect_timeout,
    }
    if config.is_unix:
        return UnixConnection(config.path, **options)
    return TCPConnection(config.host, config.port, **options)
