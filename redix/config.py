from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qs, unquote, urlparse

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 6379


@dataclass
class Config:
    """Client connection configuration container."""
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    path: Optional[str] = None
    socket_timeout: Optional[float] = 5.0
    socket_connect_timeout: Optional[float] = 5.0

    @property
    def is_unix(self) -> bool:
        return self.path is not None

    @property
    def address(self) -> str:
        if self.is_unix:
            return f"unix://{self.path}"
        return f"{self.host}:{self.port}"

    @classmethod
    def from_url(cls, url: str, **overrides) -> "Config":
        """
        Build a Config from a connection URL.

        Supports:
            redis://host:port
            unix:///path/to/redis.sock?timeout=1.5

        A ``timeout`` query parameter sets both socket timeouts. Keyword
        overrides win over anything parsed from the URL.
        """
        parsed = urlparse(url)
        values = {}

        if parsed.scheme == "redis":
            values["host"] = unquote(parsed.hostname) if parsed.hostname else DEFAULT_HOST
            try:
                values["port"] = parsed.port or DEFAULT_PORT
            except ValueError as e:
                raise ValueError(f"Invalid port in URL: {url}") from e
        elif parsed.scheme == "unix":
            if not parsed.path:
                raise ValueError(f"Missing socket path in URL: {url}")
            values["path"] = unquote(parsed.path)
        else:
            raise ValueError(
                f"Unsupported URL scheme: {parsed.scheme!r}. Use redis:// or unix://"
            )

        query = parse_qs(parsed.query)
        if "timeout" in query:
            try:
                timeout = float(query["timeout"][0])
            except ValueError as e:
                raise ValueError(f"Invalid timeout in URL: {url}") from e
            values["socket_timeout"] = timeout
            values["socket_connect_timeout"] = timeout

        values.update(overrides)
        return cls(**values)
