"""
url_builder.py

A small fluent builder for request URLs. Setters return the builder so calls can be
chained, and build() renders the accumulated state without touching it.

Keys and values are rendered as given, without percent-encoding; callers pass values
that are safe inside a query string.
"""

from typing import Dict


class URLBuilder:
    """
    Accumulates protocol, host, port, path and query parameters and renders a URL.

    Example:
        >>> URLBuilder().set_protocol("http").set_host("localhost").add_param("a", "1").build()
        'http://localhost?a=1&'
    """

    def __init__(self):
        self._protocol = ""
        self._host = ""
        self._port = 0
        self._path = ""
        self._params: Dict[str, str] = {}

    @property
    def protocol(self) -> str:
        return self._protocol

    @property
    def host(self) -> str:
        return self._host

    @property
    def port(self) -> int:
        return self._port

    @property
    def path(self) -> str:
        return self._path

    @property
    def params(self) -> Dict[str, str]:
        return dict(self._params)

    def set_protocol(self, protocol: str) -> "URLBuilder":
        self._protocol = protocol
        return self

    def set_host(self, host: str) -> "URLBuilder":
        self._host = host
        return self

    def set_port(self, port: int) -> "URLBuilder":
        """Sets the port; 0 leaves the port out of the URL."""
        self._port = port
        return self

    def set_path(self, path: str) -> "URLBuilder":
        """Sets the path rendered right after host and port, e.g. '/api'."""
        self._path = path
        return self

    def add_param(self, key: str, value: str) -> "URLBuilder":
        """Adds a query parameter, replacing any previous value for the same key."""
        self._params[key] = value
        return self

    def build(self) -> str:
        """
        Renders the URL.

        The port segment is present only for a non-zero port, and the query segment only
        when at least one parameter was added. Every pair is followed by '&', including
        the last one.

        :return: The rendered URL string.
        """
        url = f"{self._protocol}://{self._host}"

        if self._port != 0:
            url += f":{self._port}"

        url += self._path

        if self._params:
            url += "?" + "".join(f"{key}={value}&" for key, value in self._params.items())

        return url
