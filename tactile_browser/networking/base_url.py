"""Base URL class"""
from abc import ABC, abstractmethod

from .errors import InvalidURL


class URL(ABC):
    DEFAULT_PORT = None

    def __init__(self, raw_schema, raw_url):
        self.schema = raw_schema
        self.raw_url = raw_url
        self.host = None
        self.path = "/"
        self.port = self.DEFAULT_PORT

        self._parse_host_and_path(raw_url)
        if not self.host:
            raise InvalidURL(f"URL has no host: {raw_schema}://{raw_url}")

    def __str__(self):
        port_part = ":" + str(self.port)
        if self.port == self.DEFAULT_PORT:
            port_part = ""
        return f"{self.schema}://{self.host}{port_part}{self.path}"

    def _parse_host_and_path(self, raw):
        # fragment는 서버로 보내지 않음
        raw = raw.split("#", 1)[0]
        if "/" not in raw:
            raw += "/"

        self.host, path = raw.split("/", 1)
        self.path = "/" + path

        # Optional port
        if ":" in self.host:
            self.host, port = self.host.split(":", 1)
            try:
                self.port = int(port)
            except ValueError:
                raise InvalidURL(f"Invalid port: {port!r}") from None

    @abstractmethod
    def request(self, user_agent, connect_timeout, deadline):
        pass
