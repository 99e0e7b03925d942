import ssl

from .http_base import HTTPBase


class HTTPSURL(HTTPBase):
    DEFAULT_PORT = 443

    def _wrap_socket(self, s):
        # SSL
        ctx = ssl.create_default_context()
        try:
            return ctx.wrap_socket(s, server_hostname=self.host)
        except (ssl.SSLError, OSError):
            s.close()
            raise
