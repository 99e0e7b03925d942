from .http_base import HTTPBase


class HTTPURL(HTTPBase):
    DEFAULT_PORT = 80
