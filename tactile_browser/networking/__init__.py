"""
Networking package for browser engine

- URL 파싱 (http, https)
- 소켓 기반 HTTP/1.1 요청, 리다이렉트, 타임아웃
"""
from .errors import FetchError, InvalidURL
from .base_url import URL
from .http_base import HTTPBase
from .http_url import HTTPURL
from .https_url import HTTPSURL
from .url_factory import URLFactory
from .fetcher import fetch, random_user_agent

__all__ = [
    'FetchError',
    'InvalidURL',
    'URL',
    'HTTPBase',
    'HTTPURL',
    'HTTPSURL',
    'URLFactory',
    'fetch',
    'random_user_agent',
]
