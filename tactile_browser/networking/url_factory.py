from .base_url import URL
from .errors import InvalidURL
from .http_url import HTTPURL
from .https_url import HTTPSURL

NAVIGABLE_PREFIXES = ("http://", "https://")


class URLFactory:
    @staticmethod
    def is_navigable(url: str) -> bool:
        """http:// 또는 https:// 로 시작하는지 (대소문자 구분)"""
        return url.startswith(NAVIGABLE_PREFIXES)

    @staticmethod
    def parse(url: str) -> URL:
        if "://" not in url:
            raise InvalidURL(f"Missing scheme: {url!r}")
        schema, rest = url.split("://", 1)

        if schema == "http":
            return HTTPURL(schema, rest)
        elif schema == "https":
            return HTTPSURL(schema, rest)
        else:
            raise InvalidURL(f"Unsupported schema: {schema}")

    @staticmethod
    def resolve_str(current_url: URL, url: str) -> str:
        """상대 경로를 절대 URL 문자열로 변환"""
        # 절대 URL인 경우 (스킴이 있는 경우) 그대로 반환
        if "://" in url:
            return url
        # 스킴 상대 URL (//host/path)
        if url.startswith("//"):
            return current_url.schema + ":" + url

        if not url.startswith("/"):
            if "/" in current_url.path:
                dir, _ = current_url.path.rsplit("/", 1)
            else:
                dir = current_url.path
            while url.startswith("../"):
                _, url = url.split("/", 1)
                if "/" in dir:
                    dir, _ = dir.rsplit("/", 1)
            url = dir + "/" + url

        # 기본 포트는 생략 (HTTP: 80, HTTPS: 443)
        if current_url.port == current_url.DEFAULT_PORT:
            return current_url.schema + "://" + current_url.host + url
        return current_url.schema + "://" + current_url.host + \
            ":" + str(current_url.port) + url
