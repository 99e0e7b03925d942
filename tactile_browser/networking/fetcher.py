"""
fetch - URL 하나를 받아 응답 본문(bytes)을 돌려주는 네트워크 진입점

리다이렉트를 따라가고 연결/전체 타임아웃을 적용한다.
실패는 모두 FetchError (스킴/호스트 문제는 InvalidURL) 로 보고한다.
"""
import logging
import time
import zlib

from fake_useragent import UserAgent

from ..common.constants import CONNECT_TIMEOUT, MAX_REDIRECTS, TOTAL_TIMEOUT, USER_AGENT
from ..profiling import MeasureTime
from .errors import FetchError, InvalidURL
from .url_factory import URLFactory

logger = logging.getLogger(__name__)


def random_user_agent() -> str:
    """실제 브라우저처럼 보이는 임의의 User-Agent"""
    return UserAgent().random


def fetch(
    url: str,
    connect_timeout: float = CONNECT_TIMEOUT,
    total_timeout: float = TOTAL_TIMEOUT,
    max_redirects: int = MAX_REDIRECTS,
    user_agent: str = USER_AGENT,
) -> bytes:
    deadline = time.monotonic() + total_timeout
    url_obj = URLFactory.parse(url)

    for _ in range(max_redirects + 1):
        with MeasureTime("network_request", "network", {"url": str(url_obj)}):
            try:
                status, headers, body = url_obj.request(user_agent, connect_timeout, deadline)
            except FetchError:
                raise
            except (OSError, ValueError, EOFError, zlib.error) as e:
                raise FetchError(f"{url_obj}: {e}") from e

        # 리다이렉트 처리
        if 300 <= status < 400:
            location = headers.get("location")
            if not location:
                raise FetchError(f"{url_obj}: redirect without Location header")
            target = URLFactory.resolve_str(url_obj, location)
            logger.debug("redirect %d %s -> %s", status, url_obj, target)
            try:
                url_obj = URLFactory.parse(target)
            except InvalidURL as e:
                raise FetchError(f"{url_obj}: bad redirect target: {e}") from e
            continue

        logger.debug("fetched %s: status %d, %d bytes", url_obj, status, len(body))
        return body

    raise FetchError(f"{url}: too many redirects")
