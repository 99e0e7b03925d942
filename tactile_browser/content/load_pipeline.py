"""
LoadPipeline - URL 하나를 탭의 화면으로 바꾸는 과정

    begin    탭에 URL 기록, generation 증가         (UI 스레드)
    prepare  스킴 검사 -> fetch -> parse -> title    (워커 스레드 가능)
    apply    컨테이너 비우고 결과 또는 오류 표시      (UI 스레드)

각 단계의 실패는 탭 안의 경고 문구 하나로 끝나며 밖으로 던지지 않는다.
"""
import logging
from typing import Callable, Optional

from ..common.constants import (
    BLOCK_GAP,
    HSTEP,
    LAYOUT_CEILING,
    MAX_TITLE_LENGTH,
    PLACEHOLDER_TITLE,
    VSTEP,
    WARNING_COLOR,
)
from ..dom import Element, ParseError, parse_html
from ..layout import project
from ..layout.projector import BODY_SIZE
from ..networking import FetchError, InvalidURL, URLFactory, fetch
from ..profiling import MeasureTime
from ..rendering import get_font
from ..threads.commit_data import LoadCommit, LoadOutcome
from ..ui.widgets import Label
from .tab import Tab
from .title import extract_title

logger = logging.getLogger(__name__)

ERROR_MESSAGES = {
    LoadOutcome.INVALID_URL: "Invalid URL: {url}",
    LoadOutcome.FETCH_FAILED: "Failed to load {url}",
    LoadOutcome.PARSE_FAILED: "Failed to parse {url}",
}


class LoadPipeline:
    def __init__(
        self,
        fetch: Callable[[str], bytes] = fetch,
        parse: Callable[[bytes], Element] = parse_html,
        max_height: float = LAYOUT_CEILING,
        gap: float = BLOCK_GAP,
        max_title_length: int = MAX_TITLE_LENGTH,
    ):
        self.fetch = fetch
        self.parse = parse
        self.max_height = max_height
        self.gap = gap
        self.max_title_length = max_title_length

    def load(self, tab: Tab, url: str, record_history: bool = True) -> LoadOutcome:
        """동기 로드 - 끝날 때까지 호출한 스레드를 막는다"""
        generation = self.begin(tab, url, record_history)
        return self.apply(tab, self.prepare(tab.id, generation, tab.url))

    def begin(self, tab: Tab, url: str, record_history: bool = True) -> int:
        # 실패하더라도 주소창에는 시도한 주소가 남아야 함
        tab.url = url
        tab.generation += 1
        if record_history:
            tab.push_history(tab.url)
        return tab.generation

    def prepare(self, tab_id: int, generation: int, url: str) -> LoadCommit:
        def failed(outcome, error):
            logger.warning("tab %d: %s %s (%s)", tab_id, outcome.value, url, error)
            return LoadCommit(tab_id, generation, url, outcome, error=str(error))

        if not URLFactory.is_navigable(url):
            return failed(LoadOutcome.INVALID_URL, "scheme must be http or https")

        try:
            with MeasureTime("fetch", "network"):
                body = self.fetch(url)
        except InvalidURL as e:
            return failed(LoadOutcome.INVALID_URL, e)
        except FetchError as e:
            return failed(LoadOutcome.FETCH_FAILED, e)
        if not body:
            return failed(LoadOutcome.FETCH_FAILED, "empty response")

        try:
            with MeasureTime("parse_html", "parse"):
                document = self.parse(body)
        except ParseError as e:
            return failed(LoadOutcome.PARSE_FAILED, e)

        title = extract_title(document, self.max_title_length)
        return LoadCommit(tab_id, generation, url, LoadOutcome.LOADED, document, title)

    def apply(self, tab: Tab, commit: LoadCommit) -> Optional[LoadOutcome]:
        """커밋을 탭에 반영, 이미 더 새 요청이 있으면 버리고 None"""
        if commit.tab_id != tab.id or commit.generation != tab.generation:
            logger.debug("tab %d: discarding stale result for %s (generation %d, current %d)",
                         tab.id, commit.url, commit.generation, tab.generation)
            return None

        # 이전 내용은 비교하지 않고 통째로 버림
        tab.view.clear()
        tab.blocks = []

        if commit.outcome == LoadOutcome.LOADED:
            tab.title = commit.title
            tab.blocks = project(commit.document, tab.view,
                                 max_height=self.max_height, gap=self.gap)
            logger.info("tab %d: loaded %s (%r, %d blocks)",
                        tab.id, commit.url, tab.title, len(tab.blocks))
        else:
            tab.title = PLACEHOLDER_TITLE
            message = ERROR_MESSAGES[commit.outcome].format(url=commit.url or "(empty)")
            tab.view.add(Label(message, HSTEP, VSTEP, tab.view.width - 2 * HSTEP,
                               get_font(BODY_SIZE), WARNING_COLOR))

        tab.outcome = commit.outcome
        return commit.outcome
