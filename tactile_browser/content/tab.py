"""
Tab - 독립된 브라우징 슬롯 하나

URL, 콘텐츠 컨테이너(ScrollContainer), 마지막으로 적용된 로드 결과와
메모리상의 방문 기록을 가진다. 상태는 UI 스레드에서만 바뀐다.
"""
from typing import List, Optional

from ..common.constants import MAX_URL_LENGTH, PLACEHOLDER_TITLE, WIDTH
from ..layout import ViewBlock
from ..threads.commit_data import LoadOutcome
from ..ui.widgets import ScrollContainer


class Tab:
    def __init__(self, tab_id: int, width=WIDTH, max_url_length: int = MAX_URL_LENGTH):
        self.id = tab_id
        self.max_url_length = max_url_length
        self._url = ""

        # 탭마다 정확히 하나, 탭과 수명을 같이 함
        self.view = ScrollContainer(width)

        self.title = PLACEHOLDER_TITLE
        self.blocks: List[ViewBlock] = []
        self.outcome: Optional[LoadOutcome] = None

        # 로드 요청마다 증가, 이보다 오래된 결과는 적용하지 않음
        self.generation = 0

        self.history: List[str] = []
        self.history_index = -1

    @property
    def url(self) -> str:
        return self._url

    @url.setter
    def url(self, value: str):
        # 길면 자름 (거부하지 않음)
        self._url = (value or "")[:self.max_url_length]

    def push_history(self, url: str):
        if self.history and self.history[self.history_index] == url:
            return
        del self.history[self.history_index + 1:]
        self.history.append(url)
        self.history_index = len(self.history) - 1

    def can_go_back(self) -> bool:
        return self.history_index > 0

    def can_go_forward(self) -> bool:
        return self.history_index < len(self.history) - 1

    def __repr__(self):
        return f"Tab({self.id}, {self.url!r})"
