"""
Session - 탭 모음과 활성 탭

- 용량이 정해진 탭 목록 (추가만 가능, 0번 탭은 항상 존재)
- 활성 탭 전환 시 주소창 텍스트를 그 탭의 URL로 맞춤
- 내비게이션 요청을 활성 탭의 LoadPipeline 으로 보냄
- LoadThread가 붙어 있으면 fetch/parse는 워커에서, 적용은 process_commits()에서
"""
import logging
from typing import TYPE_CHECKING, List, Optional

from ..common.constants import DEFAULT_URL, TAB_CAPACITY, WIDTH
from ..networking import URLFactory
from ..threads.commit_data import LoadOutcome
from ..ui.text_buffer import TextBuffer
from .load_pipeline import LoadPipeline
from .tab import Tab

if TYPE_CHECKING:
    from ..threads.load_thread import LoadThread

logger = logging.getLogger(__name__)


class Session:
    def __init__(
        self,
        pipeline: Optional[LoadPipeline] = None,
        capacity: int = TAB_CAPACITY,
        width=WIDTH,
        default_url: str = DEFAULT_URL,
        loader: Optional["LoadThread"] = None,
    ):
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        self.pipeline = pipeline or LoadPipeline()
        self.capacity = capacity
        self.width = width
        self.default_url = default_url
        self.loader = loader

        self.tabs: List[Tab] = []
        self.active_tab_index = 0
        self.address = TextBuffer()

        self._append_tab()

    @property
    def tab_count(self) -> int:
        return len(self.tabs)

    @property
    def active_tab(self) -> Tab:
        return self.tabs[self.active_tab_index]

    def is_full(self) -> bool:
        return self.tab_count >= self.capacity

    def _append_tab(self) -> Tab:
        tab = Tab(len(self.tabs), self.width)
        self.tabs.append(tab)
        return tab

    def _sync_address(self):
        self.address.set_text(self.active_tab.url)

    def new_tab(self, url: Optional[str] = None) -> bool:
        """탭 추가 후 활성화하고 로드, 용량이 찼으면 아무 것도 안 하고 False"""
        if self.is_full():
            logger.info("new tab ignored: capacity %d reached", self.capacity)
            return False

        tab = self._append_tab()
        self.active_tab_index = tab.id
        self._sync_address()
        self.navigate(url or self.default_url)
        return True

    def switch_tab(self, index: int):
        """활성 탭 전환, 로드하지 않고 마지막 화면을 그대로 사용"""
        if not 0 <= index < self.tab_count:
            raise IndexError(f"tab index {index} out of range (0..{self.tab_count - 1})")
        self.active_tab_index = index
        self._sync_address()

    def navigate(self, url: str) -> Optional[LoadOutcome]:
        """활성 탭으로 로드, 비동기로 진행 중이면 None"""
        return self._load(self.active_tab, url, record_history=True)

    def refresh(self) -> Optional[LoadOutcome]:
        return self.navigate(self.active_tab.url)

    def go_back(self) -> bool:
        tab = self.active_tab
        if not tab.can_go_back():
            return False
        tab.history_index -= 1
        self._load(tab, tab.history[tab.history_index], record_history=False)
        return True

    def go_forward(self) -> bool:
        tab = self.active_tab
        if not tab.can_go_forward():
            return False
        tab.history_index += 1
        self._load(tab, tab.history[tab.history_index], record_history=False)
        return True

    def _load(self, tab: Tab, url: str, record_history: bool) -> Optional[LoadOutcome]:
        generation = self.pipeline.begin(tab, url, record_history)
        if tab is self.active_tab:
            self._sync_address()

        # 잘못된 URL은 네트워크 없이 바로 처리
        if self.loader is None or not URLFactory.is_navigable(tab.url):
            return self.pipeline.apply(tab, self.pipeline.prepare(tab.id, generation, tab.url))

        self.loader.submit(tab.id, generation, tab.url)
        return None

    def process_commits(self, timeout: float = 0.0) -> List[int]:
        """완료된 로드를 적용하고 화면이 바뀐 탭 id 목록 반환"""
        if self.loader is None:
            return []
        changed = []
        for commit in self.loader.poll(timeout):
            tab = self.tabs[commit.tab_id]
            if self.pipeline.apply(tab, commit) is not None:
                changed.append(tab.id)
        return changed
