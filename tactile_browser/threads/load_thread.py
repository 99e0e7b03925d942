"""
LoadThread - 페이지 로드의 fetch/parse 단계를 워커 스레드에서 처리

UI 스레드는 submit()으로 요청하고 poll()로 LoadCommit을 받아
직접 탭에 적용한다. 탭 상태는 UI 스레드에서만 바뀐다.
같은 탭에 새 요청이 들어오면 아직 시작하지 않은 이전 요청은 취소된다.
"""
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from functools import partial
from queue import Empty, Queue
from typing import TYPE_CHECKING, Dict, List

from ..common.constants import LOAD_WORKERS
from ..profiling import MeasureTime, set_thread_name
from .commit_data import LoadCommit, LoadOutcome

if TYPE_CHECKING:
    from ..content.load_pipeline import LoadPipeline

logger = logging.getLogger(__name__)


class LoadThread:
    def __init__(self, pipeline: "LoadPipeline", max_workers: int = LOAD_WORKERS):
        self.pipeline = pipeline
        self.executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="LoadWorker")

        # Worker -> UI 커밋 큐
        self.commit_queue: "Queue[LoadCommit]" = Queue()

        # 탭별 진행 중인 요청
        self.pending: Dict[int, Future] = {}
        self._lock = threading.Lock()

    def submit(self, tab_id: int, generation: int, url: str) -> Future:
        with self._lock:
            previous = self.pending.get(tab_id)
        # cancel()은 완료 콜백을 바로 호출하므로 lock 밖에서
        if previous is not None and previous.cancel():
            logger.debug("cancelled superseded load for tab %d", tab_id)

        future = self.executor.submit(self._run, tab_id, generation, url)
        with self._lock:
            self.pending[tab_id] = future
        future.add_done_callback(partial(self._on_done, tab_id, generation, url))
        return future

    def _run(self, tab_id: int, generation: int, url: str) -> LoadCommit:
        set_thread_name(threading.current_thread().name)
        with MeasureTime("load_prepare", "load", {"tab": tab_id, "url": url}):
            return self.pipeline.prepare(tab_id, generation, url)

    def _on_done(self, tab_id: int, generation: int, url: str, future: Future):
        # pending에서 빠지기 전에 큐에 먼저 넣음 (pending_count() == 0 이면 모두 큐에 있음)
        if not future.cancelled():
            error = future.exception()
            if error is not None:
                logger.error("unexpected error while loading %s", url, exc_info=error)
                commit = LoadCommit(tab_id, generation, url, LoadOutcome.FETCH_FAILED, error=str(error))
            else:
                commit = future.result()
            self.commit_queue.put(commit)

        with self._lock:
            if self.pending.get(tab_id) is future:
                del self.pending[tab_id]

    def poll(self, timeout: float = 0.0) -> List[LoadCommit]:
        """완료된 커밋들 가져오기, timeout > 0이면 첫 커밋을 그만큼 기다림"""
        commits = []
        if timeout > 0:
            try:
                commits.append(self.commit_queue.get(timeout=timeout))
            except Empty:
                return commits
        while True:
            try:
                commits.append(self.commit_queue.get_nowait())
            except Empty:
                break
        return commits

    def pending_count(self) -> int:
        with self._lock:
            return len(self.pending)

    def shutdown(self, wait: bool = False):
        """대기 중인 요청은 취소, wait=True면 실행 중인 요청이 끝날 때까지 기다림"""
        self.executor.shutdown(wait=wait, cancel_futures=True)
