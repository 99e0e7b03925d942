import threading
import time

import pytest

from tactile_browser.content import LoadPipeline, Session
from tactile_browser.threads import LoadOutcome, LoadThread

from conftest import page

SLOW = "https://slow.test/"
FAST = "https://fast.test/"
OTHER = "https://other.test/"

PAGES = {
    SLOW: page("<p>slow</p>", title="Slow"),
    FAST: page("<p>fast</p>", title="Fast"),
    OTHER: page("<p>other</p>", title="Other"),
}


class GatedFetch:
    """Fetch that blocks on the slow URL until released."""

    def __init__(self):
        self.release = threading.Event()
        self.started = threading.Event()
        self.calls = []
        self.lock = threading.Lock()

    def __call__(self, url):
        with self.lock:
            self.calls.append(url)
        if url == SLOW:
            self.started.set()
            assert self.release.wait(5), "slow fetch was never released"
        return PAGES.get(url, b"")


def drain(session, timeout=5.0):
    """Apply commits until the loader has nothing in flight."""
    deadline = time.monotonic() + timeout
    changed = []
    while time.monotonic() < deadline:
        changed += session.process_commits(timeout=0.05)
        if session.loader.pending_count() == 0:
            changed += session.process_commits()
            return changed
    raise AssertionError("loads did not finish in time")


@pytest.fixture
def gated():
    fetch = GatedFetch()
    yield fetch
    fetch.release.set()


def make_session(fetch, max_workers=4, capacity=3):
    pipeline = LoadPipeline(fetch=fetch)
    loader = LoadThread(pipeline, max_workers=max_workers)
    return Session(pipeline, capacity=capacity, default_url=OTHER, loader=loader)


@pytest.fixture
def session(gated):
    session = make_session(gated)
    yield session
    session.loader.shutdown()


def test_async_navigate_applies_on_process_commits(session):
    assert session.navigate(FAST) is None
    assert session.active_tab.url == FAST
    assert session.address.text == FAST

    assert drain(session) == [0]
    assert session.active_tab.view.texts() == ["fast"]
    assert session.active_tab.title == "Fast"


def test_invalid_url_is_resolved_without_the_loader(session, gated):
    assert session.navigate("file:///etc/passwd") == LoadOutcome.INVALID_URL
    assert session.loader.pending_count() == 0
    assert gated.calls == []
    assert session.active_tab.view.texts() == ["Invalid URL: file:///etc/passwd"]


def test_superseded_result_is_never_applied(session, gated):
    session.navigate(SLOW)
    assert gated.started.wait(5)

    session.navigate(FAST)
    # the fast load finishes while the slow one is still blocked
    deadline = time.monotonic() + 5
    while session.active_tab.view.texts() != ["fast"]:
        session.process_commits(timeout=0.05)
        assert time.monotonic() < deadline

    gated.release.set()
    # wait for the slow worker so its stale commit is queued, then apply it
    session.loader.shutdown(wait=True)
    assert session.process_commits() == []

    assert session.active_tab.url == FAST
    assert session.active_tab.view.texts() == ["fast"]
    assert session.active_tab.title == "Fast"


def test_pending_request_for_same_tab_is_cancelled(gated):
    session = make_session(gated, max_workers=1)
    try:
        session.new_tab(SLOW)
        assert gated.started.wait(5)

        session.switch_tab(0)
        session.navigate(OTHER)
        session.navigate(FAST)

        gated.release.set()
        drain(session)
    finally:
        session.loader.shutdown()

    assert OTHER not in gated.calls
    assert session.tabs[0].view.texts() == ["fast"]
    assert session.tabs[1].view.texts() == ["slow"]


def test_results_land_in_their_originating_tab(session, gated):
    session.navigate(SLOW)
    assert gated.started.wait(5)
    session.new_tab(FAST)

    gated.release.set()
    changed = drain(session)

    assert sorted(changed) == [0, 1]
    assert session.active_tab_index == 1
    assert session.tabs[0].view.texts() == ["slow"]
    assert session.tabs[1].view.texts() == ["fast"]


def test_unexpected_worker_error_becomes_fetch_failure():
    def broken(url):
        raise RuntimeError("boom")

    session = make_session(broken)
    try:
        session.navigate(FAST)
        drain(session)
    finally:
        session.loader.shutdown()

    assert session.active_tab.outcome == LoadOutcome.FETCH_FAILED
    assert session.active_tab.view.texts() == [f"Failed to load {FAST}"]
