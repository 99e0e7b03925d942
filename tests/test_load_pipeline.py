import pytest

from tactile_browser.common.constants import MAX_URL_LENGTH, WARNING_COLOR
from tactile_browser.content import LoadPipeline, Tab
from tactile_browser.networking import FetchError
from tactile_browser.threads import LoadOutcome

from conftest import FakeFetch, page

URL = "https://example.test/"


def only_label(tab):
    assert len(tab.view.children) == 1
    return tab.view.children[0]


def test_non_http_url_shows_invalid_url_without_fetching(pipeline, fake_fetch):
    tab = Tab(0)
    outcome = pipeline.load(tab, "ftp://example.test/file")

    assert outcome == LoadOutcome.INVALID_URL
    assert fake_fetch.calls == []
    label = only_label(tab)
    assert label.text == "Invalid URL: ftp://example.test/file"
    assert label.color == WARNING_COLOR
    assert tab.blocks == []


def test_scheme_check_is_case_sensitive(pipeline, fake_fetch):
    tab = Tab(0)

    assert pipeline.load(tab, "HTTPS://example.test/") == LoadOutcome.INVALID_URL
    assert fake_fetch.calls == []


def test_url_without_host_is_invalid():
    """The real fetch rejects a hostless URL before touching the network."""
    tab = Tab(0)

    assert LoadPipeline().load(tab, "http://") == LoadOutcome.INVALID_URL
    assert only_label(tab).text == "Invalid URL: http://"


def test_empty_url_is_invalid(pipeline):
    tab = Tab(0)

    assert pipeline.load(tab, "") == LoadOutcome.INVALID_URL
    assert len(tab.view.children) == 1


def test_url_is_recorded_even_when_load_fails(pipeline):
    tab = Tab(0)
    pipeline.load(tab, "not a url")

    assert tab.url == "not a url"


def test_long_url_is_truncated_not_rejected(pipeline, fake_fetch):
    tab = Tab(0)
    long_url = URL + "a" * (MAX_URL_LENGTH * 2)
    pipeline.load(tab, long_url)

    assert tab.url == long_url[:MAX_URL_LENGTH]
    assert fake_fetch.calls == [long_url[:MAX_URL_LENGTH]]


def test_fetch_error_shows_failed_to_load():
    tab = Tab(0)
    pipeline = LoadPipeline(fetch=FakeFetch(error=FetchError("connection refused")))

    assert pipeline.load(tab, URL) == LoadOutcome.FETCH_FAILED
    label = only_label(tab)
    assert label.text == f"Failed to load {URL}"
    assert label.color == WARNING_COLOR


def test_empty_body_is_a_fetch_failure(pipeline):
    tab = Tab(0)

    assert pipeline.load(tab, URL) == LoadOutcome.FETCH_FAILED
    assert len(tab.view.children) == 1


def test_unparseable_body_shows_exactly_one_parse_placeholder(fake_fetch, pipeline):
    fake_fetch.pages[URL] = b"\x00\x01\x02binary"
    tab = Tab(0)

    assert pipeline.load(tab, URL) == LoadOutcome.PARSE_FAILED
    label = only_label(tab)
    assert label.text == f"Failed to parse {URL}"
    assert label.color == WARNING_COLOR
    assert tab.title == "Untitled"


def test_successful_load_sets_title_and_blocks(fake_fetch, pipeline):
    fake_fetch.pages[URL] = page("<h1>Hello</h1><p>World</p>", title="  Greeting \n page ")
    tab = Tab(0)

    assert pipeline.load(tab, URL) == LoadOutcome.LOADED
    assert tab.title == "Greeting page"
    assert tab.outcome == LoadOutcome.LOADED
    assert [b.text for b in tab.blocks] == ["Hello", "World"]
    assert tab.view.texts() == ["Hello", "World"]


@pytest.mark.parametrize("title", [None, "", "   \n  "])
def test_missing_or_blank_title_is_untitled(fake_fetch, pipeline, title):
    fake_fetch.pages[URL] = page("<p>x</p>", title=title)
    tab = Tab(0)
    pipeline.load(tab, URL)

    assert tab.title == "Untitled"


def test_title_is_bounded(fake_fetch):
    fake_fetch.pages[URL] = page("<p>x</p>", title="t" * 1000)
    tab = Tab(0)
    LoadPipeline(fetch=fake_fetch, max_title_length=256).load(tab, URL)

    assert tab.title == "t" * 256


def test_reload_replaces_previous_content(fake_fetch, pipeline):
    fake_fetch.pages[URL] = page("<p>a</p><p>b</p>")
    tab = Tab(0)
    pipeline.load(tab, URL)
    pipeline.load(tab, URL)

    assert tab.view.texts() == ["a", "b"]
    assert len(tab.blocks) == 2


def test_failure_after_success_clears_old_content(fake_fetch, pipeline):
    fake_fetch.pages[URL] = page("<p>a</p><p>b</p>", title="Old")
    tab = Tab(0)
    pipeline.load(tab, URL)
    pipeline.load(tab, "gopher://old.test/")

    assert only_label(tab).text == "Invalid URL: gopher://old.test/"
    assert tab.blocks == []
    assert tab.title == "Untitled"


def test_page_without_body_content_loads_empty(fake_fetch, pipeline):
    fake_fetch.pages[URL] = b"<html><head><title>Blank</title></head></html>"
    tab = Tab(0)

    assert pipeline.load(tab, URL) == LoadOutcome.LOADED
    assert tab.title == "Blank"
    assert tab.view.children == []


def test_stale_commit_is_discarded(fake_fetch, pipeline):
    fake_fetch.pages["https://old.test/"] = page("<p>old</p>")
    fake_fetch.pages["https://new.test/"] = page("<p>new</p>")
    tab = Tab(0)

    old_generation = pipeline.begin(tab, "https://old.test/")
    old_commit = pipeline.prepare(tab.id, old_generation, "https://old.test/")
    pipeline.load(tab, "https://new.test/")

    assert pipeline.apply(tab, old_commit) is None
    assert tab.view.texts() == ["new"]
    assert tab.url == "https://new.test/"


def test_commit_for_another_tab_is_discarded(fake_fetch, pipeline):
    fake_fetch.pages[URL] = page("<p>x</p>")
    tab0, tab1 = Tab(0), Tab(1)
    generation = pipeline.begin(tab0, URL)
    commit = pipeline.prepare(tab0.id, generation, URL)
    pipeline.begin(tab1, URL)

    assert pipeline.apply(tab1, commit) is None
    assert tab1.view.children == []


def test_begin_records_history(pipeline):
    tab = Tab(0)
    pipeline.begin(tab, "https://a.test/")
    pipeline.begin(tab, "https://a.test/")
    pipeline.begin(tab, "https://b.test/", record_history=True)
    pipeline.begin(tab, "https://c.test/", record_history=False)

    assert tab.history == ["https://a.test/", "https://b.test/"]
    assert tab.generation == 4


def test_deeply_nested_page_loads():
    depth = 3000
    body = b"<title>Deep</title><body>" + b"<div>" * depth + b"x" + b"</div>" * depth
    tab = Tab(0)

    assert LoadPipeline(fetch=lambda url: body).load(tab, URL) == LoadOutcome.LOADED
    assert tab.title == "Deep"
    assert [b.text for b in tab.blocks] == ["x"]
