import gzip
import socket

import pytest

from conftest import LocalServer
from tactile_browser.networking import (
    HTTPSURL,
    HTTPURL,
    FetchError,
    InvalidURL,
    URLFactory,
    fetch,
)

# --- URL parsing ---


def test_url_creation():
    """Test that URLs are parsed into scheme, host, port, and path correctly."""
    url1 = URLFactory.parse("http://example.com/index.html")
    assert isinstance(url1, HTTPURL)
    assert url1.schema == "http"
    assert url1.host == "example.com"
    assert url1.port == 80
    assert url1.path == "/index.html"

    url2 = URLFactory.parse("https://google.com")
    assert isinstance(url2, HTTPSURL)
    assert url2.port == 443
    assert url2.path == "/"

    url3 = URLFactory.parse("http://localhost:8080/debug")
    assert url3.host == "localhost"
    assert url3.port == 8080
    assert str(url3) == "http://localhost:8080/debug"


def test_fragment_is_not_part_of_path():
    url = URLFactory.parse("https://example.com/a/b?q=1#section")
    assert url.path == "/a/b?q=1"


@pytest.mark.parametrize("raw", [
    "ftp://example.com/",
    "example.com",
    "http://",
    "https:///path",
    "http://host:port/",
])
def test_invalid_urls(raw):
    with pytest.raises(InvalidURL):
        URLFactory.parse(raw)


def test_invalid_url_is_a_value_error():
    assert issubclass(InvalidURL, ValueError)


@pytest.mark.parametrize("raw, expected", [
    ("http://example.com", True),
    ("https://example.com/x", True),
    ("HTTP://example.com", False),
    ("ftp://example.com", False),
    ("example.com", False),
    ("", False),
])
def test_is_navigable(raw, expected):
    assert URLFactory.is_navigable(raw) is expected


def test_url_resolution():
    """Test resolving relative URLs against a base URL."""
    base = URLFactory.parse("http://example.com/dir/page.html")

    assert URLFactory.resolve_str(base, "image.png") == "http://example.com/dir/image.png"
    assert URLFactory.resolve_str(base, "/home") == "http://example.com/home"
    assert URLFactory.resolve_str(base, "https://other.com/foo") == "https://other.com/foo"
    assert URLFactory.resolve_str(base, "../style.css") == "http://example.com/style.css"
    assert URLFactory.resolve_str(base, "//cdn.example.com/x.js") == "http://cdn.example.com/x.js"


def test_url_resolution_keeps_non_default_port():
    base = URLFactory.parse("http://localhost:8000/a/")
    assert URLFactory.resolve_str(base, "/b") == "http://localhost:8000/b"


# --- fetch against a local server ---


@pytest.fixture
def server():
    body = b"<p>hello</p>"
    compressed = gzip.compress(b"<p>zipped</p>")
    routes = {
        "/plain": b"HTTP/1.1 200 OK\r\nContent-Length: %d\r\n\r\n%s" % (len(body), body),
        "/chunked": (
            b"HTTP/1.1 200 OK\r\nTransfer-Encoding: chunked\r\n\r\n"
            b"4\r\n<p>c\r\n"
            b"9\r\nhunked</p\r\n"
            b"1\r\n>\r\n"
            b"0\r\n\r\n"
        ),
        "/gzip": b"HTTP/1.1 200 OK\r\nContent-Encoding: gzip\r\nContent-Length: %d\r\n\r\n%s"
                 % (len(compressed), compressed),
        "/until-close": b"HTTP/1.1 200 OK\r\n\r\n<p>eof</p>",
        "/redirect": b"HTTP/1.1 302 Found\r\nLocation: /plain\r\nContent-Length: 0\r\n\r\n",
        "/loop": b"HTTP/1.1 301 Moved\r\nLocation: /loop\r\nContent-Length: 0\r\n\r\n",
        "/no-location": b"HTTP/1.1 302 Found\r\nContent-Length: 0\r\n\r\n",
        "/missing": b"HTTP/1.1 404 Not Found\r\nContent-Length: 9\r\n\r\nnot found",
        "/garbage": b"hello there\r\n\r\n",
    }
    srv = LocalServer(routes)
    yield srv
    srv.close()


def test_fetch_content_length(server):
    assert fetch(server.url("/plain")) == b"<p>hello</p>"


def test_fetch_chunked(server):
    assert fetch(server.url("/chunked")) == b"<p>chunked</p>"


def test_fetch_gzip(server):
    assert fetch(server.url("/gzip")) == b"<p>zipped</p>"


def test_fetch_reads_until_close_without_length(server):
    assert fetch(server.url("/until-close")) == b"<p>eof</p>"


def test_fetch_follows_redirects(server):
    assert fetch(server.url("/redirect")) == b"<p>hello</p>"
    assert [path for path, _ in server.requests] == ["/redirect", "/plain"]


def test_fetch_gives_up_after_max_redirects(server):
    with pytest.raises(FetchError):
        fetch(server.url("/loop"), max_redirects=2)
    assert len(server.requests) == 3


def test_redirect_without_location_fails(server):
    with pytest.raises(FetchError):
        fetch(server.url("/no-location"))


def test_error_status_body_is_returned(server):
    assert fetch(server.url("/missing")) == b"not found"


def test_bad_status_line_fails(server):
    with pytest.raises(FetchError):
        fetch(server.url("/garbage"))


def test_fetch_sends_user_agent(server):
    fetch(server.url("/plain"), user_agent="TestAgent/1.0")
    _, headers = server.requests[0]
    assert headers["user-agent"] == "TestAgent/1.0"
    assert headers["connection"] == "close"


def test_connection_refused_is_fetch_error():
    s = socket.socket()
    s.bind(("127.0.0.1", 0))
    port = s.getsockname()[1]
    s.close()

    with pytest.raises(FetchError):
        fetch(f"http://127.0.0.1:{port}/", connect_timeout=1.0, total_timeout=2.0)


def test_fetch_rejects_invalid_url_before_connecting():
    with pytest.raises(InvalidURL):
        fetch("http://")
