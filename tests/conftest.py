import socket
import threading

import pytest

from tactile_browser.content import LoadPipeline, Session


def page(body: str, title=None) -> bytes:
    """Build a small HTML document as bytes."""
    head = f"<head><title>{title}</title></head>" if title is not None else ""
    return f"<!doctype html><html>{head}<body>{body}</body></html>".encode("utf-8")


class FakeFetch:
    """Stands in for networking.fetch: serves canned bodies and records calls."""

    def __init__(self, pages=None, error=None):
        self.pages = dict(pages or {})
        self.error = error
        self.calls = []

    def __call__(self, url):
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.pages.get(url, b"")


class LocalServer:
    """A one-shot-per-connection HTTP server on 127.0.0.1 serving raw responses by path."""

    def __init__(self, routes):
        self.routes = routes
        self.requests = []
        self.sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self.sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self.sock.bind(("127.0.0.1", 0))
        self.sock.listen()
        self.sock.settimeout(0.1)
        self.port = self.sock.getsockname()[1]
        self.running = True
        self.thread = threading.Thread(target=self._serve, daemon=True)
        self.thread.start()

    def url(self, path="/"):
        return f"http://127.0.0.1:{self.port}{path}"

    def _serve(self):
        while self.running:
            try:
                conx, _ = self.sock.accept()
            except socket.timeout:
                continue
            except OSError:
                return
            conx.settimeout(5)
            req = conx.makefile("rb")
            reqline = req.readline().decode("utf-8")
            headers = {}
            while True:
                line = req.readline().decode("utf-8")
                if line in ("\r\n", ""):
                    break
                h, v = line.split(":", 1)
                headers[h.casefold()] = v.strip()
            path = reqline.split(" ")[1] if reqline else "/"
            self.requests.append((path, headers))

            response = self.routes.get(path, b"HTTP/1.1 404 Not Found\r\nContent-Length: 0\r\n\r\n")
            conx.sendall(response)
            req.close()
            conx.close()

    def close(self):
        self.running = False
        self.thread.join(timeout=1)
        self.sock.close()


@pytest.fixture
def fake_fetch():
    return FakeFetch()


@pytest.fixture
def pipeline(fake_fetch):
    return LoadPipeline(fetch=fake_fetch)


@pytest.fixture
def session(pipeline):
    return Session(pipeline, capacity=3, default_url="https://default.test/")
