import gzip
import socket
import time

from .base_url import URL
from .errors import FetchError

READ_CHUNK = 64 * 1024


class HTTPBase(URL):
    """HTTP/1.1 요청 공통 로직 (연결마다 새 소켓, Connection: close)"""

    def _open_socket(self, connect_timeout, deadline):
        """HTTP 와 HTTPS 공통 소켓 생성"""
        timeout = min(connect_timeout, self._remaining(deadline))
        s = socket.create_connection((self.host, self.port), timeout=timeout)
        s.settimeout(self._remaining(deadline))
        return s

    def _wrap_socket(self, s):
        """HTTPS에서 TLS 래핑"""
        return s

    def request(self, user_agent, connect_timeout, deadline):
        s = self._wrap_socket(self._open_socket(connect_timeout, deadline))
        try:
            self._send_http_request(s, user_agent)
            return self._read_http_response(s, deadline)
        finally:
            s.close()

    def _send_http_request(self, s, user_agent):
        req = (
            f"GET {self.path} HTTP/1.1\r\n"
            f"Host: {self.host}\r\n"
            f"User-Agent: {user_agent}\r\n"
            f"Connection: close\r\n"
            f"Accept-Encoding: gzip\r\n"
            f"\r\n"
        )
        s.sendall(req.encode("utf-8"))

    @staticmethod
    def _remaining(deadline):
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise FetchError("request exceeded total timeout")
        return remaining

    def _read(self, response, size, deadline):
        self._remaining(deadline)
        return response.read(size)

    def _read_http_response(self, s: socket.socket, deadline):
        response = s.makefile("rb")  # 바이너리 모드로 읽기

        # status line
        status_line = response.readline().decode("iso-8859-1")
        status_parts = status_line.split(" ", 2)
        if len(status_parts) < 2 or not status_parts[1].isdigit():
            raise FetchError(f"Invalid HTTP status line: {status_line!r}")
        status = int(status_parts[1])

        # headers
        headers = {}
        while True:
            line = response.readline().decode("iso-8859-1")
            if line in ("\r\n", "\n", ""):
                break
            if ":" not in line:
                continue
            h, v = line.split(":", 1)
            headers[h.casefold()] = v.strip()

        # Body 읽기
        if headers.get("transfer-encoding", "").lower() == "chunked":
            chunks = []
            while True:
                chunk_size_line = response.readline().decode("iso-8859-1").strip()
                chunk_size = int(chunk_size_line.split(";", 1)[0] or "0", 16)  # 16진수로 파싱

                if chunk_size == 0:
                    break

                chunks.append(self._read(response, chunk_size, deadline))
                response.readline()  # \r\n 읽기
            body = b"".join(chunks)
        elif "content-length" in headers:
            # Content-Length가 있으면 정확히 그만큼만 읽기
            remaining = int(headers["content-length"])
            chunks = []
            while remaining > 0:
                chunk = self._read(response, min(remaining, READ_CHUNK), deadline)
                if not chunk:
                    break
                chunks.append(chunk)
                remaining -= len(chunk)
            body = b"".join(chunks)
        else:
            # 둘 다 없으면 끝까지 읽기
            chunks = []
            while True:
                chunk = self._read(response, READ_CHUNK, deadline)
                if not chunk:
                    break
                chunks.append(chunk)
            body = b"".join(chunks)

        response.close()

        # gzip 압축 해제
        if headers.get("content-encoding", "").lower() == "gzip":
            body = gzip.decompress(body)

        return status, headers, body
