import html
import logging
import re
from typing import List

from .element import Element
from .text import Text

logger = logging.getLogger(__name__)

META_CHARSET = re.compile(rb"""<meta[^>]+charset\s*=\s*["']?([A-Za-z0-9_.:-]+)""", re.IGNORECASE)
SNIFF_BYTES = 1024


class ParseError(Exception):
    """바이트열을 HTML 문서로 해석할 수 없음"""


class HTMLParser:
    SELF_CLOSING_TAGS = [
        "area", "base", "br", "col", "embed", "hr", "img", "input",
        "link", "meta", "param", "source", "track", "wbr"
    ]
    HEAD_TAGS = [
        "base", "basefont", "bgsound", "noscript",
        "link", "meta", "title", "style", "script",
    ]
    # 닫는 태그가 나올 때까지 내용을 그대로 텍스트로 취급
    RAW_TEXT_TAGS = ["script", "style"]

    def __init__(self, body: str):
        self.body = body
        # raw text 닫는 태그 검색용
        self.lower_body = body.lower()
        self.unfinished: List[Element] = []

    def parse(self):
        text = ""
        i = 0
        while i < len(self.body):
            c = self.body[i]
            if c == "<":
                if text: self.add_text(text)
                text = ""
                end = self.body.find(">", i + 1)
                if end == -1:
                    # 닫히지 않은 태그는 버림
                    break
                tag = self.add_tag(self.body[i + 1:end])
                i = end + 1
                if tag in self.RAW_TEXT_TAGS:
                    i = self.consume_raw_text(tag, i)
                continue
            text += c
            i += 1
        if text:
            self.add_text(text)
        return self.finish()

    def consume_raw_text(self, tag, start):
        close = self.lower_body.find(f"</{tag}", start)
        if close == -1:
            close = len(self.body)
        raw = self.body[start:close]
        if raw and not raw.isspace():
            parent = self.unfinished[-1]
            parent.children.append(Text(raw, parent))
        return close

    def implicit_tags(self, tag):
        while True:
            # 아래 분기는 모두 html/head 깊이에서만 해당
            if len(self.unfinished) > 2:
                break
            open_tags = [node.tag for node in self.unfinished]

            if open_tags == [] and tag != "html":
                self.add_tag("html")

            elif open_tags == ["html"] \
                and tag not in ["head", "body", "/html"]:
                if tag in self.HEAD_TAGS:
                    self.add_tag("head")
                else:
                    self.add_tag("body")

            elif open_tags == ["html", "head"] and \
                tag not in ["/head"] + self.HEAD_TAGS:
                self.add_tag("/head")

            else:
                break

    def add_text(self, text: str):
        if text.isspace(): return
        self.implicit_tags(None)
        parent = self.unfinished[-1]
        node = Text(html.unescape(text), parent)
        parent.children.append(node)

    def add_tag(self, tag: str):
        tag, attributes = self.get_attributes(tag)
        if not tag or tag.startswith("!") or tag.startswith("?"): return None

        self.implicit_tags(tag)
        if tag.startswith("/"):
            if len(self.unfinished) == 1: return tag
            node = self.unfinished.pop()
            parent = self.unfinished[-1]
            parent.children.append(node)

        elif tag in self.SELF_CLOSING_TAGS:
            parent = self.unfinished[-1]
            node = Element(tag, attributes, parent)
            parent.children.append(node)

        else:
            parent = self.unfinished[-1] if self.unfinished else None
            node = Element(tag, attributes, parent)
            self.unfinished.append(node)
        return tag

    def finish(self):
        if not self.unfinished:
            self.implicit_tags(None)

        while len(self.unfinished) > 1:
            node = self.unfinished.pop()
            parent = self.unfinished[-1]
            parent.children.append(node)
        return self.unfinished.pop()

    def get_attributes(self, text: str):
        parts = text.split(None, 1)  # 태그와 나머지를 분리
        tag = parts[0].casefold() if parts else ""
        if tag.endswith("/") and len(tag) > 1:
            tag = tag[:-1]
        attributes = {}

        if len(parts) > 1:
            rest = parts[1]
            i = 0
            while i < len(rest):
                # 공백 건너뛰기
                while i < len(rest) and rest[i].isspace():
                    i += 1
                if i >= len(rest):
                    break

                # 속성 이름 찾기
                key_start = i
                while i < len(rest) and rest[i] not in ["=", " ", "\t", "\n"]:
                    i += 1
                key = rest[key_start:i]

                if not key or key == "/":
                    break

                # 공백 건너뛰기
                while i < len(rest) and rest[i].isspace():
                    i += 1

                if i >= len(rest) or rest[i] != "=":
                    attributes[key.casefold()] = ""
                    continue

                i += 1  # '=' 건너뛰기

                while i < len(rest) and rest[i].isspace():
                    i += 1

                if i >= len(rest):
                    attributes[key.casefold()] = ""
                    break

                # 값 파싱 (따옴표 처리)
                if rest[i] in ["'", "\""]:
                    quote = rest[i]
                    i += 1
                    value_start = i
                    while i < len(rest) and rest[i] != quote:
                        i += 1
                    value = rest[value_start:i]
                    if i < len(rest):
                        i += 1  # 닫는 따옴표 건너뛰기
                else:
                    value_start = i
                    while i < len(rest) and rest[i] not in [" ", "\t", "\n"]:
                        i += 1
                    value = rest[value_start:i]

                attributes[key.casefold()] = html.unescape(value)

        return tag, attributes


def decode_body(data: bytes) -> str:
    """UTF-8, 실패하면 <meta charset>에 선언된 인코딩으로 디코딩"""
    if b"\x00" in data:
        raise ParseError("body contains NUL bytes")
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        pass

    match = META_CHARSET.search(data[:SNIFF_BYTES])
    if match is None:
        raise ParseError("body is not valid UTF-8 and declares no charset")
    charset = match.group(1).decode("ascii")
    try:
        return data.decode(charset)
    except (LookupError, UnicodeDecodeError) as e:
        raise ParseError(f"cannot decode body as {charset}: {e}") from e


def parse_html(data: bytes) -> Element:
    """바이트열을 DOM 트리로 변환, 루트(html) 요소 반환"""
    body = decode_body(data)
    root = HTMLParser(body).parse()
    logger.debug("parsed %d bytes into <%s>", len(data), root.tag)
    return root
