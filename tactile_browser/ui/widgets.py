"""
위젯 - 라벨, 버튼, 텍스트 입력, 스크롤 컨테이너

위젯은 자신의 위치(Rect)와 상태만 가지며 paint()로 display list
명령을 만든다. 픽셀을 찍는 일은 Compositor가 한다.
"""
from typing import Callable, List, Optional

from ..common.constants import (
    BACKGROUND_COLOR,
    CHROME_TEXT_COLOR,
    FOCUS_COLOR,
    VSTEP,
)
from ..rendering import DrawLine, DrawOutline, DrawRect, DrawText, Rect
from .text_buffer import TextBuffer


def wrap_text(text: str, font, width: Optional[float]) -> List[str]:
    """단어 단위로 width 안에 들어가도록 줄을 나눔"""
    if width is None:
        return [text]
    lines = []
    line = ""
    for word in text.split():
        candidate = f"{line} {word}" if line else word
        if line and font.measure(candidate) > width:
            lines.append(line)
            line = word
        else:
            line = candidate
    if line:
        lines.append(line)
    return lines or [""]


class Widget:
    focusable = False

    def __init__(self, rect: Rect):
        self.rect = rect
        self.focused = False

    def contains_point(self, x, y) -> bool:
        return self.rect.containsPoint(x, y)

    def activate(self):
        pass

    def paint(self) -> list:
        return []


class Label(Widget):
    def __init__(self, text, x, y, width, font, color, wrap=True):
        self.text = text
        self.font = font
        self.color = color
        self.lines = wrap_text(text, font, width if wrap else None)
        linespace = font.metrics("linespace")
        height = linespace * len(self.lines)
        right = x + (width if width is not None else font.measure(text))
        super().__init__(Rect(x, y, right, y + height))

    @property
    def height(self):
        return self.rect.height

    def paint(self):
        cmds = []
        linespace = self.font.metrics("linespace")
        y = self.rect.top
        for line in self.lines:
            cmds.append(DrawText(self.rect.left, y, line, self.font, self.color))
            y += linespace
        return cmds

    def __repr__(self):
        return f"Label({self.text!r})"


class Button(Widget):
    focusable = True

    def __init__(self, text, rect, action: Callable[[], object], font, padding=5):
        super().__init__(rect)
        self.text = text
        self.action = action
        self.font = font
        self.padding = padding

    def activate(self):
        self.action()

    def paint(self):
        color = FOCUS_COLOR if self.focused else CHROME_TEXT_COLOR
        return [
            DrawOutline(self.rect, color, 2 if self.focused else 1),
            DrawText(self.rect.left + self.padding, self.rect.top + self.padding,
                     self.text, self.font, CHROME_TEXT_COLOR),
        ]

    def __repr__(self):
        return f"Button({self.text!r})"


class TextInput(Widget):
    focusable = True

    def __init__(self, rect, font, buffer: TextBuffer, placeholder="", padding=5):
        super().__init__(rect)
        self.font = font
        self.buffer = buffer
        self.placeholder = placeholder
        self.padding = padding

    def visible_text(self):
        """커서가 보이도록 앞부분을 잘라낸 텍스트와 잘린 글자 수"""
        text = self.buffer.text
        avail = self.rect.width - 2 * self.padding
        start = 0
        while start < self.buffer.cursor and \
                self.font.measure(text[start:self.buffer.cursor]) > avail:
            start += 1
        return text[start:], start

    def paint(self):
        cmds = [DrawOutline(self.rect, FOCUS_COLOR if self.focused else CHROME_TEXT_COLOR, 1)]
        x = self.rect.left + self.padding
        y = self.rect.top + self.padding
        if not self.buffer.text and not self.focused:
            cmds.append(DrawText(x, y, self.placeholder, self.font, "gray"))
            return cmds

        text, start = self.visible_text()
        cmds.append(DrawText(x, y, text, self.font, CHROME_TEXT_COLOR))
        if self.focused:
            cx = x + self.font.measure(text[:self.buffer.cursor - start])
            cmds.append(DrawLine(cx, self.rect.top, cx, self.rect.bottom, FOCUS_COLOR, 1))
        return cmds


class ScrollContainer:
    """탭 하나의 콘텐츠 영역 - 세로로 쌓인 위젯과 스크롤 위치"""

    def __init__(self, width, background=BACKGROUND_COLOR):
        self.width = width
        self.background = background
        self.children: List[Widget] = []
        self.scroll = 0

    def clear(self):
        self.children = []
        self.scroll = 0

    def add(self, widget: Widget):
        self.children.append(widget)
        return widget

    @property
    def content_height(self):
        if not self.children:
            return 0
        return max(child.rect.bottom for child in self.children) + VSTEP

    def scroll_by(self, delta, viewport_height):
        max_scroll = max(0, self.content_height - viewport_height)
        self.scroll = max(0, min(self.scroll + delta, max_scroll))

    def paint(self, viewport_height=0):
        height = max(self.content_height, viewport_height)
        cmds = [DrawRect(0, 0, self.width, height, self.background)]
        for child in self.children:
            cmds.extend(child.paint())
        return cmds

    def texts(self) -> List[str]:
        return [child.text for child in self.children if isinstance(child, Label)]
