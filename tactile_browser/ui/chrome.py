"""
Chrome - 탭바, 주소창 줄, 북마크 줄

    [+][0: Title][1: Title] ...
    [<][>][Reload][ address ................ ]
    [GitHub][YouTube][MDN]

버튼과 주소창은 모두 FocusRing에 등록된다. 주소창은 Session의
TextBuffer를 그대로 보여준다.
"""
from typing import TYPE_CHECKING, List

from ..common.constants import BOOKMARKS, CHROME_COLOR, CHROME_TEXT_COLOR, WIDTH
from ..rendering import DrawLine, DrawRect, Rect, get_font
from .widgets import Button, TextInput

if TYPE_CHECKING:
    from ..content.session import Session
    from .focus import FocusRing

ADDRESS_PLACEHOLDER = "Enter a URL (http:// or https://)"


class Chrome:
    def __init__(self, session: "Session", ring: "FocusRing", width=WIDTH, bookmarks=BOOKMARKS):
        self.session = session
        self.ring = ring
        self.width = width
        self.font = get_font(16, "normal", "roman")
        self.font_height = self.font.metrics("linespace")
        self.padding = 5

        self.row_height = self.font_height + 2 * self.padding
        self.tabbar_top = 0
        self.tabbar_bottom = self.row_height
        self.urlbar_top = self.tabbar_bottom
        self.urlbar_bottom = self.urlbar_top + self.row_height
        self.bookmarks_top = self.urlbar_bottom
        self.bookmarks_bottom = self.bookmarks_top + self.row_height
        self.bottom = self.bookmarks_bottom

        # 주소창이 링의 첫 멤버 (초기 포커스)
        x = self.padding
        self.newtab_button = self._button("+", x, self.tabbar_top, lambda: self.session.new_tab())

        self.back_button = self._button("<", self.padding, self.urlbar_top, self.session.go_back)
        self.forward_button = self._button(">", self.back_button.rect.right + self.padding,
                                           self.urlbar_top, self.session.go_forward)
        self.reload_button = self._button("Reload", self.forward_button.rect.right + self.padding,
                                          self.urlbar_top, self.session.refresh)
        self.address_field = TextInput(
            Rect(self.reload_button.rect.right + self.padding,
                 self.urlbar_top + 2,
                 self.width - self.padding,
                 self.urlbar_bottom - 2),
            self.font,
            self.session.address,
            placeholder=ADDRESS_PLACEHOLDER,
        )

        self.bookmark_buttons: List[Button] = []
        x = self.padding
        for name, url in bookmarks:
            button = self._button(name, x, self.bookmarks_top, self._navigate_to(url))
            self.bookmark_buttons.append(button)
            x = button.rect.right + self.padding

        self.tab_buttons: List[Button] = []

        for widget in [self.address_field, self.newtab_button, self.back_button,
                       self.forward_button, self.reload_button, *self.bookmark_buttons]:
            self.ring.register(widget)
        self.sync_tabs()

    def _button(self, text, x, top, action) -> Button:
        w = self.font.measure(text) + 2 * self.padding
        rect = Rect(x, top + 2, x + w, top + self.row_height - 2)
        return Button(text, rect, action, self.font, padding=self.padding)

    def _navigate_to(self, url):
        return lambda: self.session.navigate(url)

    def _switch_to(self, index):
        return lambda: self.session.switch_tab(index)

    def tab_rect(self, i) -> Rect:
        tabs_start = self.newtab_button.rect.right + self.padding
        available = self.width - tabs_start - self.padding
        tab_width = min(160, available / self.session.capacity)
        return Rect(
            tabs_start + tab_width * i,
            self.tabbar_top + 2,
            tabs_start + tab_width * (i + 1),
            self.tabbar_bottom - 2,
        )

    def tab_label(self, i) -> str:
        """'i: 제목' 을 탭 너비에 맞게 자름"""
        text = f"{i}: {self.session.tabs[i].title}"
        avail = self.tab_rect(i).width - 2 * self.padding
        while len(text) > 1 and self.font.measure(text) > avail:
            text = text[:-1]
        return text

    def sync_tabs(self) -> bool:
        """새로 생긴 탭의 버튼을 만들어 링에 등록하고 모든 탭 라벨 갱신"""
        added = False
        while len(self.tab_buttons) < self.session.tab_count:
            i = len(self.tab_buttons)
            button = Button("", self.tab_rect(i), self._switch_to(i), self.font, padding=self.padding)
            self.tab_buttons.append(button)
            self.ring.register(button)
            added = True
        for i, button in enumerate(self.tab_buttons):
            button.text = self.tab_label(i)
        return added

    def paint(self):
        cmds = [DrawRect(0, 0, self.width, self.bottom, CHROME_COLOR)]

        for button in [self.newtab_button, *self.tab_buttons]:
            cmds.extend(button.paint())

        # 활성 탭 아래에는 선을 끊어서 표시
        active = self.tab_buttons[self.session.active_tab_index].rect if self.tab_buttons else None
        if active is not None:
            cmds.append(DrawLine(0, self.tabbar_bottom, active.left, self.tabbar_bottom,
                                 CHROME_TEXT_COLOR, 1))
            cmds.append(DrawLine(active.right, self.tabbar_bottom, self.width, self.tabbar_bottom,
                                 CHROME_TEXT_COLOR, 1))

        for widget in [self.back_button, self.forward_button, self.reload_button,
                       self.address_field, *self.bookmark_buttons]:
            cmds.extend(widget.paint())

        cmds.append(DrawLine(0, self.bottom, self.width, self.bottom, CHROME_TEXT_COLOR, 1))
        return cmds
