"""
포커스 링과 입력 조정자

SDL 이벤트는 Browser가 KeyEvent / ClickEvent 로 바꿔서 넘긴다.
InputCoordinator는 이벤트를 Command(EDIT, SUBMIT, MOVE_FOCUS, ACTIVATE,
IGNORE)로 해석하고(resolve) 실행한다(dispatch).
"""
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, List, Optional

from .widgets import TextInput, Widget

if TYPE_CHECKING:
    from ..content.session import Session

logger = logging.getLogger(__name__)


class Key(Enum):
    TEXT = auto()
    BACKSPACE = auto()
    DELETE = auto()
    ENTER = auto()
    TAB = auto()
    LEFT = auto()
    RIGHT = auto()
    HOME = auto()
    END = auto()


@dataclass
class KeyEvent:
    key: Key
    char: str = ""
    shift: bool = False


@dataclass
class ClickEvent:
    x: float
    y: float


class CommandType(Enum):
    EDIT = auto()
    SUBMIT = auto()
    MOVE_FOCUS = auto()
    ACTIVATE = auto()
    IGNORE = auto()


@dataclass
class Command:
    type: CommandType
    target: Optional[Widget] = None
    key: Optional[Key] = None
    char: str = ""
    step: int = 1


IGNORE = Command(CommandType.IGNORE)

EDIT_KEYS = (Key.TEXT, Key.BACKSPACE, Key.DELETE, Key.LEFT, Key.RIGHT, Key.HOME, Key.END)


class FocusRing:
    """포커스를 받을 수 있는 위젯의 순서와 현재 위치 (위젯을 소유하지 않음)"""

    def __init__(self):
        self.members: List[Widget] = []
        self.index = -1

    def register(self, widget: Widget):
        if widget in self.members:
            return
        self.members.append(widget)
        # 첫 멤버가 들어오면 바로 포커스
        if self.index < 0:
            self.focus(widget)

    @property
    def current(self) -> Optional[Widget]:
        if self.index < 0:
            return None
        return self.members[self.index]

    def focus(self, widget: Widget):
        if widget not in self.members:
            raise ValueError(f"{widget!r} is not in the focus ring")
        if self.current is not None:
            self.current.focused = False
        self.index = self.members.index(widget)
        widget.focused = True

    def advance(self, step: int = 1) -> Optional[Widget]:
        if not self.members:
            return None
        self.focus(self.members[(self.index + step) % len(self.members)])
        return self.current

    def widget_at(self, x, y) -> Optional[Widget]:
        for widget in self.members:
            if widget.contains_point(x, y):
                return widget
        return None


class InputCoordinator:
    def __init__(self, session: "Session", address_field: TextInput, ring: FocusRing):
        self.session = session
        self.address_field = address_field
        self.ring = ring
        ring.register(address_field)

    @property
    def address_focused(self) -> bool:
        return self.ring.current is self.address_field

    def resolve(self, event) -> Command:
        if isinstance(event, ClickEvent):
            target = self.ring.widget_at(event.x, event.y)
            if target is None:
                return IGNORE
            return Command(CommandType.ACTIVATE, target=target)

        if event.key == Key.TAB:
            return Command(CommandType.MOVE_FOCUS, step=-1 if event.shift else 1)

        if self.address_focused:
            if event.key == Key.ENTER:
                return Command(CommandType.SUBMIT, target=self.address_field)
            if event.key == Key.TEXT:
                if not event.char or not event.char.isprintable():
                    return IGNORE
            if event.key in EDIT_KEYS:
                return Command(CommandType.EDIT, target=self.address_field,
                               key=event.key, char=event.char)
            return IGNORE

        if event.key == Key.ENTER and self.ring.current is not None:
            return Command(CommandType.ACTIVATE, target=self.ring.current)
        return IGNORE

    def dispatch(self, event) -> Command:
        command = self.resolve(event)
        if command.type == CommandType.EDIT:
            self._edit(command)
        elif command.type == CommandType.SUBMIT:
            url = self.address_field.buffer.text
            logger.debug("submit %r", url)
            self.session.navigate(url)
        elif command.type == CommandType.MOVE_FOCUS:
            self.ring.advance(command.step)
        elif command.type == CommandType.ACTIVATE:
            if isinstance(command.target, TextInput):
                self.ring.focus(command.target)
            else:
                command.target.activate()
        return command

    def _edit(self, command: Command):
        buffer = self.address_field.buffer
        if command.key == Key.TEXT:
            for char in command.char:
                buffer.insert(char)
        elif command.key == Key.BACKSPACE:
            buffer.backspace()
        elif command.key == Key.DELETE:
            buffer.delete()
        elif command.key == Key.LEFT:
            buffer.move_left()
        elif command.key == Key.RIGHT:
            buffer.move_right()
        elif command.key == Key.HOME:
            buffer.home()
        elif command.key == Key.END:
            buffer.end()
