# User interface components (Browser Chrome, widgets, focus)
from .text_buffer import TextBuffer
from .widgets import Button, Label, ScrollContainer, TextInput, Widget, wrap_text
from .focus import (
    ClickEvent,
    Command,
    CommandType,
    FocusRing,
    InputCoordinator,
    Key,
    KeyEvent,
)
from .chrome import Chrome

__all__ = [
    'TextBuffer',
    'Widget',
    'Label',
    'Button',
    'TextInput',
    'ScrollContainer',
    'wrap_text',
    'Key',
    'KeyEvent',
    'ClickEvent',
    'CommandType',
    'Command',
    'FocusRing',
    'InputCoordinator',
    'Chrome',
]
