# Rendering components
from .draw_commands import DrawCommand, DrawText, DrawRect, DrawOutline, DrawLine
from .geometry import Rect
from .font import get_font
from .color_utils import parse_color

__all__ = [
    'DrawCommand',
    'DrawText',
    'DrawRect',
    'DrawOutline',
    'DrawLine',
    'Rect',
    'get_font',
    'parse_color',
]
