# Common utilities and constants shared across packages
from .constants import *

__all__ = [
    'HSTEP', 'VSTEP',
    'WIDTH', 'HEIGHT',
    'SCROLL_STEP',
    'TAB_CAPACITY', 'DEFAULT_URL', 'MAX_URL_LENGTH',
    'PLACEHOLDER_TITLE', 'MAX_TITLE_LENGTH', 'MAX_BLOCK_TEXT_LENGTH',
    'LAYOUT_CEILING', 'BLOCK_GAP',
    'CONNECT_TIMEOUT', 'TOTAL_TIMEOUT', 'MAX_REDIRECTS', 'USER_AGENT',
    'LOAD_WORKERS',
    'BACKGROUND_COLOR', 'TEXT_COLOR', 'HEADING_COLOR', 'LINK_COLOR',
    'WARNING_COLOR', 'CHROME_COLOR', 'CHROME_TEXT_COLOR', 'FOCUS_COLOR',
    'BOOKMARKS',
]
