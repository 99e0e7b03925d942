"""브라우저 전역 설정값"""

# 윈도우
WIDTH, HEIGHT = 800, 600
HSTEP, VSTEP = 13, 18
SCROLL_STEP = 100

# 세션
TAB_CAPACITY = 10
DEFAULT_URL = "https://example.com"
MAX_URL_LENGTH = 2048

# 페이지 로드
PLACEHOLDER_TITLE = "Untitled"
MAX_TITLE_LENGTH = 256
MAX_BLOCK_TEXT_LENGTH = 4096
LAYOUT_CEILING = 2000
BLOCK_GAP = 10

# 네트워크
CONNECT_TIMEOUT = 10.0
TOTAL_TIMEOUT = 30.0
MAX_REDIRECTS = 10
USER_AGENT = "TactileBrowser/0.1"
LOAD_WORKERS = 4

# 색상 (어두운 배경 위 밝은 글자)
BACKGROUND_COLOR = "#2a2a2a"
TEXT_COLOR = "#d0d0d0"
HEADING_COLOR = "#f0f0f0"
LINK_COLOR = "#4a90e2"
WARNING_COLOR = "orange"
CHROME_COLOR = "white"
CHROME_TEXT_COLOR = "black"
FOCUS_COLOR = "red"

# 북마크 (메모리에만 보관)
BOOKMARKS = [
    ("GitHub", "https://github.com"),
    ("YouTube", "https://www.youtube.com"),
    ("MDN", "https://developer.mozilla.org"),
]
