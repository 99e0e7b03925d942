"""
CompositorThread - 크롬/탭 레이어를 래스터하고 합성해서 SDL 창에 내보냄

Browser Thread는 display list만 만들고 submit()으로 넘긴다. 레이어는
dirty 플래그가 켜졌을 때만 다시 래스터하고, 스크롤은 합성 단계에서
탭 레이어를 잘라 그리는 것으로 처리한다.
"""
import logging
import threading
import time
from dataclasses import dataclass, field
from queue import Empty, Queue
from typing import Any, List, Optional

import sdl2
import skia

from ..common.constants import BACKGROUND_COLOR, HEIGHT, WIDTH
from ..profiling import MeasureTime, set_thread_name
from ..rendering import parse_color

logger = logging.getLogger(__name__)

FRAME_SECONDS = 1.0 / 60.0
SCROLLBAR_WIDTH = 12
SCROLLBAR_MIN_THUMB = 30


@dataclass
class CompositorData:
    """한 프레임 분량의 렌더링 입력"""
    display_list: List[Any] = field(default_factory=list)
    document_height: float = 0.0
    scroll: float = 0.0

    chrome_commands: List[Any] = field(default_factory=list)
    chrome_height: float = 0.0

    width: int = WIDTH
    height: int = HEIGHT

    chrome_changed: bool = False
    tab_changed: bool = False

    def merge_dirty(self, older: "CompositorData"):
        # 건너뛴 프레임이 요청한 래스터도 잃지 않도록
        self.chrome_changed = self.chrome_changed or older.chrome_changed
        self.tab_changed = self.tab_changed or older.tab_changed


class Layer:
    """display list 하나를 그려 두는 skia Surface"""

    def __init__(self, name: str, background):
        self.name = name
        self.background = background
        self.surface: Optional[skia.Surface] = None
        self.dirty = True

    def fit(self, width: int, height: int):
        height = max(1, int(height))
        if self.surface is None or self.surface.width() != width or self.surface.height() != height:
            self.surface = skia.Surface(width, height)
            self.dirty = True

    def raster(self, commands):
        if not self.dirty or self.surface is None:
            return
        with MeasureTime(f"raster_{self.name}", "raster"):
            canvas = self.surface.getCanvas()
            canvas.clear(self.background)
            for cmd in commands:
                cmd.execute(0, canvas)
        self.dirty = False

    def snapshot(self):
        return self.surface.makeImageSnapshot()


class CompositorThread(threading.Thread):
    def __init__(self, renderer, window_width: int, window_height: int):
        super().__init__(daemon=True, name="CompositorThread")
        self.renderer = renderer
        self.width = window_width
        self.height = window_height

        self.inbox: "Queue[CompositorData]" = Queue()
        self.frame: Optional[CompositorData] = None

        self.chrome = Layer("chrome", skia.ColorWHITE)
        self.tab = Layer("tab", parse_color(BACKGROUND_COLOR))
        self.root: Optional[skia.Surface] = None
        self.texture = None

        self.running = False
        self.lock = threading.Lock()

    def run(self):
        self.running = True
        set_thread_name("CompositorThread")
        self._allocate_output()

        while self.running:
            started = time.perf_counter()
            self._take_latest()
            if self.frame is not None:
                with MeasureTime("compositor_frame", "compositor"):
                    self._draw()
            remaining = FRAME_SECONDS - (time.perf_counter() - started)
            if remaining > 0:
                time.sleep(remaining)

    def submit(self, data: CompositorData):
        """Browser Thread에서 호출"""
        self.inbox.put(data)

    def _take_latest(self):
        latest = None
        while True:
            try:
                data = self.inbox.get_nowait()
            except Empty:
                break
            if latest is not None:
                data.merge_dirty(latest)
            latest = data
        if latest is None:
            return

        with self.lock:
            if (latest.width, latest.height) != (self.width, self.height):
                self.width, self.height = latest.width, latest.height
                logger.debug("compositor resize %dx%d", self.width, self.height)
                self._allocate_output()
            self.frame = latest
            viewport = self.height - latest.chrome_height
            self.chrome.fit(self.width, latest.chrome_height)
            self.tab.fit(self.width, max(latest.document_height, viewport))
            if latest.chrome_changed:
                self.chrome.dirty = True
            if latest.tab_changed:
                self.tab.dirty = True

    def _allocate_output(self):
        self.root = skia.Surface(self.width, self.height)
        if self.texture:
            sdl2.SDL_DestroyTexture(self.texture)
        self.texture = sdl2.SDL_CreateTexture(
            self.renderer,
            sdl2.SDL_PIXELFORMAT_RGBA32,
            sdl2.SDL_TEXTUREACCESS_STREAMING,
            self.width,
            self.height,
        )

    def _draw(self):
        frame = self.frame
        with self.lock:
            self.chrome.raster(frame.chrome_commands)
            self.tab.raster(frame.display_list)

            canvas = self.root.getCanvas()
            canvas.clear(parse_color(BACKGROUND_COLOR))
            top = frame.chrome_height
            # 탭 레이어에서 스크롤 위치부터 viewport 높이만큼만 크롬 아래로
            canvas.drawImageRect(
                self.tab.snapshot(),
                skia.Rect(0, frame.scroll, self.width, frame.scroll + self.height - top),
                skia.Rect(0, top, self.width, self.height),
            )
            canvas.drawImage(self.chrome.snapshot(), 0, 0)
            self._draw_scrollbar(canvas, frame)
            self._present()

    def _draw_scrollbar(self, canvas, frame: CompositorData):
        top = frame.chrome_height
        viewport = self.height - top
        overflow = frame.document_height - viewport
        if overflow <= 0:
            return

        left = self.width - SCROLLBAR_WIDTH
        paint = skia.Paint(Color=skia.Color(60, 60, 60, 255))
        canvas.drawRect(skia.Rect(left, top, self.width, self.height), paint)

        thumb = max(SCROLLBAR_MIN_THUMB, viewport * viewport / frame.document_height)
        y = top + (frame.scroll / overflow) * (viewport - thumb)
        paint.setColor(skia.Color(150, 150, 150, 255))
        canvas.drawRect(skia.Rect(left + 2, y, self.width - 2, y + thumb), paint)

    def _present(self):
        with MeasureTime("blit", "blit"):
            pixels = self.root.makeImageSnapshot().tobytes()
            sdl2.SDL_UpdateTexture(self.texture, None, pixels, self.width * 4)
            sdl2.SDL_RenderClear(self.renderer)
            sdl2.SDL_RenderCopy(self.renderer, self.texture, None, None)
            sdl2.SDL_RenderPresent(self.renderer)

    def stop(self):
        self.running = False

    def cleanup(self):
        if self.texture:
            sdl2.SDL_DestroyTexture(self.texture)
            self.texture = None
        self.root = None
        self.chrome.surface = None
        self.tab.surface = None
