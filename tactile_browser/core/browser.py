import ctypes
import logging
from functools import partial
from typing import Optional

import sdl2

from ..common.constants import HEIGHT, LAYOUT_CEILING, SCROLL_STEP, TAB_CAPACITY, USER_AGENT, WIDTH
from ..content import LoadPipeline, Session
from ..networking import fetch
from ..profiling import Tracer, set_thread_name
from ..threads import LoadThread
from ..ui import ClickEvent, Chrome, FocusRing, InputCoordinator, Key, KeyEvent
from .compositor_thread import CompositorData, CompositorThread

logger = logging.getLogger(__name__)

KEY_MAP = {
    sdl2.SDLK_RETURN: Key.ENTER,
    sdl2.SDLK_KP_ENTER: Key.ENTER,
    sdl2.SDLK_TAB: Key.TAB,
    sdl2.SDLK_BACKSPACE: Key.BACKSPACE,
    sdl2.SDLK_DELETE: Key.DELETE,
    sdl2.SDLK_LEFT: Key.LEFT,
    sdl2.SDLK_RIGHT: Key.RIGHT,
    sdl2.SDLK_HOME: Key.HOME,
    sdl2.SDLK_END: Key.END,
}


class Browser:
    """SDL 브라우저 - 이벤트 처리 전담

    Browser Thread에서 실행:
    - SDL 이벤트 루프 (유저 입력 -> InputCoordinator)
    - LoadThread 결과를 Session에 적용
    - CompositorThread로 렌더링 위임
    """

    def __init__(
        self,
        capacity: int = TAB_CAPACITY,
        layout_ceiling: float = LAYOUT_CEILING,
        user_agent: str = USER_AGENT,
    ):
        pipeline = LoadPipeline(fetch=partial(fetch, user_agent=user_agent), max_height=layout_ceiling)
        self.loader = LoadThread(pipeline)
        self.session = Session(pipeline, capacity=capacity, width=WIDTH, loader=self.loader)

        sdl2.SDL_Init(sdl2.SDL_INIT_VIDEO)
        self.window = sdl2.SDL_CreateWindow(
            b"Tactile Browser",
            sdl2.SDL_WINDOWPOS_CENTERED,
            sdl2.SDL_WINDOWPOS_CENTERED,
            WIDTH,
            HEIGHT,
            sdl2.SDL_WINDOW_RESIZABLE,
        )
        self.renderer = sdl2.SDL_CreateRenderer(
            self.window, -1,
            sdl2.SDL_RENDERER_ACCELERATED | sdl2.SDL_RENDERER_PRESENTVSYNC
        )
        self.width = WIDTH
        self.height = HEIGHT

        self.ring = FocusRing()
        self.chrome = Chrome(self.session, self.ring, WIDTH)
        self.input = InputCoordinator(self.session, self.chrome.address_field, self.ring)

        self.chrome_needs_raster = True
        self.tab_needs_raster = True
        # 마지막으로 래스터한 탭 상태 (view, generation, outcome)
        self.shown_tab_state = None
        self.shown_title: Optional[str] = None

        self.compositor = CompositorThread(self.renderer, WIDTH, HEIGHT)
        self.compositor.start()

        set_thread_name("BrowserThread")
        sdl2.SDL_StartTextInput()

    @property
    def viewport_height(self):
        return self.height - self.chrome.bottom

    def navigate(self, url: str):
        self.session.navigate(url)
        self.after_input()

    def submit_to_compositor(self):
        view = self.session.active_tab.view
        data = CompositorData(
            display_list=view.paint(self.viewport_height),
            document_height=view.content_height,
            scroll=view.scroll,
            chrome_commands=self.chrome.paint(),
            chrome_height=self.chrome.bottom,
            width=self.width,
            height=self.height,
            chrome_changed=self.chrome_needs_raster,
            tab_changed=self.tab_needs_raster,
        )
        self.compositor.submit(data)
        self.chrome_needs_raster = False
        self.tab_needs_raster = False

    def after_input(self):
        """입력 처리 후 크롬/탭/창 제목 갱신"""
        self.chrome.sync_tabs()
        self.chrome_needs_raster = True

        tab = self.session.active_tab
        # UI 스레드에서 바로 적용된 로드는 view를 제자리에서 바꾸므로 generation까지 비교
        tab_state = (tab.view, tab.generation, tab.outcome)
        if tab_state != self.shown_tab_state:
            self.shown_tab_state = tab_state
            self.tab_needs_raster = True
        if tab.title != self.shown_title:
            self.shown_title = tab.title
            sdl2.SDL_SetWindowTitle(self.window, f"{tab.title} - Tactile Browser".encode("utf-8"))
        self.submit_to_compositor()

    # === 이벤트 핸들러 (Browser Thread) ===

    def handle_keydown(self, key_event):
        sym = key_event.keysym.sym
        if sym == sdl2.SDLK_DOWN:
            self.handle_scroll_by(SCROLL_STEP)
            return
        if sym == sdl2.SDLK_UP:
            self.handle_scroll_by(-SCROLL_STEP)
            return

        key = KEY_MAP.get(sym)
        if key is None:
            return
        shift = bool(key_event.keysym.mod & sdl2.KMOD_SHIFT)
        self.input.dispatch(KeyEvent(key, shift=shift))
        self.after_input()

    def handle_text_input(self, text_event):
        text = text_event.text.decode("utf-8", errors="replace")
        for char in text:
            self.input.dispatch(KeyEvent(Key.TEXT, char=char))
        self.after_input()

    def handle_click(self, button_event):
        # 콘텐츠 영역의 클릭은 아무 동작 없음
        if button_event.y >= self.chrome.bottom:
            return
        self.input.dispatch(ClickEvent(button_event.x, button_event.y))
        self.after_input()

    def handle_scroll_by(self, delta):
        view = self.session.active_tab.view
        before = view.scroll
        view.scroll_by(delta, self.viewport_height)
        if view.scroll != before:
            self.submit_to_compositor()

    def handle_wheel(self, wheel_event):
        self.handle_scroll_by(-wheel_event.y * SCROLL_STEP)

    def handle_resize(self, window_event):
        self.width = window_event.data1
        self.height = window_event.data2
        self.chrome_needs_raster = True
        self.tab_needs_raster = True
        self.submit_to_compositor()

    def process_commits(self):
        """LoadThread에서 끝난 로드를 UI 스레드에서 적용"""
        changed = self.session.process_commits()
        if not changed:
            return
        if self.session.active_tab.id in changed:
            self.tab_needs_raster = True
        # 다른 탭이 바뀌어도 탭바 제목은 갱신
        self.after_input()

    def run(self):
        """메인 이벤트 루프 (Browser Thread)"""
        self.after_input()
        running = True
        event = sdl2.SDL_Event()

        while running:
            while sdl2.SDL_PollEvent(ctypes.byref(event)):
                if event.type == sdl2.SDL_QUIT:
                    running = False
                elif event.type == sdl2.SDL_KEYDOWN:
                    self.handle_keydown(event.key)
                elif event.type == sdl2.SDL_TEXTINPUT:
                    self.handle_text_input(event.text)
                elif event.type == sdl2.SDL_MOUSEBUTTONDOWN:
                    self.handle_click(event.button)
                elif event.type == sdl2.SDL_MOUSEWHEEL:
                    self.handle_wheel(event.wheel)
                elif event.type == sdl2.SDL_WINDOWEVENT:
                    if event.window.event == sdl2.SDL_WINDOWEVENT_RESIZED:
                        self.handle_resize(event.window)

            self.process_commits()

            sdl2.SDL_Delay(16)  # ~60 FPS

        self.cleanup()

    def cleanup(self):
        logger.info("shutting down")
        sdl2.SDL_StopTextInput()

        self.compositor.stop()
        self.compositor.join(timeout=1.0)
        self.compositor.cleanup()

        self.loader.shutdown()
        Tracer.get().finish()

        sdl2.SDL_DestroyRenderer(self.renderer)
        sdl2.SDL_DestroyWindow(self.window)
        sdl2.SDL_Quit()
