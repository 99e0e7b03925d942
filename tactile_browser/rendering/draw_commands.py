"""
Display list 명령

레이아웃/위젯이 만들어 내는 그리기 명령. Compositor 스레드가
skia Canvas 위에서 execute()를 호출한다. 좌표는 모두 자신이 속한
surface(크롬 또는 탭 콘텐츠) 기준이다.
"""
import skia

from .color_utils import parse_color
from .geometry import Rect


class DrawCommand:
    def __init__(self, rect: Rect, color):
        self.rect = rect
        self.color = color

    def execute(self, scroll, canvas):
        raise NotImplementedError

    def _paint(self, style):
        paint = skia.Paint()
        paint.setColor(parse_color(self.color))
        paint.setStyle(style)
        paint.setAntiAlias(True)
        return paint

    def _skia_rect(self, scroll):
        return skia.Rect(
            self.rect.left,
            self.rect.top - scroll,
            self.rect.right,
            self.rect.bottom - scroll,
        )


class DrawText(DrawCommand):
    def __init__(self, x1, y1, text, font, color):
        super().__init__(
            Rect(x1, y1, x1 + font.measure(text), y1 + font.metrics("linespace")),
            color,
        )
        self.text = text
        self.font = font

    def execute(self, scroll, canvas):
        # Skia drawString은 baseline 기준이므로 ascent 더함
        baseline_y = self.rect.top - scroll + self.font.metrics("ascent")
        canvas.drawString(
            self.text,
            self.rect.left,
            baseline_y,
            self.font.skia_font,
            self._paint(skia.Paint.kFill_Style),
        )

    def __repr__(self):
        return f"DrawText({self.rect.left}, {self.rect.top}, {self.text!r})"


class DrawRect(DrawCommand):
    def __init__(self, x1, y1, x2, y2, color):
        super().__init__(Rect(x1, y1, x2, y2), color)

    def execute(self, scroll, canvas):
        if self.color == "transparent":
            return
        paint = skia.Paint()
        paint.setColor(parse_color(self.color))
        canvas.drawRect(self._skia_rect(scroll), paint)


class DrawOutline(DrawCommand):
    def __init__(self, rect, color, thickness):
        super().__init__(rect, color)
        self.thickness = thickness

    def execute(self, scroll, canvas):
        paint = self._paint(skia.Paint.kStroke_Style)
        paint.setStrokeWidth(self.thickness)
        canvas.drawRect(self._skia_rect(scroll), paint)


class DrawLine(DrawCommand):
    def __init__(self, x1, y1, x2, y2, color, thickness):
        super().__init__(Rect(x1, y1, x2, y2), color)
        self.thickness = thickness

    def execute(self, scroll, canvas):
        paint = self._paint(skia.Paint.kStroke_Style)
        paint.setStrokeWidth(self.thickness)
        canvas.drawLine(
            self.rect.left,
            self.rect.top - scroll,
            self.rect.right,
            self.rect.bottom - scroll,
            paint,
        )
