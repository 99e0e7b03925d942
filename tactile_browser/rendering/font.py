import threading

import skia

FONTS = {}
_fonts_lock = threading.Lock()

WEIGHT_MAP = {
    "normal": skia.FontStyle.kNormal_Weight,
    "bold": skia.FontStyle.kBold_Weight,
}

STYLE_MAP = {
    "roman": skia.FontStyle.kUpright_Slant,
    "italic": skia.FontStyle.kItalic_Slant,
}


class SkiaFont:
    """Skia 폰트 래퍼 - measure()/metrics() 인터페이스"""

    def __init__(self, size, weight, style):
        font_style = skia.FontStyle(
            WEIGHT_MAP.get(weight, skia.FontStyle.kNormal_Weight),
            skia.FontStyle.kNormal_Width,
            STYLE_MAP.get(style, skia.FontStyle.kUpright_Slant),
        )
        self.typeface = skia.Typeface.MakeFromName(None, font_style)
        self.skia_font = skia.Font(self.typeface, size)
        self.size = size
        self.weight = weight
        self.style = style

    def measure(self, text):
        """텍스트 너비 반환 (픽셀)"""
        return self.skia_font.measureText(text)

    def metrics(self, name):
        """폰트 메트릭 반환"""
        fm = self.skia_font.getMetrics()
        if name == "ascent":
            return abs(fm.fAscent)
        elif name == "descent":
            return fm.fDescent
        elif name == "linespace":
            return abs(fm.fAscent) + fm.fDescent + fm.fLeading
        else:
            raise ValueError(f"Unknown metric: {name}")


def get_font(size, weight="normal", style="roman"):
    """폰트 캐시에서 폰트 반환 (없으면 생성)"""
    key = (size, weight, style)
    with _fonts_lock:
        if key not in FONTS:
            FONTS[key] = SkiaFont(size, weight, style)
        return FONTS[key]
