from functools import lru_cache

import skia

COLOR_MAP = {
    "black": skia.ColorBLACK,
    "white": skia.ColorWHITE,
    "red": skia.ColorRED,
    "gray": skia.Color(128, 128, 128, 255),
    "lightgray": skia.Color(211, 211, 211, 255),
    "orange": skia.Color(255, 165, 0, 255),
    "transparent": skia.Color(0, 0, 0, 0),
}


@lru_cache(maxsize=64)
def parse_color(color_str):
    """색상 이름 또는 #RGB / #RRGGBB / #RRGGBBAA 를 Skia Color로 변환"""
    if color_str is None:
        return skia.ColorBLACK

    color_str = color_str.lower().strip()

    if color_str in COLOR_MAP:
        return COLOR_MAP[color_str]

    if color_str.startswith("#"):
        hex_color = color_str[1:]
        if len(hex_color) == 3:
            # #RGB -> #RRGGBB
            hex_color = "".join(c * 2 for c in hex_color)
        if len(hex_color) == 6:
            hex_color += "ff"
        if len(hex_color) == 8:
            r, g, b, a = (int(hex_color[i:i + 2], 16) for i in range(0, 8, 2))
            return skia.Color(r, g, b, a)

    # 알 수 없는 값은 검정
    return skia.ColorBLACK
