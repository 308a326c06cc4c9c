"""
brickify - 색상 팔레트

- COLOR_TO_HEX: 실루엣 모델이 쓰는 색상 이름 -> 16진 RGB
- LDRAW_COLORS: LDraw 색상 코드 -> (R, G, B, 이름)
- match_ldraw_color: 이름 / hex / RGB 를 가장 가까운 LDraw 코드로 (KDTree)
"""

from typing import Dict, Sequence, Tuple, Union

import numpy as np
from scipy.spatial import KDTree

DEFAULT_COLOR = "gray"
DEFAULT_HEX = 0xA0A5A9

COLOR_TO_HEX: Dict[str, int] = {
    "red": 0xB40000,
    "blue": 0x0055BF,
    "yellow": 0xF2CD37,
    "green": 0x237841,
    "white": 0xFFFFFF,
    "black": 0x05131D,
    "gray": 0xA0A5A9,
    "light-gray": 0xE0E0E0,
    "dark-gray": 0x6C6E68,
    "orange": 0xFE8A18,
    "brown": 0x583927,
    "tan": 0xE4CD9E,
    "pink": 0xFC97AC,
    "purple": 0x9B5FC0,
    "lime": 0xBBE90B,
    "cyan": 0x36AEBF,
    "dark-blue": 0x0A3463,
    "dark-red": 0x720E0F,
    "dark-green": 0x184632,
}

LDRAW_COLORS: Dict[int, Tuple[int, int, int, str]] = {
    0:  (33, 33, 33, "Black"),
    1:  (0, 85, 191, "Blue"),
    2:  (0, 123, 40, "Green"),
    3:  (0, 131, 138, "Teal"),
    4:  (180, 0, 0, "Red"),
    5:  (171, 67, 183, "Dark Pink"),
    6:  (91, 28, 12, "Brown"),
    7:  (156, 146, 145, "Light Gray"),
    8:  (99, 95, 82, "Dark Gray"),
    9:  (107, 171, 220, "Light Blue"),
    10: (97, 189, 76, "Bright Green"),
    11: (0, 170, 164, "Light Turquoise"),
    13: (255, 148, 194, "Pink"),
    14: (255, 220, 0, "Yellow"),
    15: (255, 255, 255, "White"),
    19: (215, 197, 153, "Tan"),
    22: (129, 0, 123, "Purple"),
    25: (245, 134, 36, "Orange"),
    27: (159, 195, 65, "Lime"),
    28: (33, 55, 23, "Dark Green"),
    70: (89, 47, 14, "Reddish Brown"),
    71: (160, 165, 169, "Light Bluish Gray"),
    72: (108, 110, 104, "Dark Bluish Gray"),
    272: (10, 52, 99, "Dark Blue"),
    320: (114, 14, 15, "Dark Red"),
    378: (163, 193, 173, "Sand Green"),
    484: (179, 62, 0, "Dark Orange"),
}

_COLOR_IDS = list(LDRAW_COLORS.keys())
_COLOR_RGB = np.array([LDRAW_COLORS[i][:3] for i in _COLOR_IDS], dtype=np.float32)
_COLOR_TREE = KDTree(_COLOR_RGB)

ColorLike = Union[str, int, Sequence[float]]


def normalize_color_name(name: str) -> str:
    return name.strip().lower().replace(" ", "-")


def color_to_hex(name: str) -> str:
    """색상 이름 -> '0xRRGGBB' (모르는 이름은 gray)"""
    value = COLOR_TO_HEX.get(normalize_color_name(name), DEFAULT_HEX)
    return f"0x{value:06X}"


def hex_to_rgb(value: Union[str, int]) -> Tuple[int, int, int]:
    """'0xRRGGBB' / '#RRGGBB' / int -> (R, G, B)"""
    if isinstance(value, str):
        s = value.strip()
        if s.startswith("#"):
            s = s[1:]
        elif s.lower().startswith("0x"):
            s = s[2:]
        value = int(s, 16)
    return (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF


def _nearest(rgb: Sequence[float]) -> int:
    """0~255 RGB -> 가장 가까운 LDraw 코드"""
    v = np.array(rgb, dtype=np.float32)
    _, idx = _COLOR_TREE.query(v)
    return _COLOR_IDS[int(idx)]


def match_ldraw_color(color: ColorLike) -> int:
    """
    임의 색상 표현 -> 가장 가까운 LDraw 색상 코드

    Args:
        color: 색상 이름('dark gray'), hex('#FF0000', '0xFF0000'),
               LDraw 코드 문자열('4'), RGB 튜플 (0~255 또는 0~1)
    """
    if isinstance(color, str):
        s = color.strip()
        if s.isdigit() and int(s) in LDRAW_COLORS:
            return int(s)
        if s.startswith("#") or s.lower().startswith("0x"):
            return _nearest(hex_to_rgb(s))
        return _nearest(hex_to_rgb(color_to_hex(s)))
    if isinstance(color, int):
        if color in LDRAW_COLORS:
            return color
        raise ValueError(f"Unknown LDraw color code: {color}")
    if len(color) != 3:
        raise ValueError(f"RGB color must have 3 components, got {len(color)}")
    v = np.array(color, dtype=np.float32)
    # 0~1 float 튜플만 스케일 (정수 튜플은 0~255)
    if v.max() <= 1.0 and any(isinstance(c, float) for c in color):
        v *= 255.0
    return _nearest(v)
