"""
brickify - 크기 프리셋 / 단위 변환

수평 = 스터드, 수직 = 플레이트.
1 스터드 = 8mm, 1 플레이트 = 3.2mm, 1 브릭 = 3 플레이트 = 9.6mm
"""

import math
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .constants import PLATES_PER_BRICK
from .schemas import BoundingBox

MM_PER_STUD = 8
MM_PER_PLATE = 3.2


@dataclass(frozen=True)
class ResolutionConfig:
    max_width: int
    max_depth: int
    max_height: int
    target_voxel_count: int
    max_layers: int

    def fits(self, bbox: BoundingBox) -> bool:
        """바운딩 박스가 이 해상도 안에 들어가는지"""
        return (
            bbox.width <= self.max_width
            and bbox.depth <= self.max_depth
            and bbox.height_plates <= self.max_height
        )


@dataclass(frozen=True)
class PresetInfo:
    id: str
    label: str
    description: str
    real_size_mm: Tuple[int, int, int]  # (width, depth, height)
    brick_count: str
    config: ResolutionConfig


SIZE_PRESETS: Dict[str, PresetInfo] = {
    "pocket": PresetInfo(
        id="pocket",
        label="Pocket",
        description="Keychain or ornament size",
        real_size_mm=(48, 48, 38),
        brick_count="~50-100",
        config=ResolutionConfig(6, 6, 12, 150, 8),
    ),
    "palm": PresetInfo(
        id="palm",
        label="Palm",
        description="Fits in your hand",
        real_size_mm=(96, 96, 77),
        brick_count="~150-300",
        config=ResolutionConfig(12, 12, 24, 500, 15),
    ),
    "desktop": PresetInfo(
        id="desktop",
        label="Desktop",
        description="Desk decoration size",
        real_size_mm=(160, 160, 128),
        brick_count="~400-800",
        config=ResolutionConfig(20, 20, 40, 1200, 25),
    ),
    "display": PresetInfo(
        id="display",
        label="Display",
        description="Showcase model",
        real_size_mm=(256, 256, 192),
        brick_count="~1000-2000",
        config=ResolutionConfig(32, 32, 60, 2500, 40),
    ),
}

DEFAULT_SIZE_PRESET = "palm"


def _round_half_up(value: float) -> int:
    # 0.5 는 항상 올림 (파이썬 round 의 짝수 반올림과 다름)
    return int(math.floor(value + 0.5))


def get_preset(preset: Optional[str] = None) -> PresetInfo:
    key = (preset or DEFAULT_SIZE_PRESET).lower()
    if key not in SIZE_PRESETS:
        raise KeyError(f"Unknown size preset: {preset!r} (choose from {', '.join(SIZE_PRESETS)})")
    return SIZE_PRESETS[key]


def studs_to_mm(studs: float) -> float:
    return studs * MM_PER_STUD


def plates_to_mm(plates: float) -> float:
    return plates * MM_PER_PLATE


def bricks_to_plates(bricks: int) -> int:
    return bricks * PLATES_PER_BRICK


def mm_to_studs(mm: float) -> int:
    return _round_half_up(mm / MM_PER_STUD)


def mm_to_plates(mm: float) -> int:
    return _round_half_up(mm / MM_PER_PLATE)


def format_dimensions(width_mm: float, depth_mm: float, height_mm: float) -> str:
    """예: '~10cm × 10cm × 77mm' (100mm 이상은 cm)"""
    def fmt(mm: float) -> str:
        if mm >= 100:
            return f"{_round_half_up(mm / 10)}cm"
        return f"{_round_half_up(mm)}mm"

    return f"~{fmt(width_mm)} × {fmt(depth_mm)} × {fmt(height_mm)}"


def config_from_mm(width_mm: float, depth_mm: float, height_mm: float) -> ResolutionConfig:
    """실제 크기(mm)로 커스텀 해상도 생성 (채움률 ~40% 가정)"""
    max_width = mm_to_studs(width_mm)
    max_depth = mm_to_studs(depth_mm)
    max_height = mm_to_plates(height_mm)

    target_voxel_count = _round_half_up(max_width * max_depth * max_height * 0.4)
    max_layers = min(50, _round_half_up(max_height / 2))

    return ResolutionConfig(
        max_width=max_width,
        max_depth=max_depth,
        max_height=max_height,
        target_voxel_count=target_voxel_count,
        max_layers=max_layers,
    )
