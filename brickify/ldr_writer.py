# brickify/ldr_writer.py
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from .colors import match_ldraw_color
from .constants import (
    BRICK_HEIGHT,
    BRICK_PARTS,
    LDU_PER_STUD,
    MAX_UNSPLIT,
    PLATE_HEIGHT,
    PLATE_PARTS,
    STEP_ORDER_BOTTOMUP,
    STEP_ORDER_NONE,
    STEP_ORDER_TOPDOWN,
    VALID_STEP_ORDERS,
)
from .models import Brick

logger = logging.getLogger(__name__)

# (part, color_code, x, y, z, w, d, rot)
PartLine = Tuple[str, int, int, int, int, int, int, int]


def _rot_y_matrix(deg: int) -> Tuple[int, int, int, int, int, int, int, int, int]:
    d = deg % 360
    if d == 0:
        return (1,0,0, 0,1,0, 0,0,1)
    if d == 90:
        return (0,0,-1, 0,1,0, 1,0,0)
    if d == 180:
        return (-1,0,0, 0,1,0, 0,0,-1)
    if d == 270:
        return (0,0,1, 0,1,0, -1,0,0)
    raise ValueError(f"Only right-angle rotations supported, got {deg}")


def _catalog(kind: str):
    if kind == "plate":
        return PLATE_PARTS
    if kind == "brick":
        return BRICK_PARTS
    raise ValueError(f"kind must be 'plate' or 'brick', got {kind!r}")


def _get_part(catalog, w: int, d: int) -> Optional[Tuple[str, int]]:
    """카탈로그 키는 (짧은 변, 긴 변), 기본 방향(rot=0)은 긴 변이 X"""
    key = (min(w, d), max(w, d))
    if key not in catalog:
        return None
    return catalog[key], (0 if w >= d else 90)


def _split_lengths(catalog, short: int, length: int) -> List[int]:
    """긴 변을 카탈로그에 있는 길이로 쪼갠다 (큰 것부터). 남는 1 은 짧은 변이 1 인 조각."""
    lengths = sorted((l for (s, l) in catalog if s == short), reverse=True)
    out: List[int] = []
    remaining = length
    while remaining > 0:
        step = next((l for l in lengths if l <= remaining), 1)
        out.append(step)
        remaining -= step
    return out


def decompose_footprint(brick: Brick, kind: str = "plate") -> List[PartLine]:
    """
    브릭 발자국 -> 표준 파츠 목록

    카탈로그에 없는 크기(1x5, 2x12 등)는 긴 변 방향으로 잘라서 채운다.
    """
    catalog = _catalog(kind)
    color = match_ldraw_color(brick.color)
    along_x = brick.width >= brick.depth

    long_len = brick.width if along_x else brick.depth
    short_len = brick.depth if along_x else brick.width

    out: List[PartLine] = []
    s_off = 0
    while s_off < short_len:
        strip = min(MAX_UNSPLIT, short_len - s_off)
        l_off = 0
        for seg in _split_lengths(catalog, strip, long_len):
            if along_x:
                x, z, w, d = brick.x + l_off, brick.z + s_off, seg, strip
            else:
                x, z, w, d = brick.x + s_off, brick.z + l_off, strip, seg
            got = _get_part(catalog, w, d)
            if got is None:
                raise RuntimeError(f"Catalog missing part for {w}x{d}")
            part, rot = got
            out.append((part, color, x, brick.y, z, w, d, rot))
            l_off += seg
        s_off += strip
    return out


def _format_line(p: PartLine, height: int, cx_off: float, cz_off: float) -> str:
    part, color, x, y, z, w, d, rot = p
    cx = (x + (w - 1.0) / 2.0) * LDU_PER_STUD - cx_off
    cz = (z + (d - 1.0) / 2.0) * LDU_PER_STUD - cz_off
    # LDraw 는 -Y 가 위
    cy = -y * height

    a,b,c,e,f,g,h,i,j = _rot_y_matrix(rot)
    return (
        f"1 {color} {cx:.2f} {cy:.2f} {cz:.2f} "
        f"{a} {b} {c} {e} {f} {g} {h} {i} {j} "
        f"{part}"
    )


def bricks_to_ldr(
    bricks: Iterable[Brick],
    *,
    kind: str = "plate",
    step_order: str = STEP_ORDER_BOTTOMUP,
    center: bool = True,
    title: str = "brickify",
    author: str = "brickify",
) -> str:
    """
    브릭 목록 -> LDraw 텍스트

    Args:
        kind: 'plate' (y 한 칸 = 플레이트) | 'brick' (y 한 칸 = 브릭)
        step_order: bottomup | topdown | none (레이어마다 0 STEP)
        center: 수평 중심을 원점으로
    """
    height = PLATE_HEIGHT if kind == "plate" else BRICK_HEIGHT
    step_order = (step_order or STEP_ORDER_BOTTOMUP).lower()
    if step_order not in VALID_STEP_ORDERS:
        raise ValueError(f"step_order must be one of {VALID_STEP_ORDERS}, got {step_order!r}")

    lines = [f"0 {title}", f"0 Author: {author}"]
    parts: List[PartLine] = []
    for b in bricks:
        parts.extend(decompose_footprint(b, kind))
    if not parts:
        return "\n".join(lines) + "\n"

    if center:
        xs = [p[2] for p in parts] + [p[2] + p[5] - 1 for p in parts]
        zs = [p[4] for p in parts] + [p[4] + p[6] - 1 for p in parts]
        cx_off = (min(xs) + max(xs)) / 2.0 * LDU_PER_STUD
        cz_off = (min(zs) + max(zs)) / 2.0 * LDU_PER_STUD
    else:
        cx_off = cz_off = 0.0

    if step_order == STEP_ORDER_NONE:
        lines.extend(_format_line(p, height, cx_off, cz_off) for p in parts)
        return "\n".join(lines) + "\n"

    ys = sorted({p[3] for p in parts}, reverse=(step_order == STEP_ORDER_TOPDOWN))
    for yi in ys:
        layer_parts = [p for p in parts if p[3] == yi]
        layer_parts.sort(key=lambda p: (p[4], p[2]))
        lines.extend(_format_line(p, height, cx_off, cz_off) for p in layer_parts)
        lines.append("0 STEP")

    return "\n".join(lines) + "\n"


def write_ldr(out_path: str, bricks: Sequence[Brick], **kwargs) -> None:
    text = bricks_to_ldr(bricks, **kwargs)
    with open(out_path, "w", encoding="utf-8") as f:
        f.write(text)
    logger.info(f"Wrote {len(bricks)} bricks to {out_path}")
