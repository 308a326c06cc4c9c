"""
brickify - 실루엣 래스터라이저

레이어드 2D 도형(구멍 포함)을 정수 3D 복셀 집합으로 변환한다.

- 그리드: numpy 배열 [x, z] (x = width 방향, z = depth 방향)
- Rect / Circle / Oval 은 정수 셀 인덱스로 판정, Polygon 은 셀 중심 (i+0.5, j+0.5) 으로 판정
- 같은 레이어 안에서 도형이 겹치면 리스트 상 마지막 도형의 색이 이긴다
"""

import logging
from typing import Dict, List, Sequence, Tuple

import numpy as np

from .errors import UnsupportedShapeKind
from .models import Cell, Voxel
from .schemas import (
    BoundingBox,
    CircleHole,
    Layer,
    OvalHole,
    PolygonHole,
    RectHole,
)

logger = logging.getLogger(__name__)

EMPTY = -1


def _cell_indices(width: int, depth: int) -> Tuple[np.ndarray, np.ndarray]:
    # (width, 1), (1, depth) 브로드캐스트용
    return np.ogrid[0:width, 0:depth]


def _rect_mask(shape: RectHole, width: int, depth: int) -> np.ndarray:
    ii, jj = _cell_indices(width, depth)
    return (
        (ii >= shape.x) & (ii < shape.x + shape.width)
        & (jj >= shape.z) & (jj < shape.z + shape.depth)
    )


def _circle_mask(shape: CircleHole, width: int, depth: int) -> np.ndarray:
    ii, jj = _cell_indices(width, depth)
    dx = ii - shape.center_x
    dz = jj - shape.center_z
    return dx * dx + dz * dz <= shape.radius * shape.radius


def _oval_mask(shape: OvalHole, width: int, depth: int) -> np.ndarray:
    ii, jj = _cell_indices(width, depth)
    rx, rz = shape.radius_x, shape.radius_z
    # (dx/rx)^2 + (dz/rz)^2 <= 1 을 정수로 통분 (부동소수 경계 오차 없음)
    dx = (ii - shape.center_x) * rz
    dz = (jj - shape.center_z) * rx
    return dx * dx + dz * dz <= (rx * rz) ** 2


def _polygon_mask(shape: PolygonHole, width: int, depth: int) -> np.ndarray:
    """짝홀 ray casting (볼록 다각형일 필요 없음)"""
    ii, jj = _cell_indices(width, depth)
    px = ii + 0.5
    pz = jj + 0.5
    inside = np.zeros((width, depth), dtype=bool)

    pts = [(p.x, p.z) for p in shape.points]
    n = len(pts)
    for k in range(n):
        xi, zi = pts[k]
        xj, zj = pts[k - 1]
        if zi == zj:
            # 수평 변은 +x 방향 ray 와 교차로 세지 않는다
            continue
        straddles = (zi > pz) != (zj > pz)
        x_cross = (xj - xi) * (pz - zi) / (zj - zi) + xi
        inside ^= straddles & (px < x_cross)
    return inside


def shape_mask(shape, width: int, depth: int) -> np.ndarray:
    """
    도형 하나의 (width, depth) bool 마스크

    박스 밖 셀은 애초에 그리드에 없으므로 클리핑은 자동.

    Raises:
        UnsupportedShapeKind: 모르는 도형 객체
    """
    # RoundedRectShape 는 RectHole 하위 클래스라 사각형으로 처리됨
    if isinstance(shape, RectHole):
        return _rect_mask(shape, width, depth)
    if isinstance(shape, CircleHole):
        return _circle_mask(shape, width, depth)
    if isinstance(shape, OvalHole):
        return _oval_mask(shape, width, depth)
    if isinstance(shape, PolygonHole):
        return _polygon_mask(shape, width, depth)
    raise UnsupportedShapeKind(getattr(shape, "type", type(shape).__name__))


def rasterize_layer(layer: Layer, width: int, depth: int) -> Tuple[np.ndarray, List[str]]:
    """
    레이어 단면을 라벨 그리드로 변환

    Returns:
        (labels, palette): labels[x, z] 는 palette 인덱스, 빈 셀은 -1
    """
    labels = np.full((width, depth), EMPTY, dtype=np.int32)
    palette: List[str] = []
    color_ids: Dict[str, int] = {}

    for shape in layer.shapes:
        mask = shape_mask(shape, width, depth)
        if not mask.any():
            continue
        cid = color_ids.get(shape.color)
        if cid is None:
            cid = len(palette)
            color_ids[shape.color] = cid
            palette.append(shape.color)
        labels[mask] = cid

    for hole in layer.holes:
        labels[shape_mask(hole, width, depth)] = EMPTY

    return labels, palette


def rasterize(bbox: BoundingBox, layers: Sequence[Layer]) -> List[Voxel]:
    """
    레이어 목록 -> 복셀 목록

    - 각 레이어 단면을 [y_min_plates, y_max_plates) 모든 y 에 복제 (높이 박스로 클리핑)
    - 레이어 구간이 겹치면 뒤 레이어가 이긴다 (좌표 중복 없음)
    - 결과는 (y, z, x) 오름차순
    """
    width, depth, height = bbox.width, bbox.depth, bbox.height_plates
    cells: Dict[Cell, str] = {}

    for layer_idx, layer in enumerate(layers):
        labels, palette = rasterize_layer(layer, width, depth)
        xs, zs = np.nonzero(labels != EMPTY)
        if xs.size == 0:
            logger.debug(f"Layer {layer_idx}: no cells inside bounding box")
            continue

        colors = [palette[c] for c in labels[xs, zs]]
        y_lo = max(0, layer.y_min_plates)
        y_hi = min(height, layer.y_max_plates)
        for y in range(y_lo, y_hi):
            for x, z, color in zip(xs.tolist(), zs.tolist(), colors):
                cells[(x, y, z)] = color

        logger.debug(
            f"Layer {layer_idx}: {xs.size} cells x {max(0, y_hi - y_lo)} plates"
        )

    voxels = [Voxel(x, y, z, color) for (x, y, z), color in cells.items()]
    voxels.sort(key=lambda v: (v.y, v.z, v.x))
    logger.info(f"Rasterized {len(layers)} layers -> {len(voxels)} voxels")
    return voxels
