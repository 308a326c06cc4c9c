"""
brickify - 대칭 보정

래스터화된 복셀 집합을 바운딩 박스 중앙으로 옮긴 뒤 요청한 축으로 미러링한다.
"""

import logging
from typing import Dict, Iterable, List, Mapping, Union

from .models import Cell, SymmetryAxes, Voxel
from .schemas import BoundingBox

logger = logging.getLogger(__name__)


def _center_shift(values: List[int], dim: int) -> int:
    """extent 를 [0, dim) 중앙에 놓기 위한 이동량 (홀수 여백은 아래쪽으로 내림)"""
    lo, hi = min(values), max(values)
    extent = hi - lo + 1
    target_min = max(0, (dim - extent) // 2)
    return target_min - lo


def center_voxels(voxels: Iterable[Voxel], bbox: BoundingBox, axes: SymmetryAxes) -> List[Voxel]:
    """요청한 축만 전체 집합 기준으로 중앙 정렬 (레이어 간 상대 위치 유지)"""
    voxels = list(voxels)
    if not voxels or not axes.any:
        return voxels

    dx = _center_shift([v.x for v in voxels], bbox.width) if axes.x else 0
    dz = _center_shift([v.z for v in voxels], bbox.depth) if axes.z else 0
    if dx == 0 and dz == 0:
        return voxels
    return [Voxel(v.x + dx, v.y, v.z + dz, v.color) for v in voxels]


def _mirror(cells: Dict[Cell, str], axis: str, size: int) -> Dict[Cell, str]:
    out = dict(cells)
    for (x, y, z), color in cells.items():
        if axis == "x":
            key = (size - 1 - x, y, z)
        else:
            key = (x, y, size - 1 - z)
        # 원본 셀 색이 우선
        out.setdefault(key, color)
    return out


def enforce_symmetry(
    voxels: Iterable[Voxel],
    bbox: BoundingBox,
    axes: Union[None, bool, str, Mapping[str, bool], SymmetryAxes] = True,
) -> List[Voxel]:
    """
    대칭 보정

    Args:
        voxels: 입력 복셀
        bbox: 바운딩 박스 (중앙선 기준)
        axes: SymmetryAxes / {x, z} / 'x' | 'z' | 'both' | 'none' / bool
              (True 는 좌우(X)만, False 는 그대로)

    Returns:
        (y, z, x) 정렬된 복셀 목록 (좌표 중복 없음, 두 번 적용해도 결과 동일)
    """
    axes = SymmetryAxes.coerce(axes)
    voxels = list(voxels)
    if not axes.any or not voxels:
        return voxels

    centered = center_voxels(voxels, bbox, axes)
    cells: Dict[Cell, str] = {}
    for v in centered:
        cells.setdefault(v.key, v.color)

    if axes.x:
        cells = _mirror(cells, "x", bbox.width)
    if axes.z:
        cells = _mirror(cells, "z", bbox.depth)

    out = [Voxel(x, y, z, color) for (x, y, z), color in cells.items()]
    out.sort(key=lambda v: (v.y, v.z, v.x))
    logger.info(
        f"Symmetry '{axes.label}': {len(voxels)} -> {len(out)} voxels"
    )
    return out
