# brickify/packer.py
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from .constants import MAX_UNSPLIT
from .models import Brick, Voxel

logger = logging.getLogger(__name__)

# Grid convention: arrays are indexed [z, x] (rows = depth, cols = width).
EMPTY = -1


def _count_edge_crossings_patch(prev_ids: np.ndarray, x: int, z: int, w: int, d: int) -> int:
    patch = prev_ids[z:z+d, x:x+w]
    if patch.size == 0:
        return 0
    if patch.max() == -1:
        return 0
    v_edges = (patch[:, :-1] != -1) & (patch[:, 1:] != -1) & (patch[:, :-1] != patch[:, 1:])
    h_edges = (patch[:-1, :] != -1) & (patch[1:, :] != -1) & (patch[:-1, :] != patch[1:, :])
    return int(v_edges.sum() + h_edges.sum())


def _run_length(free: np.ndarray, x: int, z: int, *, along_x: bool, limit: int) -> int:
    H, W = free.shape
    n = 0
    while n < limit:
        xx, zz = (x + n, z) if along_x else (x, z + n)
        if xx >= W or zz >= H or not free[zz, xx]:
            break
        n += 1
    return n


def _grow_x_run(free: np.ndarray, x: int, z: int, w: int, limit: int) -> int:
    # x 방향 run 을 z 로 MAX_UNSPLIT 줄까지 확장
    H = free.shape[0]
    d = 1
    while d < limit and z + d < H and free[z + d, x:x+w].all():
        d += 1
    return d


def _grow_z_run(free: np.ndarray, x: int, z: int, d: int, limit: int) -> int:
    W = free.shape[1]
    w = 1
    while w < limit and x + w < W and free[z:z+d, x + w].all():
        w += 1
    return w


def _tile_layer(
    labels: np.ndarray,
    *,
    max_length: Optional[int],
    interlock: bool,
    prev_ids: Optional[np.ndarray],
) -> Tuple[List[Tuple[int, int, int, int, int]], np.ndarray]:
    """
    한 레이어를 직사각형으로 분할

    Returns:
        ([(x, z, w, d, color_id), ...], ids): ids[z, x] 는 해당 셀을 덮는 브릭 번호
    """
    H, W = labels.shape
    used = np.zeros((H, W), dtype=bool)
    ids = np.full((H, W), EMPTY, dtype=np.int32)
    long_limit = max(W, H) if max_length is None else max_length
    short_limit = min(MAX_UNSPLIT, long_limit)

    parts: List[Tuple[int, int, int, int, int]] = []

    def best_fit_at(x: int, z: int) -> Tuple[int, int]:
        free = (labels == labels[z, x]) & ~used

        # A: x 방향으로 최대한, 다음 z 로 최대 MAX_UNSPLIT
        wa = _run_length(free, x, z, along_x=True, limit=long_limit)
        da = _grow_x_run(free, x, z, wa, short_limit)
        # B: z 방향으로 최대한, 다음 x 로 최대 MAX_UNSPLIT
        db = _run_length(free, x, z, along_x=False, limit=long_limit)
        wb = _grow_z_run(free, x, z, db, short_limit)

        best = None
        best_key = None  # (cross, area)
        for (w, d) in ((wa, da), (wb, db)):
            cross = 0
            if interlock and prev_ids is not None:
                cross = _count_edge_crossings_patch(prev_ids, x, z, w, d)
            key = (cross, w * d)
            if best is None or key > best_key:
                best = (w, d)
                best_key = key
        return best

    for z in range(H):
        for x in range(W):
            if labels[z, x] == EMPTY or used[z, x]:
                continue

            w, d = best_fit_at(x, z)
            bid = len(parts)
            used[z:z+d, x:x+w] = True
            ids[z:z+d, x:x+w] = bid
            parts.append((x, z, w, d, int(labels[z, x])))

    return parts, ids


def pack(
    voxels: Iterable[Voxel],
    *,
    max_length: Optional[int] = None,
    interlock: bool = False,
) -> List[Brick]:
    """
    복셀 -> 브릭 목록 (레이어별 그리디 직사각형 분할)

    Args:
        voxels: 좌표 중복 없는 복셀
        max_length: 브릭 긴 변 상한 (None 이면 무제한)
        interlock: 아래 레이어의 이음매를 가장 많이 덮는 후보 우선 (면적은 동점 처리용)

    Returns:
        (y, z, x) 순으로 정렬된 Brick 목록. 모든 브릭은 한 변이 MAX_UNSPLIT 이하.
    """
    if max_length is not None and max_length < 1:
        raise ValueError(f"max_length must be positive, got {max_length}")

    voxels = list(voxels)
    if not voxels:
        return []

    xs = np.array([v.x for v in voxels], dtype=np.int64)
    ys = np.array([v.y for v in voxels], dtype=np.int64)
    zs = np.array([v.z for v in voxels], dtype=np.int64)
    min_x, min_z = int(xs.min()), int(zs.min())
    W = int(xs.max()) - min_x + 1
    H = int(zs.max()) - min_z + 1

    palette: List[str] = []
    color_ids: Dict[str, int] = {}
    layers: Dict[int, np.ndarray] = {}
    for i, v in enumerate(voxels):
        cid = color_ids.get(v.color)
        if cid is None:
            cid = len(palette)
            color_ids[v.color] = cid
            palette.append(v.color)
        y = int(ys[i])
        grid = layers.get(y)
        if grid is None:
            grid = np.full((H, W), EMPTY, dtype=np.int32)
            layers[y] = grid
        grid[int(zs[i]) - min_z, int(xs[i]) - min_x] = cid

    out: List[Brick] = []
    prev_y: Optional[int] = None
    prev_ids: Optional[np.ndarray] = None

    for y in sorted(layers):
        below = prev_ids if prev_y == y - 1 else None
        parts, ids = _tile_layer(
            layers[y],
            max_length=max_length,
            interlock=interlock,
            prev_ids=below,
        )
        for (x, z, w, d, cid) in parts:
            out.append(Brick(
                width=w, depth=d,
                x=x + min_x, y=y, z=z + min_z,
                color=palette[cid],
            ))
        logger.debug(f"Layer y={y}: {int((layers[y] != EMPTY).sum())} voxels -> {len(parts)} bricks")
        prev_y, prev_ids = y, ids

    logger.info(f"Packed {len(voxels)} voxels into {len(out)} bricks")
    return out
