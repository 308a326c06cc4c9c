"""
brickify - 브릭 연결성 분석

위/아래 레이어에서 스터드 셀을 공유하는 브릭끼리 연결된 것으로 보고
바닥(y=0, 없으면 최하단 레이어)에서 BFS 로 닿지 않는 부유 브릭을 찾아 제거한다.
"""

import logging
from collections import deque
from typing import Dict, List, Sequence, Set

from .models import Brick, Cell

logger = logging.getLogger(__name__)


def _build_cell_owner(bricks: Sequence[Brick]) -> Dict[Cell, int]:
    owner: Dict[Cell, int] = {}
    for i, b in enumerate(bricks):
        for cell in b.cells():
            owner[cell] = i
    return owner


def _neighbors(brick: Brick, owner: Dict[Cell, int]) -> Set[int]:
    """바로 위/아래 레이어에서 스터드 셀을 공유하는 브릭 (옆면 접촉은 결합 아님)"""
    found: Set[int] = set()
    for dy in (-1, 1):
        for (x, y, z) in brick.cells():
            j = owner.get((x, y + dy, z))
            if j is not None:
                found.add(j)
    return found


def find_stable_bricks(bricks: Sequence[Brick]) -> Set[int]:
    """BFS로 바닥(y=0)에서 연결된 브릭 인덱스를 찾는다."""
    if not bricks:
        return set()

    ground = {i for i, b in enumerate(bricks) if b.y == 0}
    if not ground:
        # 바닥 레이어가 없으면 최하단 레이어를 바닥으로 간주
        min_y = min(b.y for b in bricks)
        ground = {i for i, b in enumerate(bricks) if b.y == min_y}

    owner = _build_cell_owner(bricks)
    stable = set(ground)
    queue = deque(ground)
    while queue:
        i = queue.popleft()
        for j in _neighbors(bricks[i], owner):
            if j not in stable:
                stable.add(j)
                queue.append(j)
    return stable


def find_floating_bricks(bricks: Sequence[Brick]) -> List[int]:
    """
    바닥과 연결되지 않은 브릭 인덱스 (오름차순)

    Returns:
        [index, ...]
    """
    stable = find_stable_bricks(bricks)
    return [i for i in range(len(bricks)) if i not in stable]


def remove_floating_bricks(bricks: Sequence[Brick]) -> List[Brick]:
    """부유 브릭을 제외한 새 목록 (순서 유지)"""
    floating = set(find_floating_bricks(bricks))
    if floating:
        logger.info(f"Removed {len(floating)} floating bricks (of {len(bricks)})")
    return [b for i, b in enumerate(bricks) if i not in floating]
