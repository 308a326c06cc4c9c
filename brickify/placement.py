"""
brickify - 물리 배치 (중력 + 충돌)

배치 후보를 순서대로 처리한다:
1. 분할: 두 변 모두 MAX_UNSPLIT 초과면 큰 변 쪽으로 MAX_UNSPLIT 조각 + 나머지로 분할
2. 중력: 아래에 받쳐주는 셀이 하나도 없으면 y 감소 (y=0 은 바닥)
3. 충돌: 발자국 셀 중 하나라도 점유돼 있으면 y 증가
4. 확정: 점유 셀 기록 + Brick 생성

잘못된 후보는 예외로 전체를 중단하지 않고 브릭 단위 실패로 수집한다.
"""

import logging
import numbers
from typing import Any, FrozenSet, Iterable, List, Set, Tuple

from .constants import MAX_UNSPLIT
from .errors import InvalidFootprint, InvalidLayer, InvalidPlacement, PlacementError
from .models import Brick, BrickRequest, Cell, PlacementFailure, PlacementResult

logger = logging.getLogger(__name__)

Footprint = Tuple[int, int, int, int]  # (x, z, width, depth)


class OccupancyIndex:
    """점유 셀 (x, y, z) 희소 인덱스. 배치 1회 동안만 사용."""

    def __init__(self):
        self._cells: Set[Cell] = set()
        self.top_y = -1  # 가장 높은 점유 레이어 (비었으면 -1)

    def __len__(self) -> int:
        return len(self._cells)

    def __contains__(self, cell: Cell) -> bool:
        return cell in self._cells

    def is_supported(self, x: int, y: int, z: int, width: int, depth: int) -> bool:
        """발자국 셀 중 하나라도 바로 아래(y-1)가 점유돼 있으면 True. y=0 은 항상 True."""
        if y <= 0:
            return True
        below = y - 1
        return any(
            (x + dx, below, z + dz) in self._cells
            for dx in range(width)
            for dz in range(depth)
        )

    def collides(self, x: int, y: int, z: int, width: int, depth: int) -> bool:
        return any(
            (x + dx, y, z + dz) in self._cells
            for dx in range(width)
            for dz in range(depth)
        )

    def mark(self, x: int, y: int, z: int, width: int, depth: int) -> None:
        self.top_y = max(self.top_y, y)
        for dx in range(width):
            for dz in range(depth):
                self._cells.add((x + dx, y, z + dz))

    def freeze(self) -> FrozenSet[Cell]:
        return frozenset(self._cells)


def _as_int(value: Any):
    """정수로 해석 가능하면 int, 아니면 None (bool 은 거부)"""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real):
        f = float(value)
        if f.is_integer():
            return int(f)
    return None


def validate_request(req: BrickRequest) -> Tuple[int, int, int, int, int]:
    """
    후보 검증 후 (width, depth, x, y, z) 정수 튜플 반환

    Raises:
        InvalidFootprint: width/depth 가 양의 정수가 아님
        InvalidLayer: y 가 정수가 아님 (음수는 0 으로 보정)
        InvalidPlacement: x/z 가 정수가 아님
    """
    width = _as_int(req.width)
    depth = _as_int(req.depth)
    if width is None or width <= 0:
        raise InvalidFootprint(f"width must be a positive integer, got {req.width!r}", "width")
    if depth is None or depth <= 0:
        raise InvalidFootprint(f"depth must be a positive integer, got {req.depth!r}", "depth")

    y = _as_int(req.y)
    if y is None:
        raise InvalidLayer(f"y must be an integer layer, got {req.y!r}", "y")

    x = _as_int(req.x)
    z = _as_int(req.z)
    if x is None:
        raise InvalidPlacement(f"x must be an integer, got {req.x!r}", "x")
    if z is None:
        raise InvalidPlacement(f"z must be an integer, got {req.z!r}", "z")

    return width, depth, x, max(0, y), z


def split_footprint(x: int, z: int, width: int, depth: int) -> List[Footprint]:
    """
    두 변 모두 MAX_UNSPLIT 을 넘으면 큰 변을 MAX_UNSPLIT 조각으로 잘라낸다 (동률이면 width).

    재귀 대신 명시적 스택. 결과는 원래 순서(앞쪽 조각 먼저).
    """
    out: List[Footprint] = []
    stack: List[Footprint] = [(x, z, width, depth)]
    while stack:
        fx, fz, fw, fd = stack.pop()
        if fw > MAX_UNSPLIT and fd > MAX_UNSPLIT:
            if fw >= fd:
                head = (fx, fz, MAX_UNSPLIT, fd)
                rest = (fx + MAX_UNSPLIT, fz, fw - MAX_UNSPLIT, fd)
            else:
                head = (fx, fz, fw, MAX_UNSPLIT)
                rest = (fx, fz + MAX_UNSPLIT, fw, fd - MAX_UNSPLIT)
            # 나머지를 먼저 넣어 조각이 먼저 처리되게
            stack.append(rest)
            stack.append(head)
            continue
        out.append((fx, fz, fw, fd))
    return out


def resolve_layer(index: OccupancyIndex, x: int, y: int, z: int, width: int, depth: int) -> int:
    """중력으로 내린 뒤 충돌이 없을 때까지 올린 최종 y"""
    # top_y + 1 위로는 받쳐줄 셀이 없다
    y = min(y, index.top_y + 1)
    while y > 0 and not index.is_supported(x, y, z, width, depth):
        y -= 1
    while index.collides(x, y, z, width, depth):
        y += 1
    return y


def place(candidates: Iterable[Any]) -> PlacementResult:
    """
    배치 후보 스트림 처리

    Args:
        candidates: BrickRequest / Brick / {width|w, depth|d, x, y, z, color} 의 순서 있는 목록

    Returns:
        PlacementResult (성공 브릭, 실패 목록, 최종 점유 셀)
    """
    # 점유 인덱스는 호출마다 새로 만들고 밖으로 내보내지 않음 (occupied 는 frozenset 사본)
    index = OccupancyIndex()
    bricks: List[Brick] = []
    failures: List[PlacementFailure] = []
    requested = 0

    for i, raw in enumerate(candidates):
        requested += 1
        req = BrickRequest.from_value(raw)
        try:
            width, depth, x, y, z = validate_request(req)
        except PlacementError as e:
            logger.debug(f"Candidate #{i} rejected ({e.reason}): {e}")
            failures.append(PlacementFailure(index=i, request=req, error=e))
            continue

        for (px, pz, pw, pd) in split_footprint(x, z, width, depth):
            py = resolve_layer(index, px, y, pz, pw, pd)
            index.mark(px, py, pz, pw, pd)
            bricks.append(Brick(width=pw, depth=pd, x=px, y=py, z=pz, color=req.color))

    result = PlacementResult(
        bricks=bricks,
        failures=failures,
        occupied=index.freeze(),
        requested=requested,
    )
    if failures:
        logger.warning(result.summary())
    logger.info(f"Placed {len(bricks)} bricks ({len(index)} cells occupied)")
    return result
