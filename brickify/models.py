"""
brickify - 데이터 타입 정의

Voxel, Brick, BrickRequest, PlacementResult, SymmetryAxes 등 핵심 데이터 클래스
(입력 문서용 pydantic 스키마는 schemas.py)
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Mapping, Tuple, Union

from .constants import (
    MAX_UNSPLIT,
    SYMMETRY_BOTH,
    SYMMETRY_NONE,
    SYMMETRY_X,
    SYMMETRY_Z,
)
from .errors import PlacementError

Cell = Tuple[int, int, int]


@dataclass(frozen=True)
class Voxel:
    x: int
    y: int
    z: int
    color: str

    @property
    def key(self) -> Cell:
        return (self.x, self.y, self.z)


@dataclass
class Brick:
    """
    배치된 브릭 한 개

    Attributes:
        width: X 방향 스터드 수
        depth: Z 방향 스터드 수
        x, y, z: 최소 코너 좌표 (y 는 레이어 인덱스)
        color: 색상 라벨
    """
    width: int
    depth: int
    x: int
    y: int
    z: int
    color: str

    @property
    def is_valid_footprint(self) -> bool:
        """한 변 이상이 MAX_UNSPLIT 이하인지"""
        return min(self.width, self.depth) <= MAX_UNSPLIT

    def cells(self) -> List[Cell]:
        """브릭이 점유하는 (x, y, z) 셀 목록"""
        return [
            (self.x + dx, self.y, self.z + dz)
            for dx in range(self.width)
            for dz in range(self.depth)
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "width": self.width,
            "depth": self.depth,
            "x": self.x,
            "y": self.y,
            "z": self.z,
            "color": self.color,
        }


@dataclass(frozen=True)
class BrickRequest:
    """배치 후보 (외부에서 직접 작성한 브릭 리스트도 이 형태로 들어옴)"""
    width: Any
    depth: Any
    x: Any
    y: Any
    z: Any
    color: str = "gray"

    @classmethod
    def from_value(cls, value: Union["BrickRequest", Brick, Mapping[str, Any]]) -> "BrickRequest":
        if isinstance(value, BrickRequest):
            return value
        if isinstance(value, Brick):
            return cls(value.width, value.depth, value.x, value.y, value.z, value.color)
        if not isinstance(value, Mapping):
            raise TypeError(f"Unsupported brick candidate: {type(value).__name__}")
        return cls(
            width=value.get("width", value.get("w")),
            depth=value.get("depth", value.get("d")),
            x=value.get("x"),
            y=value.get("y"),
            z=value.get("z"),
            color=value.get("color", "gray"),
        )


@dataclass
class PlacementFailure:
    """배치 실패 기록 (index 는 입력 스트림 상의 위치)"""
    index: int
    request: BrickRequest
    error: PlacementError

    @property
    def reason(self) -> str:
        return self.error.reason

    def to_dict(self) -> Dict[str, Any]:
        return {"index": self.index, "reason": self.reason, "message": str(self.error)}


@dataclass
class PlacementResult:
    """배치 결과: 성공 브릭 + 브릭 단위 실패 + 최종 점유 셀"""
    bricks: List[Brick] = field(default_factory=list)
    failures: List[PlacementFailure] = field(default_factory=list)
    occupied: FrozenSet[Cell] = frozenset()
    requested: int = 0

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def placed_requests(self) -> int:
        return self.requested - len(self.failures)

    def summary(self) -> str:
        if not self.failures:
            return f"placed {self.requested} of {self.requested} blocks"
        return (
            f"could not place {len(self.failures)} of {self.requested} blocks"
        )


@dataclass(frozen=True)
class SymmetryAxes:
    x: bool = False
    z: bool = False

    @property
    def any(self) -> bool:
        return self.x or self.z

    @property
    def label(self) -> str:
        if self.x and self.z:
            return SYMMETRY_BOTH
        if self.x:
            return SYMMETRY_X
        if self.z:
            return SYMMETRY_Z
        return SYMMETRY_NONE

    @classmethod
    def coerce(cls, value: Union[None, bool, str, Mapping[str, bool], "SymmetryAxes"]) -> "SymmetryAxes":
        """
        bool / 축 이름 / {x, z} dict 를 SymmetryAxes 로 정규화

        True 는 X 축(좌우)만
        """
        if isinstance(value, SymmetryAxes):
            return value
        if value is None or value is False:
            return cls()
        if value is True:
            return cls(x=True, z=False)
        if isinstance(value, str):
            key = value.strip().lower()
            if key == SYMMETRY_X:
                return cls(x=True)
            if key == SYMMETRY_Z:
                return cls(z=True)
            if key == SYMMETRY_BOTH:
                return cls(x=True, z=True)
            if key == SYMMETRY_NONE:
                return cls()
            raise ValueError(f"Unknown symmetry axis: {value!r}")
        return cls(x=bool(value.get("x", False)), z=bool(value.get("z", False)))

