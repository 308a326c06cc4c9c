"""
brickify - 실루엣 입력 스키마 (pydantic)

AI 가 생성한 레이어드 실루엣 JSON 을 검증한다.

좌표계:
- X/Z = 수평면 (스터드, 정수)
- Y = 높이 (플레이트, 정수)
- 1 스터드 = 8mm, 1 플레이트 = 3.2mm, 1 브릭 = 3 플레이트
"""

import math
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeInt,
    PositiveInt,
    ValidationError,
    field_validator,
    model_validator,
)

from .constants import (
    MAX_BBOX_STUDS,
    MAX_HEIGHT_PLATES,
    MAX_LAYERS,
    MAX_POLYGON_POINTS,
    MIN_LAYER_HEIGHT,
)
from .errors import SilhouetteValidationError, UnsupportedShapeKind

SHAPE_KINDS = ("rect", "rounded_rect", "circle", "oval", "polygon")
HOLE_KINDS = ("rect", "circle", "oval", "polygon")


class Point(BaseModel):
    """스터드 좌표 2D 점"""
    model_config = ConfigDict(frozen=True)

    x: int
    z: int

    @model_validator(mode="before")
    @classmethod
    def _from_pair(cls, value: Any) -> Any:
        # [x, z] / (x, z) 형태도 허용
        if isinstance(value, (list, tuple)) and len(value) == 2:
            return {"x": value[0], "z": value[1]}
        return value


# ============================================
# 구멍 (색상 없는 도형)
# ============================================

class RectHole(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["rect"] = "rect"
    x: int
    z: int
    width: PositiveInt
    depth: PositiveInt


class CircleHole(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["circle"] = "circle"
    center_x: int
    center_z: int
    radius: PositiveInt


class OvalHole(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["oval"] = "oval"
    center_x: int
    center_z: int
    radius_x: PositiveInt
    radius_z: PositiveInt


class PolygonHole(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["polygon"] = "polygon"
    points: List[Point] = Field(min_length=3, max_length=MAX_POLYGON_POINTS)


# ============================================
# 도형 (색상 포함)
# ============================================

class RectShape(RectHole):
    color: str = Field(min_length=1)


class RoundedRectShape(RectShape):
    """스터드 해상도에서 둥근 모서리는 무시할 수준이라 사각형으로 래스터화"""
    type: Literal["rounded_rect"] = "rounded_rect"
    radius: NonNegativeInt = 0


class CircleShape(CircleHole):
    color: str = Field(min_length=1)


class OvalShape(OvalHole):
    color: str = Field(min_length=1)


class PolygonShape(PolygonHole):
    color: str = Field(min_length=1)


Shape = Annotated[
    Union[RectShape, RoundedRectShape, CircleShape, OvalShape, PolygonShape],
    Field(discriminator="type"),
]
Hole = Annotated[
    Union[RectHole, CircleHole, OvalHole, PolygonHole],
    Field(discriminator="type"),
]


def _check_kinds(items: Any, kinds: tuple) -> Any:
    # 모르는 type 은 ValidationError 로 뭉개지 않고 그대로 올려보낸다
    if not isinstance(items, list):
        return items
    for item in items:
        if isinstance(item, dict):
            kind = item.get("type")
        else:
            kind = getattr(item, "type", None)
        if kind not in kinds:
            raise UnsupportedShapeKind(kind)
    return items


# ============================================
# 레이어 / 바운딩 박스 / 모델
# ============================================

class BoundingBox(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: PositiveInt
    depth: PositiveInt
    height_plates: PositiveInt

    def contains(self, x: int, y: int, z: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height_plates and 0 <= z < self.depth


class Layer(BaseModel):
    """단일 실루엣 레이어: [y_min_plates, y_max_plates) 구간에 같은 단면을 반복"""
    y_min_plates: NonNegativeInt
    y_max_plates: PositiveInt
    shapes: List[Shape] = Field(default_factory=list)
    holes: List[Hole] = Field(default_factory=list)
    confidence: Optional[float] = Field(default=None, ge=0, le=1)
    notes: Optional[str] = None

    @field_validator("shapes", mode="before")
    @classmethod
    def _known_shapes(cls, value: Any) -> Any:
        return _check_kinds(value, SHAPE_KINDS)

    @field_validator("holes", mode="before")
    @classmethod
    def _known_holes(cls, value: Any) -> Any:
        if value is None:
            return []
        return _check_kinds(value, HOLE_KINDS)

    @model_validator(mode="after")
    def _check_range(self) -> "Layer":
        if self.y_max_plates <= self.y_min_plates:
            raise ValueError("y_max_plates must be greater than y_min_plates")
        if self.y_max_plates - self.y_min_plates < MIN_LAYER_HEIGHT:
            raise ValueError(f"Layer height must be at least {MIN_LAYER_HEIGHT} plate(s)")
        return self

    @property
    def height(self) -> int:
        return self.y_max_plates - self.y_min_plates


class SilhouetteModel(BaseModel):
    """AI 가 생성한 전체 실루엣 모델"""
    units: Literal["studs"] = "studs"
    bounding_box: BoundingBox
    layers: List[Layer] = Field(min_length=1, max_length=MAX_LAYERS)
    confidence: Optional[float] = Field(default=None, ge=0, le=1)
    notes: Optional[str] = None
    # 'x': 정면 (사람, 동물), 'z': 측면, 'both': 기둥/구, 'none': 비대칭
    recommended_symmetry: Optional[Literal["x", "z", "both", "none"]] = None

    @model_validator(mode="after")
    def _check_model(self) -> "SilhouetteModel":
        bbox = self.bounding_box
        if bbox.width > MAX_BBOX_STUDS or bbox.depth > MAX_BBOX_STUDS:
            raise ValueError(f"Bounding box exceeds {MAX_BBOX_STUDS} studs")
        if bbox.height_plates > MAX_HEIGHT_PLATES:
            raise ValueError(f"Bounding box exceeds {MAX_HEIGHT_PLATES} plates")

        for i, layer in enumerate(self.layers):
            if not layer.shapes:
                raise ValueError(f"Layer {i} has no shapes")
            if i > 0 and layer.y_min_plates < self.layers[i - 1].y_min_plates:
                raise ValueError("Layers must be ordered by ascending y_min_plates")

        max_y = max(layer.y_max_plates for layer in self.layers)
        if max_y > bbox.height_plates:
            raise ValueError("Layer heights exceed bounding box height")
        return self


def load_silhouette(data: Dict[str, Any]) -> SilhouetteModel:
    """
    실루엣 JSON(dict) 검증

    Raises:
        UnsupportedShapeKind: 모르는 도형 타입
        SilhouetteValidationError: 그 외 스키마 위반 (에러 메시지 리스트 포함)
    """
    try:
        return SilhouetteModel.model_validate(data)
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(p) for p in err['loc']) or 'model'}: {err['msg']}"
            for err in e.errors()
        ]
        raise SilhouetteValidationError(errors) from e


# ============================================
# 분석 유틸
# ============================================

def polygon_area(points: List[Point]) -> float:
    """신발끈 공식"""
    area = 0
    n = len(points)
    for i in range(n):
        j = (i + 1) % n
        area += points[i].x * points[j].z
        area -= points[j].x * points[i].z
    return abs(area) / 2


def shape_area(shape: Union[RectHole, CircleHole, OvalHole, PolygonHole]) -> float:
    """도형의 해석적 면적 (래스터화 전 추정용)"""
    if isinstance(shape, RectHole):
        return float(shape.width * shape.depth)
    if isinstance(shape, CircleHole):
        return math.pi * shape.radius * shape.radius
    if isinstance(shape, OvalHole):
        return math.pi * shape.radius_x * shape.radius_z
    if isinstance(shape, PolygonHole):
        return polygon_area(shape.points)
    raise UnsupportedShapeKind(getattr(shape, "type", type(shape).__name__))


def estimate_voxel_count(model: SilhouetteModel) -> int:
    """후보 모델 순위 매기기용 복셀 수 추정 (구멍, 겹침 무시)"""
    count = 0
    for layer in model.layers:
        for shape in layer.shapes:
            count += math.floor(shape_area(shape)) * layer.height
    return count


def has_valid_base_layer(model: SilhouetteModel, min_coverage_ratio: float = 0.5) -> bool:
    """Y=0 에서 시작하는 레이어가 바운딩 박스를 충분히 덮는지"""
    base_layers = [layer for layer in model.layers if layer.y_min_plates == 0]
    if not base_layers:
        return False

    bbox_area = model.bounding_box.width * model.bounding_box.depth
    covered = sum(shape_area(s) for layer in base_layers for s in layer.shapes)
    return covered / bbox_area >= min_coverage_ratio
