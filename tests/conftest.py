"""
공용 테스트 픽스처
"""
import pytest

from brickify.config import reset_config
from brickify.schemas import BoundingBox, Layer


@pytest.fixture(autouse=True)
def _fresh_config():
    """테스트 간 전역 엔진 설정 격리"""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def bbox():
    """10x10 스터드, 4 플레이트"""
    return BoundingBox(width=10, depth=10, height_plates=4)


@pytest.fixture
def big_bbox():
    """20x20 스터드, 4 플레이트"""
    return BoundingBox(width=20, depth=20, height_plates=4)


@pytest.fixture
def make_layer():
    """Layer 팩토리: make_layer(shapes, holes=None, y_min=0, y_max=1)"""
    def _make(shapes, holes=None, y_min=0, y_max=1):
        return Layer(
            y_min_plates=y_min,
            y_max_plates=y_max,
            shapes=shapes,
            holes=holes or [],
        )
    return _make


@pytest.fixture
def model_data():
    """중앙에 4x4 기둥 하나 (3 플레이트)"""
    return {
        "units": "studs",
        "bounding_box": {"width": 10, "depth": 10, "height_plates": 3},
        "layers": [
            {
                "y_min_plates": 0,
                "y_max_plates": 3,
                "shapes": [
                    {"type": "rect", "x": 3, "z": 3, "width": 4, "depth": 4, "color": "gray"},
                ],
                "holes": [],
            }
        ],
        "confidence": 0.9,
        "recommended_symmetry": "x",
    }
