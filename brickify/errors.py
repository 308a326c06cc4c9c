"""
brickify - 예외 정의

- UnsupportedShapeKind: 알 수 없는 도형 타입 (조용히 버리면 형상이 사라지므로 반드시 예외)
- SilhouetteValidationError: 실루엣 모델 스키마 검증 실패
- PlacementError 계열: 배치 후보 한 개에 대한 거부 사유 (raise 하지 않고 결과에 수집)
"""

from typing import List, Optional


class BrickifyError(Exception):
    """brickify 엔진의 모든 예외의 베이스"""


class UnsupportedShapeKind(BrickifyError):
    """래스터라이저가 모르는 도형 타입이 들어왔을 때 발생"""
    def __init__(self, kind: object):
        self.kind = kind
        super().__init__(f"Unsupported shape kind: {kind!r}")


class SilhouetteValidationError(BrickifyError):
    """실루엣 모델 검증 실패 시 발생하는 예외"""
    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__(f"Validation failed: {errors}")


class EmptyModelError(BrickifyError):
    """래스터화 결과 복셀이 하나도 없을 때"""


class PlacementError(BrickifyError):
    """배치 후보 거부 사유 (브릭 단위)"""
    reason = "invalid_placement"

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


class InvalidFootprint(PlacementError):
    """width/depth 가 양의 정수가 아님"""
    reason = "invalid_footprint"


class InvalidLayer(PlacementError):
    """요청한 y 를 음이 아닌 정수로 해석할 수 없음"""
    reason = "invalid_layer"


class InvalidPlacement(PlacementError):
    """x/z 좌표가 정수가 아님"""
    reason = "invalid_placement"
