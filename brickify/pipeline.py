"""
brickify - 전체 파이프라인

실루엣 모델 -> 래스터화 -> 대칭 보정 -> 브릭 패킹 -> (부유 브릭 제거) -> 물리 배치
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from .config import EngineConfig, get_config
from .connectivity import remove_floating_bricks
from .constants import SYMMETRY_AUTO, SYMMETRY_X
from .errors import EmptyModelError
from .ldr_writer import bricks_to_ldr
from .models import Brick, PlacementResult, SymmetryAxes, Voxel
from .packer import pack
from .placement import place
from .rasterizer import rasterize
from .schemas import SilhouetteModel, load_silhouette
from .symmetry import enforce_symmetry

logger = logging.getLogger(__name__)

LogCallback = Callable[[str, str], None]


@dataclass
class BuildResult:
    voxels: List[Voxel]
    packed: List[Brick]
    placement: PlacementResult
    symmetry: SymmetryAxes
    timings: Dict[str, float] = field(default_factory=dict)

    @property
    def bricks(self) -> List[Brick]:
        return self.placement.bricks

    @property
    def voxel_count(self) -> int:
        return len(self.voxels)

    @property
    def brick_count(self) -> int:
        return len(self.placement.bricks)

    def to_ldr(self, **kwargs) -> str:
        kwargs.setdefault("kind", get_config().ldr_kind)
        return bricks_to_ldr(self.bricks, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "voxel_count": self.voxel_count,
            "brick_count": self.brick_count,
            "symmetry": self.symmetry.label,
            "bricks": [b.to_dict() for b in self.bricks],
            "failures": [f.to_dict() for f in self.placement.failures],
            "timings": dict(self.timings),
        }


def resolve_symmetry(setting: Union[None, bool, str, Mapping[str, bool], SymmetryAxes],
                     recommended: Optional[str] = None) -> SymmetryAxes:
    """
    'auto' (또는 미지정) 이면 모델 추천값, 추천도 없으면 'x'
    """
    if setting is None or (isinstance(setting, str) and setting.strip().lower() == SYMMETRY_AUTO):
        return SymmetryAxes.coerce(recommended or SYMMETRY_X)
    return SymmetryAxes.coerce(setting)


def _make_logger(log_callback: Optional[LogCallback]) -> LogCallback:
    def _log(step: str, message: str) -> None:
        logger.info(f"[{step}] {message}")
        if log_callback is None:
            return
        try:
            log_callback(step, message)
        except Exception as e:
            # 진행 로그 콜백 실패로 빌드를 중단하지 않는다
            logger.warning(f"log_callback failed: {e}")
    return _log


def build_from_silhouette(
    model: Union[SilhouetteModel, Dict[str, Any]],
    symmetry: Union[None, bool, str, Mapping[str, bool], SymmetryAxes] = None,
    config: Optional[EngineConfig] = None,
    log_callback: Optional[LogCallback] = None,
) -> BuildResult:
    """
    실루엣 모델 -> 배치된 브릭

    Args:
        model: SilhouetteModel 또는 검증 전 dict
        symmetry: 'none' | 'x' | 'z' | 'both' | 'auto' | SymmetryAxes (None 이면 config 값)
        config: 엔진 설정 (None 이면 get_config())
        log_callback: (step, message) 진행 로그 콜백

    Raises:
        UnsupportedShapeKind, SilhouetteValidationError: 입력 오류
        EmptyModelError: 래스터화 결과가 비어 있음
    """
    cfg = config or get_config()
    _log = _make_logger(log_callback)
    if not isinstance(model, SilhouetteModel):
        model = load_silhouette(model)

    timings: Dict[str, float] = {}
    bbox = model.bounding_box

    t0 = time.perf_counter()
    voxels = rasterize(bbox, model.layers)
    timings["rasterize"] = time.perf_counter() - t0
    if not voxels:
        raise EmptyModelError("Rasterization produced no voxels")
    _log("rasterize", f"{len(model.layers)} layers -> {len(voxels)} voxels")

    axes = resolve_symmetry(symmetry if symmetry is not None else cfg.symmetry,
                            model.recommended_symmetry)
    t0 = time.perf_counter()
    voxels = enforce_symmetry(voxels, bbox, axes)
    timings["symmetry"] = time.perf_counter() - t0
    _log("symmetry", f"axes={axes.label}, {len(voxels)} voxels")

    t0 = time.perf_counter()
    packed = pack(voxels, max_length=cfg.max_brick_length, interlock=cfg.interlock)
    timings["pack"] = time.perf_counter() - t0
    _log("pack", f"{len(packed)} bricks")

    candidates = packed
    if cfg.prune_floating:
        t0 = time.perf_counter()
        candidates = remove_floating_bricks(packed)
        timings["prune"] = time.perf_counter() - t0
        if len(candidates) != len(packed):
            _log("prune", f"removed {len(packed) - len(candidates)} floating bricks")

    t0 = time.perf_counter()
    placement = place(candidates)
    timings["place"] = time.perf_counter() - t0
    _log("place", placement.summary())

    return BuildResult(
        voxels=voxels,
        packed=packed,
        placement=placement,
        symmetry=axes,
        timings=timings,
    )


def build_from_requests(
    requests: Iterable[Any],
    log_callback: Optional[LogCallback] = None,
) -> PlacementResult:
    """직접 작성한 브릭 후보 목록을 배치만 수행 (래스터화 없이)"""
    _log = _make_logger(log_callback)
    result = place(requests)
    _log("place", result.summary())
    return result
