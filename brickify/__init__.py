"""
brickify 패키지

레이어드 실루엣 -> 복셀 -> 브릭 -> 물리 배치 엔진
"""

# errors
from .errors import (
    BrickifyError,
    UnsupportedShapeKind,
    SilhouetteValidationError,
    EmptyModelError,
    PlacementError,
    InvalidFootprint,
    InvalidLayer,
    InvalidPlacement,
)

# models
from .models import (
    Voxel,
    Brick,
    BrickRequest,
    PlacementFailure,
    PlacementResult,
    SymmetryAxes,
)

# input schemas
from .schemas import (
    BoundingBox,
    Layer,
    SilhouetteModel,
    load_silhouette,
    estimate_voxel_count,
    has_valid_base_layer,
)

# core
from .rasterizer import rasterize, shape_mask
from .symmetry import enforce_symmetry
from .packer import pack
from .placement import place
from .connectivity import find_floating_bricks, remove_floating_bricks

# pipeline / export
from .pipeline import BuildResult, resolve_symmetry, build_from_silhouette, build_from_requests
from .ldr_writer import bricks_to_ldr, write_ldr
from .colors import color_to_hex, match_ldraw_color
from .presets import SIZE_PRESETS, get_preset, config_from_mm

__all__ = [
    # errors
    'BrickifyError', 'UnsupportedShapeKind', 'SilhouetteValidationError', 'EmptyModelError',
    'PlacementError', 'InvalidFootprint', 'InvalidLayer', 'InvalidPlacement',
    # models
    'Voxel', 'Brick', 'BrickRequest', 'PlacementFailure', 'PlacementResult',
    'SymmetryAxes',
    # schemas
    'BoundingBox', 'Layer', 'SilhouetteModel', 'load_silhouette',
    'estimate_voxel_count', 'has_valid_base_layer',
    # core
    'rasterize', 'shape_mask', 'enforce_symmetry', 'pack', 'place',
    'find_floating_bricks', 'remove_floating_bricks',
    # pipeline / export
    'BuildResult', 'resolve_symmetry', 'build_from_silhouette', 'build_from_requests',
    'bricks_to_ldr', 'write_ldr', 'color_to_hex', 'match_ldraw_color',
    'SIZE_PRESETS', 'get_preset', 'config_from_mm',
]
