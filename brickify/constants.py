"""상수 정의"""

# =============================================================================
# 브릭 규격
# =============================================================================

MAX_UNSPLIT = 2  # 한 변은 반드시 2 스터드 이하 (2x4 OK, 3x3 은 분할)

LDU_PER_STUD = 20  # 1 스터드 = 20 LDU
PLATE_HEIGHT = 8   # LDU
BRICK_HEIGHT = 24  # LDU
PLATES_PER_BRICK = 3

# =============================================================================
# 실루엣 입력 한계 (AI 출력 검증용)
# =============================================================================

MAX_LAYERS = 50
MAX_POLYGON_POINTS = 20
MAX_BBOX_STUDS = 64
MAX_HEIGHT_PLATES = 96
MIN_LAYER_HEIGHT = 1

# =============================================================================
# 대칭 축
# =============================================================================

SYMMETRY_NONE = "none"
SYMMETRY_X = "x"
SYMMETRY_Z = "z"
SYMMETRY_BOTH = "both"
SYMMETRY_AUTO = "auto"

# =============================================================================
# LDR 출력
# =============================================================================

STEP_ORDER_BOTTOMUP = "bottomup"
STEP_ORDER_TOPDOWN = "topdown"
STEP_ORDER_NONE = "none"
VALID_STEP_ORDERS = (STEP_ORDER_BOTTOMUP, STEP_ORDER_TOPDOWN, STEP_ORDER_NONE)

# (짧은 변, 긴 변) -> 파츠
BRICK_PARTS = {
    (1, 1): "3005.dat",
    (1, 2): "3004.dat",
    (1, 3): "3622.dat",
    (1, 4): "3010.dat",
    (1, 6): "3009.dat",
    (1, 8): "3008.dat",
    (2, 2): "3003.dat",
    (2, 3): "3002.dat",
    (2, 4): "3001.dat",
    (2, 6): "2456.dat",
    (2, 8): "3007.dat",
    (2, 10): "3006.dat",
}

PLATE_PARTS = {
    (1, 1): "3024.dat",
    (1, 2): "3023.dat",
    (1, 3): "3623.dat",
    (1, 4): "3710.dat",
    (1, 6): "3666.dat",
    (1, 8): "3460.dat",
    (2, 2): "3022.dat",
    (2, 3): "3021.dat",
    (2, 4): "3020.dat",
    (2, 6): "3795.dat",
    (2, 8): "3034.dat",
    (2, 10): "3832.dat",
}
