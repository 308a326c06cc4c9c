"""
brickify - 엔진 설정

.env / 환경변수 기본값을 EngineConfig 로 묶고 프로세스 전역 설정과 로깅 초기화를 제공한다.
"""

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .constants import SYMMETRY_X

# 실행 위치와 상관없이 프로젝트 루트의 .env 로드
BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / ".env")


def _env_bool(name: str, default: bool) -> bool:
    v = os.getenv(name)
    if v is None or not v.strip():
        return default
    return v.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str) -> Optional[int]:
    v = os.getenv(name)
    if v is None or not v.strip():
        return None
    return int(v)


################################
# 엔진 기본값 (env 로 덮어쓰기 가능)
################################
SYMMETRY = os.getenv("BRICKIFY_SYMMETRY", SYMMETRY_X)
MAX_BRICK_LENGTH = _env_int("BRICKIFY_MAX_BRICK_LENGTH")
INTERLOCK = _env_bool("BRICKIFY_INTERLOCK", False)
PRUNE_FLOATING = _env_bool("BRICKIFY_PRUNE_FLOATING", True)
LDR_KIND = os.getenv("BRICKIFY_LDR_KIND", "plate")
LOG_LEVEL = os.getenv("BRICKIFY_LOG_LEVEL", "INFO")


@dataclass
class EngineConfig:
    symmetry: str = SYMMETRY_X
    max_brick_length: Optional[int] = None
    interlock: bool = False
    prune_floating: bool = True
    ldr_kind: str = "plate"
    log_level: str = "INFO"
    is_initialized: bool = False

    @classmethod
    def from_env(cls) -> "EngineConfig":
        return cls(
            symmetry=SYMMETRY,
            max_brick_length=MAX_BRICK_LENGTH,
            interlock=INTERLOCK,
            prune_floating=PRUNE_FLOATING,
            ldr_kind=LDR_KIND,
            log_level=LOG_LEVEL,
        )

    def with_overrides(self, **kwargs) -> "EngineConfig":
        return replace(self, **kwargs)


_CONFIG: Optional[EngineConfig] = None


def init_config(config: Optional[EngineConfig] = None) -> EngineConfig:
    global _CONFIG
    base = config or EngineConfig.from_env()
    _CONFIG = replace(base, is_initialized=True)
    return _CONFIG


def get_config() -> EngineConfig:
    if _CONFIG is None:
        # init 전이면 env 기본값
        return EngineConfig.from_env()
    return _CONFIG


def reset_config() -> None:
    global _CONFIG
    _CONFIG = None


def configure_logging(level: Optional[str] = None) -> None:
    """스크립트/테스트용 로깅 설정. 엔진 모듈은 핸들러를 직접 건드리지 않는다."""
    logging.basicConfig(
        level=(level or get_config().log_level).upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
