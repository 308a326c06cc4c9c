"""
엔진 설정 테스트
"""
from brickify import config
from brickify.config import EngineConfig, get_config, init_config, reset_config


class TestEnvHelpers:

    def test_env_bool(self, monkeypatch):
        monkeypatch.setenv("BRICKIFY_TEST_FLAG", "Yes")
        assert config._env_bool("BRICKIFY_TEST_FLAG", False) is True
        monkeypatch.setenv("BRICKIFY_TEST_FLAG", "off")
        assert config._env_bool("BRICKIFY_TEST_FLAG", True) is False
        monkeypatch.setenv("BRICKIFY_TEST_FLAG", "  ")
        assert config._env_bool("BRICKIFY_TEST_FLAG", True) is True
        monkeypatch.delenv("BRICKIFY_TEST_FLAG")
        assert config._env_bool("BRICKIFY_TEST_FLAG", False) is False

    def test_env_int(self, monkeypatch):
        monkeypatch.setenv("BRICKIFY_TEST_INT", "6")
        assert config._env_int("BRICKIFY_TEST_INT") == 6
        monkeypatch.delenv("BRICKIFY_TEST_INT")
        assert config._env_int("BRICKIFY_TEST_INT") is None


class TestEngineConfig:

    def test_defaults(self):
        cfg = EngineConfig()
        assert cfg.symmetry == "x"
        assert cfg.max_brick_length is None
        assert cfg.interlock is False
        assert cfg.prune_floating is True
        assert cfg.ldr_kind == "plate"

    def test_with_overrides(self):
        base = EngineConfig()
        cfg = base.with_overrides(interlock=True, max_brick_length=8)
        assert cfg.interlock and cfg.max_brick_length == 8
        assert base.interlock is False

    def test_init_and_get(self):
        assert get_config().is_initialized is False
        cfg = init_config(EngineConfig(symmetry="z"))
        assert cfg.is_initialized
        assert get_config() is cfg
        assert get_config().symmetry == "z"
        reset_config()
        assert get_config().is_initialized is False

    def test_from_env_matches_module_defaults(self):
        cfg = EngineConfig.from_env()
        assert cfg.symmetry == config.SYMMETRY
        assert cfg.prune_floating == config.PRUNE_FLOATING


    def test_configure_logging(self):
        init_config(EngineConfig(log_level="debug"))
        config.configure_logging()
        config.configure_logging("warning")
