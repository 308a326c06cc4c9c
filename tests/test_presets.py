"""
크기 프리셋 및 단위 변환 테스트
"""
import pytest

from brickify.presets import (
    DEFAULT_SIZE_PRESET,
    SIZE_PRESETS,
    ResolutionConfig,
    bricks_to_plates,
    config_from_mm,
    format_dimensions,
    get_preset,
    mm_to_plates,
    mm_to_studs,
    plates_to_mm,
    studs_to_mm,
)
from brickify.schemas import BoundingBox


class TestPresets:

    def test_default_is_palm(self):
        assert DEFAULT_SIZE_PRESET == "palm"
        assert get_preset().config == ResolutionConfig(12, 12, 24, 500, 15)

    @pytest.mark.parametrize("name,max_width,max_layers", [
        ("pocket", 6, 8),
        ("palm", 12, 15),
        ("desktop", 20, 25),
        ("display", 32, 40),
    ])
    def test_table(self, name, max_width, max_layers):
        info = get_preset(name)
        assert info.id == name
        assert info.config.max_width == max_width
        assert info.config.max_layers == max_layers

    def test_case_insensitive(self):
        assert get_preset("Desktop") is SIZE_PRESETS["desktop"]

    def test_unknown(self):
        with pytest.raises(KeyError):
            get_preset("giant")

    def test_fits(self):
        palm = get_preset("palm").config
        assert palm.fits(BoundingBox(width=12, depth=10, height_plates=24))
        assert not palm.fits(BoundingBox(width=13, depth=10, height_plates=24))


class TestUnits:

    def test_conversions(self):
        assert studs_to_mm(10) == 80
        assert plates_to_mm(3) == pytest.approx(9.6)
        assert mm_to_studs(100) == 13
        assert mm_to_plates(32) == 10
        assert bricks_to_plates(2) == 6

    def test_format_dimensions(self):
        assert format_dimensions(96, 96, 77) == "~96mm × 96mm × 77mm"
        assert format_dimensions(160, 160, 128) == "~16cm × 16cm × 13cm"

    def test_config_from_mm(self):
        config = config_from_mm(96, 96, 76.8)
        assert (config.max_width, config.max_depth, config.max_height) == (12, 12, 24)
        assert config.target_voxel_count == 1382
        assert config.max_layers == 12

    def test_config_from_mm_layer_cap(self):
        assert config_from_mm(100, 100, 1000).max_layers == 50
