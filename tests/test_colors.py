"""
색상 헬퍼 테스트
"""
import pytest

from brickify.colors import COLOR_TO_HEX, color_to_hex, hex_to_rgb, match_ldraw_color


class TestColorToHex:

    @pytest.mark.parametrize("name,expected", [
        ("red", "0xB40000"),
        ("white", "0xFFFFFF"),
        ("black", "0x05131D"),
        ("Dark Gray", "0x6C6E68"),
        ("  LIGHT-GRAY ", "0xE0E0E0"),
        ("chartreuse", "0xA0A5A9"),
    ])
    def test_named(self, name, expected):
        assert color_to_hex(name) == expected

    def test_all_names_formatted(self):
        for name in COLOR_TO_HEX:
            hex_str = color_to_hex(name)
            assert hex_str.startswith("0x") and len(hex_str) == 8

    def test_hex_to_rgb(self):
        assert hex_to_rgb("#0055BF") == (0, 85, 191)
        assert hex_to_rgb("0xB40000") == (180, 0, 0)
        assert hex_to_rgb(0xFFFFFF) == (255, 255, 255)


class TestMatchLdrawColor:

    @pytest.mark.parametrize("color,code", [
        ("red", 4),
        ("white", 15),
        ("gray", 71),
        ("yellow", 14),
        ("#0055BF", 1),
        ("4", 4),
        (14, 14),
        ((255, 255, 255), 15),
        ((1.0, 1.0, 1.0), 15),
        ((0.0, 0.333, 0.75), 1),
    ])
    def test_match(self, color, code):
        assert match_ldraw_color(color) == code

    @pytest.mark.parametrize("color", ["#010101", "#000000", "0x0A0A0A", (1, 1, 1)])
    def test_near_black_stays_black(self, color):
        # 0~255 값은 0~1 스케일로 오인하지 않음
        assert match_ldraw_color(color) == 0

    def test_unknown_code(self):
        with pytest.raises(ValueError):
            match_ldraw_color(9999)

    def test_bad_rgb(self):
        with pytest.raises(ValueError):
            match_ldraw_color((1, 2))
