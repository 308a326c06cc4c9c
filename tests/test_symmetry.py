"""
대칭 보정 테스트
"""
import pytest

from brickify.models import SymmetryAxes, Voxel
from brickify.rasterizer import rasterize
from brickify.symmetry import center_voxels, enforce_symmetry


def _keys(voxels):
    return {v.key for v in voxels}


@pytest.fixture
def lopsided(bbox, make_layer):
    """한쪽으로 치우친 비대칭 형상 (2 플레이트)"""
    shapes = [
        {"type": "polygon", "points": [[0, 0], [6, 0], [0, 5]], "color": "red"},
        {"type": "rect", "x": 1, "z": 6, "width": 2, "depth": 3, "color": "blue"},
    ]
    return rasterize(bbox, [make_layer(shapes, y_max=2)])


class TestCentering:

    def test_single_voxel_x(self, bbox):
        out = enforce_symmetry([Voxel(0, 0, 0, "red")], bbox, {"x": True, "z": False})
        assert _keys(out) == {(4, 0, 0), (5, 0, 0)}

    def test_both_axes(self, bbox):
        out = enforce_symmetry([Voxel(0, 0, 0, "red")], bbox, "both")
        assert _keys(out) == {(4, 0, 4), (5, 0, 4), (4, 0, 5), (5, 0, 5)}

    def test_z_only_keeps_x(self, bbox):
        out = enforce_symmetry([Voxel(0, 0, 0, "red")], bbox, "z")
        assert {v.x for v in out} == {0}
        assert {v.z for v in out} == {4, 5}

    def test_whole_set_shift_keeps_layer_offsets(self, bbox):
        voxels = [Voxel(x, 0, 0, "red") for x in range(4)]
        voxels += [Voxel(x, 1, 0, "red") for x in range(2)]
        out = enforce_symmetry(voxels, bbox, "x")
        assert {v.x for v in out if v.y == 0} == {3, 4, 5, 6}
        assert {v.x for v in out if v.y == 1} == {3, 4, 5, 6}

    def test_center_voxels_without_mirror(self, bbox):
        voxels = [Voxel(0, 0, 0, "red"), Voxel(1, 0, 0, "red")]
        out = center_voxels(voxels, bbox, SymmetryAxes(x=True))
        assert _keys(out) == {(4, 0, 0), (5, 0, 0)}

    def test_centered_square_unchanged(self, bbox):
        voxels = [Voxel(x, 0, z, "gray") for x in range(3, 7) for z in range(3, 7)]
        out = enforce_symmetry(voxels, bbox, "both")
        assert _keys(out) == _keys(voxels)
        assert len(out) == 16


class TestMirror:

    @pytest.mark.parametrize("axes", ["x", "z", "both"])
    def test_idempotent(self, bbox, lopsided, axes):
        once = enforce_symmetry(lopsided, bbox, axes)
        twice = enforce_symmetry(once, bbox, axes)
        assert once == twice

    def test_mirror_invariant_x(self, bbox, lopsided):
        out = enforce_symmetry(lopsided, bbox, "x")
        keys = _keys(out)
        for v in out:
            assert (bbox.width - 1 - v.x, v.y, v.z) in keys

    def test_mirror_invariant_z(self, bbox, lopsided):
        out = enforce_symmetry(lopsided, bbox, "z")
        keys = _keys(out)
        for v in out:
            assert (v.x, v.y, bbox.depth - 1 - v.z) in keys

    def test_unselected_axis_matches_centered(self, bbox, lopsided):
        axes = SymmetryAxes(x=True)
        centered = center_voxels(lopsided, bbox, axes)
        out = enforce_symmetry(lopsided, bbox, axes)
        assert {(v.y, v.z) for v in out} == {(v.y, v.z) for v in centered}

    def test_original_color_wins(self, bbox):
        voxels = [Voxel(4, 0, 0, "red"), Voxel(5, 0, 0, "blue")]
        out = enforce_symmetry(voxels, bbox, "x")
        colors = {v.x: v.color for v in out}
        assert colors == {4: "red", 5: "blue"}

    def test_no_duplicates(self, bbox, lopsided):
        out = enforce_symmetry(lopsided, bbox, "both")
        assert len(out) == len(_keys(out))


class TestAxesShorthand:

    @pytest.mark.parametrize("axes", [None, False, "none", {"x": False, "z": False}])
    def test_noop(self, bbox, lopsided, axes):
        assert enforce_symmetry(lopsided, bbox, axes) == lopsided

    def test_true_means_x_only(self, bbox, lopsided):
        assert enforce_symmetry(lopsided, bbox, True) == enforce_symmetry(lopsided, bbox, "x")

    def test_unknown_axis_rejected(self, bbox, lopsided):
        with pytest.raises(ValueError):
            enforce_symmetry(lopsided, bbox, "diagonal")

    def test_empty_input(self, bbox):
        assert enforce_symmetry([], bbox, "both") == []
