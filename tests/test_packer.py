"""
그리디 브릭 패킹 테스트
"""
from collections import Counter

import pytest

from brickify.constants import MAX_UNSPLIT
from brickify.models import Voxel
from brickify.packer import pack
from brickify.rasterizer import rasterize


def _row(xs, y=0, z=0, color="gray"):
    return [Voxel(x, y, z, color) for x in xs]


def _block(w, d, y=0, color="gray", x0=0, z0=0):
    return [Voxel(x0 + x, y, z0 + z, color) for x in range(w) for z in range(d)]


def _assert_exact_tiling(voxels, bricks):
    covered = Counter()
    for b in bricks:
        assert min(b.width, b.depth) <= MAX_UNSPLIT
        for cell in b.cells():
            covered[cell] += 1
    assert all(n == 1 for n in covered.values()), "overlapping bricks"
    assert set(covered) == {v.key for v in voxels}

    colors = {v.key: v.color for v in voxels}
    for b in bricks:
        assert {colors[c] for c in b.cells()} == {b.color}


class TestPack:

    def test_empty(self):
        assert pack([]) == []

    def test_single_voxel(self):
        bricks = pack([Voxel(3, 2, 1, "red")])
        assert len(bricks) == 1
        b = bricks[0]
        assert (b.width, b.depth, b.x, b.y, b.z, b.color) == (1, 1, 3, 2, 1, "red")

    def test_2x4_block_is_one_brick(self):
        bricks = pack(_block(4, 2))
        assert len(bricks) == 1
        assert (bricks[0].width, bricks[0].depth) == (4, 2)

    def test_long_column_along_z(self):
        bricks = pack(_block(2, 6))
        assert len(bricks) == 1
        assert (bricks[0].width, bricks[0].depth) == (2, 6)

    def test_3x3_square(self):
        voxels = _block(3, 3)
        bricks = pack(voxels)
        _assert_exact_tiling(voxels, bricks)
        assert len(bricks) == 2
        assert (bricks[0].width, bricks[0].depth) == (3, 2)

    def test_color_boundary_splits(self):
        voxels = _row([0, 1], color="red") + _row([2, 3], color="blue")
        bricks = pack(voxels)
        assert [(b.x, b.width, b.color) for b in bricks] == [(0, 2, "red"), (2, 2, "blue")]

    def test_layers_never_merge(self):
        voxels = _block(2, 2, y=0) + _block(2, 2, y=1)
        bricks = pack(voxels)
        assert sorted(b.y for b in bricks) == [0, 1]

    def test_max_length(self):
        bricks = pack(_row(range(10)), max_length=4)
        assert [b.width for b in bricks] == [4, 4, 2]
        assert [b.x for b in bricks] == [0, 4, 8]

    def test_max_length_one(self):
        voxels = _block(3, 3)
        bricks = pack(voxels, max_length=1)
        assert len(bricks) == 9
        _assert_exact_tiling(voxels, bricks)

    def test_invalid_max_length(self):
        with pytest.raises(ValueError):
            pack(_row([0]), max_length=0)

    def test_negative_coordinates(self):
        voxels = _block(2, 2, x0=-3, z0=-5)
        bricks = pack(voxels)
        assert len(bricks) == 1
        assert (bricks[0].x, bricks[0].z) == (-3, -5)


class TestPackProperties:

    @pytest.fixture
    def disc_voxels(self, big_bbox, make_layer):
        layer = make_layer(
            [
                {"type": "circle", "center_x": 10, "center_z": 10, "radius": 7, "color": "red"},
                {"type": "rect", "x": 8, "z": 2, "width": 4, "depth": 16, "color": "white"},
            ],
            holes=[{"type": "circle", "center_x": 10, "center_z": 10, "radius": 2}],
            y_max=3,
        )
        return rasterize(big_bbox, [layer])

    def test_exact_tiling(self, disc_voxels):
        _assert_exact_tiling(disc_voxels, pack(disc_voxels))

    def test_exact_tiling_with_interlock(self, disc_voxels):
        _assert_exact_tiling(disc_voxels, pack(disc_voxels, interlock=True, max_length=6))

    def test_deterministic_order(self, disc_voxels):
        first = pack(disc_voxels)
        second = pack(list(reversed(disc_voxels)))
        assert first == second
        order = [(b.y, b.z, b.x) for b in first]
        assert order == sorted(order)

    def test_fewer_bricks_than_voxels(self, disc_voxels):
        assert len(pack(disc_voxels)) < len(disc_voxels)


class TestInterlock:

    @pytest.fixture
    def stacked(self):
        # 아래층: z=0 줄(red) / z=1 줄(blue) 두 브릭 -> 가로 이음매
        below = _row([0, 1], y=0, z=0, color="red") + _row([0, 1], y=0, z=1, color="blue")
        # 위층: ㄱ 자 3칸
        above = [Voxel(0, 1, 0, "gray"), Voxel(1, 1, 0, "gray"), Voxel(0, 1, 1, "gray")]
        return below + above

    def test_without_interlock_prefers_row(self, stacked):
        top = [b for b in pack(stacked) if b.y == 1]
        assert (top[0].width, top[0].depth) == (2, 1)

    def test_interlock_spans_seam(self, stacked):
        top = [b for b in pack(stacked, interlock=True) if b.y == 1]
        assert (top[0].width, top[0].depth) == (1, 2)
        assert len(top) == 2
