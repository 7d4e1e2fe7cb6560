"""Tests for datum conversion and geographic distances."""

import math
import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from sodautils.geo import (
    Coord,
    in_china,
    wgs84_to_gcj02,
    gcj02_to_wgs84,
    bd09_to_gcj02,
    gcj02_to_bd09,
    bd09_to_wgs84,
    wgs84_to_bd09,
    get_distance,
    get_coord,
)
from sodautils.errors import InvalidInputError

BEIJING = (116.397428, 39.90923)
NANJING = (118.796877, 32.060255)


class TestInChina:

    @pytest.mark.parametrize("coordinate", [BEIJING, NANJING, (121.47, 31.23), (87.62, 43.82)])
    def test_mainland(self, coordinate):
        assert in_china(coordinate)

    @pytest.mark.parametrize("coordinate", [
        (121.5654, 25.033),   # Taipei
        (2.3522, 48.8566),    # Paris
        (-74.006, 40.7128),   # New York
    ])
    def test_outside(self, coordinate):
        assert not in_china(coordinate)


class TestDatumConversion:

    def test_gcj02_offset_size(self):
        lng, lat = wgs84_to_gcj02(BEIJING)
        # The offset around Beijing is a few hundred metres north-east
        assert 0.001 < lng - BEIJING[0] < 0.01
        assert 0.0005 < lat - BEIJING[1] < 0.01

    @pytest.mark.parametrize("coordinate", [BEIJING, NANJING])
    def test_gcj02_round_trip(self, coordinate):
        back = gcj02_to_wgs84(wgs84_to_gcj02(coordinate))
        assert back[0] == pytest.approx(coordinate[0], abs=1e-4)
        assert back[1] == pytest.approx(coordinate[1], abs=1e-4)

    @pytest.mark.parametrize("coordinate", [BEIJING, NANJING])
    def test_bd09_round_trip(self, coordinate):
        back = bd09_to_gcj02(gcj02_to_bd09(coordinate))
        assert back[0] == pytest.approx(coordinate[0], abs=1e-4)
        assert back[1] == pytest.approx(coordinate[1], abs=1e-4)

    def test_bd09_offset(self):
        lng, lat = gcj02_to_bd09(BEIJING)
        assert lng - BEIJING[0] == pytest.approx(0.0065, abs=0.001)
        assert lat - BEIJING[1] == pytest.approx(0.006, abs=0.001)

    def test_composed_conversions(self):
        assert wgs84_to_bd09(BEIJING) == gcj02_to_bd09(wgs84_to_gcj02(BEIJING))
        assert bd09_to_wgs84(BEIJING) == gcj02_to_wgs84(bd09_to_gcj02(BEIJING))

    def test_wgs84_bd09_round_trip(self):
        back = bd09_to_wgs84(wgs84_to_bd09(NANJING))
        assert back[0] == pytest.approx(NANJING[0], abs=1e-4)
        assert back[1] == pytest.approx(NANJING[1], abs=1e-4)

    def test_returns_tuple(self):
        assert isinstance(wgs84_to_gcj02([116.0, 39.0]), tuple)


class TestDistance:

    def test_same_point(self):
        assert get_distance(Coord(120, 30), Coord(120, 30)) == 0

    def test_one_degree_of_latitude(self):
        distance = get_distance(Coord(0, 0), Coord(0, 1))
        assert distance == pytest.approx(math.pi / 180 * 6378137)

    def test_symmetric(self):
        a, b = Coord(*BEIJING), Coord(*NANJING)
        assert get_distance(a, b) == pytest.approx(get_distance(b, a))

    def test_beijing_nanjing(self):
        # Roughly 900 km apart
        distance = get_distance(Coord(*BEIJING), Coord(*NANJING))
        assert 850_000 < distance < 950_000


class TestGetCoord:

    def test_candidates_satisfy_distances(self):
        a = Coord(120.0, 30.0)
        b = Coord(120.01, 30.01)
        candidates = get_coord(a, b, 1000, 1000)
        assert len(candidates) == 2
        for candidate in candidates:
            assert get_distance(a, candidate) == pytest.approx(1000, rel=0.02)
            assert get_distance(b, candidate) == pytest.approx(1000, rel=0.02)

    def test_candidates_are_distinct(self):
        first, second = get_coord(Coord(120.0, 30.0), Coord(120.01, 30.01), 1000, 1000)
        assert first != second

    def test_circles_too_small(self):
        assert get_coord(Coord(120.0, 30.0), Coord(120.01, 30.01), 10, 10) == []

    def test_shared_latitude_rejected(self):
        with pytest.raises(InvalidInputError):
            get_coord(Coord(120.0, 30.0), Coord(120.01, 30.0), 100, 100)
