"""Unit tests for distance calculation."""
import pytest

from campusvibe.core.geo import GeoPoint, distance_m, haversine_m, round_meters

SINES = GeoPoint(33.6425, 72.9905)


@pytest.mark.unit
class TestHaversine:
    """Test great-circle distance."""

    def test_zero_at_identity(self):
        assert distance_m(SINES, SINES) == 0.0

    def test_symmetric(self):
        other = GeoPoint(33.6000, 72.9000)
        assert distance_m(SINES, other) == pytest.approx(distance_m(other, SINES))

    def test_nearby_point_on_campus(self):
        """A few hundredths of a degree apart is tens of meters."""
        d = distance_m(GeoPoint(33.6420, 72.9900), SINES)
        assert 60 < d < 80

    def test_point_across_town(self):
        d = distance_m(GeoPoint(33.6000, 72.9000), SINES)
        assert 9_000 < d < 10_500

    def test_one_degree_of_latitude(self):
        """One degree along a meridian is about 111.2 km on a 6371 km sphere."""
        assert haversine_m(0, 0, 1, 0) == pytest.approx(111_195, rel=1e-3)

    def test_antipodes(self):
        assert haversine_m(0, 0, 0, 180) == pytest.approx(20_015_087, rel=1e-4)

    def test_out_of_range_input_does_not_raise(self):
        assert haversine_m(95, 200, 0, 0) >= 0


@pytest.mark.unit
class TestRoundMeters:
    """Test display rounding."""

    @pytest.mark.parametrize("meters,expected", [
        (0.0, 0),
        (64.4, 64),
        (64.5, 65),
        (65.49, 65),
        (499.5, 500),
    ])
    def test_half_up(self, meters, expected):
        assert round_meters(meters) == expected
