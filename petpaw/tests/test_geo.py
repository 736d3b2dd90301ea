import pytest

from apps.core.geo import SignificantChangeFilter, haversine_distance, route_distance


def test_haversine_same_point_is_zero():
    assert haversine_distance(52.52, 13.405, 52.52, 13.405) == 0


def test_haversine_one_degree_of_latitude():
    # R = 6371 km, so one degree is about 111.19 km
    assert haversine_distance(0, 0, 1, 0) == pytest.approx(111_195, rel=1e-3)


def test_haversine_is_symmetric():
    a = haversine_distance(52.52, 13.405, 48.137, 11.575)
    b = haversine_distance(48.137, 11.575, 52.52, 13.405)
    assert a == pytest.approx(b)
    assert a == pytest.approx(504_000, rel=0.01)


def test_route_distance_sums_segments():
    points = [(0, 0), (0, 1), (0, 2)]
    assert route_distance(points) == pytest.approx(2 * haversine_distance(0, 0, 0, 1))
    assert route_distance(points[:1]) == 0.0


class TestSignificantChangeFilter:
    def test_first_sample_is_always_significant(self):
        change_filter = SignificantChangeFilter(threshold=10)
        assert change_filter.is_significant(52.52, 13.405) is True
        assert change_filter.last_location == (52.52, 13.405)

    def test_small_move_is_ignored_and_keeps_reference(self):
        change_filter = SignificantChangeFilter(threshold=10)
        change_filter.is_significant(52.52, 13.405)
        # ~5.5 m north
        assert change_filter.is_significant(52.52005, 13.405) is False
        assert change_filter.last_location == (52.52, 13.405)

    def test_large_move_is_accepted(self):
        change_filter = SignificantChangeFilter(threshold=10)
        change_filter.is_significant(52.52, 13.405)
        # ~22 m north
        assert change_filter.is_significant(52.5202, 13.405) is True
        assert change_filter.last_location == (52.5202, 13.405)

    def test_drift_is_measured_from_last_accepted_sample(self):
        change_filter = SignificantChangeFilter(threshold=10)
        change_filter.is_significant(52.52, 13.405)
        assert change_filter.is_significant(52.52006, 13.405) is False
        # 13 m from the reference even though only ~7 m from the previous sample
        assert change_filter.is_significant(52.52012, 13.405) is True

    def test_reset(self):
        change_filter = SignificantChangeFilter()
        change_filter.is_significant(1, 1)
        change_filter.reset()
        assert change_filter.is_significant(1, 1) is True
