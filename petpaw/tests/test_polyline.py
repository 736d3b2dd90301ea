import pytest

from apps.core import polyline

GOOGLE_SAMPLE = "_p~iF~ps|U_ulLnnqC_mqNvxq`@"
GOOGLE_POINTS = [(38.5, -120.2), (40.7, -120.95), (43.252, -126.453)]


def test_decode_reference_polyline():
    assert polyline.decode(GOOGLE_SAMPLE) == GOOGLE_POINTS


def test_encode_reference_points():
    assert polyline.encode(GOOGLE_POINTS) == GOOGLE_SAMPLE


def test_empty_input():
    assert polyline.decode("") == []
    assert polyline.encode([]) == ""


def test_single_point_at_origin():
    assert polyline.decode(polyline.encode([(0.0, 0.0)])) == [(0.0, 0.0)]


def test_values_are_rounded_to_five_decimals():
    encoded = polyline.encode([(52.5200049, 13.4049951)])
    assert polyline.decode(encoded) == [(52.52, 13.405)]


def test_truncated_string_raises():
    with pytest.raises(ValueError):
        polyline.decode(GOOGLE_SAMPLE[:-1] + "_")


def test_halves_round_up():
    # 0.25 and -0.25 are exact in binary, so these land on .5 after scaling
    assert polyline.encode([(0.25, -0.25)], precision=1) == "EB"
    assert polyline.decode("EB", precision=1) == [(0.3, -0.2)]
