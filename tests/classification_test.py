from __future__ import annotations

from datetime import datetime, timezone

import pytest

from factories import make_point
from oblecnik.classification import (
    CLOUDY_CODES,
    DRIZZLE_CODES,
    EXTRA_DRIZZLE_CODES,
    EXTRA_RAIN_CODES,
    RAIN_CODES,
    ConditionIdRainClassifier,
    SymbolCodeRainClassifier,
    classify_wind,
    scan_wind,
)


WHEN = datetime(2026, 10, 20, 7, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "speed, expected",
    [(0.0, 0), (8.0, 0), (8.01, 1), (12.0, 1), (12.01, 2), (30.0, 2)],
)
def test_classify_wind_breakpoints(speed, expected) -> None:
    assert classify_wind(speed) == expected


def test_scan_wind_tracks_peak_and_never_downgrades() -> None:
    peak, level = scan_wind([13.0, 4.0, 9.0])

    assert peak == 13.0
    assert level == 2


def test_scan_wind_is_monotonic_over_ascending_speeds() -> None:
    speeds = [1.0, 8.5, 10.0, 12.5]
    levels = [scan_wind(speeds[: i + 1])[1] for i in range(len(speeds))]

    assert levels == sorted(levels)
    assert levels == [0, 1, 1, 2]


def test_scan_wind_of_no_points_is_calm() -> None:
    assert scan_wind([]) == (0.0, 0)


def test_code_sets_do_not_overlap() -> None:
    assert not CLOUDY_CODES & DRIZZLE_CODES
    assert not DRIZZLE_CODES & RAIN_CODES
    assert not CLOUDY_CODES & RAIN_CODES


@pytest.mark.parametrize(
    "symbol, expected",
    [
        ("clearsky_day", 0),
        ("fair_day", 0),
        ("partlycloudy_day", 1),
        ("cloudy", 1),
        ("fog", 2),
        ("lightrain", 2),
        ("lightssleetshowersandthunder_day", 2),
        ("rain", 3),
        ("heavysnowshowers_night", 3),
    ],
)
def test_symbol_classifier_levels(symbol, expected) -> None:
    classifier = SymbolCodeRainClassifier()

    assert classifier.classify([make_point(WHEN, symbol=symbol)]) == expected


@pytest.mark.parametrize(
    "symbol, expected",
    [(code, 2) for code in sorted(EXTRA_DRIZZLE_CODES)] + [(code, 3) for code in sorted(EXTRA_RAIN_CODES)],
)
def test_symbol_classifier_levels_of_extra_codes(symbol, expected) -> None:
    classifier = SymbolCodeRainClassifier()

    assert classifier.classify([make_point(WHEN, symbol=symbol)]) == expected


def test_extra_codes_name_the_whole_difference() -> None:
    assert EXTRA_DRIZZLE_CODES == {
        "lightrainandthunder",
        "lightsnow",
        "lightssnowshowersandthunder_day",
        "lightssnowshowersandthunder_night",
        "lightssnowshowersandthunder_polartwilight",
    }
    assert EXTRA_RAIN_CODES == {"sleetshowers_day", "sleetshowers_night", "sleetshowers_polartwilight", "heavysleet"}
    assert len(DRIZZLE_CODES) == 25
    assert len(RAIN_CODES) == 48


def test_symbol_classifier_uses_only_the_morning_point() -> None:
    classifier = SymbolCodeRainClassifier()
    points = [
        make_point(WHEN, symbol="clearsky_day"),
        make_point(WHEN.replace(hour=12), symbol="heavyrain"),
        make_point(WHEN.replace(hour=15), symbol="heavyrain"),
    ]

    assert classifier.classify(points) == 0


def test_symbol_classifier_without_symbol_is_sunny() -> None:
    assert SymbolCodeRainClassifier().classify([make_point(WHEN)]) == 0


def test_condition_classifier_rain_anywhere_before_dry_point_resets() -> None:
    classifier = ConditionIdRainClassifier()
    points = [
        make_point(WHEN, condition=501),
        make_point(WHEN.replace(hour=12), condition=800),
    ]

    assert classifier.classify(points) == 0


def test_condition_classifier_last_rain_wins() -> None:
    classifier = ConditionIdRainClassifier()
    points = [
        make_point(WHEN, condition=800),
        make_point(WHEN.replace(hour=12), condition=300),
        make_point(WHEN.replace(hour=15), condition=502),
    ]

    assert classifier.classify(points) == 2


def test_condition_classifier_drizzle_from_baseline() -> None:
    classifier = ConditionIdRainClassifier()
    points = [
        make_point(WHEN, condition=800),
        make_point(WHEN.replace(hour=12), condition=803),
        make_point(WHEN.replace(hour=15), condition=500),
    ]

    assert classifier.classify(points) == 1


def test_condition_classifier_repeated_drizzle_resets() -> None:
    classifier = ConditionIdRainClassifier()
    points = [
        make_point(WHEN, condition=300),
        make_point(WHEN.replace(hour=12), condition=301),
    ]

    assert classifier.classify(points) == 0


def test_condition_classifier_drizzle_after_rain_resets() -> None:
    classifier = ConditionIdRainClassifier()
    points = [
        make_point(WHEN, condition=502),
        make_point(WHEN.replace(hour=12), condition=500),
    ]

    assert classifier.classify(points) == 0
