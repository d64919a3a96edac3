"""Point-distance guessing and zero insertion."""

from __future__ import annotations

import logging

import pytest

from chartseries.processing import Sample, SeriesInfo, TimeSeries, fill_missing_with_zero, guess_point_distance
from tests.conftest import get_test_logger
from tests.helpers import build_datapoints

logger = get_test_logger(__name__)
logger.info("Starting tests for gap interpolation")


def _samples(timestamps, value: float = 1.0):
    return [Sample(value, float(ts)) for ts in timestamps]


def test_distance_confirmed_by_first_repeat() -> None:
    assert guess_point_distance(_samples([0, 10, 20, 40])) == 10
    # the first confirmed delta wins even if another spacing dominates later
    assert guess_point_distance(_samples([0, 5, 10, 30, 50, 70, 90])) == 5


def test_distance_undeclared_without_repeat() -> None:
    assert guess_point_distance(_samples([0, 1, 3, 6, 10])) == 0
    assert guess_point_distance(_samples([0])) == 0
    assert guess_point_distance([]) == 0


def test_single_gap_gets_one_zero() -> None:
    filled = fill_missing_with_zero(_samples([0, 10, 20, 40]))
    assert [s.timestamp for s in filled] == [0, 10, 20, 30, 40]
    assert filled[3] == Sample(0.0, 30.0)
    assert [s.value for s in filled] == [1.0, 1.0, 1.0, 0.0, 1.0]


def test_wide_gap_padded_evenly() -> None:
    filled = fill_missing_with_zero(_samples([0, 10, 20, 60, 70]))
    assert [s.timestamp for s in filled] == [0, 10, 20, 30, 40, 50, 60, 70]


def test_gap_not_multiple_of_distance() -> None:
    filled = fill_missing_with_zero(_samples([0, 10, 20, 45]))
    # remaining 5 after two inserts is below the spacing
    assert [s.timestamp for s in filled] == [0, 10, 20, 30, 40, 45]


def test_no_repeat_leaves_sequence_untouched(caplog: pytest.LogCaptureFixture) -> None:
    original = _samples([0, 1, 3, 6, 10])
    with caplog.at_level(logging.INFO, logger="chartseries.processing.gaps"):
        filled = fill_missing_with_zero(original)
    assert filled == original
    assert filled is not original
    assert "Cannot guess point distance" in caplog.text


def test_input_not_mutated() -> None:
    original = _samples([0, 10, 20, 40])
    snapshot = list(original)
    fill_missing_with_zero(original)
    assert original == snapshot


def test_first_sample_kept_as_is() -> None:
    filled = fill_missing_with_zero([Sample(None, 0.0), Sample(2.0, 10.0), Sample(3.0, 20.0), Sample(4.0, 40.0)])
    assert filled[0] == Sample(None, 0.0)


def test_series_fill_in_place_reports_inserted_count() -> None:
    series = TimeSeries(build_datapoints([1, 2, 3, 4], timestamps=[0, 10, 20, 50]), SeriesInfo(alias="net.rx"))
    assert series.guess_point_distance() == 10
    assert series.fill_missing_values_with_zero() == 2
    assert [s.timestamp for s in series.datapoints] == [0, 10, 20, 30, 40, 50]
    # already padded: nothing left to insert
    assert series.fill_missing_values_with_zero() == 0
