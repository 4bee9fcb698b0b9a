import math

import pytest

from statusblocks.temperature import (
    State,
    TemperatureScale,
    Thresholds,
    filter_readings,
    summarize,
    temperature_state,
    temperature_thresholds,
)


def test_celsius_is_identity():
    assert TemperatureScale.CELSIUS.from_celsius(37.5) == 37.5


def test_fahrenheit_fixed_points():
    assert TemperatureScale.FAHRENHEIT.from_celsius(0.0) == pytest.approx(32.0)
    assert TemperatureScale.FAHRENHEIT.from_celsius(100.0) == pytest.approx(212.0)


def test_default_thresholds_celsius():
    assert temperature_thresholds(TemperatureScale.CELSIUS) == Thresholds(20.0, 45.0, 60.0, 80.0)


def test_default_thresholds_fahrenheit():
    thresholds = temperature_thresholds(TemperatureScale.FAHRENHEIT)
    assert thresholds.good == pytest.approx(68.0)
    assert thresholds.idle == pytest.approx(113.0)
    assert thresholds.info == pytest.approx(140.0)
    assert thresholds.warning == pytest.approx(176.0)


def test_explicit_thresholds_are_not_converted():
    thresholds = temperature_thresholds(TemperatureScale.FAHRENHEIT, good=10.0, warning=90.0)
    assert thresholds.good == 10.0
    assert thresholds.warning == 90.0


def test_state_boundaries_are_inclusive():
    thresholds = Thresholds(good=20.0, idle=45.0, info=60.0, warning=80.0)
    assert temperature_state(20.0, thresholds) is State.GOOD
    assert temperature_state(45.0, thresholds) is State.IDLE
    assert temperature_state(60.0, thresholds) is State.INFO
    assert temperature_state(80.0, thresholds) is State.WARNING
    assert temperature_state(80.5, thresholds) is State.CRITICAL


def test_state_is_monotonic():
    thresholds = temperature_thresholds()
    order = [State.GOOD, State.IDLE, State.INFO, State.WARNING, State.CRITICAL]
    ranks = [order.index(temperature_state(t, thresholds)) for t in range(-20, 120)]
    assert ranks == sorted(ranks)


def test_filter_readings_drops_out_of_range(capsys):
    readings = filter_readings([-100.0, 42.0, 150.0, 151.0, -101.0], TemperatureScale.CELSIUS)
    assert readings == [-100.0, 42.0, 150.0]
    assert "outside of range" in capsys.readouterr().err


def test_filter_readings_converts_scale():
    readings = filter_readings([0.0, 100.0], TemperatureScale.FAHRENHEIT)
    assert readings == [
        TemperatureScale.FAHRENHEIT.from_celsius(0.0),
        TemperatureScale.FAHRENHEIT.from_celsius(100.0),
    ]


def test_summarize():
    low, average, high = summarize([30.0, 10.0, 20.0])
    assert low == 10.0
    assert high == 30.0
    assert average == pytest.approx(20.0)


def test_summarize_average_between_bounds():
    readings = [33.5, 41.0, 57.25, 39.0]
    low, average, high = summarize(readings)
    assert low <= average <= high


def test_summarize_empty():
    low, average, high = summarize([])
    assert (low, high) == (0.0, 0.0)
    assert math.isnan(average)