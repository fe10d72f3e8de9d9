"""
tests/test_oref_insulin.py

Unit tests for insulin/oref.py.
Peak, user-defined DIA and the short-DIA notifier are injected as plain
callables so each test controls them directly.
"""

from unittest.mock import MagicMock

import pytest

from config import Settings
from insulin.constants import MIN_DIA
from insulin.oref import (
    InsulinOrefFreePeak,
    InsulinOrefRapidActing,
    InsulinOrefUltraRapidActing,
    OrefInsulin,
    get_insulin,
)
from insulin.schemas import Iob, Treatment
from tests.fixtures import HOUR_MS, NOW_MS, FakeClock, build_treatment


class InsulinState:
    """Mutable peak/DIA values read by the injected sources."""

    def __init__(self) -> None:
        self.peak = 0
        self.dia = MIN_DIA


@pytest.fixture
def state() -> InsulinState:
    return InsulinState()


@pytest.fixture
def notifier() -> MagicMock:
    return MagicMock()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def insulin(state, notifier, clock) -> OrefInsulin:
    return OrefInsulin(
        peak=lambda: state.peak,
        user_defined_dia=lambda: state.dia,
        notifier=notifier,
        clock=clock,
    )


def test_get_dia(insulin, state, notifier) -> None:
    assert insulin.get_dia() == MIN_DIA

    state.dia = MIN_DIA + 1
    assert insulin.get_dia() == MIN_DIA + 1
    notifier.assert_not_called()

    state.dia = MIN_DIA - 1
    assert insulin.get_dia() == MIN_DIA
    notifier.assert_called_once_with(MIN_DIA - 1, MIN_DIA)


def test_short_dia_notification_is_rate_limited(
    insulin, state, notifier, clock
) -> None:
    state.dia = 3.0
    insulin.get_dia()
    insulin.get_dia()
    assert notifier.call_count == 1

    clock.advance(61 * 1000)
    insulin.get_dia()
    assert notifier.call_count == 2


def test_iob_calc_for_treatment(insulin, state) -> None:
    treatment = Treatment()
    assert insulin.iob_calc_for_treatment(treatment, 0, 0.0) == Iob()

    state.peak = 30
    treatment = build_treatment(insulin=10.0, minutes_ago=60)
    result = insulin.iob_calc_for_treatment(treatment, NOW_MS)
    assert result.iob_contrib == pytest.approx(3.92, abs=0.1)
    assert result.activity_contrib > 0


def test_iob_at_bolus_time_equals_dose(insulin, state) -> None:
    state.peak = 75
    treatment = build_treatment(insulin=4.0, minutes_ago=0)
    result = insulin.iob_calc_for_treatment(treatment, NOW_MS)
    assert result.iob_contrib == pytest.approx(4.0)
    assert result.activity_contrib == pytest.approx(0.0)


def test_iob_is_zero_after_dia(insulin, state) -> None:
    state.peak = 75
    treatment = build_treatment(insulin=4.0, minutes_ago=MIN_DIA * 60)
    assert insulin.iob_calc_for_treatment(treatment, NOW_MS) == Iob()


def test_dia_argument_is_ignored(insulin, state) -> None:
    state.peak = 75
    treatment = build_treatment(insulin=4.0, minutes_ago=90)
    assert insulin.iob_calc_for_treatment(
        treatment, NOW_MS, 2.0
    ) == insulin.iob_calc_for_treatment(treatment, NOW_MS)


def test_iob_decays_monotonically(insulin, state) -> None:
    state.peak = 75
    treatment = Treatment(date=NOW_MS, insulin=5.0)
    values = [
        insulin.iob_calc_for_treatment(treatment, NOW_MS + h * HOUR_MS // 2).iob_contrib
        for h in range(10)
    ]
    assert values == sorted(values, reverse=True)


def test_invalid_peak_raises(insulin, state) -> None:
    state.peak = 0
    with pytest.raises(ValueError):
        insulin.iob_calc_for_treatment(build_treatment(), NOW_MS)


def test_concrete_insulin_peaks(notifier) -> None:
    assert InsulinOrefRapidActing(lambda: 5.0, notifier).get_peak() == 75
    assert InsulinOrefUltraRapidActing(lambda: 5.0, notifier).get_peak() == 55


@pytest.mark.parametrize("user_peak, expected", [(20, 35), (60, 60), (200, 120)])
def test_free_peak_is_clamped(notifier, user_peak, expected) -> None:
    insulin = InsulinOrefFreePeak(lambda: user_peak, lambda: 6.0, notifier)
    assert insulin.get_peak() == expected
    assert insulin.comment() == f"PEAK: {expected} DIA: 6h"


def test_rapid_acting_comment(notifier) -> None:
    insulin = InsulinOrefRapidActing(lambda: 5.0, notifier)
    assert insulin.comment() == "Novorapid, Novolog, Humalog DIA: 5h"


def test_get_insulin_selects_type() -> None:
    config = Settings(insulin_type="oref_ultra_rapid", insulin_dia=7.0)
    insulin = get_insulin(config)
    assert isinstance(insulin, InsulinOrefUltraRapidActing)
    assert insulin.get_dia() == 7.0

    config = Settings(insulin_type="oref_free_peak", insulin_free_peak=90)
    assert get_insulin(config).get_peak() == 90


def test_get_insulin_rejects_unknown_type() -> None:
    with pytest.raises(ValueError):
        get_insulin(Settings(insulin_type="lyumjev"))
