"""
insulin/oref.py

Exponential (oref) insulin activity curves.

OrefInsulin computes the IOB and activity left from a single treatment for
a given peak time and duration of insulin action (DIA). Peak, user-defined
DIA and the short-DIA notifier are injected callables, so the concrete
insulin types below only differ in the peak source and their labels.
"""

import math
from typing import Callable, Optional

import structlog

from automation.schemas import now_ms
from automation.services.notification import send_short_dia_warning
from config import Settings, settings
from insulin.constants import (
    FREE_PEAK_MAX,
    FREE_PEAK_MIN,
    MIN_DIA,
    RAPID_ACTING_PEAK_MIN,
    SHORT_DIA_WARN_INTERVAL_MS,
    ULTRA_RAPID_ACTING_PEAK_MIN,
)
from insulin.schemas import Iob, Treatment

logger = structlog.get_logger(__name__)

PeakSource = Callable[[], int]
DiaSource = Callable[[], float]
ShortDiaNotifier = Callable[[float, float], None]


def curve_parameters(peak: float, td: float) -> tuple[float, float, float]:
    """
    Return (tau, a, S) for peak `peak` and duration `td`, both in minutes.

    tau is the time constant of the exponential decay, a the rise time
    factor and S the auxiliary scale factor that normalizes the curve.
    """
    if not 0 < peak < td / 2:
        raise ValueError(f"peak={peak} min must be within (0, {td / 2}) min")
    tau = peak * (1 - peak / td) / (1 - 2 * peak / td)
    a = 2 * tau / td
    s = 1 / (1 - a + (1 + a) * math.exp(-td / tau))
    return tau, a, s


class OrefInsulin:
    """Base oref insulin model."""

    id: str = "oref"
    friendly_name: str = "Oref"
    standard_comment: str = ""

    def __init__(
        self,
        peak: PeakSource,
        user_defined_dia: DiaSource,
        notifier: Optional[ShortDiaNotifier] = None,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self._peak = peak
        self._user_defined_dia = user_defined_dia
        self._notifier = notifier or send_short_dia_warning
        self._clock = clock or now_ms
        self._last_warned: int = 0

    def get_peak(self) -> int:
        """Minutes from bolus to peak activity."""
        return self._peak()

    def get_user_defined_dia(self) -> float:
        return self._user_defined_dia()

    def get_dia(self) -> float:
        """User-defined DIA in hours, never below MIN_DIA."""
        dia = self.get_user_defined_dia()
        if dia >= MIN_DIA:
            return dia
        self._send_short_dia_notification(dia)
        return MIN_DIA

    def _send_short_dia_notification(self, dia: float) -> None:
        now = self._clock()
        if now - self._last_warned > SHORT_DIA_WARN_INTERVAL_MS:
            self._last_warned = now
            self._notifier(dia, MIN_DIA)

    def iob_calc_for_treatment(
        self,
        treatment: Treatment,
        time: int,
        dia: Optional[float] = None,
    ) -> Iob:
        """
        IOB and activity left from `treatment` at `time` (epoch ms).

        `dia` is accepted for interface compatibility only; the clamped
        get_dia() is always used. Returns a zero Iob once DIA has elapsed.
        """
        result = Iob()
        if treatment.insulin == 0:
            return result

        t = (time - treatment.date) / 1000.0 / 60.0
        td = self.get_dia() * 60
        # force the IOB to 0 once DIA hours have passed
        if t >= td:
            return result

        tau, a, s = curve_parameters(self.get_peak(), td)
        decay = math.exp(-t / tau)
        result.activity_contrib = (
            treatment.insulin * (s / tau**2) * t * (1 - t / td) * decay
        )
        result.iob_contrib = treatment.insulin * (
            1
            - s
            * (1 - a)
            * ((t**2 / (tau * td * (1 - a)) - t / tau - 1) * decay + 1)
        )
        return result

    def comment(self) -> str:
        return f"{self.standard_comment} DIA: {self.get_dia():g}h".strip()


class InsulinOrefRapidActing(OrefInsulin):
    id = "oref_rapid"
    friendly_name = "Rapid-Acting Oref"
    standard_comment = "Novorapid, Novolog, Humalog"

    def __init__(
        self,
        user_defined_dia: DiaSource,
        notifier: Optional[ShortDiaNotifier] = None,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        super().__init__(
            lambda: RAPID_ACTING_PEAK_MIN, user_defined_dia, notifier, clock
        )


class InsulinOrefUltraRapidActing(OrefInsulin):
    id = "oref_ultra_rapid"
    friendly_name = "Ultra-Rapid Oref"
    standard_comment = "Fiasp"

    def __init__(
        self,
        user_defined_dia: DiaSource,
        notifier: Optional[ShortDiaNotifier] = None,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        super().__init__(
            lambda: ULTRA_RAPID_ACTING_PEAK_MIN, user_defined_dia, notifier, clock
        )


class InsulinOrefFreePeak(OrefInsulin):
    """Oref curve with a user-chosen peak, clamped to [FREE_PEAK_MIN, FREE_PEAK_MAX]."""

    id = "oref_free_peak"
    friendly_name = "Free-Peak Oref"

    def __init__(
        self,
        user_defined_peak: PeakSource,
        user_defined_dia: DiaSource,
        notifier: Optional[ShortDiaNotifier] = None,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        super().__init__(
            lambda: min(FREE_PEAK_MAX, max(FREE_PEAK_MIN, user_defined_peak())),
            user_defined_dia,
            notifier,
            clock,
        )

    @property
    def standard_comment(self) -> str:  # type: ignore[override]
        return f"PEAK: {self.get_peak()}"


_INSULIN_TYPES: dict[str, type[OrefInsulin]] = {
    cls.id: cls
    for cls in (
        InsulinOrefRapidActing,
        InsulinOrefUltraRapidActing,
        InsulinOrefFreePeak,
    )
}


def get_insulin(
    config: Settings = settings,
    notifier: Optional[ShortDiaNotifier] = None,
) -> OrefInsulin:
    """Build the insulin model selected by `config.insulin_type`."""
    insulin_type = config.insulin_type
    if insulin_type not in _INSULIN_TYPES:
        raise ValueError(f"unknown insulin type: {insulin_type}")

    logger.debug("insulin_selected", insulin_type=insulin_type)
    dia_source: DiaSource = lambda: config.insulin_dia  # noqa: E731
    if insulin_type == InsulinOrefFreePeak.id:
        return InsulinOrefFreePeak(
            lambda: config.insulin_free_peak, dia_source, notifier
        )
    return _INSULIN_TYPES[insulin_type](dia_source, notifier)
