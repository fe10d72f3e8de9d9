"""
insulin/iob.py

IOB aggregation over treatment histories.
- total_iob: summed IOB/activity of many treatments at one instant
- iob_curve: IOB/activity of one treatment over many instants (numpy)
"""

from typing import Iterable, Sequence

import numpy as np

from insulin.oref import OrefInsulin, curve_parameters
from insulin.schemas import Iob, Treatment


def total_iob(
    insulin: OrefInsulin,
    treatments: Iterable[Treatment],
    time: int,
) -> Iob:
    """Sum the contributions of all treatments at `time` (epoch ms)."""
    total = Iob()
    for treatment in treatments:
        total = total.plus(insulin.iob_calc_for_treatment(treatment, time))
    return total


def iob_curve(
    insulin: OrefInsulin,
    treatment: Treatment,
    times: Sequence[int] | np.ndarray,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Evaluate one treatment at every instant in `times` (epoch ms).

    Returns (iob, activity) arrays with the same shape as `times`. Values are
    identical to calling iob_calc_for_treatment at each instant.
    """
    t = (np.asarray(times, dtype=float) - treatment.date) / 1000.0 / 60.0
    iob = np.zeros_like(t)
    activity = np.zeros_like(t)
    if treatment.insulin == 0 or t.size == 0:
        return iob, activity

    td = insulin.get_dia() * 60
    tau, a, s = curve_parameters(insulin.get_peak(), td)

    active = t < td
    ta = t[active]
    decay = np.exp(-ta / tau)
    activity[active] = treatment.insulin * (s / tau**2) * ta * (1 - ta / td) * decay
    iob[active] = treatment.insulin * (
        1 - s * (1 - a) * ((ta**2 / (tau * td * (1 - a)) - ta / tau - 1) * decay + 1)
    )
    return iob, activity
