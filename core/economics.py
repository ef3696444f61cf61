# MIT License
"""Economic utility functions for the capex calculator.

This module defines the discounted cashflow metrics used by the
dashboard: present value, net present value (NPV), internal rate of
return (IRR) and payback period.  The functions are pure and do not
depend on the rest of the model structure.  Cashflow series are indexed
from period 0 (the undiscounted initial outlay).

Nothing here raises on bad numbers.  Non-finite inputs, or rates at or
below -100%, propagate as ``inf``/``nan``.  IRR and payback report their
failures through :class:`Outcome` instead of a NaN sentinel.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

import numpy as np

logger = logging.getLogger(__name__)

IRR_LOWER = -0.9999
IRR_UPPER = 10.0
IRR_UPPER_EXPANDED = 50.0
IRR_MAX_ITER = 120
IRR_TOL = 1e-8


class Failure(str, Enum):
    """Reason a metric could not be computed."""

    NO_SIGN_CHANGE = "no_sign_change"
    NON_FINITE = "non_finite"
    EMPTY_SERIES = "empty_series"
    NEVER_RECOVERED = "never_recovered"


@dataclass(frozen=True)
class Outcome:
    """Either a computed value or the reason it is missing."""

    value: Optional[float] = None
    failure: Optional[Failure] = None

    @classmethod
    def success(cls, value: float) -> "Outcome":
        return cls(value=float(value))

    @classmethod
    def fail(cls, failure: Failure) -> "Outcome":
        return cls(failure=failure)

    @property
    def ok(self) -> bool:
        return self.failure is None

    def __float__(self) -> float:
        # tabular export only; callers branch on `ok` before arithmetic
        return self.value if self.ok else float("nan")


def present_value(rate: float, cashflows: Sequence[float]) -> List[float]:
    """Discount each cashflow back to period 0.

    Parameters
    ----------
    rate:
        Discount rate as a decimal (e.g. 0.045 for 4.5%).
    cashflows:
        Cashflows where the first element is period 0.

    Returns
    -------
    list of float
        ``cashflows[t] / (1 + rate) ** t`` for every period.  Element 0
        is always the undiscounted ``cashflows[0]``.
    """
    cf = np.asarray(cashflows, dtype=float)
    t = np.arange(cf.size, dtype=float)
    with np.errstate(divide="ignore", over="ignore", under="ignore", invalid="ignore"):
        discounted = cf / np.power(1.0 + rate, t)
    return discounted.tolist()


def npv(rate: float, cashflows: Sequence[float]) -> float:
    """Compute the net present value of a series of cashflows.

    Parameters
    ----------
    rate:
        Discount rate as a decimal (e.g. 0.08 for 8%).
    cashflows:
        Cashflows where the first element is period 0.

    Returns
    -------
    float
        Net present value, possibly ``inf`` or ``nan``.
    """
    # left-to-right summation keeps results identical across platforms
    return float(sum(present_value(rate, cashflows), 0.0))


def cumulative_sum(values: Sequence[float]) -> List[float]:
    """Running total of a series."""
    out: List[float] = []
    s = 0.0
    for v in values:
        s += v
        out.append(s)
    return out


def irr(cashflows: Sequence[float]) -> Outcome:
    """Find the internal rate of return of a series of cashflows.

    Bisection over ``[-0.9999, 10]`` (-99.99% to 1000%).  When the NPV has
    the same sign at both ends the upper bound is widened once to 50
    (5000%).  The search stops when ``|NPV| < 1e-8`` or after 120
    halvings, in which case the midpoint of the final bracket is
    returned as the answer.

    Parameters
    ----------
    cashflows:
        Cashflows where the first element is period 0.

    Returns
    -------
    Outcome
        The IRR as a decimal, or a ``NON_FINITE`` / ``NO_SIGN_CHANGE``
        failure.
    """

    def f(rate: float) -> float:
        return npv(rate, cashflows)

    lo, hi = IRR_LOWER, IRR_UPPER
    flo, fhi = f(lo), f(hi)

    if not (math.isfinite(flo) and math.isfinite(fhi)):
        logger.debug("irr: non-finite npv at bracket ends (%s, %s)", flo, fhi)
        return Outcome.fail(Failure.NON_FINITE)
    if flo == 0:
        return Outcome.success(lo)
    if fhi == 0:
        return Outcome.success(hi)

    if flo * fhi > 0:
        logger.debug("irr: no sign change on [%s, %s], widening to %s", lo, hi, IRR_UPPER_EXPANDED)
        hi = IRR_UPPER_EXPANDED
        fhi = f(hi)
        if not math.isfinite(fhi):
            return Outcome.fail(Failure.NON_FINITE)
        if flo * fhi > 0:
            logger.debug("irr: no sign change on [%s, %s]", lo, hi)
            return Outcome.fail(Failure.NO_SIGN_CHANGE)

    for _ in range(IRR_MAX_ITER):
        mid = (lo + hi) / 2.0
        fmid = f(mid)
        if not math.isfinite(fmid):
            logger.debug("irr: non-finite npv at %s", mid)
            return Outcome.fail(Failure.NON_FINITE)
        if abs(fmid) < IRR_TOL:
            return Outcome.success(mid)
        if flo * fmid <= 0:
            hi, fhi = mid, fmid
        else:
            lo, flo = mid, fmid

    logger.debug("irr: iteration budget spent, bracket [%s, %s]", lo, hi)
    return Outcome.success((lo + hi) / 2.0)


def payback_period(cashflows: Sequence[float]) -> Outcome:
    """Estimate the undiscounted payback period of a series of cashflows.

    The payback period is the time required for the cumulative cashflow
    to become non-negative.  Inside the year of recovery the cashflow is
    assumed to arrive uniformly, so the result is interpolated linearly.

    Parameters
    ----------
    cashflows:
        Cashflows where the first element is period 0.

    Returns
    -------
    Outcome
        Payback in years (0 when period 0 is already non-negative), or an
        ``EMPTY_SERIES`` / ``NEVER_RECOVERED`` failure.
    """
    if len(cashflows) == 0:
        return Outcome.fail(Failure.EMPTY_SERIES)
    if cashflows[0] >= 0:
        return Outcome.success(0.0)

    cum = 0.0
    for t, cf in enumerate(cashflows):
        prev = cum
        cum += cf
        if cum >= 0:
            if t == 0:
                return Outcome.success(0.0)
            frac = (0.0 - prev) / cf
            return Outcome.success((t - 1) + frac)

    logger.debug("payback: cumulative cashflow stays negative over %d periods", len(cashflows))
    return Outcome.fail(Failure.NEVER_RECOVERED)
