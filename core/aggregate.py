# MIT License
"""Aggregation utilities for the capex calculator.

This module runs the cashflow builder and the economic metrics for one
parameter set and collects everything the dashboard shows: the nominal
and discounted series, their running totals, a per-period table and the
headline KPIs (NPV, IRR, payback).  Every call recomputes from the raw
parameters; nothing is cached.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List

import pandas as pd

from .cashflow import build_cashflows
from .economics import Outcome, cumulative_sum, irr, npv, payback_period, present_value
from .params import ProjectParameters
from .utils import fmt, pct

logger = logging.getLogger(__name__)

TABLE_COLUMNS = [
    "year",
    "period",
    "cashflow",
    "cum_cashflow",
    "discounted_cashflow",
    "cum_discounted_cashflow",
]


@dataclass(frozen=True)
class ModelResult:
    """Series and KPIs computed for one parameter set."""

    params: ProjectParameters
    cashflows: List[float]
    cumulative: List[float]
    discounted: List[float]
    discounted_cumulative: List[float]
    npv: float
    irr: Outcome
    payback: Outcome

    @property
    def year_labels(self) -> List[str]:
        return [str(self.params.base_year + t) for t in range(len(self.cashflows))]

    @property
    def table(self) -> pd.DataFrame:
        """One row per period, with the columns in :data:`TABLE_COLUMNS`."""
        return pd.DataFrame(
            {
                "year": self.year_labels,
                "period": list(range(len(self.cashflows))),
                "cashflow": self.cashflows,
                "cum_cashflow": self.cumulative,
                "discounted_cashflow": self.discounted,
                "cum_discounted_cashflow": self.discounted_cumulative,
            },
            columns=TABLE_COLUMNS,
        )


def run_model(params: ProjectParameters) -> ModelResult:
    """Compute all series and KPIs for a parameter set.

    Parameters
    ----------
    params:
        Validated project inputs.

    Returns
    -------
    ModelResult
        Nominal and discounted series (discounted at
        ``params.discount_rate``) with their cumulative sums, NPV, IRR
        and payback.
    """
    rate = params.discount_rate
    cfs = build_cashflows(params)
    dcf = present_value(rate, cfs)
    result = ModelResult(
        params=params,
        cashflows=cfs,
        cumulative=cumulative_sum(cfs),
        discounted=dcf,
        discounted_cumulative=cumulative_sum(dcf),
        npv=npv(rate, cfs),
        irr=irr(cfs),
        payback=payback_period(cfs),
    )
    logger.debug(
        "run_model: %d periods, npv=%s, irr=%s, payback=%s",
        len(cfs),
        result.npv,
        result.irr,
        result.payback,
    )
    return result


def kpi_strings(result: ModelResult) -> Dict[str, str]:
    """Display strings for the KPI cards.

    IRR is shown as a percentage and the discount rate as the plain
    percent value with up to 2 decimals.  Failed IRR and payback values
    get a readable label instead of a number.
    """
    return {
        "npv": fmt(result.npv, 2),
        "irr": pct(result.irr.value, 2) if result.irr.ok else "Not computable",
        "payback": fmt(result.payback.value, 2) if result.payback.ok else "Not recovered",
        "rate": fmt(result.params.discount_rate_pct, 2),
    }
