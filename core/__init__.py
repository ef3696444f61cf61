"""Core package for the capex economics calculator.

This package contains the deterministic cashflow engine (cashflow
construction, present value, NPV, IRR and payback), the report assembly
used by the Streamlit dashboard, sensitivity presets, chart builders and
scenario storage.

The engine modules expose pure functions over plain lists of floats.
The high-level `run_model` helper in `aggregate.py` composes them into
the full set of series and KPIs for one parameter set.
"""

from .params import DEFAULTS, ProjectParameters
from .cashflow import build_cashflows
from .economics import Failure, Outcome, cumulative_sum, irr, npv, payback_period, present_value
from .aggregate import ModelResult, kpi_strings, run_model
from .sensitivity import SENSITIVITIES, compare_sensitivities

__all__ = [
    "DEFAULTS",
    "ProjectParameters",
    "build_cashflows",
    "Failure",
    "Outcome",
    "cumulative_sum",
    "irr",
    "npv",
    "payback_period",
    "present_value",
    "ModelResult",
    "kpi_strings",
    "run_model",
    "SENSITIVITIES",
    "compare_sensitivities",
]
