# MIT License
"""Cashflow construction for a capital project.

Turns a :class:`~core.params.ProjectParameters` record into the yearly net
cashflow series consumed by :mod:`core.economics`.  Index 0 is the
initial outlay period, index ``t >= 1`` is project year ``t``.
"""
from __future__ import annotations

from typing import List

from .params import ProjectParameters


def build_cashflows(params: ProjectParameters) -> List[float]:
    """Build the net cashflow series of a project.

    Period 0 combines the full capex outlay with the one-time tax
    benefit.  Every following year receives the same energy benefit;
    no inflation, degradation or escalation is modelled.

    Parameters
    ----------
    params:
        Project inputs.  ``years`` must already be at least 1.

    Returns
    -------
    list of float
        Cashflows for periods ``0..years`` (length ``years + 1``).
    """
    cfs = [-params.total_capex + params.tax_benefit]
    cfs.extend(params.energy_benefit for _ in range(params.years))
    return cfs
