# MIT License
"""One-click stress cases for a project.

Each preset returns a modified copy of the parameters; the input is never
mutated.  Amounts are rounded half up to whole units after scaling, as
the form does when it writes the stressed values back.
"""
from __future__ import annotations

from typing import Callable, Dict

import pandas as pd

from .aggregate import run_model
from .params import ProjectParameters
from .utils import js_round


def capex_up_10(params: ProjectParameters) -> ProjectParameters:
    """Raise every capex component by 10%."""
    return params.model_copy(
        update={
            "capex_geothermal": js_round(params.capex_geothermal * 1.10),
            "capex_indoor_unit": js_round(params.capex_indoor_unit * 1.10),
            "capex_pv": js_round(params.capex_pv * 1.10),
        }
    )


def energy_down_20(params: ProjectParameters) -> ProjectParameters:
    """Cut the annual energy benefit by 20%."""
    return params.model_copy(update={"energy_benefit": js_round(params.energy_benefit * 0.8)})


def tax_zero(params: ProjectParameters) -> ProjectParameters:
    """Drop the one-time tax benefit."""
    return params.model_copy(update={"tax_benefit": 0.0})


SENSITIVITIES: Dict[str, Callable[[ProjectParameters], ProjectParameters]] = {
    "Capex +10%": capex_up_10,
    "Energy benefit -20%": energy_down_20,
    "No tax benefit": tax_zero,
}


def compare_sensitivities(params: ProjectParameters) -> pd.DataFrame:
    """KPIs of the baseline and of every preset in :data:`SENSITIVITIES`.

    Returns
    -------
    pandas.DataFrame
        One row per scenario with columns ``scenario``, ``npv``, ``irr``
        and ``payback``.  Failed IRR or payback values are NaN.
    """
    scenarios = {"Baseline": params}
    scenarios.update({label: fn(params) for label, fn in SENSITIVITIES.items()})
    rows = []
    for label, scn in scenarios.items():
        res = run_model(scn)
        rows.append(
            dict(
                scenario=label,
                npv=res.npv,
                irr=float(res.irr),
                payback=float(res.payback),
            )
        )
    return pd.DataFrame(rows)
