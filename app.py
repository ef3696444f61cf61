"""Streamlit entry point for the capex economics calculator.

This script sets up the session state, renders the parameter form in the
sidebar (with reset, save/load and sensitivity buttons) and shows the
resulting KPIs, discounted cashflow charts and the per-period table.
The comparison views live in separate files under the `pages/`
directory.
"""

import json
import logging

import streamlit as st

from core.aggregate import kpi_strings, run_model
from core.config import AppConfig, configure_logging
from core.params import DEFAULTS, ProjectParameters
from core.plots import UNIT, fig_discounted_cashflow, fig_discounted_cumulative
from core.sensitivity import SENSITIVITIES
from core.storage import ScenarioCorrupted, ScenarioNotFound, ScenarioStore, ScenarioWriteFailed
from core.utils import fmt, scenario_hash

st.set_page_config(page_title="Capex Economics Calculator", layout="wide")

logger = logging.getLogger(__name__)

# widget key, label, model field
FIELDS = [
    ("capGeo", "Geothermal capex", "capex_geothermal"),
    ("capInd", "Indoor unit capex", "capex_indoor_unit"),
    ("capPv", "PV capex", "capex_pv"),
    ("benefitTax", "One-time tax benefit", "tax_benefit"),
    ("benefitEnergy", "Annual energy benefit", "energy_benefit"),
    ("discountRate", "Discount rate (%)", "discount_rate_pct"),
]


def _get_config() -> AppConfig:
    if "config" not in st.session_state:
        cfg = AppConfig.from_env()
        configure_logging(cfg.log_level)
        st.session_state.config = cfg
    return st.session_state.config


def _store() -> ScenarioStore:
    cfg = _get_config()
    return ScenarioStore(cfg.storage_dir, cfg.storage_key)


def _get_params() -> ProjectParameters:
    """Return the active parameters from session state or the defaults."""
    if "params" not in st.session_state:
        st.session_state.params = DEFAULTS
        st.session_state.form_rev = 0
    return st.session_state.params


def _set_params(params: ProjectParameters) -> None:
    st.session_state.params = params
    # new widget keys so the form picks up the new values
    st.session_state.form_rev = st.session_state.get("form_rev", 0) + 1


def _wkey(name: str) -> str:
    return f"{name}_{st.session_state.get('form_rev', 0)}"


def _flash(kind: str, msg: str) -> None:
    st.session_state.flash = (kind, msg)


# --- callbacks (run before the rerun that renders the new state) -----------


def _on_apply() -> None:
    raw = {field: st.session_state.get(_wkey(key)) for key, _, field in FIELDS}
    raw["years"] = st.session_state.get(_wkey("years"))
    raw["base_year"] = st.session_state.get(_wkey("baseYear"))
    _set_params(ProjectParameters.from_form(raw))


def _on_reset() -> None:
    _set_params(DEFAULTS)


def _on_save() -> None:
    try:
        path = _store().save(_get_params())
    except ScenarioWriteFailed as exc:
        _flash("error", f"Saving failed: {exc.reason}")
        return
    _flash("success", f"Scenario saved to {path}")


def _on_load() -> None:
    try:
        params = _store().load()
    except ScenarioNotFound:
        _flash("warning", "No saved scenario yet.")
        return
    except ScenarioCorrupted as exc:
        logger.warning("load failed: %s", exc)
        _flash("error", "Loading failed: the saved scenario is corrupted.")
        return
    _set_params(params)
    _flash("success", "Scenario loaded.")


def _on_sensitivity(label: str) -> None:
    _set_params(SENSITIVITIES[label](_get_params()))


# --- layout ---------------------------------------------------------------


def sidebar(params: ProjectParameters) -> None:
    st.sidebar.header("Project inputs")
    with st.sidebar.form("params_form"):
        for key, label, field in FIELDS:
            st.number_input(
                label,
                value=float(getattr(params, field)),
                step=0.1 if field == "discount_rate_pct" else 1.0,
                key=_wkey(key),
            )
        st.number_input("Years", min_value=1, value=params.years, step=1, key=_wkey("years"))
        st.number_input("Base year", value=params.base_year, step=1, key=_wkey("baseYear"))
        st.form_submit_button("Apply", on_click=_on_apply, type="primary")

    c1, c2, c3 = st.sidebar.columns(3)
    c1.button("Reset", on_click=_on_reset, key="reset")
    c2.button("Save", on_click=_on_save, key="save")
    c3.button("Load", on_click=_on_load, key="load")

    st.sidebar.subheader("Sensitivity")
    for label in SENSITIVITIES:
        st.sidebar.button(label, on_click=_on_sensitivity, args=(label,), key=f"sens_{label}")

    st.sidebar.caption(
        "Sensitivity buttons rewrite the inputs above and recompute. "
        "Use Reset to return to the default scenario."
    )


def main() -> None:
    _get_config()
    params = _get_params()
    sidebar(params)

    flash = st.session_state.pop("flash", None)
    if flash:
        kind, msg = flash
        getattr(st, kind)(msg)

    st.title("Capex Economics Calculator")
    st.caption(
        "Discounted cashflow view of a geothermal / PV retrofit. "
        f"All amounts in {UNIT}; period 0 is {params.base_year}."
    )

    res = run_model(params)
    kpis = kpi_strings(res)

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("NPV", kpis["npv"])
    c2.metric("IRR", kpis["irr"])
    c3.metric("Payback (yrs)", kpis["payback"])
    c4.metric("Discount rate (%)", kpis["rate"])

    with st.expander("How the KPIs are computed"):
        st.markdown(
            """
            - **NPV** – Sum of all yearly cashflows discounted to period 0 at the
              chosen rate. Period 0 is capex minus the one-time tax benefit.\n
            - **IRR** – The discount rate at which NPV is zero, searched between
              -99.99% and 1000% (5000% if needed). *Not computable* means the NPV
              never changes sign in that range.\n
            - **Payback** – Years until the undiscounted cumulative cashflow turns
              non-negative, interpolated within the year of recovery.
              *Not recovered* means it stays negative over the whole horizon.
            """
        )

    df = res.table

    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(fig_discounted_cashflow(df), width="stretch")
    with col2:
        st.plotly_chart(fig_discounted_cumulative(df), width="stretch")

    st.subheader("Cashflow table")
    shown = df.drop(columns=["period"]).copy()
    for c in shown.columns[1:]:
        shown[c] = shown[c].map(lambda v: fmt(v, 2))
    shown.columns = ["Year", "Cashflow", "Cumulative", "Discounted CF", "Discounted cumulative"]
    st.dataframe(shown, hide_index=True, width="stretch")

    tag = scenario_hash(params)[:8]
    d1, d2 = st.columns(2)
    d1.download_button(
        "Download cashflow CSV",
        df.to_csv(index=False).encode(),
        file_name=f"cashflow_{tag}.csv",
        mime="text/csv",
    )
    d2.download_button(
        "Download scenario JSON",
        json.dumps(params.to_record(), indent=2).encode(),
        file_name=f"scenario_{tag}.json",
        mime="application/json",
    )


if __name__ == "__main__":
    main()
