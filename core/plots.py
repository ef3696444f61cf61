# MIT License
"""Plotly figure builders for the capex calculator.

This module centralises creation of Plotly figures used by the Streamlit
frontend.  Charts show discounted values: the bar chart is the
discounted cashflow per year, the line is its running total.
"""

from __future__ import annotations
import pandas as pd
import plotly.graph_objects as go

UNIT = "KRW mn"


def fig_discounted_cashflow(df: pd.DataFrame) -> go.Figure:
    """Create a bar chart of discounted cashflow per year.

    Parameters
    ----------
    df:
        Dataframe with at least columns 'year' and 'discounted_cashflow'.

    Returns
    -------
    plotly.graph_objects.Figure
        A bar chart of discounted cashflows.
    """
    fig = go.Figure()
    fig.add_bar(x=df["year"], y=df["discounted_cashflow"], name=f"Discounted CF ({UNIT})")
    fig.update_layout(
        title="Discounted Cashflow",
        xaxis_title="Year",
        yaxis_title=f"Discounted CF ({UNIT})",
        template="plotly_white",
        showlegend=False,
    )
    fig.update_xaxes(type="category", nticks=12)
    return fig


def fig_discounted_cumulative(df: pd.DataFrame) -> go.Figure:
    """Create a line chart of cumulative discounted cashflow.

    The year where the line crosses zero is the discounted payback year.
    """
    fig = go.Figure()
    fig.add_scatter(
        x=df["year"],
        y=df["cum_discounted_cashflow"],
        mode="lines",
        line={"shape": "spline", "smoothing": 0.4},
        name=f"Discounted cumulative ({UNIT})",
    )
    fig.add_hline(y=0.0, line_width=1, line_dash="dot")
    fig.update_layout(
        title="Cumulative Discounted Cashflow",
        xaxis_title="Year",
        yaxis_title=f"Discounted cumulative ({UNIT})",
        template="plotly_white",
        showlegend=False,
    )
    fig.update_xaxes(type="category", nticks=12)
    return fig


def fig_sensitivity_npv(df: pd.DataFrame) -> go.Figure:
    fig = go.Figure()
    fig.add_bar(x=df["scenario"], y=df["npv"], name="NPV")
    fig.update_layout(template="plotly_white", title="NPV by Scenario", yaxis_title=f"NPV ({UNIT})")
    return fig
