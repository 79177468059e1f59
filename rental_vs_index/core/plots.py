from __future__ import annotations

import pandas as pd
import plotly.graph_objects as go

RE_COLOR = "#2563eb"
INDEX_COLOR = "#16a34a"
CASH_COLOR = "#64748b"


def net_worth_curve(yearly_df: pd.DataFrame, title: str = "Net worth over time") -> go.Figure:
    fig = go.Figure()
    fig.add_trace(
        go.Scatter(x=yearly_df["year"], y=yearly_df["re_net_worth"], mode="lines",
                   name="Real Estate Net Worth", line=dict(color=RE_COLOR))
    )
    fig.add_trace(
        go.Scatter(x=yearly_df["year"], y=yearly_df["index_net_worth"], mode="lines",
                   name="S&P 500 Net Worth", line=dict(color=INDEX_COLOR))
    )
    fig.add_trace(
        go.Scatter(x=yearly_df["year"], y=yearly_df["total_invested"], mode="lines",
                   name="Cash Invested", line=dict(color=CASH_COLOR, dash="dot"))
    )
    fig.update_layout(title=title, xaxis_title="Year", yaxis_title="$", hovermode="x unified")
    return fig


def cashflow_bars(yearly_df: pd.DataFrame, title: str = "Annual cash flow") -> go.Figure:
    colors = [RE_COLOR if v >= 0 else "#dc2626" for v in yearly_df["annual_cash_flow"]]
    fig = go.Figure()
    fig.add_bar(x=yearly_df["year"], y=yearly_df["annual_cash_flow"], name="Annual Cash Flow", marker_color=colors)
    fig.update_layout(title=title, xaxis_title="Year", yaxis_title="$")
    return fig


def sensitivity_curve(sweep_df: pd.DataFrame, x_label: str, title: str = "Final net worth") -> go.Figure:
    """Plot both final net worths against a swept parameter (percent units)."""
    fig = go.Figure()
    fig.add_trace(
        go.Scatter(x=sweep_df["value"], y=sweep_df["re_net_worth"], mode="lines+markers",
                   name="Real Estate", line=dict(color=RE_COLOR))
    )
    fig.add_trace(
        go.Scatter(x=sweep_df["value"], y=sweep_df["index_net_worth"], mode="lines+markers",
                   name="S&P 500", line=dict(color=INDEX_COLOR, dash="dot"))
    )
    fig.update_layout(title=title, xaxis_title=x_label, yaxis_title="$")
    return fig
