"""
Plotly chart factory functions with consistent styling for the dashboard.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from bankops.metrics.models import TrendPoint

DEFAULT_TEMPLATE = "plotly_white"
DEFAULT_COLOR_SEQUENCE = [
    "#1f77b4",  # blue for actuals
    "#ff7f0e",  # orange for targets
    "#2ca02c",  # green for healthy segments
    "#d62728",  # red for at-risk
    "#9467bd",
    "#8c564b",
]


def _configure_layout(
    fig: go.Figure,
    title: Optional[str] = None,
    yaxis_title: Optional[str] = None,
    yaxis_tickformat: Optional[str] = None,
    legend_title: Optional[str] = None,
) -> go.Figure:
    fig.update_layout(
        template=DEFAULT_TEMPLATE,
        colorway=DEFAULT_COLOR_SEQUENCE,
        title=title,
        legend_title=legend_title,
        hovermode="x unified",
        margin=dict(l=40, r=20, t=60, b=40),
    )
    if yaxis_title:
        fig.update_yaxes(title=yaxis_title)
    if yaxis_tickformat:
        fig.update_yaxes(tickformat=yaxis_tickformat)
    fig.update_xaxes(showgrid=False)
    fig.update_yaxes(showgrid=True, zeroline=True)
    return fig


def render_plotly(fig: go.Figure) -> None:
    st.plotly_chart(fig, use_container_width=True, config={"displayModeBar": False})


def trend_frame(points: Sequence[TrendPoint]) -> pd.DataFrame:
    df = pd.DataFrame(
        [{"period": p.period, "value": p.value, "target": p.target} for p in points],
        columns=["period", "value", "target"],
    )
    if df["target"].isna().all():
        df = df.drop(columns=["target"])
    return df


def trend_with_target(
    points: Sequence[TrendPoint],
    title: Optional[str] = None,
    yaxis_title: Optional[str] = None,
) -> go.Figure:
    df = trend_frame(points)
    fig = px.line(df, x="period", y="value", markers=True)
    fig = _configure_layout(fig, title, yaxis_title)
    if "target" in df:
        fig.add_trace(
            go.Scatter(
                x=df["period"],
                y=df["target"],
                mode="lines",
                name="Target",
                line=dict(dash="dash"),
            )
        )
    return fig


def bar_chart(
    df: pd.DataFrame,
    x: str,
    y: str,
    color: Optional[str] = None,
    orientation: str = "v",
    title: Optional[str] = None,
    yaxis_title: Optional[str] = None,
    category_orders: Optional[Dict[str, List[str]]] = None,
    text_auto: bool = False,
) -> go.Figure:
    fig = px.bar(
        df,
        x=x,
        y=y,
        color=color,
        orientation=orientation,
        category_orders=category_orders,
        text_auto=text_auto,
    )
    fig = _configure_layout(fig, title, yaxis_title)
    if text_auto:
        fig.update_traces(textposition="outside", cliponaxis=False)
    return fig


def funnel_chart(df: pd.DataFrame, x: str, y: str, title: Optional[str] = None) -> go.Figure:
    fig = px.funnel(df, x=x, y=y)
    return _configure_layout(fig, title)
