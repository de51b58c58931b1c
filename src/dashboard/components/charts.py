"""Reusable Plotly chart components."""

import numpy as np
import pandas as pd
import plotly.graph_objects as go

from src.allocation.results import PlanAction
from src.data.constants import WAD


def _percent(values: pd.Series, scale: int) -> np.ndarray:
    """Fixed-point integers to float percentages, for plotting only."""
    return np.asarray(values, dtype=float) / scale * 100


def rate_curve_chart(
    df: pd.DataFrame,
    utilization_precision: int,
    current_utilization: int | None = None,
    vertex_utilization: int | None = None,
    title: str = "Rate Curve",
) -> go.Figure:
    """Create an interactive APR-vs-utilization chart.

    Args:
        df: DataFrame with columns: utilization, apr.
        utilization_precision: Scale of the utilization column.
        current_utilization: If provided, marks current utilization on chart.
        vertex_utilization: If provided, marks the kink of the curve.
        title: Chart title.
    """
    fig = go.Figure()

    fig.add_trace(
        go.Scatter(
            x=_percent(df["utilization"], utilization_precision),
            y=_percent(df["apr"], WAD),
            name="Borrow APR",
            line=dict(color="#ef4444", width=2),
            hovertemplate="Utilization: %{x:.1f}%<br>APR: %{y:.2f}%<extra></extra>",
        )
    )

    if vertex_utilization is not None:
        fig.add_vline(
            x=vertex_utilization / utilization_precision * 100,
            line_dash="dot",
            line_color="#f59e0b",
            annotation_text="Vertex",
        )

    if current_utilization is not None:
        current_pct = current_utilization / utilization_precision * 100
        fig.add_vline(
            x=current_pct,
            line_dash="dash",
            line_color="#6b7280",
            annotation_text=f"Current: {current_pct:.1f}%",
        )

    fig.update_layout(
        title=title,
        xaxis_title="Utilization (%)",
        yaxis_title="APR (%)",
        hovermode="x unified",
        template="plotly_dark",
        height=400,
    )

    return fig


def allocation_chart(actions: list[PlanAction], unit: int = WAD) -> go.Figure:
    """Grouped bars of current vs target debt per strategy, in plan order."""
    labels = [f"{i + 1}. {a.strategy[:10]}…" for i, a in enumerate(actions)]
    current = np.array([a.current_debt / unit for a in actions])
    target = np.array([a.target_debt / unit for a in actions])
    colors = ["#ef4444" if a.kind == "withdraw" else "#22c55e" for a in actions]

    fig = go.Figure()
    fig.add_trace(go.Bar(x=labels, y=current, name="Current Debt", marker_color="#6b7280"))
    fig.add_trace(go.Bar(x=labels, y=target, name="Target Debt", marker_color=colors))

    fig.update_layout(
        title="Debt per Strategy",
        barmode="group",
        xaxis_title="Plan Step",
        yaxis_title="Debt (tokens)",
        template="plotly_dark",
        height=400,
    )
    return fig


def chunk_sweep_chart(df: pd.DataFrame) -> go.Figure:
    """Blended APR as a function of chunk count.

    Args:
        df: Output of ``chunk_count_sweep``.
    """
    fig = go.Figure()

    fig.add_trace(
        go.Scatter(
            x=df["chunk_count"],
            y=_percent(df["new_apr"], WAD),
            name="New APR",
            mode="lines+markers",
            line=dict(color="#22c55e", width=2),
        )
    )
    fig.add_trace(
        go.Scatter(
            x=df["chunk_count"],
            y=_percent(df["current_apr"], WAD),
            name="Current APR",
            line=dict(color="#6b7280", width=2, dash="dash"),
        )
    )

    fig.update_layout(
        title="Blended APR vs Chunk Count",
        xaxis_title="Chunk Count",
        xaxis_type="log",
        yaxis_title="APR (%)",
        template="plotly_dark",
        height=400,
    )
    return fig


def marginal_apr_chart(df: pd.DataFrame, title: str, unit: int = WAD) -> go.Figure:
    """APR of one strategy against additional debt.

    Args:
        df: Output of ``marginal_apr_table``.
    """
    fig = go.Figure(
        go.Scatter(
            x=np.asarray(df["delta_debt"], dtype=float) / unit,
            y=_percent(df["apr"], WAD),
            mode="lines",
            line=dict(color="#3b82f6", width=2),
            hovertemplate="Added debt: %{x:,.0f}<br>APR: %{y:.3f}%<extra></extra>",
        )
    )
    fig.update_layout(
        title=title,
        xaxis_title="Added Debt (tokens)",
        yaxis_title="APR (%)",
        template="plotly_dark",
        height=350,
    )
    return fig
