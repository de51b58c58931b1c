"""Reusable metric card components for the dashboard."""

import streamlit as st

from src.data.constants import WAD


def apr_to_percent(apr: int, scale: int = WAD) -> float:
    """Convert a fixed-point annualized rate to a display percentage."""
    return apr / scale * 100


def format_apr(apr: int) -> str:
    return f"{apr_to_percent(apr):.3f}%"


def kpi_row(metrics: list[tuple[str, str, str | None]]) -> None:
    """Display a row of KPI cards.

    Args:
        metrics: List of (label, value, delta) tuples.
    """
    cols = st.columns(len(metrics))
    for col, (label, value, delta) in zip(cols, metrics):
        with col:
            st.metric(label=label, value=value, delta=delta)
