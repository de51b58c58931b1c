"""Sensitivity page — blended APR against chunk count."""

import streamlit as st

from src.allocation.config import AllocatorConfig
from src.analysis.sensitivity import chunk_count_sweep, default_chunk_counts
from src.dashboard.components.charts import chunk_sweep_chart
from src.dashboard.components.metrics_cards import apr_to_percent
from src.data.interfaces import AllocationSnapshot


def render_sensitivity(
    snapshot: AllocationSnapshot,
    config: AllocatorConfig,
    max_chunks: int,
) -> None:
    """Render the chunk count sensitivity page."""
    st.header("Chunk Count Sensitivity")

    df = chunk_count_sweep(snapshot, default_chunk_counts(max_chunks), config)
    st.plotly_chart(chunk_sweep_chart(df), use_container_width=True)

    display = df.assign(
        current_apr=df["current_apr"].map(lambda v: f"{apr_to_percent(v):.4f}%"),
        new_apr=df["new_apr"].map(lambda v: f"{apr_to_percent(v):.4f}%"),
        apr_gain=df["apr_gain"].map(lambda v: f"{apr_to_percent(v):+.4f}%"),
        deposit_unit=df["deposit_unit"].map(lambda v: f"{v:,}"),
    )
    st.dataframe(display, hide_index=True, use_container_width=True)
