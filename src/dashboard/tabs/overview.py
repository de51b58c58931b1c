"""Allocation Overview page — APR decision and ordered plan."""

import streamlit as st

from src.allocation.plan import plan_frame
from src.allocation.results import AllocationResult
from src.dashboard.components.charts import allocation_chart
from src.dashboard.components.metrics_cards import apr_to_percent, format_apr, kpi_row
from src.data.interfaces import AllocationSnapshot


def render_overview(snapshot: AllocationSnapshot, result: AllocationResult) -> None:
    """Render the allocation overview page."""
    st.header("Allocation Overview")

    new_capital = snapshot.total_available_amount - snapshot.total_initial_amount
    gain_pct = apr_to_percent(result.apr_gain)
    kpi_row(
        [
            ("Strategies", str(snapshot.strategy_count), None),
            ("Chunks", str(snapshot.chunk_count), None),
            ("Current APR", format_apr(result.current_apr), None),
            ("New APR", format_apr(result.new_apr), f"{gain_pct:+.3f}%"),
        ]
    )
    st.caption(f"New capital to place: {new_capital:,} base units")

    if result.accepted:
        st.success("Reallocation accepted: the plan raises the blended APR.")
    else:
        st.warning("Reallocation rejected: the plan does not raise the blended APR.")
        return

    st.plotly_chart(allocation_chart(result.actions), use_container_width=True)

    st.subheader("Ordered Plan")
    df = plan_frame(result.actions)
    # Streamlit renders wide ints as floats; show them as strings
    for col in ("current_debt", "target_debt", "amount"):
        df[col] = df[col].map(lambda v: f"{v:,}")
    st.dataframe(df, hide_index=True, use_container_width=True)
