"""Rate Curves page — per-strategy vertex curves and marginal APR."""

import pandas as pd
import streamlit as st

from src.analysis.sensitivity import marginal_apr_table
from src.dashboard.components.charts import marginal_apr_chart, rate_curve_chart
from src.dashboard.components.metrics_cards import format_apr
from src.data.interfaces import AllocationSnapshot
from src.protocol.apr import current_apr, utilization_after_debt_change
from src.protocol.rate_curve import VariableRateModel


def render_rates(snapshot: AllocationSnapshot) -> None:
    """Render the rate curves page."""
    st.header("Rate Curves")

    rows = []
    for position, params, caps in zip(
        snapshot.initial_positions, snapshot.curve_params, snapshot.strategy_caps
    ):
        utilization = utilization_after_debt_change(params, 0)
        rows.append(
            {
                "Strategy": position.strategy,
                "Utilization": f"{utilization / params.utilization_precision * 100:.2f}%",
                "Stored APR": format_apr(current_apr(params)),
                "Current Debt": f"{caps.current_debt:,}",
                "Max Debt": f"{caps.max_debt:,}",
                "Paused": "yes" if params.interest_paused else "no",
            }
        )
    st.table(pd.DataFrame(rows))

    st.divider()
    labels = [p.strategy for p in snapshot.initial_positions]
    selected = st.selectbox("Strategy", options=range(len(labels)), format_func=lambda i: labels[i])
    if selected is None:
        return

    params = snapshot.curve_params[selected]
    model = VariableRateModel(params)

    col1, col2 = st.columns(2)
    with col1:
        fig = rate_curve_chart(
            model.rate_curve(),
            utilization_precision=params.utilization_precision,
            current_utilization=utilization_after_debt_change(params, 0),
            vertex_utilization=params.vertex_utilization,
            title="Borrow APR Curve",
        )
        st.plotly_chart(fig, use_container_width=True)
    with col2:
        if params.interest_paused:
            st.info("Interest is paused: the stored rate applies for any debt change.")
        fig = marginal_apr_chart(
            marginal_apr_table(snapshot, selected),
            title="APR vs Added Debt (up to max debt)",
        )
        st.plotly_chart(fig, use_container_width=True)
