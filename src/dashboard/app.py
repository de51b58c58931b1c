"""Strategy Allocator Dashboard — Main Streamlit entry point."""

import os
from dataclasses import replace
from pathlib import Path

import streamlit as st

# Load .env file if present (for ALLOCATOR_INPUT, etc.)
_env_path = Path(__file__).resolve().parents[2] / ".env"
if _env_path.exists():
    for line in _env_path.read_text().splitlines():
        line = line.strip()
        if line and not line.startswith("#") and "=" in line:
            key, _, value = line.partition("=")
            os.environ.setdefault(key.strip(), value.strip())

from src.allocation.config import AllocatorConfig
from src.allocation.engine import run_allocation
from src.allocation.optimizer import NoFeasibleStrategyError
from src.dashboard.components.sidebar import render_sidebar
from src.dashboard.tabs.overview import render_overview
from src.dashboard.tabs.rates import render_rates
from src.dashboard.tabs.sensitivity import render_sensitivity
from src.data.abi_codec import decode_snapshot
from src.data.abi_provider import parse_payload
from src.data.interfaces import SnapshotError
from src.data.provider_factory import create_provider
from src.protocol.rate_curve import CurveArithmeticError

_FATAL = (SnapshotError, CurveArithmeticError, NoFeasibleStrategyError)


def main() -> None:
    st.set_page_config(
        page_title="Strategy Allocator",
        page_icon="📊",
        layout="wide",
    )

    st.title("Strategy Allocator")
    st.caption("Chunked greedy reallocation across variable-rate lending silos")

    try:
        snapshot = create_provider().get_snapshot()
    except SnapshotError as exc:
        st.error(f"Could not load the configured snapshot: {exc}")
        return

    params = render_sidebar(default_chunk_count=snapshot.chunk_count)

    if params.snapshot_bytes is not None:
        try:
            snapshot = decode_snapshot(parse_payload(params.snapshot_bytes))
            st.sidebar.success(f"Loaded {snapshot.strategy_count} strategies from upload")
        except SnapshotError as exc:
            st.sidebar.error(f"Upload rejected: {exc}")
            return

    if params.chunk_count is not None:
        snapshot = replace(snapshot, chunk_count=params.chunk_count)

    config = AllocatorConfig(no_feasible_policy=params.no_feasible_policy)

    try:
        result = run_allocation(snapshot, config)
    except _FATAL as exc:
        st.error(f"Allocation aborted: {exc}")
        return

    tab1, tab2, tab3 = st.tabs(["Allocation", "Rate Curves", "Sensitivity"])

    with tab1:
        render_overview(snapshot, result)

    with tab2:
        try:
            render_rates(snapshot)
        except CurveArithmeticError as exc:
            st.error(f"Rate curve unavailable: {exc}")

    with tab3:
        try:
            render_sensitivity(snapshot, config, params.max_sweep_chunks)
        except _FATAL as exc:
            st.error(f"Sweep aborted: {exc}")


if __name__ == "__main__":
    main()
