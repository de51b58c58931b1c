"""Sidebar parameter controls."""

from dataclasses import dataclass

import streamlit as st

from src.allocation.config import NoFeasiblePolicy


@dataclass
class SidebarParams:
    """User-controlled parameters from the sidebar."""

    snapshot_bytes: bytes | None
    chunk_count: int | None
    no_feasible_policy: NoFeasiblePolicy
    max_sweep_chunks: int


def render_sidebar(default_chunk_count: int) -> SidebarParams:
    """Render sidebar controls and return selected parameters.

    Parameters
    ----------
    default_chunk_count : int
        Chunk count of the loaded snapshot, shown as the slider default.
    """
    st.sidebar.header("Snapshot")
    upload = st.sidebar.file_uploader(
        "ABI-encoded snapshot (raw bytes or 0x hex)",
        type=None,
    )
    st.sidebar.caption("Without an upload the bundled three-silo sample is used.")

    st.sidebar.header("Optimizer")
    override = st.sidebar.checkbox("Override chunk count", value=False)
    chunk_count: int | None = None
    if override:
        chunk_count = int(
            st.sidebar.number_input(
                "Chunk count",
                min_value=1,
                max_value=10_000,
                value=max(1, default_chunk_count),
                step=1,
            )
        )

    policy = st.sidebar.selectbox(
        "No-feasible-strategy policy",
        options=[p.value for p in NoFeasiblePolicy],
        index=0,
        help="'fallback' matches the on-chain allocator and may exceed the first strategy's cap; "
        "'skip' and 'raise' keep every strategy within max_debt.",
    )

    max_sweep = st.sidebar.slider(
        "Max chunk count in sweep",
        min_value=2,
        max_value=1_000,
        value=200,
        step=1,
    )

    return SidebarParams(
        snapshot_bytes=upload.getvalue() if upload is not None else None,
        chunk_count=chunk_count,
        no_feasible_policy=NoFeasiblePolicy(policy),
        max_sweep_chunks=max_sweep,
    )
