"""Sensitivity of the allocation to chunk count and per-strategy debt."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

import numpy as np
import pandas as pd

from src.allocation.config import AllocatorConfig
from src.allocation.engine import run_allocation
from src.allocation.optimizer import deposit_unit
from src.data.interfaces import AllocationSnapshot
from src.protocol.apr import apr_after_debt_change, utilization_after_debt_change


def default_chunk_counts(max_chunks: int = 200, n_points: int = 12) -> list[int]:
    """Geometric grid of distinct chunk counts in [1, max_chunks]."""
    grid = np.unique(np.geomspace(1, max_chunks, n_points).round().astype(np.int64))
    return [int(c) for c in grid]


def chunk_count_sweep(
    snapshot: AllocationSnapshot,
    chunk_counts: Sequence[int] | None = None,
    config: AllocatorConfig | None = None,
) -> pd.DataFrame:
    """Re-run the allocation for several chunk counts.

    Finer chunks track the marginal APR more closely but each chunk is
    smaller; this shows where the blended APR stops improving.

    Returns:
        DataFrame with columns: chunk_count, deposit_unit, current_apr,
        new_apr, apr_gain, accepted
    """
    counts = list(chunk_counts) if chunk_counts is not None else default_chunk_counts()
    rows = []
    for count in counts:
        variant = replace(snapshot, chunk_count=count)
        result = run_allocation(variant, config)
        rows.append(
            {
                "chunk_count": count,
                "deposit_unit": deposit_unit(
                    count, snapshot.total_initial_amount, snapshot.total_available_amount
                ),
                "current_apr": result.current_apr,
                "new_apr": result.new_apr,
                "apr_gain": result.apr_gain,
                "accepted": result.accepted,
            }
        )
    return pd.DataFrame(
        rows,
        columns=["chunk_count", "deposit_unit", "current_apr", "new_apr", "apr_gain", "accepted"],
    )


def marginal_apr_table(
    snapshot: AllocationSnapshot,
    strategy_index: int,
    n_points: int = 21,
) -> pd.DataFrame:
    """APR of one strategy as its debt grows from current debt to ``max_debt``.

    Returns:
        DataFrame with columns: delta_debt, utilization, apr
    """
    if n_points < 2:
        raise ValueError("n_points must be at least 2")
    params = snapshot.curve_params[strategy_index]
    headroom = max(0, snapshot.strategy_caps[strategy_index].headroom)

    deltas = [headroom * i // (n_points - 1) for i in range(n_points)]
    return pd.DataFrame(
        {
            "delta_debt": deltas,
            "utilization": [utilization_after_debt_change(params, d) for d in deltas],
            "apr": [apr_after_debt_change(params, d) for d in deltas],
        }
    )
