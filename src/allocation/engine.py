"""End-to-end allocation run: optimize, aggregate, gate."""

from __future__ import annotations

import logging

from src.allocation.aggregator import current_and_new_apr, decide
from src.allocation.config import AllocatorConfig
from src.allocation.optimizer import deposit_unit, optimal_allocation
from src.allocation.results import AllocationResult
from src.data.abi_codec import decode_snapshot, encode_result
from src.data.interfaces import AllocationSnapshot

logger = logging.getLogger(__name__)


def run_allocation(
    snapshot: AllocationSnapshot,
    config: AllocatorConfig | None = None,
) -> AllocationResult:
    """Compute the reallocation plan for ``snapshot``.

    The plan is only exposed when it strictly raises the blended APR.
    """
    cfg = config or AllocatorConfig()

    optimal = optimal_allocation(
        snapshot.chunk_count,
        snapshot.total_initial_amount,
        snapshot.total_available_amount,
        snapshot.initial_positions,
        snapshot.curve_params,
        snapshot.strategy_caps,
        policy=cfg.no_feasible_policy,
    )
    current_apr, new_apr = current_and_new_apr(
        snapshot.initial_positions,
        snapshot.curve_params,
        snapshot.strategy_caps,
        optimal,
    )
    result = decide(
        optimal,
        current_apr,
        new_apr,
        snapshot.initial_positions,
        snapshot.strategy_caps,
    )

    logger.info(
        "Allocation over %d strategies: unit=%d current_apr=%d new_apr=%d accepted=%s",
        snapshot.strategy_count,
        deposit_unit(
            snapshot.chunk_count,
            snapshot.total_initial_amount,
            snapshot.total_available_amount,
        ),
        current_apr,
        new_apr,
        result.accepted,
    )
    return result


def run_from_bytes(data: bytes, config: AllocatorConfig | None = None) -> bytes:
    """Decode an ABI snapshot, run the allocation, and ABI-encode the result."""
    return encode_result(run_allocation(decode_snapshot(data), config))
