"""Chunked greedy allocation of new capital across strategies.

The incremental capital is cut into equal chunks and each chunk goes to the
strategy whose APR after taking it is highest, subject to ``max_debt``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from src.allocation.config import NoFeasiblePolicy
from src.allocation.plan import order_positions
from src.data.interfaces import CurveParams, Position, SnapshotError, StrategyCaps
from src.protocol.apr import apr_after_debt_change

logger = logging.getLogger(__name__)


class NoFeasibleStrategyError(RuntimeError):
    """Raised when a chunk has no feasible strategy under ``NoFeasiblePolicy.RAISE``."""


def deposit_unit(chunk_count: int, total_initial_amount: int, total_available_amount: int) -> int:
    """Size of one chunk; integer division truncates the remainder."""
    if chunk_count < 1:
        raise SnapshotError(f"chunk_count must be at least 1, got {chunk_count}")
    if total_available_amount < total_initial_amount:
        raise SnapshotError(
            f"total_available_amount {total_available_amount} is below "
            f"total_initial_amount {total_initial_amount}"
        )
    return (total_available_amount - total_initial_amount) // chunk_count


def _fits(debt: int, amount: int, caps: StrategyCaps) -> bool:
    return debt + amount <= caps.max_debt


def _best_strategy(
    debts: Sequence[int],
    unit: int,
    curve_params: Sequence[CurveParams],
    strategy_caps: Sequence[StrategyCaps],
) -> tuple[int, int]:
    """Return ``(index, apr)`` of the strictly best feasible strategy.

    Ties keep the earliest index. ``apr`` is 0 when nothing qualified.
    """
    max_apr = 0
    max_index = 0
    for j, (debt, params, caps) in enumerate(zip(debts, curve_params, strategy_caps)):
        if not _fits(debt, unit, caps):
            continue
        apr = apr_after_debt_change(params, debt + unit - caps.current_debt)
        if apr > max_apr:
            max_apr = apr
            max_index = j
    return max_index, max_apr


def optimal_allocation(
    chunk_count: int,
    total_initial_amount: int,
    total_available_amount: int,
    initial_positions: Sequence[Position],
    curve_params: Sequence[CurveParams],
    strategy_caps: Sequence[StrategyCaps],
    policy: NoFeasiblePolicy = NoFeasiblePolicy.FALLBACK,
) -> list[Position]:
    """Greedily place ``total_available_amount - total_initial_amount``.

    Args:
        chunk_count: Number of equal chunks to split the new capital into.
        total_initial_amount: Capital already reflected in ``initial_positions``.
        total_available_amount: Capital available after the deposit.
        initial_positions: Starting debt per strategy.
        curve_params: Rate curve per strategy, aligned with ``initial_positions``.
        strategy_caps: Debt caps per strategy, aligned with ``initial_positions``.
        policy: Handling of chunks that no strategy can take. Under ``SKIP``
            and ``RAISE`` the final remainder is also held to the first
            strategy's ``max_debt``; ``FALLBACK`` applies it unconditionally.

    Returns:
        Target positions for every strategy, withdrawals first, or an empty
        list when the chunk size rounds down to zero.
    """
    n = len(initial_positions)
    if len(curve_params) != n or len(strategy_caps) != n:
        raise SnapshotError("initial_positions, curve_params and strategy_caps differ in length")

    unit = deposit_unit(chunk_count, total_initial_amount, total_available_amount)
    if unit == 0:
        return []
    if n == 0:
        raise SnapshotError("Cannot allocate new capital without any strategy")

    new_capital = total_available_amount - total_initial_amount
    debts = [p.debt for p in initial_positions]

    for chunk_index in range(chunk_count):
        if chunk_index == chunk_count - 1:
            # Last chunk absorbs the division remainder into the first strategy
            remainder = new_capital - unit * (chunk_count - 1)
            if policy is NoFeasiblePolicy.FALLBACK or _fits(debts[0], remainder, strategy_caps[0]):
                debts[0] += remainder
            else:
                logger.warning(
                    "Remainder %d would push %s above max_debt %d; policy=%s",
                    remainder,
                    initial_positions[0].strategy,
                    strategy_caps[0].max_debt,
                    policy.value,
                )
                if policy is NoFeasiblePolicy.RAISE:
                    raise NoFeasibleStrategyError(
                        f"Remainder {remainder} exceeds the capacity of "
                        f"{initial_positions[0].strategy}"
                    )

        index, apr = _best_strategy(debts, unit, curve_params, strategy_caps)
        if apr == 0:
            logger.warning(
                "No strategy can take chunk %d of %d (unit=%d); policy=%s",
                chunk_index + 1,
                chunk_count,
                unit,
                policy.value,
            )
            if policy is NoFeasiblePolicy.RAISE:
                raise NoFeasibleStrategyError(
                    f"No feasible strategy for chunk {chunk_index + 1} of {chunk_count}"
                )
            if policy is NoFeasiblePolicy.SKIP:
                continue

        debts[index] += unit

    targets = [
        Position(strategy=p.strategy, debt=debt) for p, debt in zip(initial_positions, debts)
    ]
    return order_positions(targets, strategy_caps)
