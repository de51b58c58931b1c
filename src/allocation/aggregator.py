"""Blended APR before and after a reallocation, and the accept/reject gate."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from src.allocation.plan import build_actions
from src.allocation.results import AllocationResult
from src.data.interfaces import CurveParams, Position, StrategyCaps
from src.protocol.apr import apr_after_debt_change


def blended_apr(weighted_aprs: Iterable[tuple[int, int]]) -> int:
    """Debt-weighted average of ``(apr, weight)`` pairs.

    Returns 0 when either the total weight or the weighted sum is zero.
    """
    total_apr = 0
    total_amount = 0
    for apr, weight in weighted_aprs:
        total_apr += apr * weight
        total_amount += weight
    if total_apr == 0 or total_amount == 0:
        return 0
    return total_apr // total_amount


def current_blended_apr(
    curve_params: Sequence[CurveParams],
    strategy_caps: Sequence[StrategyCaps],
) -> int:
    """Blended APR of the vault as it stands, weighted by current debt."""
    return blended_apr(
        (apr_after_debt_change(params, 0), caps.current_debt)
        for params, caps in zip(curve_params, strategy_caps)
    )


def _index_of(strategy: str, initial_positions: Sequence[Position]) -> int | None:
    for i, position in enumerate(initial_positions):
        if position.strategy == strategy:
            return i
    return None


def current_and_new_apr(
    initial_positions: Sequence[Position],
    curve_params: Sequence[CurveParams],
    strategy_caps: Sequence[StrategyCaps],
    optimal_positions: Sequence[Position],
) -> tuple[int, int]:
    """Compute ``(current_apr, new_apr)`` for a candidate allocation.

    An empty candidate yields ``(0, 0)``. Otherwise the current APR weights each strategy's stored rate by its current
    debt. The new APR weights each target position's post-change rate by
    its target debt; aggregation stops at the first target whose strategy
    is not among ``initial_positions``.
    """
    if not optimal_positions:
        return 0, 0

    current = current_blended_apr(curve_params, strategy_caps)

    pairs: list[tuple[int, int]] = []
    for position in optimal_positions:
        index = _index_of(position.strategy, initial_positions)
        if index is None:
            break
        delta = position.debt - strategy_caps[index].current_debt
        pairs.append((apr_after_debt_change(curve_params[index], delta), position.debt))

    return current, blended_apr(pairs)


def decide(
    optimal_positions: Sequence[Position],
    current_apr: int,
    new_apr: int,
    initial_positions: Sequence[Position],
    strategy_caps: Sequence[StrategyCaps],
) -> AllocationResult:
    """Accept the plan only if it strictly improves the blended APR."""
    if new_apr > current_apr:
        return AllocationResult(
            current_apr=current_apr,
            new_apr=new_apr,
            accepted=True,
            positions=list(optimal_positions),
            actions=build_actions(optimal_positions, initial_positions, strategy_caps),
        )
    return AllocationResult(current_apr=current_apr, new_apr=new_apr, accepted=False)
