"""Turn target debts into an ordered reallocation plan.

Strategies being drained come first so liquidity is freed before it is
committed elsewhere.
"""

from collections.abc import Sequence

import pandas as pd

from src.allocation.results import DEPOSIT, HOLD, WITHDRAW, PlanAction
from src.data.interfaces import Position, StrategyCaps


def order_positions(
    positions: Sequence[Position],
    strategy_caps: Sequence[StrategyCaps],
) -> list[Position]:
    """Order target positions as withdrawals followed by deposits.

    ``positions`` must be index-aligned with ``strategy_caps``. Withdrawals
    keep their original order; the deposit group (including unchanged
    strategies) is reversed.
    """
    withdrawals: list[Position] = []
    deposits: list[Position] = []

    for position, caps in zip(positions, strategy_caps, strict=True):
        if caps.current_debt > position.debt:
            withdrawals.append(position)
        else:
            deposits.append(position)

    deposits.reverse()
    return withdrawals + deposits


def build_actions(
    positions: Sequence[Position],
    initial_positions: Sequence[Position],
    strategy_caps: Sequence[StrategyCaps],
) -> list[PlanAction]:
    """Describe each ordered target position as a plan action.

    Args:
        positions: Ordered target positions (as returned by the optimizer).
        initial_positions: Input positions, used to look up each strategy's caps.
        strategy_caps: Caps aligned with ``initial_positions``.
    """
    caps_by_strategy = {
        p.strategy: caps for p, caps in zip(initial_positions, strategy_caps, strict=True)
    }

    actions = []
    for position in positions:
        current = caps_by_strategy[position.strategy].current_debt
        if position.debt < current:
            kind = WITHDRAW
        elif position.debt > current:
            kind = DEPOSIT
        else:
            kind = HOLD
        actions.append(
            PlanAction(
                strategy=position.strategy,
                kind=kind,
                current_debt=current,
                target_debt=position.debt,
            )
        )
    return actions


def plan_frame(actions: Sequence[PlanAction]) -> pd.DataFrame:
    """Tabulate plan actions for display.

    Returns:
        DataFrame with columns: step, strategy, action, current_debt,
        target_debt, amount
    """
    return pd.DataFrame(
        {
            "step": list(range(1, len(actions) + 1)),
            "strategy": [a.strategy for a in actions],
            "action": [a.kind for a in actions],
            "current_debt": [a.current_debt for a in actions],
            "target_debt": [a.target_debt for a in actions],
            "amount": [a.amount for a in actions],
        }
    )
