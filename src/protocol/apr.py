"""Annualized borrow rate implied by a change in a strategy's debt."""

from src.data.constants import SECONDS_PER_YEAR
from src.data.interfaces import CurveParams
from src.protocol.rate_curve import CurveArithmeticError, new_rates


def utilization_after_debt_change(params: CurveParams, delta_debt: int) -> int:
    """Utilization once ``delta_debt`` is added to (or removed from) total assets.

    Depositing into a strategy grows its asset base while borrows stay put,
    so positive deltas lower utilization.
    """
    new_total_asset = params.total_asset + delta_debt
    if new_total_asset < 0:
        raise CurveArithmeticError(
            f"Debt change {delta_debt} exceeds total assets {params.total_asset}"
        )
    if new_total_asset == 0:
        return 0
    return params.utilization_precision * params.total_borrow // new_total_asset


def apr_after_debt_change(params: CurveParams, delta_debt: int) -> int:
    """Compute the annualized rate after moving ``delta_debt`` into a strategy.

    Args:
        params: Curve parameters of the strategy.
        delta_debt: Signed change in the strategy's debt.

    Returns:
        ``rate_per_second * SECONDS_PER_YEAR`` in the curve's fixed-point
        units. Only meaningful relative to other results.
    """
    # No change, or a frozen strategy: the stored rate stands.
    if delta_debt == 0 or params.interest_paused:
        return params.rate_per_second * SECONDS_PER_YEAR

    utilization = utilization_after_debt_change(params, delta_debt)
    delta_time = params.elapsed
    if delta_time < 0:
        raise CurveArithmeticError(
            f"current_timestamp {params.current_timestamp} precedes "
            f"last_timestamp {params.last_timestamp}"
        )

    rate, _ = new_rates(delta_time, utilization, params)
    return rate * SECONDS_PER_YEAR


def current_apr(params: CurveParams) -> int:
    """Annualized rate at the strategy's current debt."""
    return apr_after_debt_change(params, 0)
