"""Time-weighted variable rate curve.

Replicates the lending pair's VariableInterestRate contract: the
full-utilization rate drifts with a half-life law whenever utilization
sits outside the target band, and the per-second borrow rate is read off a
two-slope curve with a kink at the vertex.

All arithmetic is unsigned integer math with truncating division. Python
ints never wrap, so intermediate products keep full precision; results are
narrowed to uint64 only after clamping.
"""

import pandas as pd

from src.data.constants import SECONDS_PER_YEAR, UINT64_MAX, WAD, WAD_SQUARED
from src.data.interfaces import CurveParams


class CurveArithmeticError(ArithmeticError):
    """Raised when curve inputs violate an unsigned arithmetic precondition."""


def _sub(a: int, b: int, label: str) -> int:
    if b > a:
        raise CurveArithmeticError(f"{label} underflows: {a} - {b}")
    return a - b


def _div(numerator: int, denominator: int, label: str) -> int:
    if denominator == 0:
        raise CurveArithmeticError(f"Division by zero computing {label}")
    return numerator // denominator


def to_uint64(value: int, label: str = "rate") -> int:
    """Narrow a wide unsigned value to uint64, failing if it does not fit."""
    if value < 0 or value > UINT64_MAX:
        raise CurveArithmeticError(f"{label} does not fit in uint64: {value}")
    return value


def full_utilization_rate(delta_time: int, utilization: int, params: CurveParams) -> int:
    """Compute the decayed/grown full-utilization rate.

    Args:
        delta_time: Seconds elapsed since the last rate update.
        utilization: Utilization scaled by ``params.utilization_precision``.
        params: Curve parameters of the strategy.

    Returns:
        New full-utilization rate, clamped to
        [min_full_utilization_rate, max_full_utilization_rate].
    """
    p = params
    half_life_term = p.rate_half_life * WAD_SQUARED

    if utilization < p.min_target_utilization:
        delta_utilization = (
            (p.min_target_utilization - utilization) * WAD
        ) // p.min_target_utilization
        decay_growth = half_life_term + delta_utilization * delta_utilization * delta_time
        new_rate = _div(
            p.full_utilization_rate * half_life_term, decay_growth, "rate decay"
        )
    elif utilization > p.max_target_utilization:
        delta_utilization = _div(
            (utilization - p.max_target_utilization) * WAD,
            _sub(p.utilization_precision, p.max_target_utilization, "utilization headroom"),
            "utilization delta",
        )
        decay_growth = half_life_term + delta_utilization * delta_utilization * delta_time
        new_rate = _div(
            p.full_utilization_rate * decay_growth, half_life_term, "rate growth"
        )
    else:
        new_rate = p.full_utilization_rate

    if new_rate > p.max_full_utilization_rate:
        new_rate = p.max_full_utilization_rate
    elif new_rate < p.min_full_utilization_rate:
        new_rate = p.min_full_utilization_rate

    return to_uint64(new_rate, "full utilization rate")


def rate_per_second(full_rate: int, utilization: int, params: CurveParams) -> int:
    """Read the per-second borrow rate off the vertex curve.

    Below the vertex the rate interpolates from ``zero_utilization_rate`` to
    the vertex rate; above it, from the vertex rate to ``full_rate`` at
    ``utilization_precision``.
    """
    p = params
    zero = p.zero_utilization_rate
    vertex_interest = (
        _div(
            _sub(full_rate, zero, "full rate over zero rate") * p.vertex_rate_percent,
            p.rate_precision,
            "vertex interest",
        )
        + zero
    )

    if utilization < p.vertex_utilization:
        slope_span = _sub(vertex_interest, zero, "vertex rate over zero rate")
        rate = zero + (utilization * slope_span) // p.vertex_utilization
    else:
        rate = vertex_interest + _div(
            (utilization - p.vertex_utilization)
            * _sub(full_rate, vertex_interest, "full rate over vertex rate"),
            _sub(p.utilization_precision, p.vertex_utilization, "vertex headroom"),
            "rate above vertex",
        )

    return to_uint64(rate, "rate per second")


def new_rates(delta_time: int, utilization: int, params: CurveParams) -> tuple[int, int]:
    """Return ``(rate_per_second, full_utilization_rate)`` after ``delta_time``."""
    full_rate = full_utilization_rate(delta_time, utilization, params)
    return rate_per_second(full_rate, utilization, params), full_rate


class VariableRateModel:
    """Rate curve bound to one strategy's parameters."""

    def __init__(self, params: CurveParams) -> None:
        self.params = params

    def full_utilization_rate(self, utilization: int, delta_time: int | None = None) -> int:
        dt = self.params.elapsed if delta_time is None else delta_time
        return full_utilization_rate(dt, utilization, self.params)

    def rate_per_second(self, utilization: int, delta_time: int | None = None) -> int:
        dt = self.params.elapsed if delta_time is None else delta_time
        rate, _ = new_rates(dt, utilization, self.params)
        return rate

    def rate_curve(self, n_points: int = 101) -> pd.DataFrame:
        """Sample the curve on evenly spaced integer utilizations.

        Returns:
            DataFrame with columns: utilization, rate_per_second, apr
        """
        if n_points < 2:
            raise ValueError("n_points must be at least 2")
        precision = self.params.utilization_precision
        utilizations = [precision * i // (n_points - 1) for i in range(n_points)]
        rates = [self.rate_per_second(u) for u in utilizations]

        return pd.DataFrame(
            {
                "utilization": utilizations,
                "rate_per_second": rates,
                "apr": [r * SECONDS_PER_YEAR for r in rates],
            }
        )
