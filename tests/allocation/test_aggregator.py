"""Tests for blended APR aggregation and the acceptance gate."""

from dataclasses import replace

from src.allocation.aggregator import (
    blended_apr,
    current_and_new_apr,
    current_blended_apr,
    decide,
)
from src.allocation.results import DEPOSIT, HOLD, WITHDRAW
from src.data.constants import SECONDS_PER_YEAR
from src.data.interfaces import CurveParams, Position, StrategyCaps

A = "0x" + "1" * 40
B = "0x" + "2" * 40
UNKNOWN = "0x" + "7" * 40

CURVE = CurveParams(
    current_timestamp=1_000_000,
    last_timestamp=1_000_000,
    rate_per_second=200_000_000,
    full_utilization_rate=1_000_000_000,
    total_asset=1_000,
    total_borrow=800,
    utilization_precision=100_000,
    min_target_utilization=75_000,
    max_target_utilization=85_000,
    vertex_utilization=80_000,
    min_full_utilization_rate=100_000_000,
    max_full_utilization_rate=10_000_000_000,
    zero_utilization_rate=0,
    rate_half_life=172_800,
    vertex_rate_percent=2 * 10**17,
    rate_precision=10**18,
    interest_paused=False,
)
PAUSED_A = replace(CURVE, interest_paused=True, rate_per_second=200_000_000)
PAUSED_B = replace(CURVE, interest_paused=True, rate_per_second=400_000_000)

INITIAL = [Position(A, 100), Position(B, 300)]
CAPS = [
    StrategyCaps(activation_time=0, last_report_time=0, current_debt=100, max_debt=1_000),
    StrategyCaps(activation_time=0, last_report_time=0, current_debt=300, max_debt=1_000),
]


class TestBlendedApr:
    def test_weighted_average(self) -> None:
        assert blended_apr([(10, 1), (40, 3)]) == 32  # 130 // 4

    def test_truncates(self) -> None:
        assert blended_apr([(10, 1), (11, 2)]) == 10  # 32 // 3

    def test_zero_weight(self) -> None:
        assert blended_apr([(10, 0), (40, 0)]) == 0

    def test_zero_aprs(self) -> None:
        assert blended_apr([(0, 5), (0, 7)]) == 0

    def test_empty(self) -> None:
        assert blended_apr([]) == 0


class TestCurrentAndNewApr:
    def test_empty_plan_reports_zero(self) -> None:
        assert current_and_new_apr(INITIAL, [PAUSED_A, PAUSED_B], CAPS, []) == (0, 0)

    def test_current_apr_weighted_by_current_debt(self) -> None:
        current, _ = current_and_new_apr(
            INITIAL, [PAUSED_A, PAUSED_B], CAPS, [Position(A, 100), Position(B, 300)]
        )
        # (2e8 * 100 + 4e8 * 300) / 400
        assert current == 350_000_000 * SECONDS_PER_YEAR

    def test_new_apr_weighted_by_target_debt(self) -> None:
        _, new = current_and_new_apr(
            INITIAL, [PAUSED_A, PAUSED_B], CAPS, [Position(B, 100), Position(A, 300)]
        )
        # (4e8 * 100 + 2e8 * 300) / 400
        assert new == 250_000_000 * SECONDS_PER_YEAR

    def test_new_apr_uses_debt_change(self) -> None:
        initial = [Position(A, 100)]
        caps = [CAPS[0]]
        _, new = current_and_new_apr(initial, [CURVE], caps, [Position(A, 700)])
        # +600 debt: utilization 50% -> rate 1.25e8
        assert new == 125_000_000 * SECONDS_PER_YEAR

    def test_unknown_strategy_stops_aggregation(self) -> None:
        optimal = [Position(A, 100), Position(UNKNOWN, 500), Position(B, 300)]
        _, new = current_and_new_apr(INITIAL, [PAUSED_A, PAUSED_B], CAPS, optimal)
        assert new == 200_000_000 * SECONDS_PER_YEAR

    def test_no_current_debt(self) -> None:
        caps = [replace(c, current_debt=0) for c in CAPS]
        current, _ = current_and_new_apr(
            INITIAL, [PAUSED_A, PAUSED_B], caps, [Position(A, 100), Position(B, 300)]
        )
        assert current == 0

    def test_current_blended_apr_ignores_plan(self) -> None:
        assert current_blended_apr([PAUSED_A, PAUSED_B], CAPS) == 350_000_000 * SECONDS_PER_YEAR


class TestDecide:
    OPTIMAL = [Position(A, 50), Position(B, 400)]

    def test_accepts_strict_improvement(self) -> None:
        result = decide(self.OPTIMAL, 10, 11, INITIAL, CAPS)
        assert result.accepted
        assert result.positions == self.OPTIMAL
        assert [a.kind for a in result.actions] == [WITHDRAW, DEPOSIT]
        assert [a.amount for a in result.actions] == [50, 100]
        assert result.apr_gain == 1

    def test_rejects_equal_apr(self) -> None:
        result = decide(self.OPTIMAL, 10, 10, INITIAL, CAPS)
        assert not result.accepted
        assert result.positions == []
        assert result.actions == []
        assert (result.current_apr, result.new_apr) == (10, 10)

    def test_rejects_lower_apr(self) -> None:
        result = decide(self.OPTIMAL, 10, 9, INITIAL, CAPS)
        assert not result.accepted
        assert result.positions == []

    def test_unchanged_strategy_is_hold(self) -> None:
        result = decide([Position(B, 300), Position(A, 150)], 1, 2, INITIAL, CAPS)
        assert [a.kind for a in result.actions] == [HOLD, DEPOSIT]
