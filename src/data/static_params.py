"""Static snapshot provider with a representative three-silo aggregator."""

from web3 import Web3

from src.data.interfaces import (
    AllocationSnapshot,
    CurveParams,
    Position,
    SnapshotProvider,
    StrategyCaps,
)

# --- Silo addresses ---

SILO_CRV = Web3.to_checksum_address("0x6c1d33a4e96a8d49ddd5c2a1fb1d08b6b2fa3b11")
SILO_WSTETH = Web3.to_checksum_address("0x3ab45cf8b2a41cf1c2f10a54e4d5b3e1f7a0c922")
SILO_FXS = Web3.to_checksum_address("0x9f8e2d2c66b1f4d62ba0a15d5e9b04d3f0c1a833")

_UNIT = 10**18

# --- Curve constants shared by the VariableInterestRate deployments ---

_CURVE_DEFAULTS = dict(
    utilization_precision=100_000,
    min_target_utilization=75_000,
    max_target_utilization=85_000,
    vertex_utilization=87_500,
    min_full_utilization_rate=1_582_470_460,  # ~5% APR
    max_full_utilization_rate=3_164_940_920_000,  # ~10000% APR
    zero_utilization_rate=158_247_046,  # ~0.5% APR
    rate_half_life=172_800,  # 2 days
    vertex_rate_percent=200_000_000_000_000_000,  # 20%
    rate_precision=_UNIT,
)

_NOW = 1_700_000_000
_LAST_UPDATE = _NOW - 3_600

_CURVES: tuple[CurveParams, ...] = (
    CurveParams(
        current_timestamp=_NOW,
        last_timestamp=_LAST_UPDATE,
        rate_per_second=726_597_636,
        full_utilization_rate=3_000_000_000,
        total_asset=4_000_000 * _UNIT,
        total_borrow=3_500_000 * _UNIT,  # 87.5% utilized
        interest_paused=False,
        **_CURVE_DEFAULTS,
    ),
    CurveParams(
        current_timestamp=_NOW,
        last_timestamp=_LAST_UPDATE,
        rate_per_second=397_116_022,
        full_utilization_rate=1_900_000_000,
        total_asset=2_500_000 * _UNIT,
        total_borrow=1_500_000 * _UNIT,  # 60% utilized
        interest_paused=False,
        **_CURVE_DEFAULTS,
    ),
    CurveParams(
        current_timestamp=_NOW,
        last_timestamp=_LAST_UPDATE,
        rate_per_second=1_000_000_000,
        full_utilization_rate=2_000_000_000,
        total_asset=1_000_000 * _UNIT,
        total_borrow=900_000 * _UNIT,
        interest_paused=True,
        **_CURVE_DEFAULTS,
    ),
)

_POSITIONS: tuple[Position, ...] = (
    Position(strategy=SILO_CRV, debt=1_200_000 * _UNIT),
    Position(strategy=SILO_WSTETH, debt=800_000 * _UNIT),
    Position(strategy=SILO_FXS, debt=300_000 * _UNIT),
)

_CAPS: tuple[StrategyCaps, ...] = (
    StrategyCaps(
        activation_time=1_690_000_000,
        last_report_time=_NOW - 86_400,
        current_debt=1_200_000 * _UNIT,
        max_debt=2_000_000 * _UNIT,
    ),
    StrategyCaps(
        activation_time=1_690_000_000,
        last_report_time=_NOW - 86_400,
        current_debt=800_000 * _UNIT,
        max_debt=1_500_000 * _UNIT,
    ),
    StrategyCaps(
        activation_time=1_695_000_000,
        last_report_time=_NOW - 172_800,
        current_debt=300_000 * _UNIT,
        max_debt=300_000 * _UNIT,  # at capacity
    ),
)

_SNAPSHOT = AllocationSnapshot(
    chunk_count=20,
    total_initial_amount=2_300_000 * _UNIT,
    total_available_amount=2_800_000 * _UNIT,
    initial_positions=_POSITIONS,
    strategy_caps=_CAPS,
    curve_params=_CURVES,
)


class StaticSnapshotProvider(SnapshotProvider):
    """Snapshot provider returning a fixed sample aggregator state."""

    def get_snapshot(self) -> AllocationSnapshot:
        return _SNAPSHOT
