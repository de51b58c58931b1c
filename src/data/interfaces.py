"""Snapshot records and the abstract snapshot provider interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


class SnapshotError(ValueError):
    """Raised when an allocation snapshot is malformed or inconsistent."""


@dataclass(frozen=True)
class CurveParams:
    """Variable rate curve state for one lending strategy.

    Field order matches the wire layout of a curve-parameter record.
    """

    current_timestamp: int
    last_timestamp: int
    rate_per_second: int
    full_utilization_rate: int
    total_asset: int
    total_borrow: int
    utilization_precision: int
    min_target_utilization: int
    max_target_utilization: int
    vertex_utilization: int
    min_full_utilization_rate: int
    max_full_utilization_rate: int
    zero_utilization_rate: int
    rate_half_life: int  # seconds
    vertex_rate_percent: int
    rate_precision: int
    interest_paused: bool

    @property
    def elapsed(self) -> int:
        """Seconds since the rate was last updated."""
        return self.current_timestamp - self.last_timestamp


@dataclass(frozen=True)
class StrategyCaps:
    """Debt bookkeeping for a strategy as reported by the vault."""

    activation_time: int
    last_report_time: int
    current_debt: int
    max_debt: int

    @property
    def headroom(self) -> int:
        return self.max_debt - self.current_debt


@dataclass(frozen=True)
class Position:
    """A strategy address paired with a debt amount."""

    strategy: str
    debt: int


@dataclass(frozen=True)
class AllocationSnapshot:
    """Everything the optimizer needs for one run.

    ``initial_positions``, ``strategy_caps`` and ``curve_params`` are
    positional: index i of each refers to the same strategy.
    """

    chunk_count: int
    total_initial_amount: int
    total_available_amount: int
    initial_positions: tuple[Position, ...]
    strategy_caps: tuple[StrategyCaps, ...]
    curve_params: tuple[CurveParams, ...]

    def __post_init__(self) -> None:
        n = len(self.initial_positions)
        if len(self.strategy_caps) != n or len(self.curve_params) != n:
            raise SnapshotError(
                "Strategy lists differ in length: "
                f"positions={n}, caps={len(self.strategy_caps)}, "
                f"curves={len(self.curve_params)}"
            )

    @property
    def strategy_count(self) -> int:
        return len(self.initial_positions)

    @property
    def strategies(self) -> list[str]:
        return [p.strategy for p in self.initial_positions]


class SnapshotProvider(ABC):
    """Abstract source of allocation snapshots."""

    @abstractmethod
    def get_snapshot(self) -> AllocationSnapshot:
        """Load the snapshot for this run."""
