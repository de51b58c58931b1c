"""Result dataclasses for allocation runs."""

from dataclasses import dataclass, field

from src.data.interfaces import Position

WITHDRAW = "withdraw"
DEPOSIT = "deposit"
HOLD = "hold"


@dataclass(frozen=True)
class PlanAction:
    """A single step of a reallocation plan.

    Attributes:
        strategy: Strategy address.
        kind: One of ``withdraw``, ``deposit`` or ``hold``.
        current_debt: Debt the vault currently reports for the strategy.
        target_debt: Debt the strategy should end up with.
    """

    strategy: str
    kind: str
    current_debt: int
    target_debt: int

    @property
    def amount(self) -> int:
        return abs(self.target_debt - self.current_debt)


@dataclass(frozen=True)
class AllocationResult:
    """Outcome of one allocation run.

    ``positions`` and ``actions`` are empty whenever the plan was rejected;
    both APRs are reported either way.
    """

    current_apr: int
    new_apr: int
    accepted: bool
    positions: list[Position] = field(default_factory=list)
    actions: list[PlanAction] = field(default_factory=list)

    @property
    def apr_gain(self) -> int:
        return self.new_apr - self.current_apr
