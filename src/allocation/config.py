"""Allocator runtime configuration."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from src.data.constants import ENV_LOG_LEVEL, ENV_NO_FEASIBLE_POLICY


class NoFeasiblePolicy(str, Enum):
    """What to do with a chunk no strategy can take at a positive APR."""

    FALLBACK = "fallback"  # assign to the first strategy anyway
    SKIP = "skip"  # leave the chunk unallocated
    RAISE = "raise"  # abort the run


def parse_log_level(name: str, source: str = ENV_LOG_LEVEL) -> str:
    """Normalize a log level name, rejecting names ``logging`` does not know."""
    level = name.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(
            f"Unknown {source}={name!r}; expected one of DEBUG, INFO, WARNING, ERROR, CRITICAL"
        )
    return level


@dataclass(frozen=True)
class AllocatorConfig:
    """Settings that shape an allocation run.

    Attributes:
        no_feasible_policy: Handling of chunks without a feasible strategy.
            ``FALLBACK`` matches the on-chain allocator.
        log_level: Root log level used by the CLI.
    """

    no_feasible_policy: NoFeasiblePolicy = NoFeasiblePolicy.FALLBACK
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> AllocatorConfig:
        """Build a config from ``ALLOCATOR_*`` environment variables."""
        env = os.environ if environ is None else environ
        policy_name = env.get(ENV_NO_FEASIBLE_POLICY, NoFeasiblePolicy.FALLBACK.value)
        try:
            policy = NoFeasiblePolicy(policy_name.strip().lower())
        except ValueError:
            valid = ", ".join(p.value for p in NoFeasiblePolicy)
            raise ValueError(
                f"Unknown {ENV_NO_FEASIBLE_POLICY}={policy_name!r}; expected one of {valid}"
            ) from None
        return cls(
            no_feasible_policy=policy,
            log_level=parse_log_level(env.get(ENV_LOG_LEVEL, "WARNING")),
        )
