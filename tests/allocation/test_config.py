"""Tests for allocator configuration."""

import pytest

from src.allocation.config import AllocatorConfig, NoFeasiblePolicy, parse_log_level


class TestAllocatorConfig:
    def test_defaults(self) -> None:
        config = AllocatorConfig()
        assert config.no_feasible_policy is NoFeasiblePolicy.FALLBACK
        assert config.log_level == "WARNING"

    def test_from_empty_env(self) -> None:
        assert AllocatorConfig.from_env({}) == AllocatorConfig()

    def test_from_env(self) -> None:
        config = AllocatorConfig.from_env(
            {"ALLOCATOR_NO_FEASIBLE_POLICY": " Skip ", "ALLOCATOR_LOG_LEVEL": "debug"}
        )
        assert config.no_feasible_policy is NoFeasiblePolicy.SKIP
        assert config.log_level == "DEBUG"

    def test_reads_process_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ALLOCATOR_NO_FEASIBLE_POLICY", "raise")
        assert AllocatorConfig.from_env().no_feasible_policy is NoFeasiblePolicy.RAISE

    def test_unknown_policy(self) -> None:
        with pytest.raises(ValueError, match="ALLOCATOR_NO_FEASIBLE_POLICY"):
            AllocatorConfig.from_env({"ALLOCATOR_NO_FEASIBLE_POLICY": "retry"})

    def test_frozen(self) -> None:
        config = AllocatorConfig()
        with pytest.raises(AttributeError):
            config.log_level = "INFO"  # type: ignore[misc]

    def test_unknown_log_level(self) -> None:
        with pytest.raises(ValueError, match="ALLOCATOR_LOG_LEVEL"):
            AllocatorConfig.from_env({"ALLOCATOR_LOG_LEVEL": "chatty"})


class TestParseLogLevel:
    def test_normalizes(self) -> None:
        assert parse_log_level(" info ") == "INFO"

    def test_names_the_source(self) -> None:
        with pytest.raises(ValueError, match="--log-level"):
            parse_log_level("loud", "--log-level")
