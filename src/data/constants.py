"""Fixed-point scales and protocol constants."""

# 1e18 fixed-point unit used for utilization deltas and per-second rates
WAD = 10**18
WAD_SQUARED = 10**36

# 365.2425 days, matching the on-chain rate contracts
SECONDS_PER_YEAR = 31_556_952

# Per-second rates are stored on-chain as uint64
UINT64_MAX = 2**64 - 1

# Environment variables
ENV_INPUT = "ALLOCATOR_INPUT"
ENV_NO_FEASIBLE_POLICY = "ALLOCATOR_NO_FEASIBLE_POLICY"
ENV_LOG_LEVEL = "ALLOCATOR_LOG_LEVEL"
