"""Command-line entry point: read a snapshot, write the encoded allocation."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from src.allocation.config import AllocatorConfig, NoFeasiblePolicy, parse_log_level
from src.allocation.engine import run_allocation
from src.allocation.optimizer import NoFeasibleStrategyError
from src.allocation.plan import plan_frame
from src.data.abi_codec import encode_result
from src.data.interfaces import SnapshotError
from src.data.provider_factory import create_provider
from src.protocol.rate_curve import CurveArithmeticError

logger = logging.getLogger("src.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="strategy-allocator",
        description="Compute the APR-maximizing reallocation of new capital across strategies.",
    )
    parser.add_argument(
        "--input",
        default=None,
        help="Snapshot source: file path, '-' for stdin, or 'static' for the sample "
        "(default: $ALLOCATOR_INPUT, else the sample)",
    )
    parser.add_argument("--output", default="-", help="Output file, '-' for stdout")
    parser.add_argument("--hex", action="store_true", help="Write 0x-prefixed hex instead of raw bytes")
    parser.add_argument(
        "--policy",
        choices=[p.value for p in NoFeasiblePolicy],
        default=None,
        help="Handling of chunks no strategy can take (default: $ALLOCATOR_NO_FEASIBLE_POLICY or fallback)",
    )
    parser.add_argument("--log-level", default=None, help="Log level (default: $ALLOCATOR_LOG_LEVEL or WARNING)")
    parser.add_argument("--summary", action="store_true", help="Print the plan table and APRs to stderr")
    return parser


def _write(payload: bytes, output: str, as_hex: bool) -> None:
    if as_hex:
        payload = ("0x" + payload.hex() + "\n").encode("ascii")
    if output == "-":
        sys.stdout.buffer.write(payload)
        sys.stdout.buffer.flush()
    else:
        Path(output).write_bytes(payload)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = AllocatorConfig.from_env()
        if args.log_level is not None:
            config = replace(config, log_level=parse_log_level(args.log_level, "--log-level"))
    except ValueError as exc:
        print(f"strategy-allocator: {exc}", file=sys.stderr)
        return 1
    if args.policy is not None:
        config = replace(config, no_feasible_policy=NoFeasiblePolicy(args.policy))

    logging.basicConfig(
        level=config.log_level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        snapshot = create_provider(args.input).get_snapshot()
        result = run_allocation(snapshot, config)
    except (SnapshotError, CurveArithmeticError, NoFeasibleStrategyError) as exc:
        logger.error("Allocation aborted: %s", exc)
        return 1

    if args.summary:
        table = plan_frame(result.actions).to_string(index=False) if result.actions else "(no plan)"
        print(
            f"current_apr={result.current_apr} new_apr={result.new_apr} "
            f"accepted={result.accepted}\n{table}",
            file=sys.stderr,
        )

    _write(encode_result(result), args.output, args.hex)
    return 0


if __name__ == "__main__":
    sys.exit(main())
