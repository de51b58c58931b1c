"""ABI codec for allocation snapshots and results.

Input layout (all ``uint256`` unless noted)::

    chunk_count, total_initial_amount, total_available_amount,
    (address, debt)[]                               initial positions
    (activation, last_report, current_debt, max_debt)[]   strategy caps
    (16 x uint256, bool)[]                          curve params

Output layout::

    uint256[] plan, uint256 new_apr, uint256 current_apr, bool accepted

``plan`` is flattened as ``address, debt, address, debt, ...`` with each
address left-padded to a full word.
"""

from __future__ import annotations

import logging
from dataclasses import astuple, fields
from typing import TYPE_CHECKING

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError, EncodingError
from web3 import Web3

from src.data.constants import UINT64_MAX
from src.data.interfaces import (
    AllocationSnapshot,
    CurveParams,
    Position,
    SnapshotError,
    StrategyCaps,
)

if TYPE_CHECKING:
    from src.allocation.results import AllocationResult

logger = logging.getLogger(__name__)

_CURVE_FIELD_COUNT = len(fields(CurveParams))
_CURVE_TUPLE = "(" + ",".join(["uint256"] * (_CURVE_FIELD_COUNT - 1) + ["bool"]) + ")"

SNAPSHOT_TYPES = [
    "uint256",
    "uint256",
    "uint256",
    "(address,uint256)[]",
    "(uint256,uint256,uint256,uint256)[]",
    f"{_CURVE_TUPLE}[]",
]
RESULT_TYPES = ["uint256[]", "uint256", "uint256", "bool"]


def decode_snapshot(data: bytes) -> AllocationSnapshot:
    """Decode an ABI-encoded snapshot.

    Raises:
        SnapshotError: If the buffer does not decode, the strategy lists
            differ in length, or the chunk count does not fit in 64 bits.
    """
    try:
        (
            chunk_count,
            total_initial,
            total_available,
            raw_positions,
            raw_caps,
            raw_curves,
        ) = decode(SNAPSHOT_TYPES, data)
    except (DecodingError, ValueError) as exc:
        raise SnapshotError(f"Undecodable snapshot ({len(data)} bytes): {exc}") from exc

    if chunk_count > UINT64_MAX:
        raise SnapshotError(f"chunk_count {chunk_count} does not fit in 64 bits")

    logger.debug(
        "Decoded snapshot: %d positions, %d caps, %d curves",
        len(raw_positions),
        len(raw_caps),
        len(raw_curves),
    )
    return AllocationSnapshot(
        chunk_count=chunk_count,
        total_initial_amount=total_initial,
        total_available_amount=total_available,
        initial_positions=tuple(
            Position(strategy=Web3.to_checksum_address(addr), debt=debt)
            for addr, debt in raw_positions
        ),
        strategy_caps=tuple(StrategyCaps(*row) for row in raw_caps),
        curve_params=tuple(CurveParams(*row) for row in raw_curves),
    )


def encode_snapshot(snapshot: AllocationSnapshot) -> bytes:
    """ABI-encode a snapshot in the layout ``decode_snapshot`` reads."""
    try:
        return encode(
            SNAPSHOT_TYPES,
            [
                snapshot.chunk_count,
                snapshot.total_initial_amount,
                snapshot.total_available_amount,
                [(p.strategy, p.debt) for p in snapshot.initial_positions],
                [astuple(c) for c in snapshot.strategy_caps],
                [astuple(c) for c in snapshot.curve_params],
            ],
        )
    except EncodingError as exc:
        raise SnapshotError(f"Snapshot cannot be ABI-encoded: {exc}") from exc


def encode_result(result: AllocationResult) -> bytes:
    """ABI-encode a result; rejected results always carry an empty plan."""
    plan: list[int] = []
    if result.accepted:
        for position in result.positions:
            plan.append(int(position.strategy, 16))
            plan.append(position.debt)
    return encode(RESULT_TYPES, [plan, result.new_apr, result.current_apr, result.accepted])
