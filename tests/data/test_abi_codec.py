"""Tests for the ABI snapshot/result codec."""

import pytest
from eth_abi import decode, encode

from src.allocation.results import AllocationResult
from src.data.abi_codec import (
    RESULT_TYPES,
    SNAPSHOT_TYPES,
    decode_snapshot,
    encode_result,
    encode_snapshot,
)
from src.data.interfaces import (
    AllocationSnapshot,
    CurveParams,
    Position,
    SnapshotError,
    StrategyCaps,
)

A = "0x" + "1" * 40
B = "0x" + "2" * 40

CURVE_FIELDS = (
    1_700_000_000,
    1_699_996_400,
    726_597_636,
    3_000_000_000,
    4_000_000 * 10**18,
    3_500_000 * 10**18,
    100_000,
    75_000,
    85_000,
    87_500,
    1_582_470_460,
    3_164_940_920_000,
    158_247_046,
    172_800,
    2 * 10**17,
    10**18,
)
CAPS_FIELDS = (1_690_000_000, 1_699_913_600, 1_200_000 * 10**18, 2_000_000 * 10**18)

SNAPSHOT = AllocationSnapshot(
    chunk_count=20,
    total_initial_amount=2_000_000 * 10**18,
    total_available_amount=2_500_000 * 10**18,
    initial_positions=(Position(A, 1_200_000 * 10**18), Position(B, 800_000 * 10**18)),
    strategy_caps=(StrategyCaps(*CAPS_FIELDS), StrategyCaps(*CAPS_FIELDS)),
    curve_params=(CurveParams(*CURVE_FIELDS, False), CurveParams(*CURVE_FIELDS, True)),
)


class TestDecodeSnapshot:
    def test_round_trip(self) -> None:
        assert decode_snapshot(encode_snapshot(SNAPSHOT)) == SNAPSHOT

    def test_field_order(self) -> None:
        decoded = decode_snapshot(encode_snapshot(SNAPSHOT))
        curve = decoded.curve_params[1]
        assert curve.current_timestamp == 1_700_000_000
        assert curve.rate_half_life == 172_800
        assert curve.rate_precision == 10**18
        assert curve.interest_paused is True
        assert decoded.strategy_caps[0].max_debt == 2_000_000 * 10**18

    def test_mismatched_lengths(self) -> None:
        data = encode(
            SNAPSHOT_TYPES,
            [
                1,
                0,
                100,
                [(A, 0), (B, 0)],
                [CAPS_FIELDS],
                [CURVE_FIELDS + (False,), CURVE_FIELDS + (False,)],
            ],
        )
        with pytest.raises(SnapshotError, match="differ in length"):
            decode_snapshot(data)

    def test_truncated_buffer(self) -> None:
        data = encode_snapshot(SNAPSHOT)
        with pytest.raises(SnapshotError):
            decode_snapshot(data[:100])

    def test_garbage(self) -> None:
        with pytest.raises(SnapshotError):
            decode_snapshot(b"\x01\x02\x03")

    def test_chunk_count_must_fit_64_bits(self) -> None:
        data = encode(SNAPSHOT_TYPES, [2**64, 0, 0, [], [], []])
        with pytest.raises(SnapshotError, match="64 bits"):
            decode_snapshot(data)

    def test_empty_lists(self) -> None:
        decoded = decode_snapshot(encode(SNAPSHOT_TYPES, [1, 0, 0, [], [], []]))
        assert decoded.strategy_count == 0


class TestEncodeResult:
    def test_accepted_plan_is_flattened(self) -> None:
        result = AllocationResult(
            current_apr=5,
            new_apr=7,
            accepted=True,
            positions=[Position(B, 20), Position(A, 30)],
        )
        plan, new_apr, current_apr, accepted = decode(RESULT_TYPES, encode_result(result))
        assert list(plan) == [int(B, 16), 20, int(A, 16), 30]
        assert (new_apr, current_apr, accepted) == (7, 5, True)

    def test_rejected_plan_is_empty(self) -> None:
        result = AllocationResult(
            current_apr=7,
            new_apr=5,
            accepted=False,
            positions=[Position(A, 30)],
        )
        plan, new_apr, current_apr, accepted = decode(RESULT_TYPES, encode_result(result))
        assert list(plan) == []
        assert (new_apr, current_apr, accepted) == (5, 7, False)

    def test_address_word_layout(self) -> None:
        result = AllocationResult(current_apr=0, new_apr=1, accepted=True, positions=[Position(A, 1)])
        data = encode_result(result)
        # head (4 words) + array length word, then the left-padded address
        address_word = data[5 * 32 : 6 * 32]
        assert address_word == bytes(12) + bytes.fromhex(A[2:])
