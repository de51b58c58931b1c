"""Snapshot provider reading an ABI-encoded snapshot from a file or stdin."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from src.data.abi_codec import decode_snapshot
from src.data.interfaces import AllocationSnapshot, SnapshotError, SnapshotProvider

logger = logging.getLogger(__name__)

STDIN = "-"


def parse_payload(raw: bytes) -> bytes:
    """Accept raw ABI bytes or ``0x``-prefixed hex text."""
    text = raw.strip()
    if text[:2] in (b"0x", b"0X"):
        try:
            return bytes.fromhex(text[2:].decode("ascii"))
        except (UnicodeDecodeError, ValueError) as exc:
            raise SnapshotError(f"Invalid hex snapshot: {exc}") from exc
    return raw


class AbiSnapshotProvider(SnapshotProvider):
    """Reads the whole input before decoding it.

    Parameters
    ----------
    source : str | Path
        File path, or ``"-"`` for standard input.
    """

    def __init__(self, source: str | Path) -> None:
        self.source = source

    def _read(self) -> bytes:
        if str(self.source) == STDIN:
            return sys.stdin.buffer.read()
        try:
            return Path(self.source).read_bytes()
        except OSError as exc:
            raise SnapshotError(f"Cannot read snapshot from {self.source}: {exc}") from exc

    def get_snapshot(self) -> AllocationSnapshot:
        payload = parse_payload(self._read())
        logger.debug("Read %d snapshot bytes from %s", len(payload), self.source)
        return decode_snapshot(payload)
