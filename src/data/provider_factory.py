"""Factory for creating the appropriate SnapshotProvider."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from src.data.abi_provider import AbiSnapshotProvider
from src.data.constants import ENV_INPUT
from src.data.interfaces import SnapshotProvider
from src.data.static_params import StaticSnapshotProvider

logger = logging.getLogger(__name__)

STATIC = "static"


def create_provider(source: str | Path | None = None) -> SnapshotProvider:
    """Create a snapshot provider for ``source``.

    Parameters
    ----------
    source : str | Path | None
        ``"static"`` for the bundled sample, ``"-"`` for stdin, or a file
        path.  Falls back to the ``ALLOCATOR_INPUT`` environment variable
        when not supplied.

    Returns
    -------
    SnapshotProvider
        ``StaticSnapshotProvider`` when no source is configured, otherwise
        ``AbiSnapshotProvider``.
    """
    resolved = source if source is not None else os.environ.get(ENV_INPUT)
    if not resolved or str(resolved) == STATIC:
        logger.info("Using the static sample snapshot")
        return StaticSnapshotProvider()
    return AbiSnapshotProvider(resolved)
