#!/usr/bin/env python3
"""Block accounting: scale factor, hard-link tracking, per-record block counts."""
import logging
import math
import os
from fractions import Fraction
from typing import Optional, Set

from ..core.constants import STAT_BLOCK_UNIT
from ..core.errors import ConfigurationError
from ..core.models import LinkIdentity, StatRecord
from ..utils.disk import ceil_div

logger = logging.getLogger(__name__)


def compute_scale(native_block_size: Optional[int], reporting_block_size: int) -> Fraction:
    """
    Factor between the device's native block unit and the reporting unit.

    Always >= 1: native / reporting when native units are coarser,
    reporting / native otherwise.
    """
    if not native_block_size or native_block_size <= 0:
        raise ConfigurationError(f"cannot determine native block size: {native_block_size!r}")
    if reporting_block_size <= 0:
        raise ConfigurationError(f"unexpected block size: {reporting_block_size}")
    if native_block_size > reporting_block_size:
        return Fraction(native_block_size, reporting_block_size)
    return Fraction(reporting_block_size, native_block_size)


def probe_native_block_size(path: str = os.sep) -> int:
    """Native block unit as exposed by stat on this platform."""
    try:
        st = os.stat(path)
    except OSError as e:
        raise ConfigurationError(f"cannot determine native block size from '{path}': {e.strerror}") from e
    if getattr(st, "st_blocks", None) is not None:
        return STAT_BLOCK_UNIT
    blksize = getattr(st, "st_blksize", None)
    if blksize:
        return blksize
    raise ConfigurationError("cannot determine native block size: stat exposes no block information")


class LinkTracker:
    """Set of (device, inode) identities already charged in this run."""

    def __init__(self):
        self._seen: Set[LinkIdentity] = set()

    def __len__(self):
        return len(self._seen)

    def seen(self, identity: LinkIdentity) -> bool:
        return identity in self._seen

    def mark_seen(self, identity: LinkIdentity) -> None:
        self._seen.add(identity)

    def charge_once(self, identity: LinkIdentity) -> bool:
        """True the first time identity is presented, False afterwards."""
        if identity in self._seen:
            return False
        self._seen.add(identity)
        return True


class BlockAccountant:
    def __init__(self, scale: Fraction, reporting_block_size: int, tracker: Optional[LinkTracker] = None):
        self.scale = scale
        self.reporting_block_size = reporting_block_size
        self.tracker = tracker if tracker is not None else LinkTracker()

    @classmethod
    def for_device(cls, native_block_size: int, reporting_block_size: int) -> "BlockAccountant":
        scale = compute_scale(native_block_size, reporting_block_size)
        logger.debug("block scale %s (native %d, reporting %d)", scale, native_block_size, reporting_block_size)
        return cls(scale, reporting_block_size)

    def blocks_for(self, record: StatRecord) -> int:
        """Blocks charged to record; 0 if its storage was already counted."""
        if not self.tracker.charge_once(record.identity):
            logger.debug("already counted: %s %s", record.identity, record.path)
            return 0
        if record.blocks is not None:
            return math.floor(Fraction(record.blocks) / self.scale)
        # no st_blocks: round the byte size up
        return ceil_div(record.size, self.reporting_block_size)
