#!/usr/bin/env python3
"""Post-order block sums over the walked tree, and the per-run driver."""
import logging
import sys
from typing import Iterable, List, Optional, TextIO

from ..core.errors import TraversalSetupError
from ..core.models import DirNode, Mode, Options, TreeNode
from ..utils.disk import format_usage
from .blocks_service import BlockAccountant, probe_native_block_size
from .walker_service import Walker

logger = logging.getLogger(__name__)


class TreeAggregator:
    """
    Sums BlockAccountant results over a tree and prints usage lines.

    The mode decides which nodes print; the returned total is the same in
    every mode. The top-level node always prints exactly once, after its
    children (post-order).
    """

    def __init__(self, accountant: BlockAccountant, mode: Mode = Mode.DEFAULT, out: Optional[TextIO] = None):
        self.accountant = accountant
        self.mode = mode
        self.out = out

    def emit(self, total: int, path: str) -> None:
        print(format_usage(total, path), file=self.out or sys.stdout)

    def aggregate(self, node: TreeNode, top: bool = False) -> int:
        """Post-order sum over node, without recursion."""
        totals: List[int] = []
        stack = [(node, top, False)]
        while stack:
            current, is_top, expanded = stack.pop()
            if isinstance(current, DirNode):
                if not expanded:
                    stack.append((current, is_top, True))
                    stack.extend((child, False, False) for child in reversed(list(current.children.values())))
                    continue
                total = 0
                if current.children:
                    total = sum(totals[-len(current.children):])
                    del totals[-len(current.children):]
                total += self.accountant.blocks_for(current.record)
                shown = self.mode.emit_dirs
            else:
                total = self.accountant.blocks_for(current.record)
                shown = self.mode.emit_files
            if is_top or shown:
                self.emit(total, current.record.path)
            totals.append(total)
        return totals.pop()


class DiskUsageSession:
    """One du run: a single LinkTracker shared by every argument."""

    def __init__(self, options: Options, out: Optional[TextIO] = None,
                 accountant: Optional[BlockAccountant] = None, walker: Optional[Walker] = None):
        self.options = options
        if accountant is None:
            accountant = BlockAccountant.for_device(probe_native_block_size(), options.block_size)
        self.accountant = accountant
        self.walker = walker or Walker(options.link_policy, options.one_file_system)
        self.aggregator = TreeAggregator(accountant, options.mode, out)
        self.grand_total = 0
        self.failed_arguments = 0

    @property
    def entry_errors(self) -> int:
        return self.walker.errors

    def process(self, path: str) -> int:
        """Walk and report one top-level argument. Returns its total (0 on failure)."""
        try:
            tree = self.walker.build(path)
        except TraversalSetupError as e:
            self.failed_arguments += 1
            logger.error("%s", e)
            return 0
        return self.aggregate(tree)

    def aggregate(self, tree: TreeNode) -> int:
        total = self.aggregator.aggregate(tree, top=True)
        self.grand_total += total
        return total

    def run(self, paths: Optional[Iterable[str]] = None) -> int:
        """Process every argument in order; returns the grand total."""
        for path in paths if paths is not None else self.options.paths:
            self.process(path)
        if self.options.grand_total:
            self.aggregator.emit(self.grand_total, "total")
        return self.grand_total
