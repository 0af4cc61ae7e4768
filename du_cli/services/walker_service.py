#!/usr/bin/env python3
"""Directory walk: stat every reachable entry and build the record tree."""
import logging
import os
from typing import FrozenSet, List, Optional

from ..core.errors import EntryAccessError, TraversalSetupError
from ..core.models import DirNode, FileNode, LinkIdentity, LinkPolicy, StatRecord, TreeNode

logger = logging.getLogger(__name__)


class Walker:
    """
    Builds a FileNode/DirNode tree for one top-level argument.

    Symlinks are followed according to link_policy; with one_file_system,
    entries on another device than the argument are left out. Entries that
    cannot be stat'ed are reported and left out; directories that cannot be
    listed are kept without children.
    """

    def __init__(self, link_policy: LinkPolicy = LinkPolicy.PHYSICAL, one_file_system: bool = False):
        self.link_policy = link_policy
        self.one_file_system = one_file_system
        self.errors = 0
        self._start_dev: Optional[int] = None

    def _stat(self, path: str, top: bool) -> os.stat_result:
        follow = self.link_policy is LinkPolicy.LOGICAL or (top and self.link_policy is LinkPolicy.COMMAND_LINE)
        return os.stat(path, follow_symlinks=follow)

    def _report(self, err: EntryAccessError) -> None:
        self.errors += 1
        logger.error("%s", err)

    def build(self, path: str) -> TreeNode:
        """Tree rooted at path. Raises TraversalSetupError if path cannot be stat'ed."""
        try:
            st = self._stat(path, top=True)
        except OSError as e:
            raise TraversalSetupError(path, e.strerror or str(e)) from e
        record = StatRecord.from_stat(path, st)
        self._start_dev = record.dev
        if not record.is_dir:
            return FileNode(record)
        root = DirNode(record)
        # (directory, identities of it and its ancestors) awaiting a listing
        stack = [(root, frozenset({record.identity}))]
        while stack:
            node, ancestors = stack.pop()
            for name in self._list(node.record):
                child = self._visit(os.path.join(node.record.path, name), ancestors)
                if child is None:
                    continue
                node.children[name] = child
                if isinstance(child, DirNode):
                    stack.append((child, ancestors | {child.record.identity}))
        return root

    def _list(self, record: StatRecord) -> List[str]:
        try:
            with os.scandir(record.path) as it:
                return [entry.name for entry in it]
        except OSError as e:
            self._report(EntryAccessError(record.path, e.strerror or str(e)))
            return []

    def _visit(self, path: str, ancestors: FrozenSet[LinkIdentity]) -> Optional[TreeNode]:
        try:
            st = self._stat(path, top=False)
        except OSError as e:
            self._report(EntryAccessError(path, e.strerror or str(e)))
            return None
        record = StatRecord.from_stat(path, st)
        if self.one_file_system and record.dev != self._start_dev:
            logger.debug("skipping %s: different device", path)
            return None
        if not record.is_dir:
            return FileNode(record)
        if record.identity in ancestors:
            # only reachable by following symlinks
            logger.warning("%s: directory cycle, not descending", path)
            return None
        return DirNode(record)
