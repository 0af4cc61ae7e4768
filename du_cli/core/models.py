"""Data model: stat records, the walked tree, run options."""
from __future__ import annotations

import os
import stat as statmod
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

LinkIdentity = Tuple[int, int]  # (st_dev, st_ino)


class Kind(Enum):
    FILE = "file"
    DIRECTORY = "directory"
    OTHER = "other"


class Mode(Enum):
    """Output mode. Each member carries (emit_dirs, emit_files)."""

    SUMMARY = (False, False)
    DEFAULT = (True, False)
    ALL = (True, True)

    @property
    def emit_dirs(self) -> bool:
        return self.value[0]

    @property
    def emit_files(self) -> bool:
        return self.value[1]


class LinkPolicy(Enum):
    PHYSICAL = "P"
    COMMAND_LINE = "H"
    LOGICAL = "L"


@dataclass(frozen=True)
class StatRecord:
    dev: int
    ino: int
    size: int
    blocks: Optional[int]
    path: str
    kind: Kind

    @classmethod
    def from_stat(cls, path: str, st: os.stat_result) -> "StatRecord":
        if statmod.S_ISDIR(st.st_mode):
            kind = Kind.DIRECTORY
        elif statmod.S_ISREG(st.st_mode):
            kind = Kind.FILE
        else:
            kind = Kind.OTHER
        return cls(
            dev=st.st_dev,
            ino=st.st_ino,
            size=st.st_size,
            blocks=getattr(st, "st_blocks", None),
            path=path,
            kind=kind,
        )

    @property
    def identity(self) -> LinkIdentity:
        return (self.dev, self.ino)

    @property
    def is_dir(self) -> bool:
        return self.kind is Kind.DIRECTORY


@dataclass
class FileNode:
    record: StatRecord


@dataclass
class DirNode:
    record: StatRecord
    children: Dict[str, "TreeNode"] = field(default_factory=dict)


TreeNode = Union[FileNode, DirNode]


@dataclass(frozen=True)
class Options:
    paths: List[str]
    mode: Mode = Mode.DEFAULT
    link_policy: LinkPolicy = LinkPolicy.PHYSICAL
    one_file_system: bool = False
    block_size: int = 1024
    grand_total: bool = False
