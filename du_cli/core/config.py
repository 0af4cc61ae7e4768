#!/usr/bin/env python3
"""Configuration for du-cli: config file, environment, flag validation."""
from __future__ import annotations

import json
import os
from typing import Any, Iterable, Mapping

from .constants import (
    CONFIG_PATHS,
    DEFAULT_BLOCK_SIZE,
    MAX_BLOCK_SIZE,
    POSIX_BLOCK_SIZE,
    POSIX_ENV_VAR,
)
from .errors import ConfigurationError, UsageError
from .models import LinkPolicy, Mode, Options

DEFAULTS: dict[str, Any] = {
    "block_size": DEFAULT_BLOCK_SIZE,
    "grand_total": False,
    "one_file_system": False,
}

VALID_KEYS = frozenset(DEFAULTS.keys())


def config_exists(paths: Iterable[str] | None = None) -> bool:
    """True if any known config file exists."""
    for p in paths if paths is not None else CONFIG_PATHS:
        if os.path.isfile(p):
            return True
    return False


def _valid_block_size(v: Any) -> bool:
    if isinstance(v, bool) or not isinstance(v, int):
        return False
    return 0 < v <= MAX_BLOCK_SIZE and v % POSIX_BLOCK_SIZE == 0


def load(paths: Iterable[str] | None = None) -> dict[str, Any]:
    """Load config from first existing file. Returns defaults + overrides."""
    out = dict(DEFAULTS)
    for p in paths if paths is not None else CONFIG_PATHS:
        if not os.path.isfile(p):
            continue
        try:
            with open(p, "r", encoding="utf-8") as f:
                raw = json.load(f)
            if not isinstance(raw, dict):
                continue
            for k, v in raw.items():
                if k not in VALID_KEYS:
                    continue
                if k == "block_size" and _valid_block_size(v):
                    out[k] = v
                elif k in ("grand_total", "one_file_system") and isinstance(v, bool):
                    out[k] = v
            return out
        except (OSError, json.JSONDecodeError):
            continue
    return out


def reporting_block_size(
    env: Mapping[str, str],
    force_kilobytes: bool = False,
    cfg: Mapping[str, Any] | None = None,
) -> int:
    """Config default, then POSIXLY_CORRECT (512), then -k (1024)."""
    size = (cfg or DEFAULTS).get("block_size", DEFAULT_BLOCK_SIZE)
    if POSIX_ENV_VAR in env:
        size = POSIX_BLOCK_SIZE
    if force_kilobytes:
        size = DEFAULT_BLOCK_SIZE
    if not _valid_block_size(size):
        raise ConfigurationError(f"unexpected block size: {size}")
    return size


def build_options(args: Any, env: Mapping[str, str], cfg: Mapping[str, Any] | None = None) -> Options:
    """Turn parsed command-line flags into Options. Rejects -a with -s."""
    cfg = cfg if cfg is not None else DEFAULTS
    if args.a and args.s:
        raise UsageError("the -a and -s options are mutually exclusive")
    if args.a:
        mode = Mode.ALL
    elif args.s:
        mode = Mode.SUMMARY
    else:
        mode = Mode.DEFAULT
    return Options(
        paths=list(args.files) or ["."],
        mode=mode,
        link_policy=args.link_policy or LinkPolicy.PHYSICAL,
        one_file_system=bool(args.x or cfg.get("one_file_system")),
        block_size=reporting_block_size(env, args.k, cfg),
        grand_total=bool(args.c or cfg.get("grand_total")),
    )
