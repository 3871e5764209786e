"""Helpers for building directory trees in tests."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

# Nested mapping of names to either a byte count (file) or another mapping (directory)
type TreeSpec = Mapping[str, int | TreeSpec]

RUNNING_AS_ROOT = hasattr(os, "geteuid") and os.geteuid() == 0


def build_tree(root: Path, spec: TreeSpec) -> Path:
    """Create files and directories under root as described by spec."""
    root.mkdir(parents=True, exist_ok=True)
    for name, value in spec.items():
        if isinstance(value, int):
            _ = (root / name).write_bytes(b"x" * value)
        else:
            _ = build_tree(root / name, value)
    return root
