"""Diff subpackage (Layer 1 -- pure string production, no internal dependencies)."""

from altestkit.diff.lines import VISIBLE_GLYPHS, Line, split_lines, visualize
from altestkit.diff.renderer import (
    BLOCK_SEPARATOR,
    LEGEND,
    ChangeKind,
    DiffBlock,
    DiffEntry,
    align,
    compute_diff,
    render_blocks,
    render_diff,
)

__all__ = [
    "VISIBLE_GLYPHS",
    "Line",
    "split_lines",
    "visualize",
    "BLOCK_SEPARATOR",
    "LEGEND",
    "ChangeKind",
    "DiffEntry",
    "DiffBlock",
    "align",
    "compute_diff",
    "render_blocks",
    "render_diff",
]
