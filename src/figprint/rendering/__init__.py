# =============================================================================
# Rendering Module
# =============================================================================
# The FIGlet layout engine: turns text plus a FIGFont into banner rows.
#
# The rendering pipeline:
#   1. Strip ANSI escape sequences (when color pass-through is on)
#   2. Drop characters the font doesn't define
#   3. Place glyphs left to right, overlapping per layout mode
#   4. Merge overlapping columns with the font's smushing rules
#   5. Replace hard blanks with spaces and join the rows
# =============================================================================

from figprint.rendering.ansi import ANSI_RESET, AnsiScanner, split_ansi
from figprint.rendering.engine import RenderEngine, render

__all__ = ["ANSI_RESET", "AnsiScanner", "RenderEngine", "render", "split_ansi"]
