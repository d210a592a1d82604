# =============================================================================
# figprint Core Module
# =============================================================================
# This module contains the FIGfont model and the small value types the
# renderer is built on. Everything here is pure Python with no external
# dependencies, so it can be imported anywhere (CLI, preview UI, tests)
# without dragging in Textual.
#
# The core models represent the fundamental concepts of FIGlet rendering:
#   - FIGFont: A parsed font (header metadata + glyph table)
#   - SmushingRules: The bitmask of enabled horizontal smushing rules
#   - LayoutMode: How glyphs are merged (full size, kerning, smushing)
# =============================================================================

from figprint.core.default_font import get_default_font, reset_default_font
from figprint.core.font import FIGFont, FormatError
from figprint.core.layout import LayoutMode
from figprint.core.smushing import SmushingRules, derive_smushing_rules

__all__ = [
    "FIGFont",
    "FormatError",
    "LayoutMode",
    "SmushingRules",
    "derive_smushing_rules",
    "get_default_font",
    "reset_default_font",
]
