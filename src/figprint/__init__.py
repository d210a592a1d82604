# =============================================================================
# figprint: FIGlet Banners from Plain Text
# =============================================================================
#
#   "Because every module deserves a banner."
#
# figprint renders plain text as large multi-line "ASCII-art" banners using
# FIGfonts, merging adjacent glyphs with FIGlet's smushing rules.
#
# Features:
#   - FIGfont v2 parser (plain or zipped .flf files)
#   - Full size, kerning and smushing layouts
#   - ANSI color pass-through
#   - Paragraph mode and right-to-left fonts
#   - Bundled default font, CLI and live Textual preview
#
# =============================================================================

__version__ = "0.1.0"
__app_name__ = "figprint"

from figprint.core import (
    FIGFont,
    FormatError,
    LayoutMode,
    SmushingRules,
    get_default_font,
)
from figprint.rendering import RenderEngine, render

__all__ = [
    "FIGFont",
    "FormatError",
    "LayoutMode",
    "RenderEngine",
    "SmushingRules",
    "get_default_font",
    "render",
    "__version__",
    "__app_name__",
]
