# =============================================================================
# figprint UI Module
# =============================================================================
# Interactive banner preview built with Textual.
# =============================================================================

from figprint.ui.preview import PreviewApp

__all__ = ["PreviewApp"]
