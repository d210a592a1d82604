# =============================================================================
# Bundled Default Font
# =============================================================================
# figprint ships one small FIGfont inside the package so it can render
# without any font directory configured. It is parsed on first use and the
# same instance is handed out afterwards.
#
# Callers that have their own font pass it explicitly; this is only the
# fallback used when nothing else is configured.
# =============================================================================

import logging
import threading
from importlib import resources

from figprint.core.font import FIGFont

logger = logging.getLogger(__name__)

DEFAULT_FONT_NAME = "mini"

_default_font: FIGFont | None = None
_lock = threading.Lock()


def get_default_font() -> FIGFont:
    """
    Returns the bundled default font, loading it on the first call.

    The font is fully parsed before it is published, so concurrent callers
    either wait for the first load or get the finished instance.
    """
    global _default_font

    if _default_font is None:
        with _lock:
            if _default_font is None:
                resource = resources.files("figprint") / "fonts" / f"{DEFAULT_FONT_NAME}.flf"
                logger.info(f"Loading bundled font {DEFAULT_FONT_NAME!r}")
                _default_font = FIGFont.from_bytes(resource.read_bytes())

    return _default_font


def reset_default_font() -> None:
    """Forget the cached default font (the next call reloads it)."""
    global _default_font

    with _lock:
        _default_font = None
