# =============================================================================
# Layout Mode
# =============================================================================
# How much adjacent glyphs are merged, from least to most:
#   - FULL_SIZE: glyphs are simply concatenated
#   - KERNING:   glyphs are moved together until they touch
#   - SMUSHING:  glyphs overlap and touching characters are merged
# =============================================================================

from enum import Enum


class LayoutMode(Enum):
    """Layout strategy applied between adjacent glyphs."""
    FULL_SIZE = -1
    KERNING = 0
    SMUSHING = 1

    # Alias: members with an equal value resolve to the first definition
    DEFAULT = 1

    @classmethod
    def from_name(cls, name: str) -> "LayoutMode":
        """
        Look up a layout mode by its config/CLI spelling.

        Args:
            name: One of "full", "fullsize", "full_size", "kerning", "kern",
                  "smushing", "smush" or "default" (case-insensitive).

        Returns:
            The matching LayoutMode.

        Raises:
            ValueError: If the name is not recognized.
        """
        key = name.strip().lower().replace("-", "_")
        try:
            return _NAMES[key]
        except KeyError:
            raise ValueError(f"Unknown layout mode: {name!r}") from None


_NAMES = {
    "full": LayoutMode.FULL_SIZE,
    "fullsize": LayoutMode.FULL_SIZE,
    "full_size": LayoutMode.FULL_SIZE,
    "kerning": LayoutMode.KERNING,
    "kern": LayoutMode.KERNING,
    "smushing": LayoutMode.SMUSHING,
    "smush": LayoutMode.SMUSHING,
    "default": LayoutMode.DEFAULT,
}
