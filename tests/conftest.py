# =============================================================================
# Pytest Configuration and Fixtures
# =============================================================================
# Shared fixtures for the figprint test suite.
#
# Most tests use tiny synthetic fonts: either FIGfont text built by
# build_font_text() (to exercise the parser) or FIGFont objects constructed
# directly from a few glyphs (to exercise the renderer).
# =============================================================================

import pytest

from figprint.core import FIGFont, SmushingRules, reset_default_font


def mark_rows(rows: list[str]) -> list[str]:
    """Add FIGfont end marks: "@" per row, "@@" on the glyph's last row."""
    return [f"{row}@" for row in rows[:-1]] + [f"{rows[-1]}@@"]


def build_font_text(
    glyphs: dict[str, list[str]] | None = None,
    *,
    height: int = 1,
    hard_blank: str = "$",
    old_layout: int = 0,
    print_direction: int | None = None,
    full_layout: int | None = None,
    comments: tuple[str, ...] = (),
    extra_lines: tuple[str, ...] = (),
) -> str:
    """
    Build the text of a FIGfont with all 95 required glyphs.

    Glyphs not given in `glyphs` are filled with their own character (the
    hard blank for space), repeated on every row.
    """
    glyphs = glyphs or {}
    tokens = [f"flf2a{hard_blank}", str(height), str(height), "10", str(old_layout), str(len(comments))]
    if print_direction is not None or full_layout is not None:
        tokens.append(str(print_direction or 0))
    if full_layout is not None:
        tokens.append(str(full_layout))

    lines = [" ".join(tokens), *comments]
    for code_point in range(32, 127):
        filler = hard_blank if code_point == 32 else chr(code_point)
        lines.extend(mark_rows(glyphs.get(chr(code_point), [filler] * height)))
    lines.extend(extra_lines)
    return "\n".join(lines) + "\n"


@pytest.fixture
def font_text():
    """Factory fixture for FIGfont source text (see build_font_text)."""
    return build_font_text


@pytest.fixture
def glyph_font():
    """
    Factory fixture for fonts built straight from a few glyphs.

    Usage:
        font = glyph_font({"A": "XX", "B": ["Y", "Y"]}, rules=SmushingRules.BIG_X)

    A glyph given as a string is a single row; the height is taken from
    the first glyph.
    """
    def make(
        glyphs: dict[str, str | list[str]],
        rules: SmushingRules = SmushingRules.NONE,
        hard_blank: str = "$",
        print_direction: int = 0,
    ) -> FIGFont:
        characters = {
            ord(char): (rows,) if isinstance(rows, str) else tuple(rows)
            for char, rows in glyphs.items()
        }
        height = len(next(iter(characters.values())))
        return FIGFont(
            height=height,
            characters=characters,
            hard_blank=hard_blank,
            print_direction=print_direction,
            smushing_rules=rules,
        )

    return make


@pytest.fixture
def fresh_default_font():
    """Reset the cached bundled font before and after the test."""
    reset_default_font()
    yield
    reset_default_font()
