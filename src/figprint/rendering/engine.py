# =============================================================================
# Rendering Engine
# =============================================================================
# Turns text into FIGlet banners.
#
# For every input character the glyph's rows are appended to the output
# rows. Between two glyphs the engine works out how far the new glyph can
# slide left into the previous one (the overlap), takes the smallest overlap
# over all rows so the glyph stays vertically aligned, and merges the
# overlapping columns with the smushing rules of the font.
#
# Optional features:
#   - ANSI color pass-through: escape sequences in the input are removed
#     before lookup and re-emitted in front of the matching glyph columns
#   - Paragraph mode: each input line becomes its own block of rows
#   - Right-to-left fonts (print direction 1)
# =============================================================================

import os

from figprint.core import FIGFont, LayoutMode, SmushingRules, get_default_font
from figprint.core.smushing import HIERARCHY_CHARACTERS, OPPOSITE_PAIRS
from figprint.rendering.ansi import ANSI_RESET, split_ansi

SLASHES = frozenset("/\\")


class _Row:
    """One output row: plain cells plus escape codes keyed by column."""

    __slots__ = ("cells", "codes")

    def __init__(self) -> None:
        self.cells: list[str] = []
        self.codes: dict[int, str] = {}

    @property
    def text(self) -> str:
        return "".join(self.cells)

    def mark(self, code: str) -> None:
        """Emit `code` before whatever column is appended next."""
        if code:
            position = len(self.cells)
            self.codes[position] = self.codes.get(position, "") + code

    def finish(self, hard_blank: str, suffix: str) -> str:
        parts = []
        for column, cell in enumerate(self.cells):
            if column in self.codes:
                parts.append(self.codes[column])
            parts.append(" " if cell == hard_blank else cell)
        parts.append(self.codes.get(len(self.cells), ""))
        parts.append(suffix)
        return "".join(parts)


class RenderEngine:
    """
    Renders text with a FIGfont.

    The engine holds a font plus render settings. It keeps no state between
    calls, so one instance can render any number of strings.

    Usage:
        >>> engine = RenderEngine(font, mode=LayoutMode.KERNING, line_separator="\\n")
        >>> print(engine.render("Hello"))

    Attributes:
        font: The FIGfont to render with.
        mode: Layout mode between glyphs.
        line_separator: Joins the output rows.
        use_ansi_colors: Pass color escape sequences through to the output.
        paragraph_mode: Render each input line as a separate block.
    """

    def __init__(
        self,
        font: FIGFont | None = None,
        mode: LayoutMode = LayoutMode.DEFAULT,
        line_separator: str | None = None,
        use_ansi_colors: bool = False,
        paragraph_mode: bool = True,
    ) -> None:
        """
        Initialize the rendering engine.

        Args:
            font: Font to render with. Defaults to the bundled font.
            mode: Layout mode (smushing unless told otherwise).
            line_separator: Row separator. Defaults to os.linesep.
            use_ansi_colors: Keep color escape sequences from the input.
            paragraph_mode: Split input on newlines into separate blocks.
        """
        self.font = font if font is not None else get_default_font()
        self.mode = mode
        self.line_separator = os.linesep if line_separator is None else line_separator
        self.use_ansi_colors = use_ansi_colors
        self.paragraph_mode = paragraph_mode

    def render(
        self,
        text: str | None,
        mode: LayoutMode | None = None,
        line_separator: str | None = None,
        use_ansi_colors: bool | None = None,
    ) -> str:
        """
        Render text as a banner.

        Arguments left as None fall back to the engine's settings.
        Characters the font doesn't define are skipped.

        Returns:
            The rendered rows joined with the line separator, or "" for
            empty input.
        """
        if not text:
            return ""

        mode = self.mode if mode is None else mode
        line_separator = self.line_separator if line_separator is None else line_separator
        use_ansi_colors = self.use_ansi_colors if use_ansi_colors is None else use_ansi_colors

        if not self.paragraph_mode:
            text = text.replace("\r", "").replace("\n", " ")
            return line_separator.join(self._render_line(text, mode, use_ansi_colors))

        rows: list[str] = []
        for paragraph in text.replace("\r\n", "\n").split("\n"):
            if not paragraph.strip():
                # Blank input line -> one glyph-height of empty rows
                rows.extend([""] * self.font.height)
            else:
                rows.extend(self._render_line(paragraph, mode, use_ansi_colors))

        return line_separator.join(rows)

    # -------------------------------------------------------------------------
    # Layout
    # -------------------------------------------------------------------------

    def _render_line(self, text: str, mode: LayoutMode, use_ansi_colors: bool) -> list[str]:
        """Render one line of input into `height` rows ([] if nothing renders)."""
        font = self.font

        if use_ansi_colors:
            text, colors = split_ansi(text, accept=lambda char: ord(char) in font)
        else:
            text, colors = "".join(char for char in text if ord(char) in font), {}

        if font.print_direction == 1:
            length = len(text)
            text = text[::-1]
            colors = {length - index - 1: code for index, code in colors.items()}

        if not text:
            return []

        rows = [_Row() for _ in range(font.height)]

        for index, char in enumerate(text):
            glyph = font.characters[ord(char)]
            color = colors.get(index, "")

            if index == 0:
                for row, part in zip(rows, glyph):
                    row.mark(color)
                    row.cells.extend(part)
                continue

            # Same overlap on every row keeps the glyph aligned
            overlap = min(
                self.calculate_overlap(row.text, part, mode)
                for row, part in zip(rows, glyph)
            )

            for row, part in zip(rows, glyph):
                if overlap == 0:
                    row.mark(color)
                    row.cells.extend(part)
                else:
                    self._smush_row(row, part, overlap, mode, color)

        suffix = ANSI_RESET if use_ansi_colors else ""
        return [row.finish(font.hard_blank, suffix) for row in rows]

    def _smush_row(self, row: _Row, part: str, overlap: int, mode: LayoutMode, color: str) -> None:
        """Merge the last `overlap` cells of `row` with the start of `part`."""
        start = len(row.cells) - overlap
        tail = row.cells[start:]
        del row.cells[start:]
        head = part[:overlap]

        if mode is LayoutMode.KERNING:
            # Kerning only closes blank gaps: the new glyph shows through
            # wherever the existing cell is blank. Unlike appending the new
            # row as-is, this never erases what is already drawn.
            merged = [new if old.isspace() else old for old, new in zip(tail, head)]
        else:
            merged = [self.smush_characters(old, new, mode) for old, new in zip(tail, head)]

        row.cells.extend(merged)
        row.mark(color)
        row.cells.extend(part[overlap:])

    def calculate_overlap(self, line: str, glyph_row: str, mode: LayoutMode) -> int:
        """
        Work out how many columns `glyph_row` can slide into `line`.

        Args:
            line: The output row built so far.
            glyph_row: The matching row of the next glyph.
            mode: Layout mode.

        Returns:
            The overlap in columns, at most the width of the shorter of
            `line` and `glyph_row`.
        """
        if mode is LayoutMode.FULL_SIZE:
            return 0

        width = len(glyph_row)
        # The glyph can never slide past the start of the row
        limit = min(width, len(line))
        end_of_line = line[len(line) - limit:]

        left = end_of_line.rstrip()
        right_index = width - len(glyph_row.lstrip())

        # One side is all blank: nothing stops the glyph
        if not left or right_index == width:
            return limit

        left_index = len(left) - 1
        c1, c2 = left[left_index], glyph_row[right_index]

        if not self.can_smush(c1, c2, mode):
            return 0

        overlap = min(max(len(end_of_line) - left_index, right_index) + 1, limit)

        # Opposing slashes need one extra column to read as a diagonal
        if c1 != c2 and c1 in SLASHES and c2 in SLASHES:
            overlap = max(overlap - 1, 0)

        return overlap

    # -------------------------------------------------------------------------
    # Smushing Rules
    # -------------------------------------------------------------------------

    def can_smush(self, c1: str, c2: str, mode: LayoutMode) -> bool:
        """
        Decide whether two touching characters may be merged.

        Rules are checked in precedence order; the first match decides.
        """
        if mode is LayoutMode.KERNING:
            return c1 == " " and c2 == " "

        if mode is LayoutMode.FULL_SIZE:
            return False

        font = self.font
        hard_blank = font.hard_blank

        if c1 == hard_blank or c2 == hard_blank:
            return font.has_smushing_rule(SmushingRules.HARD_BLANK)

        # Spaces never block merging
        if c1 == " " or c2 == " ":
            return True

        if font.has_smushing_rule(SmushingRules.EQUAL_CHARACTER) and c1 == c2:
            return True

        if font.has_smushing_rule(SmushingRules.UNDERSCORE):
            if (c1 == "_" and c2 in HIERARCHY_CHARACTERS) or (c2 == "_" and c1 in HIERARCHY_CHARACTERS):
                return True

        if font.has_smushing_rule(SmushingRules.HIERARCHY):
            if c1 in HIERARCHY_CHARACTERS and c2 in HIERARCHY_CHARACTERS:
                return True

        if font.has_smushing_rule(SmushingRules.OPPOSITE_PAIR):
            if OPPOSITE_PAIRS.get(c1) == c2:
                return True

        if font.has_smushing_rule(SmushingRules.BIG_X):
            if c1 + c2 in ("/\\", "\\/", "><"):
                return True

        return False

    def smush_characters(self, c1: str, c2: str, mode: LayoutMode) -> str:
        """
        Merge two overlapping characters into one.

        Follows the same precedence as can_smush(); if no rule applies the
        existing character (c1) is kept.
        """
        if mode is LayoutMode.KERNING:
            return c1

        if c1 == " " and c2 == " ":
            return " "
        if c1 == " ":
            return c2
        if c2 == " ":
            return c1

        font = self.font
        hard_blank = font.hard_blank

        if c1 == hard_blank or c2 == hard_blank:
            if font.has_smushing_rule(SmushingRules.HARD_BLANK):
                return hard_blank
            return c1

        if font.has_smushing_rule(SmushingRules.EQUAL_CHARACTER) and c1 == c2:
            return c1

        if font.has_smushing_rule(SmushingRules.UNDERSCORE):
            if c1 == "_" and c2 in HIERARCHY_CHARACTERS:
                return c2
            if c2 == "_" and c1 in HIERARCHY_CHARACTERS:
                return c1

        if font.has_smushing_rule(SmushingRules.HIERARCHY):
            rank1 = HIERARCHY_CHARACTERS.find(c1)
            rank2 = HIERARCHY_CHARACTERS.find(c2)
            if rank1 >= 0 and rank2 >= 0:
                return HIERARCHY_CHARACTERS[max(rank1, rank2)]

        if font.has_smushing_rule(SmushingRules.OPPOSITE_PAIR):
            if OPPOSITE_PAIRS.get(c1) == c2:
                return "|"

        if font.has_smushing_rule(SmushingRules.BIG_X):
            if c1 + c2 in ("/\\", "\\/"):
                return "|"
            if c1 + c2 == "><":
                return "X"

        return c1


def render(
    text: str | None,
    font: FIGFont | None = None,
    mode: LayoutMode = LayoutMode.DEFAULT,
    line_separator: str | None = None,
    use_ansi_colors: bool = False,
    paragraph_mode: bool = True,
) -> str:
    """
    Render text in one call.

    Example:
        >>> print(render("Hi", line_separator="\\n"))
    """
    if not text:
        return ""

    engine = RenderEngine(font, mode, line_separator, use_ansi_colors, paragraph_mode)
    return engine.render(text)
