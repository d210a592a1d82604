# =============================================================================
# FIGfont Model
# =============================================================================
# Parses the FIGfont v2 text format into an immutable FIGFont.
#
# File layout:
#
#   flf2a$ 4 3 8 15 3 0 31        <- header: signature + hard blank, then
#   comment line 1                   height, baseline, max length,
#   comment line 2                   old layout, comment count,
#   comment line 3                   [print direction, full layout]
#   $$@                           <- glyph rows for code points 32..126,
#   $$@                              `height` rows each; a row ends in "@",
#   ...                              the last row of a glyph in "@@"
#   196  LATIN CAPITAL ...        <- optional extra glyphs, each preceded
#   o  o@                            by its code point (and a comment)
#   ...
#
# Fonts may also arrive zipped (the usual ".flz" packaging); the first
# archive entry is the font.
# =============================================================================

import io
import logging
import re
import zipfile
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import BinaryIO, Iterable, Mapping

from figprint.core.smushing import SmushingRules, derive_smushing_rules

logger = logging.getLogger(__name__)


SIGNATURE = "flf2a"

# Code points every FIGfont must define, in file order
REQUIRED_CODE_POINTS = range(32, 127)

ZIP_MAGIC = b"PK"

# Leading integer of an optional glyph's code-point line
_CODE_POINT_PATTERN = re.compile(r"0[xX][0-9a-fA-F]+|[0-9]+")

# Stripped from the end of every glyph row
_ROW_END_CHARACTERS = "@\r\n"


class FormatError(ValueError):
    """Raised when a FIGfont cannot be parsed."""
    pass


@dataclass(frozen=True)
class FIGFont:
    """
    A parsed FIGfont.

    Instances are read-only once constructed, so a single font can be
    shared by any number of renderers.

    Attributes:
        height: Number of rows in every glyph.
        characters: Glyph table, code point -> tuple of `height` rows.
                    Rows keep their own lengths; no padding is applied.
        hard_blank: Placeholder for an "occupied but blank" cell. Replaced
                    by a space only in final output.
        signature: The header's first token minus the hard blank.
        baseline: Rows from the top to the baseline (informational).
        max_length: Widest row in the file (informational).
        old_layout: Header old layout field.
        comment_lines: Number of comment lines declared by the header.
        print_direction: 0 = left to right, 1 = right to left.
        full_layout: Header full layout field (0 when absent).
        comments: The comment block, lines joined with "\\n".
        smushing_rules: Rule mask derived from the layout fields.

    Example:
        >>> font = FIGFont.from_file("fonts/small.flf")
        >>> font.height
        5
        >>> font.glyph(ord("A"))
        ('    _   ', '   /_\\  ', ...)
    """

    height: int
    characters: Mapping[int, tuple[str, ...]] = field(default_factory=dict)
    hard_blank: str = "$"
    signature: str = SIGNATURE
    baseline: int = 0
    max_length: int = 0
    old_layout: int = 0
    comment_lines: int = 0
    print_direction: int = 0
    full_layout: int = 0
    comments: str = ""
    smushing_rules: SmushingRules = SmushingRules.NONE

    def __post_init__(self) -> None:
        if self.height < 1:
            raise FormatError(f"Font height must be positive, got {self.height}")
        if len(self.hard_blank) != 1:
            raise FormatError(f"Hard blank must be one character, got {self.hard_blank!r}")

        glyphs: dict[int, tuple[str, ...]] = {}
        for code_point, rows in self.characters.items():
            rows = tuple(rows)
            if len(rows) != self.height:
                raise FormatError(
                    f"Glyph {code_point} has {len(rows)} rows, expected {self.height}"
                )
            glyphs[code_point] = rows

        # Frozen dataclass: bypass __setattr__ to install the read-only view
        object.__setattr__(self, "characters", MappingProxyType(glyphs))
        object.__setattr__(self, "smushing_rules", SmushingRules(self.smushing_rules))

    # -------------------------------------------------------------------------
    # Glyph Access
    # -------------------------------------------------------------------------

    def __contains__(self, code_point: object) -> bool:
        return code_point in self.characters

    def glyph(self, code_point: int) -> tuple[str, ...] | None:
        """Returns the rows for a code point, or None if the font lacks it."""
        return self.characters.get(code_point)

    def has_smushing_rule(self, rule: SmushingRules) -> bool:
        """Returns True if every bit of `rule` is enabled for this font."""
        return (self.smushing_rules & rule) == rule

    # -------------------------------------------------------------------------
    # Parsing
    # -------------------------------------------------------------------------

    @classmethod
    def from_text(cls, text: str) -> "FIGFont":
        """
        Parse a FIGfont from its text content.

        Lines are split on "\\n" only; stray "\\r" characters are removed
        when each line is trimmed.

        Raises:
            FormatError: If the content is not a valid FIGfont.
        """
        return cls.from_lines(text.split("\n"))

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "FIGFont":
        """
        Parse a FIGfont from a sequence of lines.

        Args:
            lines: The font file's lines, without their "\\n" terminators.

        Returns:
            The parsed font.

        Raises:
            FormatError: If the header is malformed, a header field is not
                         numeric, or the file is too short for the 95
                         required glyphs.
        """
        lines = list(lines)
        if not lines:
            raise FormatError("Empty font data")

        header = _parse_header(lines[0])
        height = header["height"]
        comment_count = header["comment_lines"]
        logger.debug(f"FIGfont header: {header}")

        required = 1 + comment_count + height * len(REQUIRED_CODE_POINTS)
        if len(lines) < required:
            raise FormatError(
                f"Font has {len(lines)} lines, expected at least {required} "
                f"for height {height} and {comment_count} comment lines"
            )

        comments = "\n".join(line.rstrip("\r") for line in lines[1:1 + comment_count])
        cursor = 1 + comment_count

        characters: dict[int, tuple[str, ...]] = {}
        for code_point in REQUIRED_CODE_POINTS:
            characters[code_point] = _read_rows(lines, cursor, height)
            cursor += height

        # Optional glyphs: "<code point> [comment]" followed by `height` rows.
        # Stop at the first line that doesn't declare a code point or when
        # not enough lines remain for a whole glyph.
        while cursor + height < len(lines):
            match = _CODE_POINT_PATTERN.match(lines[cursor])
            if match is None:
                break

            code_point = _parse_code_point(match.group(0))
            cursor += 1
            # Later declarations of the same code point replace earlier ones
            characters[code_point] = _read_rows(lines, cursor, height)
            cursor += height

        rules = derive_smushing_rules(header["old_layout"], header["full_layout"])
        font = cls(
            height=height,
            characters=characters,
            hard_blank=header["hard_blank"],
            signature=header["signature"],
            baseline=header["baseline"],
            max_length=header["max_length"],
            old_layout=header["old_layout"],
            comment_lines=comment_count,
            print_direction=header["print_direction"],
            full_layout=header["full_layout"],
            comments=comments,
            smushing_rules=rules,
        )
        logger.debug(
            f"Parsed FIGfont: {len(font.characters)} glyphs, "
            f"height={height}, rules={rules!r}"
        )
        return font

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    @classmethod
    def from_bytes(cls, data: bytes) -> "FIGFont":
        """
        Parse a FIGfont from raw bytes, unpacking a ZIP container if present.

        A payload starting with "PK" is opened as a ZIP archive and its
        first entry is parsed. If it turns out not to be a valid archive
        the bytes are treated as plain font text.

        Raises:
            FormatError: If the content is not a valid FIGfont.
        """
        if data[:2] == ZIP_MAGIC:
            try:
                with zipfile.ZipFile(io.BytesIO(data)) as archive:
                    entries = archive.infolist()
                    if entries:
                        logger.debug(f"Reading font from ZIP entry {entries[0].filename!r}")
                        data = archive.read(entries[0])
            except zipfile.BadZipFile as e:
                logger.warning(f"Font data looks zipped but is not a valid archive: {e}")

        return cls.from_text(_decode(data))

    @classmethod
    def from_stream(cls, stream: BinaryIO) -> "FIGFont":
        """Parse a FIGfont from a binary stream (read to the end)."""
        return cls.from_bytes(stream.read())

    @classmethod
    def from_file(cls, path: str | Path) -> "FIGFont":
        """
        Load a FIGfont from a ".flf" file (plain or zipped).

        Raises:
            FormatError: If the file is not a valid FIGfont.
            OSError: If the file cannot be read.
        """
        path = Path(path)
        logger.info(f"Loading FIGfont from {path}")
        with open(path, "rb") as f:
            return cls.from_stream(f)


# =============================================================================
# Helpers
# =============================================================================

def _parse_header(line: str) -> dict:
    """
    Split the header line into its named fields.

    Tokens 1-5 are required integers; print direction and full layout are
    optional and default to 0.
    """
    line = line.rstrip("\r")
    if not line.startswith(SIGNATURE):
        raise FormatError(f"Missing {SIGNATURE!r} signature in header: {line[:20]!r}")

    tokens = line.split()
    if len(tokens[0]) <= len(SIGNATURE):
        raise FormatError("Header is missing the hard blank character")
    if len(tokens) < 6:
        raise FormatError(f"Header has {len(tokens)} fields, expected at least 6")

    names = ("height", "baseline", "max_length", "old_layout", "comment_lines",
             "print_direction", "full_layout")
    values = dict.fromkeys(names, 0)
    for name, token in zip(names, tokens[1:]):
        try:
            values[name] = int(token)
        except ValueError as e:
            raise FormatError(f"Header field {name} is not a number: {token!r}") from e

    if values["height"] < 1:
        raise FormatError(f"Font height must be positive, got {values['height']}")
    if values["comment_lines"] < 0:
        raise FormatError(f"Comment line count cannot be negative: {values['comment_lines']}")

    values["signature"] = tokens[0][:len(SIGNATURE)]
    # Only one character is taken, however long the token is
    values["hard_blank"] = tokens[0][len(SIGNATURE)]
    return values


def _parse_code_point(token: str) -> int:
    """Code points are decimal, or hexadecimal with a "0x" prefix."""
    if token[:2] in ("0x", "0X"):
        return int(token, 16)
    return int(token)


def _read_rows(lines: list[str], start: int, height: int) -> tuple[str, ...]:
    """Read one glyph's rows, stripping end marks and line terminators."""
    return tuple(line.rstrip(_ROW_END_CHARACTERS) for line in lines[start:start + height])


def _decode(data: bytes) -> str:
    """Decode font bytes as UTF-8, falling back to Latin-1 for legacy fonts."""
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        logger.debug("Font data is not UTF-8, decoding as Latin-1")
        return data.decode("latin-1")
