# =============================================================================
# ANSI Escape Handling
# =============================================================================
# When color pass-through is enabled, the input text may contain terminal
# escape sequences such as "\x1b[31m". These must not be rendered as glyphs,
# but color changes should survive into the banner: the active color is
# re-emitted in front of the glyph columns of the next literal character.
#
# The scanner is a two-state machine:
#
#   Normal --ESC--> InEscape
#   InEscape: second byte must be "[" (CSI) or the sequence is dropped;
#             from the third byte on, a terminator ends the sequence.
#             Sequences ending in "m" (SGR) become the current color.
# =============================================================================

from typing import Callable

ESC = "\x1b"
ANSI_RESET = f"{ESC}[0m"


class AnsiScanner:
    """
    Classifies characters as escape-sequence bytes or literal text.

    Usage:
        >>> scanner = AnsiScanner()
        >>> [scanner.feed(c) for c in "\\x1b[31mA"]
        [True, True, True, True, True, False]
        >>> scanner.current_color_sequence
        '\\x1b[31m'
    """

    def __init__(self) -> None:
        self._in_escape = False
        self._buffer: list[str] = []
        self.current_color_sequence = ""

    @property
    def in_escape(self) -> bool:
        """True while an escape sequence is being read."""
        return self._in_escape

    def feed(self, char: str) -> bool:
        """
        Process one character.

        Returns:
            True if the character belongs to an escape sequence (and must
            not be rendered), False if it is literal text.
        """
        if char == ESC:
            self._in_escape = True
            self._buffer = [char]
            return True

        if not self._in_escape:
            return False

        self._buffer.append(char)

        # Only CSI ("ESC [") sequences are tracked; anything else is dropped
        if len(self._buffer) == 2 and char != "[":
            self._in_escape = False
            return True

        if len(self._buffer) >= 3 and _is_terminator(char):
            self._in_escape = False
            if char == "m":
                self.current_color_sequence = "".join(self._buffer)

        return True

    def reset_color_state(self) -> None:
        """Forget the current color sequence."""
        self.current_color_sequence = ""


def _is_terminator(char: str) -> bool:
    # CSI final bytes; cursor, erase and mode commands as well as "m"
    return "@" <= char <= "~"


def split_ansi(
    text: str,
    accept: Callable[[str], bool] = lambda char: True,
) -> tuple[str, dict[int, str]]:
    """
    Separate escape sequences from literal text.

    Each color change is attached to the next literal character only, so a
    run of same-colored characters carries the sequence once.

    Args:
        text: Input that may contain escape sequences.
        accept: Predicate deciding which literal characters are kept (the
                renderer passes "is this character in the font").

    Returns:
        (plain_text, colors): the kept literal characters, and a map from
        index in plain_text to the color sequence to emit before it.

    Example:
        >>> split_ansi("\\x1b[31mA\\x1b[0mB")
        ('AB', {0: '\\x1b[31m', 1: '\\x1b[0m'})
    """
    scanner = AnsiScanner()
    plain: list[str] = []
    colors: dict[int, str] = {}

    for char in text:
        if scanner.feed(char):
            continue

        if scanner.current_color_sequence:
            # A color seen before a dropped character moves on to the next
            # kept one
            colors[len(plain)] = scanner.current_color_sequence
            scanner.reset_color_state()

        if accept(char):
            plain.append(char)

    return "".join(plain), colors
