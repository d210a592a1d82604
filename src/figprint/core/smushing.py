# =============================================================================
# Smushing Rules
# =============================================================================
# A FIGfont declares which horizontal smushing rules apply when two glyphs
# are pushed into each other. The header carries this information in two
# historical encodings:
#
#   - old_layout (FIGlet 2.0): -1 = full width, 0 = kerning,
#     positive = rule bits directly
#   - full_layout (FIGlet 2.2+): bit 0 switches horizontal smushing on,
#     the rule bits follow shifted left by one
#
# Both collapse into one 6-bit mask at parse time.
# =============================================================================

from enum import IntFlag

# Characters taking part in underscore and hierarchy smushing, ordered by
# rank: a later character replaces an earlier one.
HIERARCHY_CHARACTERS = "|/\\[]{}()<>"

OPPOSITE_PAIRS = {
    "[": "]", "]": "[",
    "{": "}", "}": "{",
    "(": ")", ")": "(",
    "<": ">", ">": "<",
}

RULE_MASK = 0x3F


class SmushingRules(IntFlag):
    """
    Horizontal smushing rules, stored as a bitmask.

    Usage:
        # Check a rule
        if font.smushing_rules & SmushingRules.HIERARCHY:
            ...

        # Combine rules
        rules = SmushingRules.EQUAL_CHARACTER | SmushingRules.BIG_X
    """
    NONE = 0
    EQUAL_CHARACTER = 1 << 0    # "==" -> "="
    UNDERSCORE = 1 << 1         # "_|" -> "|"
    HIERARCHY = 1 << 2          # "|/" -> "/" (later in hierarchy wins)
    OPPOSITE_PAIR = 1 << 3      # "[]" -> "|"
    BIG_X = 1 << 4              # "/\" -> "|", "><" -> "X"
    HARD_BLANK = 1 << 5         # hard blank + hard blank -> hard blank


def derive_smushing_rules(old_layout: int, full_layout: int) -> SmushingRules:
    """
    Resolve the active rule set from the two header layout fields.

    full_layout wins whenever it is positive. Its bit 0 gates smushing
    entirely; the remaining bits are shifted down into the rule mask.
    Otherwise old_layout is used: -1 (full width) and 0 (kerning) both
    mean no rules, positive values are the rule mask as-is.

    Args:
        old_layout: The header's old layout value.
        full_layout: The header's full layout value (0 when absent).

    Returns:
        The resolved SmushingRules.

    Example:
        >>> derive_smushing_rules(-1, 0)
        <SmushingRules.NONE: 0>
        >>> derive_smushing_rules(0, 31)
        <SmushingRules.EQUAL_CHARACTER|UNDERSCORE|HIERARCHY|OPPOSITE_PAIR: 15>
    """
    if full_layout > 0:
        if not full_layout & 1:
            return SmushingRules.NONE
        return SmushingRules((full_layout >> 1) & RULE_MASK)

    if old_layout <= 0:
        return SmushingRules.NONE

    return SmushingRules(old_layout & RULE_MASK)
