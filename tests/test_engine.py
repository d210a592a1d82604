# =============================================================================
# Rendering Engine Tests
# =============================================================================

import os

import pytest

from figprint.core import LayoutMode, SmushingRules, get_default_font
from figprint.rendering import ANSI_RESET, RenderEngine, render

ALL_MODES = [LayoutMode.FULL_SIZE, LayoutMode.KERNING, LayoutMode.SMUSHING]


def make_engine(font, mode=LayoutMode.SMUSHING, **kwargs) -> RenderEngine:
    return RenderEngine(font, mode=mode, line_separator="\n", **kwargs)


# =============================================================================
# Basic Behavior
# =============================================================================

class TestRender:
    def test_kerning_places_glyphs_side_by_side(self, glyph_font):
        font = glyph_font({"A": "XX", "B": "YY"})
        assert make_engine(font, LayoutMode.KERNING).render("AB") == "XXYY"

    @pytest.mark.parametrize("mode", ALL_MODES)
    def test_empty_text(self, glyph_font, mode):
        engine = make_engine(glyph_font({"A": "XX"}), mode)

        assert engine.render("") == ""
        assert engine.render(None) == ""

    @pytest.mark.parametrize("mode", ALL_MODES)
    def test_only_unknown_characters(self, glyph_font, mode):
        engine = make_engine(glyph_font({"A": "XX"}), mode)
        assert engine.render("☃☃") == ""

    def test_unknown_characters_are_skipped(self, glyph_font):
        engine = make_engine(glyph_font({"A": "XX", "B": "YY"}))
        assert engine.render("A☃B") == engine.render("AB")

    def test_render_is_deterministic(self):
        engine = RenderEngine(get_default_font(), line_separator="\n")
        assert engine.render("Hello, World!") == engine.render("Hello, World!")

    def test_line_separator(self, glyph_font):
        font = glyph_font({"A": ["ab", "cd"]})

        assert make_engine(font).render("A") == "ab\ncd"
        assert make_engine(font).render("A", line_separator="|") == "ab|cd"
        assert RenderEngine(font).line_separator == os.linesep

    def test_call_arguments_override_settings(self, glyph_font):
        font = glyph_font({"A": "|"}, rules=SmushingRules.EQUAL_CHARACTER)
        engine = make_engine(font, LayoutMode.SMUSHING)

        assert engine.render("AA") == "|"
        assert engine.render("AA", mode=LayoutMode.FULL_SIZE) == "||"
        assert engine.mode is LayoutMode.SMUSHING

    def test_module_level_render(self, glyph_font):
        font = glyph_font({"A": "XX", "B": "YY"})

        assert render("AB", font, LayoutMode.FULL_SIZE, "\n") == "XXYY"
        assert render("", font) == ""

    def test_default_font_is_used_without_font(self):
        engine = RenderEngine(line_separator="\n")

        assert engine.font is get_default_font()
        assert len(engine.render("Hi").split("\n")) == 4


# =============================================================================
# Layout Modes
# =============================================================================

class TestLayoutModes:
    def test_full_size_width_is_sum_of_glyph_widths(self, glyph_font):
        font = glyph_font({"A": ["ab ", "a"], "B": [" cd", "bb"]}, rules=SmushingRules(63))
        assert make_engine(font, LayoutMode.FULL_SIZE).render("AB") == "ab  cd\nabb"

    def test_full_size_with_bundled_font(self):
        font = get_default_font()
        text = "Hello"

        rows = make_engine(font, LayoutMode.FULL_SIZE).render(text).split("\n")

        for row_index, row in enumerate(rows):
            expected = sum(len(font.glyph(ord(char))[row_index]) for char in text)
            assert len(row) == expected

    def test_smushing_never_wider_than_full_size(self):
        font = get_default_font()
        full = make_engine(font, LayoutMode.FULL_SIZE).render("figprint").split("\n")
        smushed = make_engine(font, LayoutMode.SMUSHING).render("figprint").split("\n")

        assert max(map(len, smushed)) <= max(map(len, full))

    def test_kerning_keeps_hard_blank_gap(self, glyph_font):
        font = glyph_font({"A": "XX", " ": "$$"})
        assert make_engine(font, LayoutMode.KERNING).render("A A") == "XX  XX"

    def test_kerning_closes_blank_leading_glyph(self, glyph_font):
        font = glyph_font({"A": "XX", " ": "  "})
        assert make_engine(font, LayoutMode.KERNING).render(" A") == "XX"

    @pytest.mark.parametrize("mode", [LayoutMode.KERNING, LayoutMode.SMUSHING])
    def test_narrow_leading_space_keeps_whole_glyph(self, glyph_font, mode):
        font = glyph_font({" ": " ", "A": "ABC"})
        assert make_engine(font, mode).render(" A") == "ABC"

    def test_overlap_is_minimum_over_rows(self, glyph_font):
        font = glyph_font(
            {"A": ["X", "|"], "B": ["X", "X"]},
            rules=SmushingRules.EQUAL_CHARACTER,
        )
        # Row 0 could merge, row 1 can't, so neither does
        assert make_engine(font).render("AB") == "XX\n|X"

    @pytest.mark.parametrize("mode", ALL_MODES)
    def test_hard_blanks_never_reach_output(self, glyph_font, mode):
        font = glyph_font({"A": "$X$", "B": "#"}, rules=SmushingRules(63))
        assert "$" not in make_engine(font, mode).render("AABA")

    @pytest.mark.parametrize("mode", ALL_MODES)
    def test_bundled_font_output_has_no_hard_blanks(self, mode):
        output = make_engine(get_default_font(), mode).render("Hello, World! 0123")
        rows = output.split("\n")

        assert "$" not in output
        assert len(rows) == 4

    def test_hard_blank_blocks_smushing(self, glyph_font):
        font = glyph_font({"A": "$X$"}, rules=SmushingRules.EQUAL_CHARACTER)
        assert make_engine(font).render("AA") == " X  X "


# =============================================================================
# Smushing at Glyph Boundaries
# =============================================================================

class TestSmushingRender:
    def test_equal_characters_merge(self, glyph_font):
        font = glyph_font({"A": "|"}, rules=SmushingRules.EQUAL_CHARACTER)
        assert make_engine(font).render("AA") == "|"

    def test_no_rules_no_merge(self, glyph_font):
        font = glyph_font({"A": "|"})
        assert make_engine(font).render("AA") == "||"

    @pytest.mark.parametrize("text, expected", [("AB", "{"), ("BA", "{")])
    def test_hierarchy_higher_rank_wins(self, glyph_font, text, expected):
        font = glyph_font({"A": "[", "B": "{"}, rules=SmushingRules.HIERARCHY)
        assert make_engine(font).render(text) == expected

    def test_underscore_is_replaced(self, glyph_font):
        font = glyph_font({"A": "_", "B": "|"}, rules=SmushingRules.UNDERSCORE)
        assert make_engine(font).render("AB") == "|"

    def test_opposite_pair(self, glyph_font):
        font = glyph_font({"A": "[", "B": "]"}, rules=SmushingRules.OPPOSITE_PAIR)
        assert make_engine(font).render("AB") == "|"

    def test_big_x(self, glyph_font):
        font = glyph_font({"A": ">", "B": "<"}, rules=SmushingRules.BIG_X)
        assert make_engine(font).render("AB") == "X"

    def test_opposing_slashes_keep_a_column(self, glyph_font):
        font = glyph_font({"A": "/", "B": "\\"}, rules=SmushingRules.BIG_X)
        assert make_engine(font).render("AB") == "/\\"


# =============================================================================
# Overlap Calculation
# =============================================================================

class TestCalculateOverlap:
    @pytest.fixture
    def engine(self, glyph_font):
        font = glyph_font({"A": "A"}, rules=SmushingRules(63))
        return make_engine(font)

    def test_full_size_never_overlaps(self, engine):
        assert engine.calculate_overlap("ab", "  ", LayoutMode.FULL_SIZE) == 0

    def test_blank_glyph_row(self, engine):
        assert engine.calculate_overlap("abcd", "   ", LayoutMode.SMUSHING) == 3

    def test_limited_by_row_length(self, engine):
        assert engine.calculate_overlap("ab", "   ", LayoutMode.SMUSHING) == 2
        assert engine.calculate_overlap(" ", "ABC", LayoutMode.SMUSHING) == 1
        assert engine.calculate_overlap("|", "  |", LayoutMode.SMUSHING) == 1

    def test_blank_line_end(self, engine):
        assert engine.calculate_overlap("x  ", "ab", LayoutMode.SMUSHING) == 2

    def test_empty_glyph_row(self, engine):
        assert engine.calculate_overlap("ab", "", LayoutMode.SMUSHING) == 0

    def test_unsmushable_pair(self, engine):
        assert engine.calculate_overlap("ab", "cd", LayoutMode.SMUSHING) == 0

    def test_smushable_pair(self, engine):
        # max(len("a|") - 1, 0) + 1
        assert engine.calculate_overlap("a|", "|b", LayoutMode.SMUSHING) == 2

    def test_clamped_to_glyph_width(self, engine):
        assert engine.calculate_overlap("|", "|", LayoutMode.SMUSHING) == 1

    def test_opposing_slashes_reduce_overlap(self, engine):
        assert engine.calculate_overlap("a/ ", " \\b", LayoutMode.SMUSHING) == 2
        assert engine.calculate_overlap("a\\ ", " /b", LayoutMode.SMUSHING) == 2
        assert engine.calculate_overlap("a/ ", " /b", LayoutMode.SMUSHING) == 3

    def test_kerning(self, engine):
        assert engine.calculate_overlap("ab", "cd", LayoutMode.KERNING) == 0
        assert engine.calculate_overlap("  ", "cd", LayoutMode.KERNING) == 2


# =============================================================================
# Rule Machine
# =============================================================================

class TestCanSmush:
    def test_kerning_only_spaces(self, glyph_font):
        engine = make_engine(glyph_font({"A": "A"}, rules=SmushingRules(63)))

        assert engine.can_smush(" ", " ", LayoutMode.KERNING)
        assert not engine.can_smush("a", "a", LayoutMode.KERNING)
        assert not engine.can_smush("a", " ", LayoutMode.KERNING)

    def test_full_size_never(self, glyph_font):
        engine = make_engine(glyph_font({"A": "A"}, rules=SmushingRules(63)))
        assert not engine.can_smush(" ", " ", LayoutMode.FULL_SIZE)

    def test_hard_blank_needs_rule(self, glyph_font):
        without = make_engine(glyph_font({"A": "A"}, rules=SmushingRules(31)))
        with_rule = make_engine(glyph_font({"A": "A"}, rules=SmushingRules.HARD_BLANK))

        # Hard blank is checked before the space rule
        assert not without.can_smush("$", " ", LayoutMode.SMUSHING)
        assert not without.can_smush("$", "$", LayoutMode.SMUSHING)
        assert with_rule.can_smush("$", "x", LayoutMode.SMUSHING)

    def test_space_always_smushes(self, glyph_font):
        engine = make_engine(glyph_font({"A": "A"}))

        assert engine.can_smush(" ", "x", LayoutMode.SMUSHING)
        assert engine.can_smush("x", " ", LayoutMode.SMUSHING)

    @pytest.mark.parametrize("rule, c1, c2, expected", [
        (SmushingRules.EQUAL_CHARACTER, "a", "a", True),
        (SmushingRules.EQUAL_CHARACTER, "a", "b", False),
        (SmushingRules.UNDERSCORE, "_", "/", True),
        (SmushingRules.UNDERSCORE, ">", "_", True),
        (SmushingRules.UNDERSCORE, "_", "a", False),
        (SmushingRules.HIERARCHY, "|", ">", True),
        (SmushingRules.HIERARCHY, "<", "<", True),
        (SmushingRules.HIERARCHY, "|", "a", False),
        (SmushingRules.OPPOSITE_PAIR, "(", ")", True),
        (SmushingRules.OPPOSITE_PAIR, "}", "{", True),
        (SmushingRules.OPPOSITE_PAIR, "(", "]", False),
        (SmushingRules.BIG_X, "/", "\\", True),
        (SmushingRules.BIG_X, "\\", "/", True),
        (SmushingRules.BIG_X, ">", "<", True),
        (SmushingRules.BIG_X, "<", ">", False),
        (SmushingRules.NONE, "a", "a", False),
    ])
    def test_rules(self, glyph_font, rule, c1, c2, expected):
        engine = make_engine(glyph_font({"A": "A"}, rules=rule))
        assert engine.can_smush(c1, c2, LayoutMode.SMUSHING) is expected


class TestSmushCharacters:
    def test_kerning_keeps_first(self, glyph_font):
        engine = make_engine(glyph_font({"A": "A"}, rules=SmushingRules(63)))
        assert engine.smush_characters("a", "b", LayoutMode.KERNING) == "a"

    @pytest.mark.parametrize("c1, c2, expected", [
        (" ", " ", " "),
        (" ", "x", "x"),
        ("x", " ", "x"),
    ])
    def test_spaces(self, glyph_font, c1, c2, expected):
        engine = make_engine(glyph_font({"A": "A"}))
        assert engine.smush_characters(c1, c2, LayoutMode.SMUSHING) == expected

    def test_hard_blank(self, glyph_font):
        with_rule = make_engine(glyph_font({"A": "A"}, rules=SmushingRules.HARD_BLANK))
        without = make_engine(glyph_font({"A": "A"}))

        assert with_rule.smush_characters("$", "$", LayoutMode.SMUSHING) == "$"
        assert with_rule.smush_characters("x", "$", LayoutMode.SMUSHING) == "$"
        assert without.smush_characters("x", "$", LayoutMode.SMUSHING) == "x"

    @pytest.mark.parametrize("rule, c1, c2, expected", [
        (SmushingRules.EQUAL_CHARACTER, "#", "#", "#"),
        (SmushingRules.UNDERSCORE, "_", "[", "["),
        (SmushingRules.UNDERSCORE, "}", "_", "}"),
        (SmushingRules.HIERARCHY, "|", "/", "/"),
        (SmushingRules.HIERARCHY, "<", "(", "<"),
        (SmushingRules.HIERARCHY, "]", "[", "]"),
        (SmushingRules.OPPOSITE_PAIR, "[", "]", "|"),
        (SmushingRules.OPPOSITE_PAIR, ">", "<", "|"),
        (SmushingRules.BIG_X, "/", "\\", "|"),
        (SmushingRules.BIG_X, "\\", "/", "|"),
        (SmushingRules.BIG_X, ">", "<", "X"),
        (SmushingRules.NONE, "a", "b", "a"),
    ])
    def test_rules(self, glyph_font, rule, c1, c2, expected):
        engine = make_engine(glyph_font({"A": "A"}, rules=rule))
        assert engine.smush_characters(c1, c2, LayoutMode.SMUSHING) == expected

    def test_precedence_equal_before_hierarchy(self, glyph_font):
        rules = SmushingRules.EQUAL_CHARACTER | SmushingRules.HIERARCHY | SmushingRules.OPPOSITE_PAIR
        engine = make_engine(glyph_font({"A": "A"}, rules=rules))

        assert engine.smush_characters("[", "[", LayoutMode.SMUSHING) == "["
        # Hierarchy is checked before opposite pairs
        assert engine.smush_characters("[", "]", LayoutMode.SMUSHING) == "]"


# =============================================================================
# Paragraphs and Direction
# =============================================================================

class TestParagraphs:
    def test_lines_render_as_blocks(self, glyph_font):
        font = glyph_font({"A": "XX", "B": "YY"})

        assert make_engine(font).render("A\nB") == "XX\nYY"
        assert make_engine(font).render("A\r\nB") == "XX\nYY"

    def test_blank_line_is_glyph_height(self, glyph_font):
        font = glyph_font({"A": ["X", "X"]})
        assert make_engine(font).render("A\n\nA") == "X\nX\n\n\nX\nX"

    def test_paragraph_mode_off_joins_lines(self, glyph_font):
        font = glyph_font({"A": "XX", "B": "YY", " ": "$"})
        engine = make_engine(font, LayoutMode.FULL_SIZE, paragraph_mode=False)

        assert engine.render("A\nB") == "XX YY"


class TestRightToLeft:
    def test_text_is_reversed(self, glyph_font):
        font = glyph_font({"A": "XX", "B": "YY"}, print_direction=1)
        assert make_engine(font).render("AB") == "YYXX"

    def test_colors_follow_their_characters(self, glyph_font):
        font = glyph_font({"A": "XX", "B": "YY"}, print_direction=1)
        engine = make_engine(font, use_ansi_colors=True)

        assert engine.render("A\x1b[31mB") == f"\x1b[31mYYXX{ANSI_RESET}"


# =============================================================================
# ANSI Colors
# =============================================================================

class TestAnsiColors:
    def test_color_precedes_glyph_on_every_row(self, glyph_font):
        font = glyph_font({"A": ["XX", "XX"], "B": ["YY", "YY"]})
        engine = make_engine(font, use_ansi_colors=True)

        output = engine.render("\x1b[31mA\x1b[0mB")

        row = f"\x1b[31mXX\x1b[0mYY{ANSI_RESET}"
        assert output == f"{row}\n{row}"

    def test_unchanged_color_is_emitted_once(self, glyph_font):
        font = glyph_font({"A": "XX", "B": "YY"})
        engine = make_engine(font, use_ansi_colors=True)

        assert engine.render("\x1b[32mAB") == f"\x1b[32mXXYY{ANSI_RESET}"

    def test_escape_codes_do_not_affect_overlap(self, glyph_font):
        font = glyph_font({"A": "X"}, rules=SmushingRules.EQUAL_CHARACTER)
        engine = make_engine(font, use_ansi_colors=True)

        assert engine.render("\x1b[31mA\x1b[32mA") == f"\x1b[31mX\x1b[32m{ANSI_RESET}"

    def test_color_before_unknown_character_moves_on(self, glyph_font):
        font = glyph_font({"A": "XX"})
        engine = make_engine(font, use_ansi_colors=True)

        assert engine.render("\x1b[31m☃A") == f"\x1b[31mXX{ANSI_RESET}"

    def test_colors_off_drops_escape_characters(self, glyph_font):
        font = glyph_font({"A": "XX"})
        assert make_engine(font).render("\x1b[31mA") == "XX"

    def test_hard_blanks_replaced_with_colors_on(self, glyph_font):
        font = glyph_font({"A": "$X"})
        engine = make_engine(font, LayoutMode.FULL_SIZE, use_ansi_colors=True)

        assert engine.render("\x1b[31mA") == f"\x1b[31m X{ANSI_RESET}"
