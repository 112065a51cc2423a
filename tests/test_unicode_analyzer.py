# ============================================================
# Unit tests for UnicodeAnalyzer
# ============================================================
# - detection of fancy font blocks and zalgo combining marks
# - offset-based mapping back to ASCII
# - empty input and idempotent normalization
# ============================================================

import pytest


def styled(text, start):
    """Render ASCII letters in a mathematical alphabet starting at ``start``."""
    chars = []
    for char in text:
        if 'A' <= char <= 'Z':
            chars.append(chr(start + ord(char) - ord('A')))
        elif 'a' <= char <= 'z':
            chars.append(chr(start + 26 + ord(char) - ord('a')))
        else:
            chars.append(char)
    return ''.join(chars)


MATH_BOLD = 0x1D400
BOLD_FRAKTUR = 0x1D56C
SANS_SERIF_BOLD_ITALIC = 0x1D63C
MONOSPACE = 0x1D670


class TestFancyDetection:

    def test_plain_ascii_is_not_fancy(self, unicode_analyzer):
        assert unicode_analyzer.has_fancy("Slot gacor hari ini") is False
        assert unicode_analyzer.fancy_count("Slot gacor hari ini") == 0

    def test_mathematical_bold_is_fancy(self, unicode_analyzer):
        text = styled("SLOT", MATH_BOLD)
        assert unicode_analyzer.has_fancy(text) is True
        assert unicode_analyzer.fancy_count(text) == 4

    @pytest.mark.parametrize("start", [MATH_BOLD, BOLD_FRAKTUR, SANS_SERIF_BOLD_ITALIC, MONOSPACE])
    def test_mathematical_alphabets_are_detected(self, unicode_analyzer, start):
        assert unicode_analyzer.has_fancy(styled("Gacor", start)) is True

    def test_fullwidth_letters_are_fancy(self, unicode_analyzer):
        assert unicode_analyzer.has_fancy("ＧＡＣＯＲ") is True

    def test_fullwidth_punctuation_is_not_fancy(self, unicode_analyzer):
        # U+FF01 (fullwidth '!') sits outside the letter and digit blocks
        assert unicode_analyzer.has_fancy("ok！") is False

    def test_greek_and_cyrillic_are_not_fancy_fonts(self, unicode_analyzer):
        assert unicode_analyzer.has_fancy("GΔCOR") is False
        assert unicode_analyzer.has_fancy("слот") is False

    def test_three_combining_marks_flag_text(self, unicode_analyzer):
        assert unicode_analyzer.has_fancy("z\u0301\u0302\u0303algo") is True
        assert unicode_analyzer.combining_mark_count("z\u0301\u0302\u0303algo") == 3

    def test_two_combining_marks_are_tolerated(self, unicode_analyzer):
        assert unicode_analyzer.has_fancy("cafe\u0301 na\u0308ive") is False

    def test_variation_selectors_count_as_marks(self, unicode_analyzer):
        text = "a\ufe0fb\ufe0fc\ufe0f"
        assert unicode_analyzer.combining_mark_count(text) == 3
        assert unicode_analyzer.has_fancy(text) is True

    def test_density(self, unicode_analyzer):
        text = styled("A", MATH_BOLD) + "a"
        assert unicode_analyzer.density(text) == 0.5

    def test_fancy_positions(self, unicode_analyzer):
        text = "x" + styled("AB", MATH_BOLD)
        positions = unicode_analyzer.fancy_positions(text)

        assert [p.position for p in positions] == [1, 2]
        assert positions[0].range_key == "mathematical_bold"
        assert positions[0].code_point == MATH_BOLD


class TestNormalization:

    def test_mathematical_bold_upper_and_lower(self, unicode_analyzer):
        assert unicode_analyzer.normalize(styled("Slot Gacor", MATH_BOLD)) == "Slot Gacor"

    def test_bold_fraktur_and_sans_serif_bold_italic(self, unicode_analyzer):
        assert unicode_analyzer.normalize(styled("Maxwin", BOLD_FRAKTUR)) == "Maxwin"
        assert unicode_analyzer.normalize(styled("Maxwin", SANS_SERIF_BOLD_ITALIC)) == "Maxwin"

    def test_fullwidth_upper_lower_and_digits(self, unicode_analyzer):
        assert unicode_analyzer.normalize("ＧＡＣＯＲ") == "GACOR"
        assert unicode_analyzer.normalize("ｇａｃｏｒ") == "gacor"
        assert unicode_analyzer.normalize("１２３") == "123"

    def test_circled_latin(self, unicode_analyzer):
        # Ⓙ = U+24BF (offset 9), ⓤ = U+24E4 (offset 46)
        assert unicode_analyzer.normalize("Ⓙⓤ") == "Ju"

    def test_squared_and_negative_squared_are_uppercase(self, unicode_analyzer):
        assert unicode_analyzer.normalize(chr(0x1F130)) == "A"
        assert unicode_analyzer.normalize(chr(0x1F150 + 2)) == "C"
        assert unicode_analyzer.normalize(chr(0x1F170 + 1)) == "B"

    def test_mathematical_digits(self, unicode_analyzer):
        assert unicode_analyzer.normalize(chr(0x1D7CE + 7)) == "7"
        assert unicode_analyzer.normalize(chr(0x1D7F6)) == "0"
        assert unicode_analyzer.normalize(chr(0x1D7D8 + 9)) == "9"

    def test_non_fancy_characters_untouched(self, unicode_analyzer):
        assert unicode_analyzer.normalize("Halo 🔥 GΔCOR!") == "Halo 🔥 GΔCOR!"

    @pytest.mark.parametrize("text", [
        "",
        "plain text",
        styled("Slot Gacor 88", MATH_BOLD),
        "ＧＡＣＯＲ１２３",
        "z\u0301\u0302\u0303algo",
    ])
    def test_normalize_is_idempotent(self, unicode_analyzer, text):
        once = unicode_analyzer.normalize(text)
        assert unicode_analyzer.normalize(once) == once


class TestEmptyInput:

    def test_empty_values(self, unicode_analyzer):
        assert unicode_analyzer.has_fancy("") is False
        assert unicode_analyzer.fancy_count("") == 0
        assert unicode_analyzer.density("") == 0.0
        assert unicode_analyzer.normalize("") == ""
        assert unicode_analyzer.fancy_positions("") == []

    def test_empty_statistics(self, unicode_analyzer):
        stats = unicode_analyzer.statistics("")
        assert stats.has_fancy is False
        assert stats.count == 0
        assert stats.ranges == {}


class TestStatistics:

    def test_statistics_groups_by_range_name(self, unicode_analyzer):
        text = styled("AB", MATH_BOLD) + "ＣＤ" + "e"
        stats = unicode_analyzer.statistics(text)

        assert stats.has_fancy is True
        assert stats.count == 4
        assert stats.ranges == {"Mathematical Bold": 2, "Fullwidth Latin": 2}
        assert stats.normalized == "ABCDe"
        assert stats.density == 0.8
        assert stats.to_dict()["count"] == 4
