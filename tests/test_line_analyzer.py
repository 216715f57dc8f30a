"""
行分析器測試 (視覺寬度、tab 展開、行分類、行尾邊框)
"""
import pytest

from boxfix.analysis import (
    analyze_line,
    classify_line,
    column_index,
    detect_suffix_border,
    expand_tabs,
    structure_signature,
    visual_width,
)
from boxfix.core.models import BorderMark, LineKind


class TestVisualWidth:
    """視覺寬度測試"""

    def test_ascii(self):
        assert visual_width("A") == 1
        assert visual_width("hello") == 5

    def test_cjk_is_double_width(self):
        assert visual_width("漢") == 2
        assert visual_width("漢字") == 4
        assert visual_width("Ａ") == 2

    def test_emoji_is_double_width(self):
        assert visual_width("🙂") == 2

    def test_zero_width(self):
        assert visual_width("") == 0
        assert visual_width("\u200d") == 0
        assert visual_width("e\u0301") == 1

    def test_box_drawing_is_single_width(self):
        assert visual_width("│──│") == 4
        assert visual_width("╔═╗") == 3

    def test_stable(self):
        text = "│ 漢字 🙂 │"
        assert visual_width(text) == visual_width(text)


class TestExpandTabs:
    """tab 展開測試"""

    def test_expand_to_next_stop(self):
        assert expand_tabs("\thello", 4) == "    hello"
        assert expand_tabs("a\tb", 4) == "a   b"
        assert expand_tabs("ab\tc", 4) == "ab  c"

    def test_wide_chars_count_as_two_columns(self):
        assert expand_tabs("漢\tx", 4) == "漢  x"

    def test_custom_width(self):
        assert expand_tabs("\t|", 8) == " " * 8 + "|"

    def test_no_tabs_unchanged(self):
        line = "| no tabs |"
        assert expand_tabs(line, 4) is line


class TestColumnIndex:
    """視覺欄位 → 字串索引"""

    def test_ascii(self):
        assert column_index("| hi|", 0) == 0
        assert column_index("| hi|", 4) == 4
        assert column_index("| hi|", 5) == 5

    def test_wide_char_boundary(self):
        assert column_index("漢x", 2) == 1
        assert column_index("漢x", 1) == -1

    def test_out_of_range(self):
        assert column_index("abc", 4) == -1
        assert column_index("abc", -1) == -1


class TestClassifyLine:
    """行分類決策樹測試"""

    @pytest.mark.parametrize("line", ["", "   ", "\t"])
    def test_blank(self, line):
        assert classify_line(line) is LineKind.BLANK

    @pytest.mark.parametrize("line", ["+---+", "| x |", "┌───┐", "│ y │", "| hi|", "-----", "  ╰──╯"])
    def test_diagram(self, line):
        assert classify_line(line) is LineKind.DIAGRAM

    @pytest.mark.parametrize("line", ["fn main() {}", "def main():", "    x = foo(bar);", "a == b"])
    def test_code(self, line):
        assert classify_line(line) is LineKind.CODE

    @pytest.mark.parametrize(
        "line",
        [
            "hello world",
            "The quick brown fox jumps over the lazy dog.",
            "C++ is a language",
            "- a bullet item",
            "Call setup() before you start the engine today.",
        ],
    )
    def test_prose(self, line):
        assert classify_line(line) is LineKind.PROSE


class TestDetectSuffixBorder:
    """行尾邊框偵測測試"""

    def test_border_at_expected_column(self):
        assert detect_suffix_border("| hello |", 8) == 8

    def test_border_within_tolerance(self):
        assert detect_suffix_border("| hello |", 9) == 8
        assert detect_suffix_border("| hello |", 10) == 8

    def test_border_too_far_left(self):
        assert detect_suffix_border("| hi|", 8) is None

    def test_trailing_annotation(self):
        assert detect_suffix_border("| a |  note", 4) == 4

    def test_no_border(self):
        assert detect_suffix_border("hello world", 10) is None


class TestAnalyzeLine:
    """analyze_line 組合結果測試"""

    def test_misaligned_row(self):
        record = analyze_line("| hi|")
        assert record.kind is LineKind.DIAGRAM
        assert record.width == 5
        assert record.suffix_border == BorderMark(4, "|")
        assert record.leading_border == BorderMark(0, "|")
        assert record.border_columns == frozenset({0, 4})
        assert not record.has_anchor

    def test_indented_corner_line(self):
        record = analyze_line("  ┌──┐")
        assert record.indent == 2
        assert record.suffix_border == BorderMark(5, "┐")
        assert record.leading_border == BorderMark(2, "┌")
        assert record.has_anchor
        assert record.border_columns == frozenset()

    def test_wide_content(self):
        record = analyze_line("│ 漢字 │")
        assert record.width == 8
        assert record.suffix_border == BorderMark(7, "│")

    def test_prose_has_no_borders(self):
        record = analyze_line("just some text")
        assert record.kind is LineKind.PROSE
        assert record.suffix_border is None
        assert record.leading_border is None

    def test_record_is_immutable(self):
        record = analyze_line("| x |")
        with pytest.raises(AttributeError):
            record.text = "changed"


class TestStructureSignature:
    """結構簽名測試"""

    def test_signatures(self):
        assert structure_signature("| hi    |") == "VSPSV"
        assert structure_signature("+-------+") == "CHC"
        assert structure_signature("   ") == ""
