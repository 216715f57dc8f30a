"""
修訂引擎測試 (候選產生、評分、套用)
"""
from dataclasses import dataclass

import pytest

from boxfix.analysis import analyze_line
from boxfix.correction.revisions import (
    AddSuffixBorder,
    BlockProfile,
    PadBeforeSuffixBorder,
    Revision,
    RevisionEngine,
    apply,
    insert_at_column,
    score,
)
from boxfix.exceptions import RevisionOutOfRange


def _records(lines):
    return [analyze_line(line) for line in lines]


@dataclass(frozen=True)
class StrayRevision(Revision):
    """不在 REVISION_KINDS 中的修訂種類"""

    def score(self):
        return 1.0


class TestBlockProfile:
    """區塊輪廓測試"""

    def test_profile(self):
        profile = BlockProfile.from_records(_records(["+-------+", "| hi|", "+-------+"]))

        assert profile.suffix_column == 8
        assert profile.leading_column == 0
        assert profile.border_char == "|"

    def test_unicode_border_char(self):
        profile = BlockProfile.from_records(_records(["┌────┐", "│ a  │", "│ b│", "└────┘"]))

        assert profile.border_char == "│"
        assert profile.body_signatures == ("VSPSV",)

    def test_no_borders(self):
        profile = BlockProfile.from_records(_records(["├── src", "│", "└── main"]))

        assert profile.suffix_column is None

    def test_target_is_rightmost_border(self):
        profile = BlockProfile.from_records(_records(["+------+", "| short|", "| longer |", "+------+"]))

        assert profile.suffix_column == 9

    def test_prose_lines_are_ignored(self):
        profile = BlockProfile.from_records(_records(["+---+", "| x |", "+---+", "See a | b | c and more words |"]))

        assert profile.suffix_column == 4


class TestPropose:
    """候選修訂產生測試"""

    @pytest.fixture(autouse=True)
    def setup(self):
        self.engine = RevisionEngine()

    def test_pad_before_suffix_border(self):
        revisions = self.engine.propose(_records(["+-------+", "| hi|", "+-------+"]))

        assert revisions == [
            PadBeforeSuffixBorder(line_index=1, column=4, text="    ", deficit=4, diagram_line=True)
        ]

    def test_rule_line_is_padded_with_fill(self):
        records = _records(["+-----+", "| abc   |", "| de    |", "+-------+"])
        revisions = self.engine.propose(records)

        assert len(revisions) == 1
        assert revisions[0].line_index == 0
        assert revisions[0].text == "--"
        assert revisions[0].apply(records[0]).text == "+-------+"

    def test_add_missing_suffix_border(self):
        records = _records(["+--------+", "| one    |", "| two", "| three  |", "+--------+"])
        revisions = self.engine.propose(records)

        assert len(revisions) == 1
        revision = revisions[0]
        assert isinstance(revision, AddSuffixBorder)
        assert revision.line_index == 2
        assert revision.column == 5
        assert revision.text == "    |"
        assert revision.similarity == pytest.approx(1.0)
        assert revision.score() >= 0.5
        assert revision.apply(records[2]).text == "| two    |"

    def test_add_requires_matching_leading_border(self):
        records = _records(["+--------+", "| one    |", "  | two", "+--------+"])

        assert self.engine.propose(records) == []

    def test_add_requires_leading_border(self):
        records = _records(["+--------+", "| one    |", "  two", "+--------+"])

        assert self.engine.propose(records) == []

    def test_short_rows_grow_to_widest_row(self):
        records = _records(["+--+", "| wide |", "+--+"])
        revisions = self.engine.propose(records)

        assert [(r.line_index, r.text) for r in revisions] == [(0, "----"), (2, "----")]
        assert revisions[0].apply(records[0]).text == "+------+"

    def test_prose_line_between_boxes_is_left_alone(self):
        records = _records(["+-------+", "| hi    |", "+-------+", "Use C++", "+---+", "| x |", "+---+"])
        revisions = self.engine.propose(records)

        assert [r.line_index for r in revisions] == [4, 5, 6]

    def test_lone_tree_border_is_left_alone(self):
        records = _records(["├── src", "│   ├── main.py", "│   │", "│   └── lib", "│", "└── README"])

        assert self.engine.propose(records) == []

    def test_tree_without_closing_borders(self):
        records = _records(["├── src", "│   └── main.py", "└── README"])

        assert self.engine.propose(records) == []

    def test_wide_chars_use_visual_columns(self):
        records = _records(["┌──────┐", "│ 漢字│", "└──────┘"])
        revisions = self.engine.propose(records)

        assert len(revisions) == 1
        assert revisions[0].text == " "
        assert revisions[0].apply(records[1]).text == "│ 漢字 │"


class TestScore:
    """評分測試"""

    def _pad(self, deficit, diagram_line=True):
        return PadBeforeSuffixBorder(
            line_index=0, column=1, text=" " * deficit, deficit=deficit, diagram_line=diagram_line
        )

    def test_pad_score_grows_with_deficit_until_cap(self):
        assert self._pad(1).score() < self._pad(4).score() < self._pad(8).score()
        assert self._pad(8).score() == pytest.approx(self._pad(20).score())

    def test_pad_score_value(self):
        assert self._pad(4).score() == pytest.approx(0.75)
        assert self._pad(4, diagram_line=False).score() == pytest.approx(0.65)

    def test_pad_sanity_limit_penalty(self):
        assert self._pad(50).score() == pytest.approx(0.5)
        assert self._pad(50).score() < self._pad(8).score()

    def test_add_scored_below_pad(self):
        best_add = AddSuffixBorder(line_index=0, column=1, text="|", similarity=1.0, width_ratio=1.0)

        assert best_add.score() < self._pad(1).score()

    def test_scores_are_bounded_and_deterministic(self):
        revision = self._pad(4)
        assert score(revision) == score(revision)
        for deficit in (0, 1, 8, 100):
            assert 0.0 <= self._pad(deficit).score() <= 1.0

    def test_base_class_is_abstract(self):
        with pytest.raises(TypeError):
            Revision(line_index=0, column=0, text="x")

    def test_unknown_revision_kind(self):
        stray = StrayRevision(line_index=0, column=0, text="x")

        with pytest.raises(TypeError):
            score(stray)
        with pytest.raises(TypeError):
            apply(stray, analyze_line("x"))


class TestApply:
    """套用與越界防禦測試"""

    def test_apply_returns_new_record(self):
        record = analyze_line("| hi|")
        revision = PadBeforeSuffixBorder(line_index=0, column=4, text="    ", deficit=4)
        new_record = apply(revision, record)

        assert new_record.text == "| hi    |"
        assert new_record.suffix_border.column == 8
        assert record.text == "| hi|"

    def test_column_past_line_end(self):
        revision = PadBeforeSuffixBorder(line_index=0, column=20, text=" ", deficit=1)

        with pytest.raises(RevisionOutOfRange):
            revision.apply(analyze_line("| x |"))

    def test_column_inside_wide_char(self):
        with pytest.raises(RevisionOutOfRange):
            insert_at_column("漢|", 1, " ")


class TestSelect:
    """門檻篩選測試"""

    def test_threshold_and_best_per_line(self):
        engine = RevisionEngine()
        low = AddSuffixBorder(line_index=0, column=3, text="|", similarity=0.0, width_ratio=0.0)
        high = PadBeforeSuffixBorder(line_index=0, column=3, text=" ", deficit=1, diagram_line=True)
        other = PadBeforeSuffixBorder(line_index=1, column=3, text=" ", deficit=1, diagram_line=False)

        selected = engine.select([low, high, other], min_score=0.6)

        assert selected == {0: high}
