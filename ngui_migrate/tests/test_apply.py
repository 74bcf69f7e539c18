"""Tests for applying transformations to file text."""

from ngui_migrate.core.errors import TransformationMismatchError
from ngui_migrate.core.transformers import Transformation, TransformBatch, TransformKind, apply_transformations


def _make_edit(line: int, column: int, old: str, new: str) -> Transformation:
    return Transformation(
        file_path="app.ts",
        kind=TransformKind.CONFIG,
        line=line,
        column=column,
        old_text=old,
        new_text=new,
        description=f"{old} -> {new}",
    )


class TestApplyTransformations:
    def test_column_anchored_replacement(self):
        outcome = apply_transformations("a = a;", [_make_edit(1, 4, "a", "b")])
        assert outcome.text == "a = b;"
        assert outcome.changed

    def test_falls_back_to_first_occurrence(self):
        outcome = apply_transformations("x = rowData;", [_make_edit(1, 0, "rowData", "data")])
        assert outcome.text == "x = data;"

    def test_several_edits_on_one_line(self):
        edits = [
            _make_edit(1, 0, "rowData", "data"),
            _make_edit(1, 15, "columnDefs", "columns"),
        ]
        outcome = apply_transformations("rowData: rows, columnDefs: cols", edits)
        assert outcome.text == "data: rows, columns: cols"
        assert len(outcome.applied) == 2

    def test_edits_on_different_lines(self):
        text = "one\ntwo\nthree\n"
        outcome = apply_transformations(text, [_make_edit(1, 0, "one", "1"), _make_edit(3, 0, "three", "3")])
        assert outcome.text == "1\ntwo\n3\n"

    def test_missing_text_skipped(self):
        outcome = apply_transformations("const a = 1;", [_make_edit(1, 0, "rowData", "data")])
        assert outcome.text == "const a = 1;"
        assert not outcome.changed
        assert len(outcome.skipped) == 1
        assert isinstance(outcome.skipped[0], TransformationMismatchError)
        assert outcome.skipped[0].old_text == "rowData"

    def test_line_out_of_range_skipped(self):
        outcome = apply_transformations("a", [_make_edit(5, 0, "a", "b")])
        assert outcome.text == "a"
        assert outcome.skipped[0].line == 5

    def test_old_text_gone_after_apply(self):
        text = "{ rowData: rows }\n"
        edit = _make_edit(1, 2, "rowData", "data")
        outcome = apply_transformations(text, [edit])
        line = outcome.text.split("\n")[0]
        assert line[edit.column:edit.column + len(edit.old_text)] != edit.old_text

    def test_windows_line_endings_preserved(self):
        outcome = apply_transformations("rowData: x\r\nother\r\n", [_make_edit(1, 0, "rowData", "data")])
        assert outcome.text == "data: x\r\nother\r\n"


class TestTransformBatch:
    def test_noop_and_none_dropped(self):
        batch = TransformBatch()
        batch.add(None)
        batch.add(_make_edit(1, 0, "same", "same"))
        batch.add(_make_edit(1, 0, "old", "new"))
        assert [t.new_text for t in batch.transformations] == ["new"]

    def test_extend_carries_warnings(self):
        first, second = TransformBatch(), TransformBatch()
        second.warn("app.ts", 1, 0, "manual work")
        first.extend(second)
        assert first.warnings[0].message == "manual work"
