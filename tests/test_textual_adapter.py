from __future__ import annotations

from typing import List, Tuple

from editor_engine.adapters.textual import (
    INVALID_LINE,
    FindRequest,
    TextualEditorAdapter,
    TextualUIHooks,
)
from editor_engine.document import EditorDocument, Location
from editor_engine.metrics import DocumentMetrics


class Recorder:
    def __init__(self) -> None:
        self.statuses: List[str] = []
        self.texts: List[str] = []
        self.metrics: List[DocumentMetrics] = []
        self.selections: List[Tuple[Location, Location]] = []
        self.results: List[str] = []
        self.goto_results: List[str] = []
        self.edits: List[Tuple[Location, Location, str]] = []
        self.logs: List[str] = []

    def hooks(self) -> TextualUIHooks:
        return TextualUIHooks(
            update_status=self.statuses.append,
            update_text=self.texts.append,
            update_metrics=self.metrics.append,
            select_range=lambda start, end: self.selections.append((start, end)),
            show_find_result=self.results.append,
            show_goto_result=self.goto_results.append,
            replace_range=lambda start, end, text: self.edits.append((start, end, text)),
            log=self.logs.append,
        )


def make_adapter(text: str = "cat dog\ncat") -> tuple[TextualEditorAdapter, Recorder]:
    recorder = Recorder()
    adapter = TextualEditorAdapter(EditorDocument(text, name="adapter"), recorder.hooks())
    return adapter, recorder


def test_adapter_publishes_initial_status() -> None:
    _, recorder = make_adapter()

    assert recorder.statuses[-1] == "Words: 3   Chars: 10   Lines: 1   Column: 1"
    assert recorder.metrics[-1].word_count == 3


def test_text_change_rescans_and_resets_search() -> None:
    adapter, recorder = make_adapter()
    adapter.handle_find(FindRequest(query="cat"))

    metrics = adapter.handle_text_changed("cat dog\ncat cat", (1, 7))

    assert metrics.word_count == 4
    assert metrics.current_column == 8
    assert adapter.document.search.is_idle
    assert any(line.startswith("edit ->") for line in recorder.logs)


def test_cursor_move_updates_column() -> None:
    adapter, recorder = make_adapter()

    metrics = adapter.handle_cursor_moved((1, 2))

    assert metrics.current_column == 3
    assert recorder.statuses[-1].endswith("Column: 3")


def test_find_selects_match_across_lines() -> None:
    adapter, recorder = make_adapter()
    request = FindRequest(query="cat")

    adapter.handle_find(request)
    adapter.handle_find(request, find_next=True)
    adapter.handle_find(request, find_next=True)

    assert recorder.selections == [
        ((0, 0), (0, 3)),
        ((1, 0), (1, 3)),
        ((0, 0), (0, 3)),
    ]
    assert recorder.results == [
        "Found match.",
        "Found match.",
        "Found match (wrapped to start).",
    ]


def test_find_without_results_reports_notice() -> None:
    adapter, recorder = make_adapter()

    adapter.handle_find(FindRequest(query="bird"))

    assert recorder.results[-1] == "No results found."
    assert recorder.selections == []


def test_replace_all_pushes_new_text() -> None:
    adapter, recorder = make_adapter()

    result = adapter.handle_replace_all(FindRequest(query="cat", replacement="cow"))

    assert result.count == 2
    assert recorder.texts[-1] == "cow dog\ncow"
    assert recorder.results[-1] == "Replaced 2 occurrences."


def test_replace_single_occurrence() -> None:
    adapter, recorder = make_adapter()

    adapter.handle_replace(FindRequest(query="dog", replacement="emu"))

    assert recorder.texts[-1] == "cat emu\ncat"
    assert recorder.results[-1] == "Replaced 1 occurrence."


def test_brace_check_reports_status() -> None:
    adapter, recorder = make_adapter("f(x\n)")

    assert adapter.handle_brace_check((0, 1)) is True
    assert recorder.statuses[-1].endswith("Brace: ok")
    assert adapter.handle_brace_check((0, 0)) is None


def test_go_to_line_selects_line_start() -> None:
    adapter, recorder = make_adapter("one\ntwo\nthree")

    location = adapter.handle_go_to_line("2")

    assert location == (1, 0)
    assert recorder.selections[-1] == ((1, 0), (1, 0))
    assert recorder.goto_results[-1] == "Moved to line 2."
    assert recorder.statuses[-1].endswith("Column: 1")


def test_go_to_line_reports_bad_input() -> None:
    adapter, recorder = make_adapter("one\ntwo")

    assert adapter.handle_go_to_line("7") is None
    assert recorder.goto_results[-1] == "Line 7 is out of range (1-2)."
    assert adapter.handle_go_to_line("two") is None
    assert recorder.goto_results[-1] == INVALID_LINE
    assert recorder.selections == []


def test_newline_pushes_indented_edit() -> None:
    adapter, recorder = make_adapter("  f() {}")

    edit = adapter.handle_newline("  f() {}", (0, 7))

    assert recorder.edits[-1] == ((0, 7), (0, 7), "\n      \n  ")
    assert recorder.selections[-1] == ((1, 6), (1, 6))
    assert adapter.document.text == "  f() {\n      \n  }"
    assert adapter.document.cursor == edit.cursor


def test_newline_syncs_pending_widget_text_first() -> None:
    adapter, recorder = make_adapter("")

    adapter.handle_newline("[", (0, 1))

    assert adapter.document.text == "[\n    "
    assert recorder.edits[-1] == ((0, 1), (0, 1), "\n    ")


def test_closing_brace_dedents_and_toggle_turns_it_off() -> None:
    adapter, recorder = make_adapter("{\n    ")

    adapter.handle_closing_brace("{\n    ", (1, 4), "}")

    assert recorder.edits[-1] == ((1, 0), (1, 4), "}")
    assert adapter.document.text == "{\n}"

    assert adapter.handle_toggle_auto_indent() is False
    adapter.handle_newline(adapter.document.text, (0, 1))

    assert adapter.document.text == "{\n\n}"
    assert any("auto_indent=False" in line for line in recorder.logs)
