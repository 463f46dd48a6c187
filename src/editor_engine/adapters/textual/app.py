"""Executable Textual app that hosts the editor engine."""

from __future__ import annotations

import argparse
import os
from typing import Callable, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual.app import App, ComposeResult
    from textual.containers import Horizontal
    from textual.events import Key
    from textual.widgets import Checkbox, Footer, Header, Input, Static, TextArea
    from textual.widgets.text_area import Selection
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use editor_engine.adapters.textual.app"
    ) from exc

from editor_engine.document import EditorDocument, Location
from editor_engine.runtime import telemetry

from .controller import FindRequest, TextualEditorAdapter, TextualUIHooks


class IndentingTextArea(TextArea):
    """TextArea that hands Enter and closing braces to an indent handler.

    The handler returns ``False`` to let the key through unchanged.
    """

    CLOSING_BRACES = ")]}"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.indent_handler: Callable[[str], bool] | None = None

    async def on_key(self, event: Key) -> None:
        if self.indent_handler is None or self.read_only:
            return
        if event.key == "enter":
            typed = "\n"
        elif event.character and event.character in self.CLOSING_BRACES:
            typed = event.character
        else:
            return
        if self.indent_handler(typed):
            event.prevent_default()
            event.stop()


class EditorEngineApp(App[None]):
    """Minimal Textual editor with a status line and a find/replace bar."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#editor {
		height: 1fr;
	}

	#find-bar {
		height: auto;
	}

	#find-input, #replace-input {
		width: 1fr;
	}

	#find-result {
		height: 1;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
        ("ctrl+f", "focus_find", "Find"),
        ("ctrl+g", "focus_goto", "Go to line"),
        ("ctrl+h", "focus_replace", "Replace with"),
        ("f3", "find_next", "Find next"),
        ("ctrl+r", "replace", "Replace"),
        ("ctrl+shift+r", "replace_all", "Replace all"),
        ("ctrl+b", "check_brace", "Check brace"),
        ("alt+c", "toggle_case", "Match case"),
        ("alt+w", "toggle_words", "Whole words"),
        ("alt+i", "toggle_auto_indent", "Auto indent"),
    ]

    def __init__(self, *, text: str = "", name: str = "untitled") -> None:
        super().__init__()
        self.document = EditorDocument(text, name=name)
        self.adapter: TextualEditorAdapter | None = None
        self._initial_text = text

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield IndentingTextArea(self._initial_text, id="editor")
        with Horizontal(id="find-bar"):
            yield Input(placeholder="Find", id="find-input")
            yield Input(placeholder="Replace with", id="replace-input")
            yield Checkbox("Match case", id="case-toggle")
            yield Checkbox("Whole words", id="words-toggle")
            yield Input(placeholder="Go to line", id="goto-input", type="integer")
        yield Static("", id="find-result")
        yield Static("", id="status-line")
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_status=self._update_status,
            update_text=self._update_text,
            select_range=self._select_range,
            show_find_result=self._show_find_result,
            show_goto_result=self._show_find_result,
            replace_range=self._replace_range,
            log=self._log_line,
        )
        self.adapter = TextualEditorAdapter(self.document, hooks)
        area = self.query_one("#editor", IndentingTextArea)
        area.indent_handler = self._indent_key
        area.focus()

    # -- widget events -----------------------------------------------------

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if self.adapter:
            area = event.text_area
            self.adapter.handle_text_changed(area.text, area.cursor_location)

    def on_text_area_selection_changed(self, event: TextArea.SelectionChanged) -> None:
        if self.adapter and event.text_area.text == self.document.text:
            self.adapter.handle_cursor_moved(event.selection.end)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "find-input":
            self.action_find_next()
        elif event.input.id == "replace-input":
            self.action_replace()
        elif event.input.id == "goto-input" and self.adapter:
            if self.adapter.handle_go_to_line(event.value) is not None:
                self.query_one("#editor", TextArea).focus()

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "find-input":
            # a new query starts over from the top
            self.document.search.reset()

    # -- actions -----------------------------------------------------------

    def action_focus_find(self) -> None:
        self.query_one("#find-input", Input).focus()

    def action_focus_replace(self) -> None:
        self.query_one("#replace-input", Input).focus()

    def action_focus_goto(self) -> None:
        self.query_one("#goto-input", Input).focus()

    def action_find_next(self) -> None:
        if self.adapter:
            self.adapter.handle_find(self._request(), find_next=True)

    def action_replace(self) -> None:
        if self.adapter:
            self.adapter.handle_replace(self._request())

    def action_replace_all(self) -> None:
        if self.adapter:
            self.adapter.handle_replace_all(self._request())

    def action_check_brace(self) -> None:
        if not self.adapter:
            return
        area = self.query_one("#editor", TextArea)
        if self.adapter.handle_brace_check(area.cursor_location) is None:
            self._show_find_result("Cursor is not on an opening brace.")

    def action_toggle_case(self) -> None:
        self.query_one("#case-toggle", Checkbox).toggle()

    def action_toggle_words(self) -> None:
        self.query_one("#words-toggle", Checkbox).toggle()

    def action_toggle_auto_indent(self) -> None:
        if self.adapter:
            enabled = self.adapter.handle_toggle_auto_indent()
            self._show_find_result(f"Auto indent {'on' if enabled else 'off'}.")

    def _indent_key(self, typed: str) -> bool:
        area = self.query_one("#editor", TextArea)
        if not self.adapter or not self.document.auto_indent or area.selected_text:
            return False
        if typed == "\n":
            self.adapter.handle_newline(area.text, area.cursor_location)
        else:
            self.adapter.handle_closing_brace(area.text, area.cursor_location, typed)
        return True

    def _request(self) -> FindRequest:
        return FindRequest(
            query=self.query_one("#find-input", Input).value,
            replacement=self.query_one("#replace-input", Input).value,
            case_sensitive=self.query_one("#case-toggle", Checkbox).value,
            whole_words=self.query_one("#words-toggle", Checkbox).value,
        )

    # -- hooks -------------------------------------------------------------

    def _update_status(self, status: str) -> None:
        self.query_one("#status-line", Static).update(status)

    def _update_text(self, text: str) -> None:
        area = self.query_one("#editor", TextArea)
        if area.text != text:
            area.load_text(text)

    def _replace_range(self, start: Location, end: Location, text: str) -> None:
        self.query_one("#editor", TextArea).replace(text, start, end)

    def _select_range(self, start: Location, end: Location) -> None:
        area = self.query_one("#editor", TextArea)
        area.selection = Selection(start, end)
        area.scroll_cursor_visible()

    def _show_find_result(self, message: str) -> None:
        self.query_one("#find-result", Static).update(message)

    def _log_line(self, line: str) -> None:
        telemetry.record_event("textual.adapter", level="debug", data={"line": line})


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the editor engine Textual demo.")
    parser.add_argument(
        "--text",
        default="",
        help="Initial document text",
    )
    parser.add_argument(
        "--name",
        default="untitled",
        help="Document name used in telemetry",
    )
    parser.add_argument(
        "--log-preset",
        choices=telemetry.PRESETS,
        default=os.environ.get("EDITOR_ENGINE_LOG_PRESET") or None,
        help="Telemetry preset (default: derived from EDITOR_ENGINE_* variables)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    app = EditorEngineApp(text=args.text, name=args.name)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
