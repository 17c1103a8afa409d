"""Executable Textual app: Markdown editor with live preview and find/replace."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual.app import App, ComposeResult
    from textual.containers import Horizontal, VerticalScroll
    from textual.widgets import Button, Checkbox, Footer, Header, Input, Static, TextArea
    from textual.widgets.text_area import Selection
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use mdpad_engine.adapters.textual.app"
    ) from exc

from mdpad_engine.document import DocumentBuffer, DocumentMirror, Span
from mdpad_engine.runtime import telemetry
from mdpad_engine.search import SearchOptions

from .controller import EditorAdapter, EditorHooks


@dataclass
class UIState:
    preview_markup: str = ""
    status_text: str = ""
    counter_text: str = "0/0"


class MarkdownEditorApp(App[None]):
    """Editor pane, rendered preview and a find/replace bar."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#panes {
		height: 1fr;
	}

	#editor {
		width: 1fr;
	}

	#preview-scroll {
		width: 1fr;
		border: round $accent;
		padding: 0 1;
	}

	#find-bar {
		height: 3;
	}

	#find-input, #replace-input {
		width: 1fr;
	}

	#match-counter {
		width: 12;
		content-align: center middle;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
        ("ctrl+b", "command('bold')", "Bold"),
        ("ctrl+e", "command('italic')", "Italic"),
        ("ctrl+k", "command('code')", "Code"),
        ("f3", "find_next", "Next"),
        ("shift+f3", "find_previous", "Previous"),
    ]

    def __init__(
        self,
        *,
        text: str = "",
        options: Optional[SearchOptions] = None,
    ) -> None:
        super().__init__()
        self._state = UIState()
        self._initial_text = text
        self._options = options or SearchOptions()
        self.buffer: DocumentBuffer | None = None
        self.adapter: EditorAdapter | None = None
        self._editor: TextArea | None = None
        self._preview: Static | None = None
        self._status: Static | None = None
        self._counter: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Horizontal(id="panes"):
            self._editor = TextArea(self._initial_text, id="editor")
            yield self._editor
            with VerticalScroll(id="preview-scroll"):
                self._preview = Static("", id="preview", markup=False)
                yield self._preview
        with Horizontal(id="find-bar"):
            yield Input(placeholder="Find", id="find-input")
            yield Input(placeholder="Replace", id="replace-input")
            yield Checkbox("Aa", self._options.case_sensitive, id="case-sensitive")
            yield Checkbox(".*", self._options.is_regex, id="use-regex")
            self._counter = Static(self._state.counter_text, id="match-counter")
            yield self._counter
            yield Button("Next", id="find-next")
            yield Button("Replace", id="replace-one")
            yield Button("All", id="replace-all")
        self._status = Static("", id="status-line")
        yield self._status
        yield Footer()

    def on_mount(self) -> None:
        self.buffer = DocumentBuffer.from_text(self._initial_text, name="editor")
        hooks = EditorHooks(
            update_preview=self._update_preview,
            update_status=self._update_status,
            update_counter=self._update_counter,
            update_editor=self._update_editor,
            log=self._log_line,
        )
        self.adapter = EditorAdapter(self.buffer, hooks, options=self._options)

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if self.adapter:
            self.adapter.set_text(event.text_area.text)

    def on_text_area_selection_changed(self, event: TextArea.SelectionChanged) -> None:
        if not (self.adapter and self.buffer):
            return
        source = self.buffer.snapshot()
        start = source.offset_for(*event.selection.start)
        end = source.offset_for(*event.selection.end)
        self.adapter.set_selection(Span(min(start, end), max(start, end)))

    def on_input_changed(self, event: Input.Changed) -> None:
        if self.adapter and event.input.id == "find-input":
            self.adapter.set_query(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "find-input":
            self.action_find_next()
        elif event.input.id == "replace-input" and self.adapter:
            self.adapter.replace_one(event.value)

    def on_checkbox_changed(self, event: Checkbox.Changed) -> None:
        if not self.adapter:
            return
        if event.checkbox.id == "case-sensitive":
            self._options = self._options.evolve(case_sensitive=event.value)
        elif event.checkbox.id == "use-regex":
            self._options = self._options.evolve(is_regex=event.value)
        else:
            return
        self.adapter.set_query(self.adapter.engine.query, self._options)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if not self.adapter:
            return
        replacement = self.query_one("#replace-input", Input).value
        if event.button.id == "find-next":
            self.action_find_next()
        elif event.button.id == "replace-one":
            self.adapter.replace_one(replacement)
        elif event.button.id == "replace-all":
            self.adapter.replace_all(replacement)

    def action_command(self, name: str) -> None:
        if self.adapter:
            self.adapter.run_command(name)

    def action_find_next(self) -> None:
        if self.adapter:
            self.adapter.find_next()

    def action_find_previous(self) -> None:
        if self.adapter:
            self.adapter.find_previous()

    def _update_preview(self, markup: str) -> None:
        self._state.preview_markup = markup
        if self._preview:
            self._preview.update(markup)

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status:
            self._status.update(status)

    def _update_counter(self, counter: str) -> None:
        self._state.counter_text = counter
        if self._counter:
            self._counter.update(counter)

    def _update_editor(self, mirror: DocumentMirror) -> None:
        if not (self._editor and self.buffer):
            return
        if self._editor.text != mirror.text:
            self._editor.load_text(mirror.text)
        if mirror.selection is not None:
            source = self.buffer.snapshot()
            self._editor.selection = Selection(
                source.position_for(mirror.selection.start),
                source.position_for(mirror.selection.end),
            )

    def _log_line(self, line: str) -> None:
        telemetry.record_event("ui.adapter", level="debug", data={"line": line})


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the Markdown editor Textual demo.")
    parser.add_argument(
        "--file",
        type=Path,
        default=os.environ.get("MDPAD_ENGINE_FILE"),
        help="Markdown file to open",
    )
    parser.add_argument(
        "--case-sensitive",
        action="store_true",
        help="Start with case-sensitive search enabled",
    )
    parser.add_argument(
        "--regex",
        action="store_true",
        help="Start with regex search enabled",
    )
    parser.add_argument(
        "--no-wrap",
        action="store_true",
        default=not telemetry.env_flag("WRAP_AROUND", True),
        help="Stop at the first/last match instead of wrapping",
    )
    return parser.parse_args(argv)


def _read_text(path: Any) -> str:
    if path is None:
        return ""
    return Path(path).read_text(encoding="utf-8")


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    options = SearchOptions(
        case_sensitive=args.case_sensitive,
        is_regex=args.regex,
        wrap_around=not args.no_wrap,
    )
    app = MarkdownEditorApp(text=_read_text(args.file), options=options)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
