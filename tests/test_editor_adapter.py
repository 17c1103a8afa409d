from __future__ import annotations

from typing import List

from mdpad_engine.adapters.textual import EditorAdapter, EditorHooks
from mdpad_engine.document import DocumentBuffer, DocumentMirror, Span
from mdpad_engine.search import SearchOptions


class Recorder:
    def __init__(self) -> None:
        self.previews: List[str] = []
        self.statuses: List[str] = []
        self.counters: List[str] = []
        self.editor: List[DocumentMirror] = []
        self.events: List[str] = []
        self.logs: List[str] = []

    def hooks(self) -> EditorHooks:
        return EditorHooks(
            update_preview=self.previews.append,
            update_status=self.statuses.append,
            update_counter=self.counters.append,
            handle_event=lambda name, payload: self.events.append(name),
            update_editor=self.editor.append,
            log=self.logs.append,
        )


def make_adapter(text: str) -> tuple[EditorAdapter, Recorder]:
    recorder = Recorder()
    adapter = EditorAdapter(DocumentBuffer.from_text(text), recorder.hooks())
    return adapter, recorder


def test_adapter_renders_preview_and_stats_on_start() -> None:
    _, recorder = make_adapter("# Cat\n\ncat")

    assert recorder.previews[-1] == "<h1>Cat</h1><p>cat</p>"
    assert recorder.statuses[-1] == "Words: 3  Characters: 10  Lines: 3"


def test_adapter_edit_refreshes_preview() -> None:
    adapter, recorder = make_adapter("")

    adapter.set_text("**x**")

    assert recorder.previews[-1] == "<p><strong>x</strong></p>"
    assert "document.changed" in recorder.events
    assert adapter.pull_document().text == "**x**"


def test_find_next_selects_match_and_updates_counter() -> None:
    adapter, recorder = make_adapter("# Cat\n\ncat")

    adapter.set_query("cat")
    assert recorder.counters[-1] == "0/2"

    adapter.find_next()

    assert recorder.counters[-1] == "1/2"
    assert adapter.buffer.selection == Span(2, 5)
    assert recorder.editor[-1].selection == Span(2, 5)
    assert list(adapter.buffer.find_history) == ["cat"]
    assert "search.highlight" in recorder.events


def test_replace_one_installs_snapshot_and_records_history() -> None:
    adapter, recorder = make_adapter("# Cat\n\ncat")
    adapter.set_query("cat")
    adapter.find_next()

    adapter.replace_one("dog")

    assert adapter.buffer.text == "# dog\n\ncat"
    assert recorder.previews[-1] == "<h1>dog</h1><p>cat</p>"
    assert recorder.counters[-1] == "0/1"
    assert recorder.statuses[-1] == "Replaced 1 occurrence"
    assert list(adapter.buffer.replace_history) == ["dog"]


def test_replace_all_then_undo_reindexes() -> None:
    adapter, recorder = make_adapter("cat Cat")
    adapter.set_query("cat")

    adapter.replace_all("dog")

    assert adapter.buffer.text == "dog dog"
    assert recorder.counters[-1] == "0/0"
    assert recorder.statuses[-1] == "Replaced 2 occurrences"

    assert adapter.undo() is True
    assert adapter.buffer.text == "cat Cat"
    assert recorder.counters[-1] == "0/2"


def test_invalid_regex_is_shown_in_counter() -> None:
    adapter, recorder = make_adapter("abc")

    outcome = adapter.set_query("(", SearchOptions(is_regex=True))

    assert outcome.status == "invalid_pattern"
    assert recorder.counters[-1] == "Invalid regex"
    assert adapter.find_next().status == "invalid_pattern"


def test_unknown_command_surfaces_status() -> None:
    adapter, recorder = make_adapter("x")

    result = adapter.run_command("nope")

    assert result.status == "command_error"
    assert recorder.statuses[-1] == "unknown command 'nope'"


def test_command_updates_editor_and_preview() -> None:
    adapter, recorder = make_adapter("Title")

    adapter.run_command("h1")

    assert adapter.buffer.text == "# Title"
    assert recorder.editor[-1].text == "# Title"
    assert recorder.previews[-1] == "<h1>Title</h1>"
    assert any(line.startswith("command <-") for line in recorder.logs)


def test_push_host_edit_adopts_text_and_selection() -> None:
    adapter, _ = make_adapter("")

    adapter.push_host_edit(DocumentMirror(text="abc", selection=Span(1, 2), version=0))

    assert adapter.buffer.text == "abc"
    assert adapter.buffer.selected_text() == "b"
