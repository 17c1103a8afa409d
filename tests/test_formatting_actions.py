from __future__ import annotations

from typing import List

from mdpad_engine.actions import COMMAND_NAMES, apply_command
from mdpad_engine.actions.formatting import (
    indent_lines,
    insert_horizontal_rule,
    insert_image,
    insert_link,
    insert_table,
    outdent_lines,
    remove_formatting,
    toggle_heading,
    toggle_list,
    wrap_selection,
)
from mdpad_engine.document import DocumentBuffer, SourceText, Span


def make_source(text: str) -> SourceText:
    return SourceText.from_text(text)


def test_wrap_selection_keeps_wrapped_text_selected() -> None:
    edit = wrap_selection(make_source("hello"), Span(0, 5), before="**", after="**")

    assert edit.source.text == "**hello**"
    assert edit.selection == Span(0, 9)


def test_wrap_empty_selection_puts_caret_between_markers() -> None:
    edit = wrap_selection(make_source(""), Span(0, 0), before="~~", after="~~")

    assert edit.source.text == "~~~~"
    assert edit.selection == Span(2, 2)


def test_link_label_falls_back_to_selection_then_url() -> None:
    labelled = insert_link(make_source("see docs"), Span(4, 8), url="https://d.io", text="Docs")
    selected = insert_link(make_source("see docs"), Span(4, 8), url="https://d.io")
    bare = insert_link(make_source(""), Span(0, 0), url="https://d.io")

    assert labelled.source.text == "see [Docs](https://d.io)"
    assert selected.source.text == "see [docs](https://d.io)"
    assert selected.selection == Span(24, 24)
    assert bare.source.text == "[https://d.io](https://d.io)"


def test_image_alt_defaults_to_image() -> None:
    edit = insert_image(make_source(""), Span(0, 0), url="cat.png")
    named = insert_image(make_source("a cat"), Span(2, 5), url="cat.png")

    assert edit.source.text == "![Image](cat.png)"
    assert named.source.text == "a ![cat](cat.png)"


def test_link_without_url_inserts_nothing() -> None:
    buffer = DocumentBuffer.from_text("x")

    assert apply_command(buffer, "link", url="").status == "command_noop"
    assert apply_command(buffer, "image").status == "command_error"
    assert buffer.text == "x"


def test_heading_toggle_twice_restores_line() -> None:
    source = make_source("intro\nTitle")
    added = toggle_heading(source, Span(8, 8), level=2)
    removed = toggle_heading(added.source, Span(9, 9), level=2)

    assert added.source.text == "intro\n## Title"
    assert removed.source.text == "intro\nTitle"


def test_heading_changes_level() -> None:
    edit = toggle_heading(make_source("## Title"), Span(0, 0), level=1)

    assert edit.source.text == "# Title"
    assert edit.selection == Span(7, 7)


def test_list_toggle_applies_to_every_line() -> None:
    added = toggle_list(make_source("a\nb"), Span(0, 3), prefix="- ")
    removed = toggle_list(added.source, added.selection, prefix="- ")

    assert added.source.text == "- a\n- b"
    assert added.selection == Span(0, 7)
    assert removed.source.text == "a\nb"


def test_ordered_list_prefix() -> None:
    edit = toggle_list(make_source("a"), Span(0, 0), prefix="1. ")

    assert edit.source.text == "1. a"


def test_indent_and_outdent() -> None:
    indented = indent_lines(make_source("a\nb"), Span(0, 3))
    outdented = outdent_lines(indented.source, indented.selection)

    assert indented.source.text == "    a\n    b"
    assert outdented.source.text == "a\nb"
    assert outdent_lines(make_source("\tx"), Span(0, 0)).source.text == "x"


def test_table_template_at_line_start() -> None:
    edit = insert_table(make_source(""), Span(0, 0), cols=2, rows=1)

    assert edit.source.text == (
        "| Header 1 | Header 2 |\n"
        "| -------- | -------- |\n"
        "| Cell 1-1 | Cell 1-2 |\n"
    )


def test_table_mid_line_starts_a_new_paragraph() -> None:
    edit = insert_table(make_source("abc"), Span(3, 3), cols=1, rows=1)

    assert edit.source.text.startswith("abc\n\n| Header 1 |")


def test_horizontal_rule() -> None:
    mid_line = insert_horizontal_rule(make_source("abc"), Span(3, 3))
    line_start = insert_horizontal_rule(make_source(""), Span(0, 0))

    assert mid_line.source.text == "abc\n---\n"
    assert mid_line.selection == Span(8, 8)
    assert line_start.source.text == "---\n"


def test_remove_formatting_strips_markers() -> None:
    text = "**b** *i* ~~s~~ `c` [l](u) ![a](p)\n# h\n> q"
    edit = remove_formatting(make_source(text), Span(0, len(text)))

    assert edit.source.text == "b i s c l a\nh\nq"


def test_command_table_names() -> None:
    for name in ("bold", "italic", "strike", "code", "h1", "h6", "bullet_list",
                 "ordered_list", "indent", "outdent", "table", "rule",
                 "clear_formatting", "link", "image"):
        assert name in COMMAND_NAMES


def test_apply_command_installs_edit_with_undo() -> None:
    buffer = DocumentBuffer.from_text("hello")
    buffer.select(Span(0, 5))
    applied: List[object] = []
    buffer.bus.subscribe("command.applied", applied.append)

    result = apply_command(buffer, "bold")

    assert result.status == "command_applied"
    assert buffer.text == "**hello**"
    assert applied == ["bold"]
    buffer.undo()
    assert buffer.text == "hello"


def test_apply_command_unknown_name() -> None:
    buffer = DocumentBuffer.from_text("x")
    errors: List[object] = []
    buffer.bus.subscribe("command.error", errors.append)

    result = apply_command(buffer, "nope")

    assert result.status == "command_error"
    assert errors == ["nope"]
    assert buffer.text == "x"


def test_apply_command_bad_arguments() -> None:
    buffer = DocumentBuffer.from_text("")

    assert apply_command(buffer, "table", cols=0).status == "command_error"


def test_apply_command_without_change_is_noop() -> None:
    buffer = DocumentBuffer.from_text("plain")

    result = apply_command(buffer, "clear_formatting")

    assert result.status == "command_noop"
    assert len(buffer.undo_stack) == 0
