from __future__ import annotations

from mdpad_engine.render import INDENT_STEP, ListKind, parse_list, render


def test_adjacent_kinds_start_new_lists() -> None:
    assert render("- a\n- b\n1. c") == (
        "<ul><li>a</li><li>b</li></ul><ol><li>c</li></ol>"
    )


def test_nested_list_by_four_space_indent() -> None:
    assert render("- a\n    - b\n- c") == (
        "<ul><li>a<ul><li>b</li></ul></li><li>c</li></ul>"
    )


def test_tab_counts_as_one_indent_step() -> None:
    assert render("- a\n\t1. b") == render("- a\n    1. b")


def test_mixed_markers_inside_one_unordered_list() -> None:
    assert render("* a\n+ b\n- c") == "<ul><li>a</li><li>b</li><li>c</li></ul>"


def test_list_items_get_inline_formatting() -> None:
    assert render("- **x**\n- [y](z)") == (
        '<ul><li><strong>x</strong></li><li><a href="z">y</a></li></ul>'
    )


def test_parse_list_builds_children() -> None:
    blocks = parse_list(["1. a", "    - b", "    - c", "2. d"], 0)

    assert len(blocks) == 1
    top = blocks[0]
    assert top.kind is ListKind.ORDERED
    assert [item.content for item in top.items] == ["a", "d"]
    child = top.items[0].children[0]
    assert child.kind is ListKind.UNORDERED
    assert [item.content for item in child.items] == ["b", "c"]


def test_orphan_indented_line_is_dropped() -> None:
    blocks = parse_list(["    - orphan", "- item"], 0)

    assert [item.content for item in blocks[0].items] == ["item"]


def test_deep_nesting_terminates() -> None:
    lines = [" " * (INDENT_STEP * level) + "- x" for level in range(40)]

    markup = render("\n".join(lines))

    assert markup.startswith("<ul><li>x")
