"""Markdown renderer: escape extraction through block cleanup."""

from .escapes import ESCAPABLE, extract_escapes, restore_escapes
from .lists import INDENT_STEP, parse_list
from .nodes import Alignment, CodeBlock, Image, Link, ListBlock, ListItem, ListKind, Table
from .pipeline import Renderer, literal_markup, render
from .tables import parse_alignments, parse_table

__all__ = [
    "Alignment",
    "CodeBlock",
    "ESCAPABLE",
    "INDENT_STEP",
    "Image",
    "Link",
    "ListBlock",
    "ListItem",
    "ListKind",
    "Renderer",
    "Table",
    "extract_escapes",
    "literal_markup",
    "parse_alignments",
    "parse_list",
    "parse_table",
    "render",
    "restore_escapes",
]
