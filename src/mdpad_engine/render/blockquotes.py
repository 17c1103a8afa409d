"""Recursive folding of ``>``-quoted line runs into nested blockquotes."""

from __future__ import annotations

import re
from typing import List, Sequence

from .code import stash_fences
from .escapes import Stash

_QUOTED = re.compile(r"^(>+) ?(.*)$")

MAX_QUOTE_DEPTH = 32


def fold_blockquotes(text: str, stash: Stash) -> str:
    """Fold quoted runs, stashing the tags and any code fenced inside a quote."""

    return "\n".join(_fold(text.split("\n"), 0, stash))


def _wrap(content: str, depth: int, stash: Stash) -> str:
    # Tags sit on their own blank-line separated lines so line-anchored
    # stages (headings, tables, lists) still see the quoted lines.
    opening = (stash.put("<blockquote>") + "\n\n") * depth
    closing = ("\n\n" + stash.put("</blockquote>")) * depth
    return "\n\n" + opening + content + closing + "\n\n"


def _fold(lines: Sequence[str], nesting: int, stash: Stash) -> List[str]:
    if nesting >= MAX_QUOTE_DEPTH:
        return list(lines)

    result: List[str] = []
    run: List[str] = []
    run_depth = 0

    for line in lines:
        match = _QUOTED.match(line)
        if match is None:
            if run:
                result.append(_flush(run, run_depth, nesting, stash))
                run = []
            run_depth = 0
            result.append(line)
            continue

        depth = len(match.group(1))
        if run and depth != run_depth:
            result.append(_flush(run, run_depth, nesting, stash))
            run = []
        run.append(match.group(2))
        run_depth = depth

    if run:
        result.append(_flush(run, run_depth, nesting, stash))
    return result


def _flush(run: Sequence[str], depth: int, nesting: int, stash: Stash) -> str:
    # Fences only line up once the markers are gone.
    body = stash_fences("\n".join(run), stash)
    inner = "\n".join(_fold(body.split("\n"), nesting + depth, stash))
    return _wrap(inner, depth, stash)
