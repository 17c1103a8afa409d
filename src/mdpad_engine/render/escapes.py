"""Opaque placeholders that shield text from later rendering stages.

Two kinds of placeholder share one delimiter pair:

* escape tokens carry the code point of a backslash-escaped character, so the
  character can never be read as syntax and is restored verbatim at the end;
* stash tokens stand in for finished markup (code, links) that no later stage
  may touch.

The delimiters are ASCII control characters; they are stripped from incoming
text so user input can never forge a placeholder.
"""

from __future__ import annotations

import re
from typing import List

_OPEN = "\x02"
_CLOSE = "\x03"

ESCAPABLE = "\\`*_{}[]()#+-.!|"

_ESCAPE_SOURCE = re.compile(r"\\([\\`*_{}\[\]()#+\-.!|])")
_ESCAPE_TOKEN = re.compile(_OPEN + r"e([0-9a-f]+)" + _CLOSE)
_STASH_TOKEN = re.compile(_OPEN + r"s(\d+)" + _CLOSE)
_DELIMITERS = re.compile(f"[{_OPEN}{_CLOSE}]")


def strip_delimiters(text: str) -> str:
    return _DELIMITERS.sub("", text)


def escape_token(char: str) -> str:
    return f"{_OPEN}e{ord(char):x}{_CLOSE}"


def extract_escapes(text: str) -> str:
    """Replace every ``\\<punct>`` pair with an escape token."""

    return _ESCAPE_SOURCE.sub(lambda m: escape_token(m.group(1)), text)


def restore_escapes(text: str, *, as_source: bool = False) -> str:
    """Turn escape tokens back into characters.

    With ``as_source`` the backslash is put back, which undoes
    ``extract_escapes`` exactly; otherwise only the literal character remains.
    """

    def _restore(match: re.Match[str]) -> str:
        char = chr(int(match.group(1), 16))
        return f"\\{char}" if as_source else char

    return _ESCAPE_TOKEN.sub(_restore, text)


class Stash:
    """Holds finished markup fragments behind stash tokens for one render."""

    def __init__(self) -> None:
        self._fragments: List[str] = []

    def __len__(self) -> int:
        return len(self._fragments)

    def put(self, markup: str) -> str:
        self._fragments.append(markup)
        return f"{_OPEN}s{len(self._fragments) - 1}{_CLOSE}"

    def restore(self, text: str) -> str:
        def _fragment(match: re.Match[str]) -> str:
            index = int(match.group(1))
            if index >= len(self._fragments):
                return ""
            return self._fragments[index]

        # A fragment may embed earlier tokens (an image inside a link), and a
        # fragment can only embed tokens created before it, so nesting depth
        # is bounded by the number of fragments. Escape tokens are left for
        # the final stage.
        for _ in range(len(self._fragments) + 1):
            if _STASH_TOKEN.search(text) is None:
                break
            text = _STASH_TOKEN.sub(_fragment, text)
        return text


def is_stash_token(text: str) -> bool:
    return _STASH_TOKEN.fullmatch(text) is not None


__all__ = [
    "ESCAPABLE",
    "Stash",
    "escape_token",
    "extract_escapes",
    "is_stash_token",
    "restore_escapes",
    "strip_delimiters",
]
