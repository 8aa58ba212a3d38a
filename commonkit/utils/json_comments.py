"""Strip comments and layout whitespace from JSON-like text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class CommentDelimiters:
    """A comment opened by ``start`` and closed by ``end``."""

    start: str
    end: str


DEFAULT_DELIMITERS: tuple[CommentDelimiters, ...] = (
    CommentDelimiters("//", "\n"),
    CommentDelimiters("/*", "*/"),
)

_WHITESPACE = frozenset(" \n\t")


def discard(content: str, matches: Iterable[CommentDelimiters] = DEFAULT_DELIMITERS) -> str:
    """Remove comments and spaces, newlines and tabs outside comments.

    Delimiters are tried in order; an unterminated comment swallows the rest
    of the text.
    """
    delimiters = tuple(matches)
    output: list[str] = []
    active: CommentDelimiters | None = None
    index = 0
    length = len(content)

    while index < length:
        if active is None:
            opener = next(
                (d for d in delimiters if d.start and content.startswith(d.start, index)),
                None,
            )
            if opener is not None:
                active = opener
                index += len(opener.start)
                continue
            char = content[index]
            if char not in _WHITESPACE:
                output.append(char)
        elif active.end and content.startswith(active.end, index):
            index += len(active.end)
            active = None
            continue
        index += 1

    return "".join(output)