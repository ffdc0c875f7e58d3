"""Tokenizer — turn a raw input line into a bounded argument vector.

The shell has no quoting, escaping, or expansion: a token is simply a
run of characters that are not spaces or tabs.  Two bounds apply:

1. **Line length.**  Input is read into a fixed buffer, so a line
   keeps at most ``max_size - 1`` bytes of UTF-8.  The rest is dropped,
   along with any character the cut would split.
2. **Token count.**  The argument vector has room for
   ``MAX_NUM_ARGUMENTS - 1`` tokens plus the terminator.  Tokens past
   that are silently not collected.  This is a capacity limit, not an
   error, and a token is never cut in half.

A ``TokenSequence`` is immutable.  The spawn primitive needs a list, so
``argv`` hands out a fresh copy; in Python the list's length marks the
end of the arguments, which is the job the NULL terminator does in C.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import overload

from msh.config import MAX_COMMAND_SIZE, MAX_NUM_ARGUMENTS

WHITESPACE = " \t\n"

_SPLIT = re.compile(f"[{re.escape(WHITESPACE)}]")


@dataclass(frozen=True)
class TokenSequence(Sequence[str]):
    """An ordered, immutable run of non-empty tokens.

    Token 0, when present, is the command name.
    """

    tokens: tuple[str, ...] = ()

    @overload
    def __getitem__(self, index: int) -> str: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[str, ...]: ...

    def __getitem__(self, index: int | slice) -> str | tuple[str, ...]:
        """Return the token (or tokens) at *index*."""
        return self.tokens[index]

    def __len__(self) -> int:
        """Return the number of tokens."""
        return len(self.tokens)

    def __iter__(self) -> Iterator[str]:
        """Iterate over the tokens in order."""
        return iter(self.tokens)

    @property
    def command(self) -> str | None:
        """Return the command name, or None for an empty sequence."""
        return self.tokens[0] if self.tokens else None

    @property
    def args(self) -> tuple[str, ...]:
        """Return every token after the command name."""
        return self.tokens[1:]

    @property
    def argv(self) -> list[str]:
        """Return a fresh argument vector; the executor passes it to ``os.execv``."""
        return list(self.tokens)


def clean_line(raw: str, *, max_size: int = MAX_COMMAND_SIZE) -> str:
    """Strip the newline and bound the line to the buffer size.

    Everything from the first newline on is discarded, then the line is
    cut to ``max_size - 1`` bytes of its UTF-8 encoding.  A multibyte
    character straddling the cut is dropped whole.

    Args:
        raw: The line as read from the input source.
        max_size: The line buffer size, terminator included.

    Returns:
        The cleaned line (possibly empty).

    """
    line = raw.split("\n", 1)[0]
    encoded = line.encode("utf-8", errors="surrogateescape")
    return encoded[: max(max_size - 1, 0)].decode("utf-8", errors="ignore")


def tokenize(line: str, *, max_tokens: int = MAX_NUM_ARGUMENTS - 1) -> TokenSequence:
    """Split *line* into at most *max_tokens* whitespace-delimited tokens.

    Adjacent delimiters produce empty fragments, which are skipped and do
    not count toward the bound.

    Args:
        line: A cleaned input line.
        max_tokens: Maximum number of tokens to keep.

    Returns:
        The token sequence; empty when the line is blank or all whitespace.

    """
    tokens: list[str] = []
    for fragment in _SPLIT.split(line):
        if len(tokens) >= max_tokens:
            break
        if fragment:
            tokens.append(fragment)
    return TokenSequence(tuple(tokens))


def format_tokens(tokens: TokenSequence) -> str:
    """Render the tokens as ``token[i] = value`` lines for debugging."""
    return "\n".join(f"token[{i}] = {tok}" for i, tok in enumerate(tokens))
