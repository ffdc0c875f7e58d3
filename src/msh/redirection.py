"""Output redirection — ``cmd args > file``.

The only redirection the shell understands is a single ``>`` followed
by exactly one file name at the very end of the line.  Both stdout and
stderr of the child go to that file, which is created (mode ``0600``)
or truncated.

The scan runs in the child, after ``fork`` and before ``execv``:

1. ``parse_redirection`` splits the tokens into the program's argv and
   an optional ``Redirection``.  Anything else with a ``>`` in it is an
   error: no file name, extra tokens after the file name, or a second
   ``>``.
2. ``open_redirection`` opens the target.
3. ``apply_redirection`` points fds 1 and 2 at it.

The program never sees the ``>`` or the file name.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass

from msh.errors import RedirectionError

REDIRECT_TOKEN = ">"

_FILE_MODE = 0o600
_OPEN_FLAGS = os.O_WRONLY | os.O_CREAT | os.O_TRUNC


@dataclass(frozen=True)
class Redirection:
    """A parsed ``> target`` directive."""

    target: str


def parse_redirection(tokens: Sequence[str]) -> tuple[list[str], Redirection | None]:
    """Split *tokens* into the program's argv and an optional redirection.

    Args:
        tokens: The full token sequence, command name included.

    Returns:
        ``(argv, redirection)``; redirection is None when there is no ``>``.

    Raises:
        RedirectionError: If the ``>`` usage is malformed.

    """
    positions = [i for i, tok in enumerate(tokens) if tok == REDIRECT_TOKEN]
    if not positions:
        return list(tokens), None

    if len(positions) > 1:
        msg = f"expected one '{REDIRECT_TOKEN}', found {len(positions)}"
        raise RedirectionError(msg)

    index = positions[0]
    if index == len(tokens) - 1:
        msg = f"missing file name after '{REDIRECT_TOKEN}'"
        raise RedirectionError(msg)
    if index != len(tokens) - 2:
        msg = f"unexpected tokens after redirection target: {' '.join(tokens[index + 2 :])}"
        raise RedirectionError(msg)
    if index == 0:
        msg = "redirection without a command"
        raise RedirectionError(msg)

    return list(tokens[:index]), Redirection(target=tokens[index + 1])


def open_redirection(redirection: Redirection) -> int:
    """Open the redirection target for writing and return its fd.

    Raises:
        RedirectionError: If the file cannot be opened.

    """
    try:
        return os.open(redirection.target, _OPEN_FLAGS, _FILE_MODE)
    except (OSError, ValueError) as e:
        msg = f"cannot open {redirection.target!r}: {e}"
        raise RedirectionError(msg) from e


def apply_redirection(fd: int) -> None:
    """Point stdout and stderr at *fd*, then close the original."""
    os.dup2(fd, 1)
    os.dup2(fd, 2)
    if fd not in (1, 2):
        os.close(fd)
