"""Executable resolution.

A command name is resolved by gluing it onto each search-path prefix in
turn and asking the OS whether the result exists and is executable.
The first hit wins.  The prefixes are fixed (see ``config.SEARCH_PATH``)
and ``PATH`` is never consulted, so ``ls`` always means ``/bin/ls`` when
that exists, even if ``./ls`` does too.

A ``ResolvedCommand`` only exists for a command that was found.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

from msh.config import SEARCH_PATH
from msh.errors import CommandNotFoundError

if TYPE_CHECKING:
    from msh.tokenizer import TokenSequence


@dataclass(frozen=True)
class ResolvedCommand:
    """A token sequence paired with the executable it resolved to.

    Attributes:
        path: The candidate path that passed the executable check.
        tokens: The command's tokens, redirection syntax included.

    """

    path: str
    tokens: TokenSequence


def _is_executable(path: str) -> bool:
    """Return True if *path* exists and is executable.

    A name containing a NUL byte can never name a file, so it is simply
    not a match.
    """
    try:
        return os.access(path, os.X_OK)
    except ValueError:
        return False


def candidates(name: str, *, search_path: tuple[str, ...] = SEARCH_PATH) -> list[str]:
    """Return the candidate paths for *name*, in search order."""
    return [f"{prefix}{name}" for prefix in search_path]


def resolve(
    tokens: TokenSequence,
    *,
    search_path: tuple[str, ...] = SEARCH_PATH,
) -> ResolvedCommand:
    """Resolve ``tokens[0]`` to an executable path.

    Args:
        tokens: A non-empty token sequence.
        search_path: Ordered directory prefixes to try.

    Returns:
        The resolved command.

    Raises:
        CommandNotFoundError: If no candidate is executable.

    """
    name = tokens[0]
    for path in candidates(name, search_path=search_path):
        if _is_executable(path):
            return ResolvedCommand(path=path, tokens=tokens)
    msg = f"{name}: not found in {', '.join(search_path)}"
    raise CommandNotFoundError(msg)


def executables(*, search_path: tuple[str, ...] = SEARCH_PATH) -> list[str]:
    """List the executable file names reachable through *search_path*.

    Unreadable or missing directories are skipped.

    Returns:
        Sorted, de-duplicated command names.

    """
    names: set[str] = set()
    for prefix in search_path:
        try:
            entries = list(os.scandir(prefix))
        except OSError:
            continue
        for entry in entries:
            if entry.is_file() and _is_executable(entry.path):
                names.add(entry.name)
    return sorted(names)
