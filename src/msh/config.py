"""Shell configuration — every tunable constant in one place.

A C shell would hard-code its limits as preprocessor constants:
the line buffer size, the argument vector capacity, the prompt, the
error text, and the list of directories searched for executables.
``ShellConfig`` gathers them into one immutable record so the shell,
the tokenizer, and the executor all read the same values, and tests
can swap in a different search path without touching globals.

Design choices:
    - **Frozen dataclass** — configuration is decided once at startup
      and never mutated while the loop runs.
    - **The search path is not read from ``PATH``.**  Resolution order
      is part of the shell's observable behaviour, so it stays a fixed
      ordered tuple.
    - **Only two environment toggles** — ``MSH_DEBUG_TOKENS`` turns on
      the token dump and ``MSH_LOG`` names a file for the audit log.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

# Directories searched for executables, highest priority first.
SEARCH_PATH: tuple[str, ...] = ("/bin/", "/usr/bin/", "/usr/local/bin/", "./")

MAX_COMMAND_SIZE = 255
MAX_NUM_ARGUMENTS = 12

PROMPT = "msh> "

# The exact bytes, spelling included, are part of the shell's output.
ERROR_MESSAGE = "An error has occured\n"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True)
class ShellConfig:
    """Immutable configuration for one shell session.

    Attributes:
        prompt: Written to stdout before each interactive read.
        search_path: Ordered directory prefixes tried during resolution.
        max_command_size: Line buffer size; at most ``max_command_size - 1``
            characters of a line are kept.
        max_num_arguments: Argument vector capacity including the
            terminator; at most ``max_num_arguments - 1`` tokens are kept.
        error_message: The single message written for every recoverable error.
        debug_tokens: Print ``token[i] = value`` for each parsed token.
        log_path: File the audit log is appended to when the loop ends.

    """

    prompt: str = PROMPT
    search_path: tuple[str, ...] = SEARCH_PATH
    max_command_size: int = MAX_COMMAND_SIZE
    max_num_arguments: int = MAX_NUM_ARGUMENTS
    error_message: str = ERROR_MESSAGE
    debug_tokens: bool = False
    log_path: str | None = None

    @property
    def max_tokens(self) -> int:
        """Return how many tokens a line may contribute."""
        return self.max_num_arguments - 1

    @classmethod
    def from_environ(cls, environ: Mapping[str, str]) -> ShellConfig:
        """Build a config from environment variables.

        Args:
            environ: Usually ``os.environ``.

        Returns:
            A config with defaults for everything the environment
            does not override.

        """
        debug = environ.get("MSH_DEBUG_TOKENS", "").strip().lower() in _TRUTHY
        log_path = environ.get("MSH_LOG") or None
        return cls(debug_tokens=debug, log_path=log_path)
