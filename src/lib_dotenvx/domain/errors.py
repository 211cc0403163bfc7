"""Domain-level exception hierarchy.

Purpose
-------
Expose the stable error taxonomy shared by adapters, the composition root, and
the CLI. The hierarchy lives in the domain layer so outer layers may depend on
it without pulling in any I/O.

Contents
--------
* :class:`DotenvError` – umbrella base class for all library failures.
* :class:`InvalidPath` – the chain planner received an empty path.
* :class:`FileReadError` – a planned chain file could not be read.

System Role
-----------
Malformed dotenv lines are deliberately *not* represented here: the parser
skips them silently so partially correct files still load. Only path and I/O
problems abort a load.
"""

from __future__ import annotations


class DotenvError(Exception):
    """Base type for all exceptions emitted by ``lib_dotenvx``.

    Why
    ----
    Provide a single catch-all type for consumers that do not need fine-grained
    handling.
    """


class InvalidPath(DotenvError):
    """Raised when an empty file path is handed to the chain planner."""


class FileReadError(DotenvError):
    """Raised when a file of the planned chain cannot be opened or decoded.

    Why
    ----
    A missing or unreadable layer aborts the whole load; callers need the
    offending path to report it.

    Attributes
    ----------
    path:
        The chain file that failed to load.
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"error reading file {path}: {reason}")
        self.path = path
