"""`.env` adapter.

Purpose
-------
Implement the :class:`lib_dotenvx.application.ports.DotEnvLoader` protocol and
own the line grammar shared by dotenv files and process environment snapshots.

Contents
--------
* :class:`ParsedLine` – result of parsing one raw line.
* :func:`parse_line` – classify a line as comment, entry, or noise.
* :func:`build_env_map` – fold an ordered line sequence into an ``EnvMap``.
* :class:`DefaultDotEnvLoader` – read a file from disk into an ``EnvMap``.

Grammar
-------
* A trimmed line starting with ``#`` is a full comment. ``# LOCK`` marks the
  next parsed entry as locked; other comments leave a pending lock in place.
* Otherwise the first ``=`` splits key from value; both sides are trimmed.
  Nothing else is interpreted: no quotes, no escapes, no inline comments.
* Lines without ``=`` or with an empty key are skipped silently.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, NamedTuple

from ...domain.env import EnvMap, Entry
from ...domain.errors import FileReadError
from ...observability import log_debug, log_error

LOCK_MARKER = "# LOCK"


class ParsedLine(NamedTuple):
    """Outcome of :func:`parse_line`.

    ``entry`` is ``None`` for comments and skipped lines; ``locked`` is the
    pending-lock flag to carry into the next line.
    """

    entry: Entry | None
    locked: bool


def parse_line(line: str, locked: bool = False) -> ParsedLine:
    """Parse one raw *line* given the pending *locked* flag.

    Examples
    --------
    >>> parse_line('# LOCK')
    ParsedLine(entry=None, locked=True)
    >>> parse_line(' KEY = value # note ', locked=True)
    ParsedLine(entry=Entry(key='KEY', value='value # note', locked=True), locked=False)
    >>> parse_line('garbage', locked=True)
    ParsedLine(entry=None, locked=True)
    """

    stripped = line.strip()
    if stripped.startswith("#"):
        return ParsedLine(None, locked or stripped.startswith(LOCK_MARKER))
    key, sep, value = line.partition("=")
    key = key.strip()
    if not sep or not key:
        return ParsedLine(None, locked)
    return ParsedLine(Entry(key, value.strip(), locked), False)


def build_env_map(lines: Iterable[str]) -> EnvMap:
    """Fold *lines* into an :class:`EnvMap`; the last occurrence of a key wins.

    Examples
    --------
    >>> env = build_env_map(['# LOCK', 'A=1', 'B=2', 'A=3'])
    >>> env['A']
    Entry(key='A', value='3', locked=False)
    >>> build_env_map(['# LOCK', 'A=1'])['A'].locked
    True
    """

    entries: dict[str, Entry] = {}
    locked = False
    for line in lines:
        entry, locked = parse_line(line, locked)
        if entry is not None:
            entries[entry.key] = entry
    return EnvMap(entries)


class DefaultDotEnvLoader:
    """Load a single dotenv file into an :class:`EnvMap`.

    Why
    ----
    Each file of a planned chain is one layer. Reading must be strict about
    I/O (a missing layer aborts the load) yet lenient about content.
    """

    def load(self, path: str) -> EnvMap:
        """Read *path* as UTF-8 and return the parsed map.

        Raises
        ------
        FileReadError
            When the file is missing, unreadable, or not valid UTF-8.

        Examples
        --------
        >>> from tempfile import TemporaryDirectory
        >>> tmp = TemporaryDirectory()
        >>> target = Path(tmp.name) / '.env'
        >>> _ = target.write_text('# LOCK\\nTOKEN=secret\\n', encoding='utf-8')
        >>> DefaultDotEnvLoader().load(str(target)).locked_keys()
        ['TOKEN']
        >>> tmp.cleanup()
        """

        try:
            text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            log_error("dotenv_read_failed", stage="dotenv", path=path, error=str(exc))
            raise FileReadError(path, str(exc)) from exc
        env_map = build_env_map(text.split("\n"))
        log_debug("dotenv_loaded", stage="dotenv", path=path, keys=sorted(env_map))
        return env_map
