"""Domain-level environment value objects.

Purpose
-------
Anchor the immutable types that flow through the chain loader: a single parsed
variable (:class:`Entry`), a whole environment layer (:class:`EnvMap`), and a
per-key change record (:class:`DiffEntry`). The module contains no I/O.

Contents
--------
* :class:`Entry` – frozen ``key``/``value``/``locked`` triple.
* :class:`EnvMap` – read-only ``Mapping[str, Entry]`` with export helpers.
* :class:`DiffEntry` – ``(key, before, after)`` named tuple.
* :data:`EMPTY_ENV_MAP` – canonical empty instance.

System Role
-----------
Every parser, merger, and loader returns these types. Maps are never mutated
in place; merge operations build new instances so successive chain layers can
never alias each other.
"""

from __future__ import annotations

import json
from collections.abc import Mapping as MappingABC
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterator, Mapping, NamedTuple


@dataclass(frozen=True, slots=True)
class Entry:
    """One configuration variable parsed from a dotenv line.

    Attributes
    ----------
    key:
        Variable name, never empty.
    value:
        Raw value with surrounding whitespace removed. Inline ``#`` text is
        kept verbatim.
    locked:
        ``True`` when a ``# LOCK`` comment preceded the entry; later layers
        may not override a locked entry.

    Examples
    --------
    >>> Entry("PORT", "8080").line()
    'PORT=8080'
    """

    key: str
    value: str
    locked: bool = False

    def line(self) -> str:
        """Render the entry as a ``KEY=VALUE`` line."""

        return f"{self.key}={self.value}"


class DiffEntry(NamedTuple):
    """Change record for one key; an absent side is the empty string."""

    key: str
    before: str
    after: str


@dataclass(frozen=True, slots=True, eq=False)
class EnvMap(MappingABC[str, Entry]):
    """Immutable mapping from variable name to :class:`Entry`.

    Why
    ----
    Layers of a chain are merged functionally. Wrapping the entries in a
    ``mappingproxy`` guarantees that neither the loader nor consumers can
    change a layer after it was built.

    Examples
    --------
    >>> env = EnvMap({"B": Entry("B", "2"), "A": Entry("A", "1", locked=True)})
    >>> env.value("A")
    '1'
    >>> env.lines()
    ['A=1', 'B=2']
    >>> env.locked_keys()
    ['A']
    """

    _entries: Mapping[str, Entry]

    def __post_init__(self) -> None:
        object.__setattr__(self, "_entries", MappingProxyType(dict(self._entries)))

    def __getitem__(self, key: str) -> Entry:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"EnvMap({dict(self._entries)!r})"

    def value(self, key: str, default: str | None = None) -> str | None:
        """Return the string value stored under *key* or *default*."""

        entry = self._entries.get(key)
        if entry is None:
            return default
        return entry.value

    def environ(self) -> dict[str, str]:
        """Return a plain ``{key: value}`` dictionary suitable for ``os.exec*``."""

        return {key: entry.value for key, entry in self._entries.items()}

    def lines(self) -> list[str]:
        """Return ``KEY=VALUE`` lines sorted by key."""

        return [self._entries[key].line() for key in sorted(self._entries)]

    def locked_keys(self) -> list[str]:
        """Return the sorted names of locked entries."""

        return sorted(key for key, entry in self._entries.items() if entry.locked)

    def to_json(self, *, indent: int | None = None) -> str:
        """Serialise ``{key: value}`` as JSON with keys sorted.

        Examples
        --------
        >>> EnvMap({"A": Entry("A", "1")}).to_json()
        '{"A":"1"}'
        """

        return json.dumps(self.environ(), indent=indent, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


EMPTY_ENV_MAP = EnvMap(MappingProxyType({}))
"""Canonical empty map; safe to share because :class:`EnvMap` is immutable."""
