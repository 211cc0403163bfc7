"""Application-layer diff engine.

Purpose
-------
Describe how two environment layers differ so verbose loads can narrate every
override. A key missing on one side compares as the empty string.

Contents
    - ``diff_maps``: sorted, de-duplicated list of :class:`DiffEntry` records.
    - ``format_diff``: human-readable rendering used by the CLI.
"""

from __future__ import annotations

from typing import Iterable

from ..domain.env import DiffEntry, EnvMap


def diff_maps(before: EnvMap, after: EnvMap) -> tuple[DiffEntry, ...]:
    """Return every key whose value differs between *before* and *after*.

    Both directions are compared; records are de-duplicated by exact
    ``(key, before, after)`` content and sorted by key.

    Examples
    --------
    >>> from lib_dotenvx.domain.env import Entry
    >>> before = EnvMap({'A': Entry('A', '1'), 'B': Entry('B', 'x')})
    >>> after = EnvMap({'A': Entry('A', '2'), 'C': Entry('C', 'y')})
    >>> for item in diff_maps(before, after):
    ...     print(item)
    DiffEntry(key='A', before='1', after='2')
    DiffEntry(key='B', before='x', after='')
    DiffEntry(key='C', before='', after='y')
    """

    seen: set[DiffEntry] = set()
    collected: list[DiffEntry] = []
    for record in (*_changes(before, after, forward=True), *_changes(after, before, forward=False)):
        if record in seen:
            continue
        seen.add(record)
        collected.append(record)
    return tuple(sorted(collected, key=lambda record: record.key))


def _changes(source: EnvMap, other: EnvMap, *, forward: bool) -> Iterable[DiffEntry]:
    """Yield a record for each key of *other* whose value differs in *source*."""

    for key, entry in other.items():
        counterpart = source.value(key, "")
        if counterpart == entry.value:
            continue
        if forward:
            yield DiffEntry(key, counterpart, entry.value)
        else:
            yield DiffEntry(key, entry.value, counterpart)


def format_diff(diff: Iterable[DiffEntry]) -> list[str]:
    """Render *diff* as ``KEY: before -> after`` lines.

    Examples
    --------
    >>> format_diff([DiffEntry('PORT', '80', '8080')])
    ['PORT: 80 -> 8080']
    """

    return [f"{item.key}: {item.before} -> {item.after}" for item in diff]
