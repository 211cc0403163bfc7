"""Application-layer merge policy.

Purpose
-------
Combine environment layers with lock-respecting precedence. The module is free
of I/O so it can be reused by alternative composition roots.

Contents
    - ``override``: fold one layer onto another.
    - ``merge_maps``: left-to-right fold over any number of layers.

System Role
-----------
:func:`lib_dotenvx.core.load_chain` calls :func:`override` once per chain
file, so files later in the chain win unless an earlier layer locked the key.
"""

from __future__ import annotations

from typing import Iterable

from ..domain.env import EMPTY_ENV_MAP, EnvMap, Entry


def override(old: EnvMap, new: EnvMap) -> EnvMap:
    """Return *old* overridden by *new*, keeping locked entries of *old*.

    Neither input is modified.

    Examples
    --------
    >>> old = EnvMap({'K': Entry('K', 'v1', locked=True), 'A': Entry('A', 'a')})
    >>> new = EnvMap({'K': Entry('K', 'v2'), 'A': Entry('A', 'b'), 'N': Entry('N', 'n')})
    >>> merged = override(old, new)
    >>> merged.value('K'), merged.value('A'), merged.value('N')
    ('v1', 'b', 'n')
    """

    result: dict[str, Entry] = dict(old)
    for key, entry in new.items():
        existing = result.get(key)
        if existing is None or not existing.locked:
            result[key] = entry
    return EnvMap(result)


def merge_maps(maps: Iterable[EnvMap]) -> EnvMap:
    """Fold :func:`override` across *maps* ordered from lowest to highest precedence.

    Examples
    --------
    >>> layers = [EnvMap({'A': Entry('A', '1')}), EnvMap({'A': Entry('A', '2')})]
    >>> merge_maps(layers).value('A')
    '2'
    >>> len(merge_maps([]))
    0
    """

    merged = EMPTY_ENV_MAP
    for layer in maps:
        merged = override(merged, layer)
    return merged
