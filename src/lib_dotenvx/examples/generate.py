"""Example dotenv chain generation helpers.

Purpose
-------
Produce a reproducible three-file chain that demonstrates dotted-name
expansion and ``# LOCK`` semantics. Used by the ``generate-examples`` CLI
command and by documentation.

Contents
    - ``DEFAULT_CHAIN_NAME``: the most specific file of the generated chain.
    - ``ExampleSpec``: dataclass capturing a relative path and text content.
    - ``generate_examples``: writes the chain honouring ``force``.
    - ``_build_specs``: yields the file templates, least specific first.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

DEFAULT_CHAIN_NAME = "app.config.env.production.api"
"""Leaf of the generated chain; pass it to ``lib_dotenvx dump -f``."""


@dataclass(slots=True)
class ExampleSpec:
    """Describe a single example file to be written to disk.

    Attributes
    ----------
    relative_path:
        Path relative to the destination directory.
    content:
        File contents (UTF-8 text) including explanatory comments.
    """

    relative_path: Path
    content: str


def generate_examples(destination: str | Path, *, force: bool = False) -> list[Path]:
    """Write the example chain under *destination*.

    Parameters
    ----------
    destination:
        Directory that will receive the files; created when missing.
    force:
        When ``True`` existing files are overwritten; otherwise they are
        skipped and omitted from the result.

    Returns
    -------
    list[Path]
        File paths written during this invocation, least specific first.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> [path.name for path in generate_examples(tmp.name)]
    ['app.config.env', 'app.config.env.production', 'app.config.env.production.api']
    >>> generate_examples(tmp.name)
    []
    >>> tmp.cleanup()
    """

    dest = Path(destination)
    written: list[Path] = []
    for spec in _build_specs():
        path = dest / spec.relative_path
        if not (force or not path.exists()):
            continue
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(spec.content, encoding="utf-8")
        written.append(path)
    return written


def _build_specs() -> Iterator[ExampleSpec]:
    """Yield :class:`ExampleSpec` instances for each layer of the chain."""

    yield ExampleSpec(
        Path("app.config.env"),
        "# Shared defaults, applied first\n"
        "APP_NAME=demo\n"
        "LOG_LEVEL=info\n"
        "# LOCK\n"
        "# Region is fixed for every environment\n"
        "REGION=eu-west-1\n",
    )
    yield ExampleSpec(
        Path("app.config.env.production"),
        "# Production overrides\n"
        "LOG_LEVEL=warning\n"
        "REGION=us-east-1\n"
        "DATABASE_URL=postgres://db.internal/demo\n",
    )
    yield ExampleSpec(
        Path(DEFAULT_CHAIN_NAME),
        "# API service overrides\n"
        "PORT=8080\n"
        "LOG_LEVEL=error # inline text stays part of the value\n",
    )
