"""Shared sandbox helpers for chain-loading tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping


@dataclass
class ChainSandbox:
    """A temporary directory holding dotenv layers plus a fake environment."""

    root: Path
    env: dict[str, str] = field(default_factory=dict)

    def write(self, name: str, content: str) -> Path:
        """Write *content* to ``root/name`` and return the path."""

        path = self.root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    def path(self, name: str) -> str:
        """Return ``root/name`` as a string, whether or not it exists."""

        return str(self.root / name)


def create_chain_sandbox(tmp_path: Path, files: Mapping[str, str] | None = None, env: Mapping[str, str] | None = None) -> ChainSandbox:
    """Create a sandbox under *tmp_path* pre-populated with *files*."""

    sandbox = ChainSandbox(root=tmp_path, env=dict(env or {}))
    for name, content in (files or {}).items():
        sandbox.write(name, content)
    return sandbox
