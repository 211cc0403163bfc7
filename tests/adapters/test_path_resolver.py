"""Chain planner tests covering the dotted-name expansion rules."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lib_dotenvx import InvalidPath, plan_chain
from lib_dotenvx.adapters.path_resolvers.default import DefaultChainPlanner


def test_plan_expands_from_env_segment() -> None:
    assert plan_chain("/p/app.config.env.production.api") == [
        "/p/app.config.env",
        "/p/app.config.env.production",
        "/p/app.config.env.production.api",
    ]


def test_plan_relative_names_stay_relative() -> None:
    assert plan_chain("app.env.dev") == ["app.env", "app.env.dev"]
    assert plan_chain("conf/app.env.dev") == ["conf/app.env", "conf/app.env.dev"]


def test_plan_hidden_dotenv_chain() -> None:
    assert plan_chain("/srv/.env.production") == ["/srv/.env", "/srv/.env.production"]


@pytest.mark.parametrize("path", [".env", "/etc/app/.env", "env.local", "settings", "a.b.c.d"])
def test_plan_returns_path_itself(path: str) -> None:
    assert plan_chain(path) == [path]


def test_plan_trailing_env_segment() -> None:
    assert plan_chain("/p/app.config.env") == ["/p/app.config.env"]


def test_plan_rejects_empty_path() -> None:
    with pytest.raises(InvalidPath):
        plan_chain("")


def test_default_planner_delegates() -> None:
    assert DefaultChainPlanner().plan("/p/a.env.b") == ["/p/a.env", "/p/a.env.b"]


SEGMENT = st.text(alphabet="abcdefghijklmnopqrstuvwxyz", min_size=1, max_size=6).filter(lambda s: s != "env")


@given(st.lists(SEGMENT, min_size=1, max_size=2), st.lists(SEGMENT, min_size=1, max_size=3))
def test_plan_chain_shape(prefix: list[str], suffix: list[str]) -> None:
    name = ".".join([*prefix, "env", *suffix])
    chain = plan_chain(f"/base/{name}")
    assert len(chain) == len(suffix) + 1
    assert chain[-1] == f"/base/{name}"
    assert chain[0] == "/base/" + ".".join([*prefix, "env"])
    for shorter, longer in zip(chain, chain[1:]):
        assert longer.startswith(shorter + ".")


@given(st.lists(SEGMENT, min_size=1, max_size=2))
def test_plan_two_or_fewer_segments_is_identity(parts: list[str]) -> None:
    path = "/base/" + ".".join(parts)
    assert plan_chain(path) == [path]
