"""End-to-end CLI coverage for the public commands exposed by lib_dotenvx."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

import lib_cli_exit_tools

from lib_dotenvx import cli
from tests.support import ChainSandbox, create_chain_sandbox

CHAIN = {
    "svc.env": "# LOCK\nREGION=eu\nMODE=base\n",
    "svc.env.prod": "REGION=us\nMODE=prod\nPORT=443\n",
}


def _runner() -> CliRunner:
    """Return a fresh CLI runner so each test starts from a clean state."""

    return CliRunner()


@pytest.fixture()
def sandbox(tmp_path: Path) -> ChainSandbox:
    return create_chain_sandbox(tmp_path, CHAIN)


def test_cli_plan_prints_chain() -> None:
    result = _runner().invoke(cli.cli, ["plan", "/p/app.config.env.production.api"])
    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "/p/app.config.env",
        "/p/app.config.env.production",
        "/p/app.config.env.production.api",
    ]


def test_cli_plan_rejects_empty_path() -> None:
    result = _runner().invoke(cli.cli, ["plan", ""])
    assert result.exit_code != 0
    assert type(result.exception).__name__ == "InvalidPath"


def test_cli_dump_env_format(sandbox: ChainSandbox) -> None:
    result = _runner().invoke(cli.cli, ["dump", "-o", "-f", sandbox.path("svc.env.prod")], env={"ZZ_MARKER": "1"})
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert "MODE=prod" in lines
    assert "PORT=443" in lines
    assert "REGION=eu" in lines
    assert "ZZ_MARKER=1" in lines
    positions = [lines.index(line) for line in ("MODE=prod", "PORT=443", "REGION=eu", "ZZ_MARKER=1")]
    assert positions == sorted(positions)


def test_cli_dump_json_format(sandbox: ChainSandbox) -> None:
    result = _runner().invoke(
        cli.cli, ["dump", "--override", "--file", sandbox.path("svc.env.prod"), "--format", "json", "--indent", "2"]
    )
    assert result.exit_code == 0
    payload = json.loads("\n".join(line for line in result.output.splitlines() if not line.startswith("---> ")))
    assert payload["REGION"] == "eu"
    assert payload["MODE"] == "prod"


def test_cli_dump_without_override_ignores_chain(sandbox: ChainSandbox) -> None:
    result = _runner().invoke(cli.cli, ["dump", "-f", sandbox.path("svc.env.prod")], env={"MODE": "shell"})
    assert result.exit_code == 0
    assert "MODE=shell" in result.output.splitlines()
    assert "PORT=443" not in result.output.splitlines()


def test_cli_dump_verbose_reports_overrides(sandbox: ChainSandbox) -> None:
    result = _runner().invoke(cli.cli, ["dump", "-o", "-v", "-f", sandbox.path("svc.env.prod")], env={"MODE": "shell"})
    assert result.exit_code == 0
    assert f"---> Loading {sandbox.path('svc.env')}" in result.output
    assert f"---> Loading {sandbox.path('svc.env.prod')}" in result.output
    assert "     Overrided MODE: shell -> base" in result.output
    assert "     Overrided MODE: base -> prod" in result.output


def test_cli_dump_override_reports_loaded_files_without_diffs(sandbox: ChainSandbox) -> None:
    result = _runner().invoke(cli.cli, ["dump", "-o", "-f", sandbox.path("svc.env.prod")], env={"MODE": "shell"})
    assert result.exit_code == 0
    assert f"---> Loading {sandbox.path('svc.env')}" in result.output
    assert f"---> Loading {sandbox.path('svc.env.prod')}" in result.output
    assert "Overrided" not in result.output


def test_cli_dump_without_override_is_silent(sandbox: ChainSandbox) -> None:
    result = _runner().invoke(cli.cli, ["dump", "-v", "-f", sandbox.path("svc.env.prod")])
    assert result.exit_code == 0
    assert "---> Loading" not in result.output


def test_cli_dump_missing_file_fails(tmp_path: Path) -> None:
    result = _runner().invoke(cli.cli, ["dump", "-o", "-f", str(tmp_path / "missing.env")])
    assert result.exit_code != 0
    assert type(result.exception).__name__ == "FileReadError"


def test_cli_diff_command(tmp_path: Path) -> None:
    sandbox = create_chain_sandbox(tmp_path, {"a.env": "A=1\nB=2\n", "b.env": "A=1\nB=3\nC=4\n"})
    result = _runner().invoke(cli.cli, ["diff", sandbox.path("a.env"), sandbox.path("b.env")])
    assert result.exit_code == 0
    assert result.output.splitlines() == ["B: 2 -> 3", "C:  -> 4"]


def test_cli_run_execs_command_with_merged_environment(sandbox: ChainSandbox, monkeypatch) -> None:
    captured: dict[str, object] = {}

    def _fake_exec(file: str, args: list[str], env: dict[str, str]) -> None:
        captured.update(file=file, args=args, env=env)

    monkeypatch.setattr(cli.os, "execvpe", _fake_exec)
    result = _runner().invoke(
        cli.cli,
        ["run", "-o", "-f", sandbox.path("svc.env.prod"), "--", "printenv", "-0", "MODE"],
    )
    assert result.exit_code == 0
    assert captured["file"] == "printenv"
    assert captured["args"] == ["printenv", "-0", "MODE"]
    env = captured["env"]
    assert isinstance(env, dict)
    assert env["MODE"] == "prod"
    assert env["REGION"] == "eu"


def test_cli_run_options_stop_at_command(sandbox: ChainSandbox, monkeypatch) -> None:
    captured: list[list[str]] = []
    monkeypatch.setattr(cli.os, "execvpe", lambda file, args, env: captured.append(args))
    result = _runner().invoke(cli.cli, ["run", "-f", sandbox.path("svc.env"), "ls", "-o", "-v"])
    assert result.exit_code == 0
    assert captured == [["ls", "-o", "-v"]]


def test_cli_run_without_command_only_loads(sandbox: ChainSandbox, monkeypatch) -> None:
    def _unexpected_exec(*_args, **_kwargs):
        raise AssertionError("exec must not be called without a command")

    monkeypatch.setattr(cli.os, "execvpe", _unexpected_exec)
    result = _runner().invoke(cli.cli, ["run", "-o", "-f", sandbox.path("svc.env.prod")])
    assert result.exit_code == 0


def test_cli_generate_examples_command(tmp_path: Path) -> None:
    destination = tmp_path / "demo"
    runner = _runner()
    first = runner.invoke(cli.cli, ["generate-examples", "--destination", str(destination)])
    assert first.exit_code == 0
    created = [Path(line) for line in first.output.splitlines()]
    assert [path.name for path in created] == [
        "app.config.env",
        "app.config.env.production",
        "app.config.env.production.api",
    ]

    second = runner.invoke(cli.cli, ["generate-examples", "--destination", str(destination)])
    assert second.exit_code == 0
    assert second.output == ""

    forced = runner.invoke(cli.cli, ["generate-examples", "--destination", str(destination), "--force"])
    assert forced.exit_code == 0
    assert len(forced.output.splitlines()) == 3


def test_cli_info_handles_missing_metadata(monkeypatch) -> None:
    """`cli info` must degrade gracefully when package metadata is unavailable."""

    def _raise_pkg_not_found(*_args, **_kwargs):
        raise cli.metadata.PackageNotFoundError()

    monkeypatch.setattr(cli.metadata, "metadata", _raise_pkg_not_found)
    result = _runner().invoke(cli.cli, ["info"])
    assert result.exit_code == 0
    assert "metadata unavailable" in result.output


def test_cli_main_returns_exit_codes(tmp_path: Path) -> None:
    assert cli.main(["plan", "a.env.b"]) == 0
    assert cli.main(["dump", "-o", "-f", str(tmp_path / "missing.env")]) != 0


def test_cli_main_restores_traceback_flag() -> None:
    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    exit_code = cli.main(["--traceback", "plan", ".env"], restore_traceback=True)
    assert exit_code == 0
    assert getattr(lib_cli_exit_tools.config, "traceback", False) == previous_traceback
