"""CLI adapter for ``lib_dotenvx`` built on ``lib_cli_exit_tools``.

Purpose
-------
Expose chain planning, loading, diffing, and command execution so operators
can inspect and use layered dotenv files without writing Python.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command wiring traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata.
* :func:`cli_plan` – prints the chain implied by a dotted filename.
* :func:`cli_dump` – prints the merged environment.
* :func:`cli_diff` – prints the diff between two dotenv files.
* :func:`cli_run` – replaces the process with a command under the merged
  environment.
* :func:`cli_generate_examples` – scaffolds an example chain.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
The CLI lives in the outermost layer. It calls :func:`lib_dotenvx.core.load_chain`
and owns the two side effects the core refuses to perform: printing verbose
progress and ``exec``-ing the child process.
"""

from __future__ import annotations

import os
import sys
from importlib import metadata
from pathlib import Path
from typing import Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .adapters.dotenv.default import DefaultDotEnvLoader
from .application.diff import diff_maps, format_diff
from .core import load_chain, plan_chain
from .domain.env import DiffEntry, EnvMap
from .examples import generate_examples as _generate_examples

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

FORMAT_CHOICES: Final[tuple[str, ...]] = ("env", "json")


def _resolve_version() -> str:
    """Return the installed package version or ``"0.0.0"`` for source checkouts."""

    try:
        return metadata.version("lib_dotenvx")
    except metadata.PackageNotFoundError:
        return "0.0.0"


def _file_option(func):
    return click.option(
        "-f",
        "--file",
        "env_file",
        default=".env",
        show_default=True,
        help="Path to the .env file; dotted names expand into a chain",
    )(func)


def _override_option(func):
    return click.option(
        "-o",
        "--override",
        is_flag=True,
        default=False,
        help="Apply the chain on top of the current environment",
    )(func)


def _verbose_option(func):
    return click.option(
        "-v",
        "--verbose",
        is_flag=True,
        default=False,
        help="Print every override applied by each chain file",
    )(func)


@click.group(
    help="Load layered .env chains into the environment",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name="lib_dotenvx",
    message="lib_dotenvx version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command storing the traceback preference for all subcommands.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata("lib_dotenvx")
    except metadata.PackageNotFoundError:
        click.echo("lib_dotenvx (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', 'lib_dotenvx')}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("plan", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("path")
def cli_plan(path: str) -> None:
    """Print the chain of files implied by *path*, least specific first.

    Examples
    --------
    >>> from click.testing import CliRunner
    >>> result = CliRunner().invoke(cli, ["plan", "conf/app.env.dev"])
    >>> result.output.splitlines()
    ['conf/app.env', 'conf/app.env.dev']
    """

    for chain_path in plan_chain(path):
        click.echo(chain_path)


@cli.command("dump", context_settings=CLICK_CONTEXT_SETTINGS)
@_file_option
@_override_option
@_verbose_option
@click.option(
    "--format",
    "output_format",
    type=click.Choice(FORMAT_CHOICES, case_sensitive=False),
    default="env",
    show_default=True,
    help="Print KEY=VALUE lines or a JSON object",
)
@click.option("--indent", type=int, default=None, help="Pretty-print JSON output with the provided indent size")
def cli_dump(env_file: str, override: bool, verbose: bool, output_format: str, indent: Optional[int]) -> None:
    """Load the chain and print the resulting environment sorted by key."""

    env_map = _load(env_file, override, verbose)
    if output_format.lower() == "json":
        click.echo(env_map.to_json(indent=indent))
        return
    for line in env_map.lines():
        click.echo(line)


@cli.command("diff", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("before", type=click.Path(path_type=Path, dir_okay=False))
@click.argument("after", type=click.Path(path_type=Path, dir_okay=False))
def cli_diff(before: Path, after: Path) -> None:
    """Print every key whose value differs between two dotenv files."""

    loader = DefaultDotEnvLoader()
    for line in format_diff(diff_maps(loader.load(str(before)), loader.load(str(after)))):
        click.echo(line)


@cli.command(
    "run",
    context_settings={**CLICK_CONTEXT_SETTINGS, "ignore_unknown_options": True, "allow_interspersed_args": False},
)
@_file_option
@_override_option
@_verbose_option
@click.argument("command", nargs=-1, type=click.UNPROCESSED)
def cli_run(env_file: str, override: bool, verbose: bool, command: tuple[str, ...]) -> None:
    """Load the chain and replace this process with COMMAND under the result.

    Without a command the chain is still loaded (surfacing read errors) and
    the process exits successfully.
    """

    env_map = _load(env_file, override, verbose)
    if not command:
        return
    _exec(list(command), env_map)


@cli.command("generate-examples", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--destination",
    type=click.Path(path_type=Path, file_okay=False, dir_okay=True, resolve_path=True),
    required=True,
    help="Directory that will receive the example chain",
)
@click.option(
    "--force/--no-force",
    default=False,
    help="Overwrite existing example files if set",
    show_default=True,
)
def cli_generate_examples(destination: Path, force: bool) -> None:
    """Write an example chain ending in ``app.config.env.production.api``."""

    for path in _generate_examples(destination, force=force):
        click.echo(str(path))


def _load(env_file: str, override: bool, verbose: bool) -> EnvMap:
    """Run :func:`load_chain` reporting each applied file on stderr when *override* is set."""

    return load_chain(
        env_file,
        override=override,
        verbose=verbose,
        reporter=_report if override else None,
    )


def _report(path: str, diff: tuple[DiffEntry, ...] | None) -> None:
    """Echo the file being applied and, for verbose loads, its overrides."""

    click.echo(f"---> Loading {path}", err=True)
    for line in format_diff(diff or ()):
        click.echo(f"     Overrided {line}", err=True)


def _exec(command: list[str], env_map: EnvMap) -> None:
    """Replace the current process with *command* using the merged environment."""

    sys.stdout.flush()
    sys.stderr.flush()
    os.execvpe(command[0], command, env_map.environ())


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name="lib_dotenvx",
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
