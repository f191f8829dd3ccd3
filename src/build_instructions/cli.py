"""Command-line front end for emitting build instructions from shell build steps."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import typer
from loguru import logger

from build_instructions.cargo import Cargo, PathBehavior
from build_instructions.config import Settings, load_settings
from build_instructions.errors import ConfigurationError
from build_instructions.logging_utils import configure_logging
from build_instructions.raw import INSTRUCTION_NAMES

app = typer.Typer(
    name="build-instructions",
    help="Print Cargo build script instructions to stdout.",
    add_completion=False,
    no_args_is_help=True,
)


@dataclass(frozen=True)
class CliState:
    settings: Settings
    cargo: Cargo


@app.callback()
def main(
    ctx: typer.Context,
    prefix: str | None = typer.Option(None, "--prefix", help="Prefix written before every instruction"),
    log_level: str | None = typer.Option(None, "--log-level", help="Log level for stderr logging"),
) -> None:
    try:
        settings = load_settings(prefix=prefix, log_level=log_level)
    except ConfigurationError as exc:
        typer.echo(f"Invalid configuration: {exc}", err=True)
        raise typer.Exit(2) from exc
    configure_logging(profile=settings.log_format, level=settings.log_level)
    ctx.obj = CliState(settings=settings, cargo=Cargo.from_settings(settings))


def _emit(ctx: typer.Context, action: Callable[[Cargo], None]) -> None:
    state: CliState = ctx.obj
    try:
        action(state.cargo)
    except OSError as exc:
        logger.debug("cli.emit.failed command={} error={!r}", ctx.command.name, exc)
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(1) from exc


@app.command("kinds")
def kinds() -> None:
    """List the instruction names this tool can emit."""
    for name in INSTRUCTION_NAMES:
        typer.echo(name)


@app.command("rerun-if-changed")
def rerun_if_changed(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="File or directory to watch"),  # noqa: B008
    behavior: PathBehavior | None = typer.Option(
        None, "--behavior", "-b", case_sensitive=False, help="Existence check for PATH"
    ),
) -> None:
    """Re-run the build script when PATH changes."""
    state: CliState = ctx.obj
    chosen = behavior or state.settings.path_behavior
    _emit(ctx, lambda cargo: cargo.rerun_if_changed(path, chosen))


@app.command("rerun-if-env-changed")
def rerun_if_env_changed(ctx: typer.Context, var: str = typer.Argument(..., help="Environment variable name")) -> None:
    """Re-run the build script when VAR changes."""
    _emit(ctx, lambda cargo: cargo.rerun_if_env_changed(var))


@app.command("rustc-link-arg")
def rustc_link_arg(ctx: typer.Context, flag: str = typer.Argument(...)) -> None:
    """Pass a linker flag to every target."""
    _emit(ctx, lambda cargo: cargo.rustc_link_arg(flag))


@app.command("rustc-link-arg-bin")
def rustc_link_arg_bin(
    ctx: typer.Context,
    bin_name: str = typer.Argument(..., metavar="BIN"),
    flag: str = typer.Argument(...),
) -> None:
    """Pass a linker flag to the binary BIN."""
    _emit(ctx, lambda cargo: cargo.rustc_link_arg_bin(bin_name, flag))


@app.command("rustc-link-arg-bins")
def rustc_link_arg_bins(ctx: typer.Context, flag: str = typer.Argument(...)) -> None:
    """Pass a linker flag to binaries."""
    _emit(ctx, lambda cargo: cargo.rustc_link_arg_bins(flag))


@app.command("rustc-link-arg-tests")
def rustc_link_arg_tests(ctx: typer.Context, flag: str = typer.Argument(...)) -> None:
    """Pass a linker flag to tests."""
    _emit(ctx, lambda cargo: cargo.rustc_link_arg_tests(flag))


@app.command("rustc-link-arg-examples")
def rustc_link_arg_examples(ctx: typer.Context, flag: str = typer.Argument(...)) -> None:
    """Pass a linker flag to examples."""
    _emit(ctx, lambda cargo: cargo.rustc_link_arg_examples(flag))


@app.command("rustc-link-arg-benches")
def rustc_link_arg_benches(ctx: typer.Context, flag: str = typer.Argument(...)) -> None:
    """Pass a linker flag to benchmarks."""
    _emit(ctx, lambda cargo: cargo.rustc_link_arg_benches(flag))


@app.command("rustc-link-lib")
def rustc_link_lib(ctx: typer.Context, lib: str = typer.Argument(..., help="e.g. static:+whole-archive=mylib")) -> None:
    """Link a library."""
    _emit(ctx, lambda cargo: cargo.rustc_link_lib(lib))


@app.command("rustc-link-search")
def rustc_link_search(
    ctx: typer.Context,
    path: str = typer.Argument(...),
    kind: str | None = typer.Option(None, "--kind", "-k", help="Search path kind, e.g. native or crate"),
) -> None:
    """Add a directory to the library search path."""
    _emit(ctx, lambda cargo: cargo.rustc_link_search(kind, path))


@app.command("rustc-flags")
def rustc_flags(ctx: typer.Context, flags: str = typer.Argument(...)) -> None:
    """Pass flags to the compiler."""
    _emit(ctx, lambda cargo: cargo.rustc_flags(flags))


@app.command("rustc-cfg")
def rustc_cfg(
    ctx: typer.Context,
    key: str = typer.Argument(...),
    value: str | None = typer.Argument(None),
) -> None:
    """Enable a compile-time cfg setting."""
    _emit(ctx, lambda cargo: cargo.rustc_cfg(key, value))


@app.command("rustc-env")
def rustc_env(ctx: typer.Context, var: str = typer.Argument(...), value: str = typer.Argument(...)) -> None:
    """Set an environment variable at compile time."""
    _emit(ctx, lambda cargo: cargo.rustc_env(var, value))


@app.command("rustc-cdylib-link-arg")
def rustc_cdylib_link_arg(ctx: typer.Context, flag: str = typer.Argument(...)) -> None:
    """Pass a linker flag to cdylib crates."""
    _emit(ctx, lambda cargo: cargo.rustc_cdylib_link_arg(flag))


@app.command("warning")
def warning(ctx: typer.Context, message: str = typer.Argument(...)) -> None:
    """Display a warning during the build."""
    _emit(ctx, lambda cargo: cargo.warning(message))


@app.command("metadata")
def metadata(ctx: typer.Context, key: str = typer.Argument(...), value: str = typer.Argument(...)) -> None:
    """Set metadata for dependents of a links package."""
    _emit(ctx, lambda cargo: cargo.metadata(key, value))
