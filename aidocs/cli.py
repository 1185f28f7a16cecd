"""The ``ai-docs`` command line."""

from __future__ import annotations

import sys
from collections.abc import Callable, Sequence
from typing import Any

import click

from aidocs.commands.clean import run_clean
from aidocs.commands.initialize import run_init
from aidocs.commands.pull import run_pull
from aidocs.commands.push import run_push
from aidocs.console import CommandError, Console, Options

_LONG_HELP = (
    'AI Docs CLI provides a one-command workflow that isolates AI-generated "memory" '
    "files onto a dedicated Git branch+worktree, with automatic symlinks and easy sync."
)


def _shared_options(func: Callable[..., Any]) -> Callable[..., Any]:
    func = click.option(
        "-v", "--verbose", is_flag=True, default=False, help="verbose output"
    )(func)
    func = click.option(
        "--dry-run", is_flag=True, default=False,
        help="show what would be done without making changes",
    )(func)
    func = click.option(
        "--config", "config_path", default="",
        help="config file path (default: .ai-docs.config.yml)",
    )(func)
    return func


def _options(ctx: click.Context, config_path: str, dry_run: bool, verbose: bool,
             force: bool = False) -> Options:
    parent = ctx.find_object(Options) or Options()
    return Options(
        config_path=config_path or parent.config_path,
        dry_run=dry_run or parent.dry_run,
        verbose=verbose or parent.verbose,
        force=force,
    )


@click.group(
    invoke_without_command=True,
    help=_LONG_HELP,
    short_help="AI documentation management tool",
    context_settings={"help_option_names": ["-h", "--help"]},
)
@_shared_options
@click.pass_context
def _app(ctx: click.Context, config_path: str, dry_run: bool, verbose: bool) -> None:
    ctx.obj = Options(config_path=config_path, dry_run=dry_run, verbose=verbose)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@_app.command(
    "init",
    short_help="Initialize AI docs branch and worktree",
    help="Creates an orphan branch for AI memory files, sets up worktree, "
         "and creates symlinks.",
)
@_shared_options
@click.option("--force", is_flag=True, default=False,
              help="force initialization even if branch/worktree exists")
@click.pass_context
def _init(ctx: click.Context, config_path: str, dry_run: bool, verbose: bool,
          force: bool) -> None:
    options = _options(ctx, config_path, dry_run, verbose, force)
    run_init(options, Console(verbose=options.verbose))


@_app.command(
    "clean",
    short_help="Remove AI docs worktree and branch",
    help="Removes the AI docs worktree and optionally deletes the branch "
         "after confirmation.",
)
@_shared_options
@click.pass_context
def _clean(ctx: click.Context, config_path: str, dry_run: bool, verbose: bool) -> None:
    options = _options(ctx, config_path, dry_run, verbose)
    run_clean(options, Console(verbose=options.verbose), sys.stdin)


@_app.command(
    "pull",
    short_help="Pull AI docs from remote branch to local",
    help="Pulls latest changes from the remote AI docs branch and copies them "
         "to your local project.",
)
@_shared_options
@click.option("--overwrite", is_flag=True, default=False,
              help="overwrite local files without warning")
@click.pass_context
def _pull(ctx: click.Context, config_path: str, dry_run: bool, verbose: bool,
          overwrite: bool) -> None:
    options = _options(ctx, config_path, dry_run, verbose)
    run_pull(options, Console(verbose=options.verbose), overwrite)


@_app.command(
    "push",
    short_help="Push local AI docs to remote branch",
    help="Copies local AI docs to the worktree, commits changes, and pushes "
         "to the remote repository.",
)
@_shared_options
@click.pass_context
def _push(ctx: click.Context, config_path: str, dry_run: bool, verbose: bool) -> None:
    options = _options(ctx, config_path, dry_run, verbose)
    run_push(options, Console(verbose=options.verbose))


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line and return the exit status."""
    args = list(argv) if argv is not None else sys.argv[1:]
    try:
        _app.main(args=args, prog_name="ai-docs", standalone_mode=False)
    except (CommandError, OSError) as exc:
        click.secho(f"Error: {exc}", fg="red")
        return 1
    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    return 0


if __name__ == "__main__":
    sys.exit(main())