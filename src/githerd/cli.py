"""Command line interface for githerd."""

from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from . import __version__
from .core import commands
from .core.config import Config
from .core.errors import GitherdError
from .core.logging import setup_logging

error_console = Console(stderr=True)


def _fail(error: Exception) -> None:
    error_console.print(f"Error: {error}", style="red", markup=False, highlight=False, soft_wrap=True)
    raise click.Abort()


@click.group()
@click.version_option(__version__, prog_name="githerd")
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity, can be repeated (-v info, -vv debug)",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML file overriding the default configuration",
)
@click.option("--log-file", help="Also write debug logs to this file")
@click.pass_context
def cli(
    ctx: click.Context, verbose: int, config_file: Optional[Path], log_file: Optional[str]
) -> None:
    """Control many git repositories at the same time.

    githerd does not need any setup inside the repositories and can work
    with just the ones you pick. Find repositories with 'scan', then run git
    in all of them with 'exec'.

    Examples:

      # Save every repository up to 3 levels down, then show modified ones
      githerd scan -s
      githerd exec -s --porcelain

      # Pipe scan results straight into exec
      githerd scan --relative | githerd exec --print-cherry-picks
    """
    setup_logging(verbosity=verbose, log_file=log_file)

    config = Config()
    try:
        if config_file is not None:
            config.load_config(config_file)
    except GitherdError as e:
        _fail(e)
    errors = config.validate()
    if errors:
        _fail(GitherdError("; ".join(errors)))
    ctx.obj = config


@cli.command("scan")
@click.argument(
    "root",
    required=False,
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@click.option(
    "--max-depth",
    "-m",
    type=click.IntRange(min=0),
    help="How many levels of directories to scan for repositories (default: 3)",
)
@click.option(
    "--min-depth",
    type=click.IntRange(min=0),
    help="Level to start reporting repositories at, 0 is the scanned directory (default: 0)",
)
@click.option(
    "--save-to-file",
    "-s",
    is_flag=False,
    flag_value="",
    default=None,
    metavar="[PATH]",
    help="Save results for later use by 'githerd exec' (default file: ~/.githerd). "
    "Without PATH, put this option after ROOT, otherwise ROOT is taken as the file",
)
@click.option("--relative", is_flag=True, help="Print paths relative to the current directory")
@click.pass_obj
def scan_command(
    config: Config,
    root: Optional[Path],
    max_depth: Optional[int],
    min_depth: Optional[int],
    save_to_file: Optional[str],
    relative: bool,
) -> None:
    """Scan for repositories in subdirectories.

    ROOT is the directory to scan, the current directory by default.

    Examples:

      # Print repositories found up to 3 levels below the current directory
      githerd scan

      # Save repositories to ~/.githerd
      githerd scan --save-to-file

      # Save to another file, scanning deeper
      githerd scan --max-depth 5 --save-to-file ~/work-repos
    """
    try:
        commands.scan(
            config,
            root=root,
            min_depth=min_depth,
            max_depth=max_depth,
            save_to=save_to_file,
            relative=relative,
        )
    except GitherdError as e:
        _fail(e)


@cli.command("exec")
@click.option(
    "--source-file",
    "-s",
    is_flag=False,
    flag_value="",
    default=None,
    metavar="[PATH]",
    help="Read repositories saved by 'githerd scan' instead of stdin (default file: ~/.githerd)",
)
@click.option(
    "--porcelain",
    is_flag=True,
    help="Show 'git status --porcelain' for modified repositories only",
)
@click.option(
    "--find-cherry-picks",
    is_flag=True,
    help="Show repositories with cherry-picks in git reflog",
)
@click.option(
    "--print-cherry-picks",
    is_flag=True,
    help="Show cherry-pick entries from git reflog",
)
@click.option("--marker", help="Reflog text to look for instead of 'cherry-pick'")
@click.option(
    "--with-author",
    is_flag=False,
    flag_value="",
    default=None,
    metavar="[NAME]",
    help="Show repositories with commits by NAME in the last --number commits "
    "(default: the configured git user of each repository)",
)
@click.option(
    "--number",
    "-n",
    type=click.IntRange(min=0),
    help="Number of recent commits --with-author looks into (default: 10)",
)
@click.option("--cmd", "-c", help="Git command to run in every repository, e.g. 'fetch --all'")
@click.pass_obj
def exec_command(
    config: Config,
    source_file: Optional[str],
    porcelain: bool,
    find_cherry_picks: bool,
    print_cherry_picks: bool,
    marker: Optional[str],
    with_author: Optional[str],
    number: Optional[int],
    cmd: Optional[str],
) -> None:
    """Run git commands in many repositories.

    Examples:

      # Show modified repositories and their cherry-picks
      githerd exec -s --print-cherry-picks --porcelain

      # Read repositories from a pipe
      githerd scan --relative | githerd exec --print-cherry-picks

      # Show your commits among the last 20 in each repository
      githerd exec -s --with-author -n 20

      # Fetch everywhere
      githerd exec -s --cmd 'fetch --all'
    """
    try:
        commands.execute(
            config,
            source=source_file,
            porcelain=porcelain,
            find_marker=find_cherry_picks,
            print_marker=print_cherry_picks,
            marker=marker,
            with_author=with_author,
            number=number,
            cmd=cmd,
        )
    except GitherdError as e:
        _fail(e)


def main() -> None:
    """Entry point for the githerd CLI."""
    cli()


if __name__ == "__main__":
    main()
