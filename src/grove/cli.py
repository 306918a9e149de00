"""Command line interface for grove."""

import logging
from pathlib import Path
from typing import Annotated, NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from grove import __version__
from grove.branches import cleanup_branches, count_by_email, filter_by_email
from grove.config import Settings, load_settings
from grove.git import BranchInfo, GitError, GitRepo

app = typer.Typer(help="Remote branch statistics and cleanup tool")
console = Console(soft_wrap=True, highlight=False, emoji=False)
err_console = Console(stderr=True)

SEPARATOR = "=========================="


def setup_logging(verbose: bool) -> None:
    """Send grove log records to stderr through rich."""
    logger = logging.getLogger("grove")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        logger.addHandler(RichHandler(console=err_console, show_time=False, show_path=False))


def fail(err: GitError) -> NoReturn:
    """Report an error and exit with a non-zero status."""
    console.print(f"[red]Error:[/red] {escape(str(err))}")
    raise typer.Exit(code=1) from err


def get_repo(path: Path) -> GitRepo:
    """Get git repository instance."""
    try:
        return GitRepo(path)
    except GitError as err:
        fail(err)


def get_branches(repo: GitRepo) -> list[BranchInfo]:
    """Get remote branches, exiting on failure."""
    try:
        return repo.get_remote_branches()
    except GitError as err:
        fail(err)


def print_filter_email(email: str) -> None:
    console.print(f"filter_email: {email}", markup=False)
    console.print(SEPARATOR)


def version_callback(value: bool) -> None:
    if value:
        console.print(f"grove {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    location: Annotated[Path, typer.Option("--location", "-l", help="Location of the git repository")] = Path("."),
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging")] = False,
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show the version and exit"),
    ] = None,
) -> None:
    """Inspect and clean up remote branches by author."""
    setup_logging(verbose)
    if ctx.invoked_subcommand is None:
        console.print("Please provide a subcommand, use --help to see the available options")
        return

    try:
        ctx.obj = load_settings(location)
    except GitError as err:
        fail(err)


@app.command()
def stats(ctx: typer.Context) -> None:
    """Stats about the remote branches of the repository."""
    settings: Settings = ctx.obj
    branches = get_branches(get_repo(settings.location))

    console.print("Branches per user:")
    for email, count in count_by_email(branches).items():
        console.print(f"{email}: {count}", markup=False)
    console.print(f"=========================\n Total Remote Branches: {len(branches)}")


@app.command("list")
def list_branches(
    ctx: typer.Context,
    email: Annotated[Optional[str], typer.Option("--email", "-e", help="Filter branches by author email")] = None,
) -> None:
    """List remote branches authored by an email."""
    settings: Settings = ctx.obj
    filter_email = settings.resolve_email(email)
    print_filter_email(filter_email)

    branches = get_branches(get_repo(settings.location))
    for branch in filter_by_email(branches, filter_email):
        console.print(branch.name, markup=False)


@app.command()
def cleanup(
    ctx: typer.Context,
    email: Annotated[Optional[str], typer.Option("--email", "-e", help="Filter branches by author email")] = None,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Delete without asking for confirmation")] = False,
) -> None:
    """Delete remote branches that are no longer needed."""
    settings: Settings = ctx.obj
    filter_email = settings.resolve_email(email)
    print_filter_email(filter_email)

    repo = get_repo(settings.location)
    branches = get_branches(repo)

    def confirm(branch_name: str) -> bool:
        if yes:
            return True
        return typer.confirm(f"Do you want to delete the branch '{branch_name}'?")

    def delete(branch_name: str) -> None:
        repo.delete_remote_branch(branch_name)
        console.print(f"[green]Deleted[/green] {escape(branch_name)}")

    try:
        deleted = cleanup_branches(branches, filter_email, confirm, delete)
    except GitError as err:
        fail(err)

    console.print(f"Deleted {len(deleted)} branch(es)")


if __name__ == "__main__":
    app()
