from __future__ import annotations
import logging
from typing import List, Optional

import typer
from rich import print
from rich.console import Console
from rich.markup import escape
from dotenv import find_dotenv, load_dotenv

from .errors import GitError, GitCommandError
from .repo import GitRepo, clone as clone_repo

# Load environment variables from .env file
load_dotenv(find_dotenv(usecwd=True))

app = typer.Typer(add_completion=False, help="Inspect git repositories through the gitapi wrappers.")
err_console = Console(stderr=True)

RepoOpt = typer.Option(".", "--repo", "-r", help="Path to the git repository")
ShowOpt = typer.Option(False, "--show-command", help="Echo each git command line to stderr")


def _fail(e: GitError) -> None:
    err_console.print(f"[red]{e}[/red]", highlight=False)
    raise typer.Exit(code=e.exit_code if isinstance(e, GitCommandError) and e.exit_code > 0 else 1)


@app.callback()
def main(debug: bool = typer.Option(False, help="Enable debug logging")):
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s - %(levelname)s - %(name)s - %(message)s")


@app.command("id")
def show_id(repo: str = RepoOpt, show_command: bool = ShowOpt):
    """Print the hash of the latest commit."""
    try:
        print(GitRepo(repo, show_command=show_command, check=True).id())
    except GitError as e:
        _fail(e)


@app.command()
def branches(repo: str = RepoOpt, show_command: bool = ShowOpt):
    try:
        for name in GitRepo(repo, show_command=show_command, check=True).branches():
            print(name)
    except GitError as e:
        _fail(e)


@app.command()
def tags(pattern: Optional[str] = typer.Argument(None, help="Glob passed to git tag -l"),
         points_at: Optional[str] = typer.Option(None, help="Only tags pointing at this object"),
         repo: str = RepoOpt, show_command: bool = ShowOpt):
    try:
        for name in GitRepo(repo, show_command=show_command, check=True).tags(pattern, points_at):
            print(name)
    except GitError as e:
        _fail(e)


@app.command()
def log(identifier: Optional[str] = typer.Argument(None, help="Show only this revision"),
        limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Maximum number of commits"),
        repo: str = RepoOpt, show_command: bool = ShowOpt):
    try:
        out = GitRepo(repo, show_command=show_command, check=True).log(identifier=identifier, limit=limit)
    except GitError as e:
        _fail(e)
    else:
        # plain write; log text may contain rich markup characters
        typer.echo(out, nl=not out.endswith("\n"))


@app.command()
def clone(remote_url: str, local_path: str,
          extra: List[str] = typer.Option([], "--arg", help="Extra argument passed to git clone (repeatable)"),
          show_command: bool = ShowOpt):
    try:
        new_repo = clone_repo(remote_url, local_path, extra, show_command=show_command, check=True)
    except GitError as e:
        _fail(e)
    else:
        print(f"[green]cloned[/green] {escape(remote_url)} -> {escape(new_repo.path)}")


if __name__ == "__main__":
    app()
