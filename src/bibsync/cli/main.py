"""Main CLI entry point using Click."""

import functools
import logging
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TypeVar

import click
from dotenv import load_dotenv

from bibsync import __version__
from bibsync.config import RepositoryLocator, Settings, load_settings
from bibsync.core.constants import MARKER_DIR
from bibsync.core.exceptions import BibsyncError
from bibsync.core.models import BibliographyEntry, FetchOutcome, FetchStatus, Repository, SearchHit
from bibsync.infrastructure.storage import BibliographyStore
from bibsync.pipeline import (
    SyncEngine,
    add_search_hit,
    build_router,
    find_entries,
    initialize_store,
    remove_entry,
)
from bibsync.sources.dblp import DblpClient
from bibsync.utils.logging import setup_logging

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _handle_errors(func: Callable) -> Callable:
    """Report domain errors as a clean CLI failure."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except BibsyncError as exc:
            raise click.ClickException(str(exc)) from exc

    return wrapper


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.version_option(version=__version__, prog_name="bibsync")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """bibsync - Bibliography and PDF library synced through git."""
    ctx.ensure_object(dict)

    load_dotenv()
    setup_logging(verbose=verbose)

    ctx.obj.setdefault("locator", RepositoryLocator())
    ctx.obj.setdefault("cwd", Path.cwd())


def _open_repository(ctx: click.Context) -> tuple[Repository, Settings]:
    """Locate the store for the working directory and load its settings."""
    repository = ctx.obj["locator"].open(ctx.obj["cwd"])
    logger.debug("Using store at %s (remote: %s)", repository.root, repository.remote)
    return repository, load_settings(repository.root)


def _sync(ctx: click.Context, repository: Repository, settings: Settings) -> None:
    vcs = ctx.obj["locator"].vcs_factory(repository.root)
    SyncEngine.from_settings(vcs, settings).synchronize(repository)


def _select(items: Sequence[T], render: Callable[[T], str], prompt: str) -> T:
    """Numbered interactive selection."""
    for index, item in enumerate(items, start=1):
        click.echo(f"{index:>3}. {render(item)}")
    choice = click.prompt(prompt, type=click.IntRange(1, len(items)), default=1)
    return items[choice - 1]


def _render_hit(hit: SearchHit) -> str:
    line = f"{click.style(hit.title, bold=True)} ({click.style(', '.join(hit.authors), italic=True)})"
    details = [part for part in (hit.venue, hit.year) if part]
    if hit.doi:
        details.append(f"DOI: {hit.doi}")
    if details:
        line += f"\n       {' | '.join(details)}"
    return line


def _render_entry(entry: BibliographyEntry) -> str:
    line = f"{click.style(entry.display_title, bold=True)} ({click.style(', '.join(entry.authors), italic=True)})"
    if entry.identifier:
        line += f"\n       DOI: {entry.identifier}"
    return line


@cli.command()
@click.option("-l", "--local", is_flag=True, help=f"Set up a store in ./{MARKER_DIR}")
@click.option("--git", "git_url", default=None, help="URL of the git remote to sync with")
@click.pass_context
@_handle_errors
def init(ctx: click.Context, local: bool, git_url: str | None) -> None:
    """Set up a bibliography store, optionally synced with a git remote."""
    locator: RepositoryLocator = ctx.obj["locator"]
    if local:
        root = Path(ctx.obj["cwd"]).resolve() / MARKER_DIR
    else:
        root = locator.default_dir.resolve()

    repository = locator.establish(root, remote=git_url)
    initialize_store(repository, locator.vcs_factory(repository.root))
    click.echo(f"Store ready at {repository.root}")
    if repository.remote:
        click.echo(f"  Remote: {repository.remote}")


@cli.command()
@click.pass_context
@_handle_errors
def sync(ctx: click.Context) -> None:
    """Commit local changes, rebase onto the remote and push."""
    repository, settings = _open_repository(ctx)
    if not repository.remote:
        click.echo("No git remote configured, nothing to sync.")
        return
    _sync(ctx, repository, settings)
    click.echo("Synced.")


@cli.command()
@click.argument("query", nargs=-1, required=True)
@click.pass_context
@_handle_errors
def index(ctx: click.Context, query: tuple[str, ...]) -> None:
    """Search dblp and add the selected article to the bibliography."""
    repository, settings = _open_repository(ctx)
    store = BibliographyStore.load(repository.bib_path)
    with DblpClient(settings) as client:
        click.echo("Looking up articles...")
        hits = client.search(" ".join(query))
        if not hits:
            raise click.ClickException(f"No articles found for: {' '.join(query)}")

        hit = _select(hits, _render_hit, "Select article")
        click.echo("Downloading bibliography...")
        entry = add_search_hit(store, client, hit)
    click.echo(f"Added {entry.display_title}")

    _sync(ctx, repository, settings)


@cli.command(name="list")
@click.pass_context
@_handle_errors
def list_entries(ctx: click.Context) -> None:
    """List bibliography entries."""
    repository, _ = _open_repository(ctx)
    store = BibliographyStore.load(repository.bib_path)
    for entry in store.entries():
        click.echo(f"{click.style(entry.display_title, bold=True)} ({entry.identifier or ''})")
        click.echo(f"  {click.style(', '.join(entry.authors), italic=True)}")


@cli.command()
@click.option("-f", "--force", is_flag=True, help="Do not ask for confirmation")
@click.argument("query")
@click.pass_context
@_handle_errors
def rm(ctx: click.Context, force: bool, query: str) -> None:
    """Remove an entry matched by DOI or title."""
    repository, settings = _open_repository(ctx)
    store = BibliographyStore.load(repository.bib_path)

    matches = find_entries(store, query)
    entry = _select(matches, _render_entry, "Select article to remove")

    if not force and not click.confirm(f"Remove {entry.display_title}?"):
        return

    remove_entry(store, entry.key)
    click.echo(f"Removed {entry.display_title}")
    _sync(ctx, repository, settings)


def _report_outcome(outcome: FetchOutcome) -> None:
    if outcome.status is FetchStatus.DOWNLOADED:
        click.echo(f"  {click.style('downloaded', fg='green')} {outcome.title}")
    elif outcome.status is FetchStatus.FAILED:
        click.echo(f"  {click.style('failed', fg='red')}     {outcome.title}: {outcome.error}")


@cli.command()
@click.pass_context
@_handle_errors
def pdfs(ctx: click.Context) -> None:
    """Download PDFs for all entries that are not cached yet."""
    repository, settings = _open_repository(ctx)
    store = BibliographyStore.load(repository.bib_path)
    with build_router(settings, repository.pdf_dir) as router:
        report = router.fetch_all(store.entries(), on_progress=_report_outcome)
    click.echo(f"Downloaded: {report.downloaded}, Cached: {report.cached}, Failed: {report.failed}")


if __name__ == "__main__":
    cli()
