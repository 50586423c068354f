"""Main CLI entry point for the wikijs command.

This module provides the Typer application behind the ``wikijs`` command.
Global options live on the app callback; each resource operation is a
subcommand. Commands are thin: they parse arguments, call the operation
classes and hand the result to the OutputHandler.
"""

import logging
import sys
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional

import typer

from src.cli.formatting import (
    format_bytes,
    format_date,
    parse_id_or_path,
    parse_tags,
    top_counts,
    truncate,
)
from src.cli.models import ExitCode
from src.cli.output import OutputHandler
from src.content_analysis import (
    build_toc,
    diff_lines,
    extract_headings,
    extract_links,
    format_diff,
    is_internal_link,
    lint_markdown,
    rank_similar,
    render_tree,
)
from src.wiki_operations import AssetOperations, PageOperations, SystemOperations
from src.wikijs_client.api_wrapper import GraphQLClient
from src.wikijs_client.auth import ConfigProvider
from src.wikijs_client.errors import ConfigError, TransportError, WikiError
from src.wikijs_client.rate_limit import RateLimiter

app = typer.Typer(
    name="wikijs",
    help="""Command-line client for the Wiki.js GraphQL API.

QUICK START:
  wikijs list --tag howto            # List pages with a tag
  wikijs get docs/install            # Show a page by path
  wikijs get 12 --content            # Show a page and its source
  wikijs search "backup"             # Full-text search
  wikijs lint README.md              # Lint a local markdown file

Configuration comes from WIKIJS_URL / WIKIJS_API_TOKEN (a .env file is
read) or from ~/.config/wikijs.json.""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=True,
)

# Module logger
logger = logging.getLogger(__name__)

VERSION = "0.1.0"


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger to avoid affecting third-party
    libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)

    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter("%(asctime)s [%(levelname)8s] %(message)s", datefmt=date_format)

    # Repeated invocations in one process (tests) must not stack handlers
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"wikijs_{timestamp}.log"

        file_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt=date_format
        )
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


class CLIContext:
    """Per-invocation state shared by all commands.

    The GraphQL client is built on first use so that offline commands
    (lint, version) never read configuration.
    """

    def __init__(
        self,
        output: OutputHandler,
        rate_limit_ms: int = 0,
        config_path: Optional[str] = None,
    ):
        self.output = output
        self.rate_limit_ms = rate_limit_ms
        self.config_path = config_path
        self._client: Optional[GraphQLClient] = None

    @property
    def client(self) -> GraphQLClient:
        if self._client is None:
            self._client = GraphQLClient(
                ConfigProvider(self.config_path),
                rate_limiter=RateLimiter(self.rate_limit_ms),
            )
        return self._client

    @property
    def pages(self) -> PageOperations:
        return PageOperations(self.client)

    @property
    def assets(self) -> AssetOperations:
        return AssetOperations(self.client)

    @property
    def system(self) -> SystemOperations:
        return SystemOperations(self.client)


@contextmanager
def _command_errors(output: OutputHandler) -> Iterator[None]:
    """Translate library errors into a message and an exit code."""
    try:
        yield
    except (typer.Exit, typer.Abort):
        raise
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        output.error(f"Configuration error: {e}")
        raise typer.Exit(ExitCode.CONFIG_ERROR)
    except TransportError as e:
        logger.error(f"Network error: {e}")
        output.error(f"Network error: {e}")
        raise typer.Exit(ExitCode.NETWORK_ERROR)
    except WikiError as e:
        logger.error(str(e))
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    except FileNotFoundError as e:
        output.error(f"File not found: {e.filename or e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    except Exception as e:
        logger.exception("Unexpected error")
        output.error(f"Unexpected error: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)


def _state(ctx: typer.Context) -> CLIContext:
    return ctx.obj


def _confirm(message: str, yes: bool) -> None:
    if not yes:
        typer.confirm(message, abort=True)


def _read_text(file_path: str) -> str:
    return Path(file_path).read_text(encoding="utf-8")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"wikijs version {VERSION}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Print results as JSON",
    ),
    rate_limit: int = typer.Option(
        0,
        "--rate-limit",
        min=0,
        help="Minimum delay between API requests in milliseconds",
        metavar="MS",
    ),
    config: Optional[str] = typer.Option(
        None,
        "--config",
        help="Config file path (default: $WIKIJS_CONFIG or ~/.config/wikijs.json)",
        metavar="FILE",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Command-line client for the Wiki.js GraphQL API."""
    _configure_logging(verbosity, logdir)
    output = OutputHandler(verbosity=verbosity, no_color=no_color, json_mode=json_output)
    ctx.obj = CLIContext(output, rate_limit_ms=rate_limit, config_path=config)


# Pages


@app.command("list")
def list_command(
    ctx: typer.Context,
    tag: Optional[str] = typer.Option(None, "--tag", "-t", help="Only pages with this tag"),
    author: Optional[str] = typer.Option(None, "--author", "-a", help="Only pages whose author contains this text"),
    locale: Optional[str] = typer.Option(None, "--locale", "-l", help="Only pages in this locale"),
    limit: int = typer.Option(50, "--limit", "-n", min=1, help="Maximum number of pages"),
) -> None:
    """List pages."""
    state = _state(ctx)
    output = state.output
    with _command_errors(output):
        with output.spinner("Fetching pages..."):
            pages = state.pages.list_pages(tag=tag, author=author, locale=locale, limit=limit)

        output.print_data(pages, [
            ("ID", lambda p: p.id),
            ("Path", lambda p: p.path),
            ("Title", lambda p: truncate(p.title, 40)),
            ("Locale", lambda p: p.locale),
            ("Updated", lambda p: format_date(p.updated_at)),
            ("Published", lambda p: p.is_published),
        ])


@app.command("search")
def search_command(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Search text"),
    limit: int = typer.Option(50, "--limit", "-n", min=1, help="Maximum number of results"),
) -> None:
    """Full-text search across pages."""
    state = _state(ctx)
    output = state.output
    with _command_errors(output):
        with output.spinner("Searching..."):
            results = state.pages.search_pages(query, limit=limit)

        if output.json_mode:
            output.print_json(results)
            return

        output.print_table(results.results, [
            ("ID", lambda r: r.id),
            ("Path", lambda r: r.path),
            ("Title", lambda r: truncate(r.title, 40)),
            ("Description", lambda r: truncate(r.description)),
        ])
        output.print(f"{results.total_hits} hit(s)")
        if results.suggestions:
            output.print(f"Suggestions: {', '.join(results.suggestions)}")


@app.command("get")
def get_command(
    ctx: typer.Context,
    id_or_path: str = typer.Argument(..., help="Page ID or path"),
    children: bool = typer.Option(False, "--children", "-c", help="Also list descendant pages"),
    content: bool = typer.Option(False, "--content", help="Print the page source"),
    locale: Optional[str] = typer.Option(None, "--locale", "-l", help="Locale for path lookups"),
) -> None:
    """Show a page by ID or path."""
    state = _state(ctx)
    output = state.output
    with _command_errors(output):
        with output.spinner("Fetching page..."):
            page = state.pages.get_page(
                parse_id_or_path(id_or_path), with_children=children, locale=locale
            )

        if output.json_mode:
            output.print_json(page)
            return

        output.print(f"ID:          {page.id}")
        output.print(f"Title:       {page.title}")
        output.print(f"Path:        {page.path}")
        output.print(f"Locale:      {page.locale}")
        output.print(f"Description: {page.description}")
        output.print(f"Tags:        {', '.join(page.tags)}")
        output.print(f"Author:      {page.author_name}")
        output.print(f"Published:   {'yes' if page.is_published else 'no'}")
        output.print(f"Created:     {format_date(page.created_at)}")
        output.print(f"Updated:     {format_date(page.updated_at)}")

        if page.children is not None:
            output.print(f"Children ({len(page.children)}):")
            for child in page.children:
                output.print(f"  {child.id}  {child.path}  {child.title}")

        if content:
            output.print("")
            output.print(page.content)


@app.command("create")
def create_command(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Page path, e.g. docs/install"),
    title: str = typer.Argument(..., help="Page title"),
    content: Optional[str] = typer.Option(None, "--content", help="Page content"),
    file: Optional[str] = typer.Option(None, "--file", "-f", help="Read content from a file"),
    description: str = typer.Option("", "--description", "-d", help="Short description"),
    tags: Optional[str] = typer.Option(None, "--tags", help="Comma-separated tags"),
    locale: Optional[str] = typer.Option(None, "--locale", "-l", help="Page locale"),
    editor: Optional[str] = typer.Option(None, "--editor", help="Editor (default from config)"),
    draft: bool = typer.Option(False, "--draft", help="Create unpublished"),
    private: bool = typer.Option(False, "--private", help="Create as private"),
) -> None:
    """Create a page."""
    state = _state(ctx)
    output = state.output
    with _command_errors(output):
        body = _read_text(file) if file else (content or "")
        with output.spinner("Creating page..."):
            created = state.pages.create_page(
                path,
                title,
                content=body,
                description=description,
                tags=parse_tags(tags),
                locale=locale,
                editor=editor,
                is_published=not draft,
                is_private=private,
            )

        if output.json_mode:
            output.print_json(created)
        else:
            output.success(f"Created page {created.id}: {created.path}")


@app.command("update")
def update_command(
    ctx: typer.Context,
    page_id: str = typer.Argument(..., help="Page ID"),
    content: Optional[str] = typer.Option(None, "--content", help="New content"),
    file: Optional[str] = typer.Option(None, "--file", "-f", help="Read new content from a file"),
    title: Optional[str] = typer.Option(None, "--title", help="New title"),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="New description"),
    tags: Optional[str] = typer.Option(None, "--tags", help="Comma-separated tags (replaces existing)"),
    publish: Optional[bool] = typer.Option(None, "--publish/--unpublish", help="Change published state"),
) -> None:
    """Update a page; omitted fields keep their current value."""
    state = _state(ctx)
    output = state.output
    with _command_errors(output):
        body = _read_text(file) if file else content
        with output.spinner("Updating page..."):
            updated = state.pages.update_page(
                page_id,
                content=body,
                title=title,
                description=description,
                tags=parse_tags(tags) if tags is not None else None,
                is_published=publish,
            )

        if output.json_mode:
            output.print_json(updated)
        else:
            output.success(f"Updated page {updated.id}: {updated.path}")


@app.command("move")
def move_command(
    ctx: typer.Context,
    page_id: str = typer.Argument(..., help="Page ID"),
    new_path: str = typer.Argument(..., help="Destination path"),
    locale: Optional[str] = typer.Option(None, "--locale", "-l", help="Destination locale"),
) -> None:
    """Move a page to a new path."""
    state = _state(ctx)
    output = state.output
    with _command_errors(output):
        with output.spinner("Moving page..."):
            state.pages.move_page(page_id, new_path, locale=locale)
        output.success(f"Moved page {page_id} to {new_path}")


@app.command("delete")
def delete_command(
    ctx: typer.Context,
    page_id: str = typer.Argument(..., help="Page ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Delete a page."""
    state = _state(ctx)
    output = state.output
    _confirm(f"Delete page {page_id}?", yes)
    with _command_errors(output):
        with output.spinner("Deleting page..."):
            state.pages.delete_page(page_id)
        output.success(f"Deleted page {page_id}")


@app.command("tags")
def tags_command(ctx: typer.Context) -> None:
    """List all tags."""
    state = _state(ctx)
    output = state.output
    with _command_errors(output):
        with output.spinner("Fetching tags..."):
            tags = state.pages.list_tags()

        output.print_data(tags, [
            ("ID", lambda t: t.id),
            ("Tag", lambda t: t.tag),
            ("Title", lambda t: t.title),
            ("Created", lambda t: format_date(t.created_at)),
        ])


@app.command("versions")
def versions_command(
    ctx: typer.Context,
    page_id: str = typer.Argument(..., help="Page ID"),
) -> None:
    """Show the version history of a page."""
    state = _state(ctx)
    output = state.output
    with _command_errors(output):
        with output.spinner("Fetching history..."):
            versions = state.pages.get_page_versions(page_id)

        output.print_data(versions, [
            ("Version", lambda v: v.version_id),
            ("Date", lambda v: format_date(v.version_date)),
            ("Author", lambda v: v.author_name),
            ("Action", lambda v: v.action_type),
        ])


@app.command("revert")
def revert_command(
    ctx: typer.Context,
    page_id: str = typer.Argument(..., help="Page ID"),
    version_id: str = typer.Argument(..., help="Version ID to restore"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Restore a page to a previous version."""
    state = _state(ctx)
    output = state.output
    _confirm(f"Revert page {page_id} to version {version_id}?", yes)
    with _command_errors(output):
        with output.spinner("Restoring version..."):
            state.pages.revert_page(page_id, version_id)
        output.success(f"Reverted page {page_id} to version {version_id}")


# Assets


@app.command("assets")
def assets_command(
    ctx: typer.Context,
    folder: str = typer.Option("", "--folder", help="Only assets whose filename starts with this"),
    limit: int = typer.Option(50, "--limit", "-n", min=1, help="Maximum number of assets"),
) -> None:
    """List media assets."""
    state = _state(ctx)
    output = state.output
    with _command_errors(output):
        with output.spinner("Fetching assets..."):
            assets = state.assets.list_assets(folder=folder, limit=limit)

        output.print_data(assets, [
            ("ID", lambda a: a.id),
            ("Filename", lambda a: a.filename),
            ("Kind", lambda a: a.kind),
            ("Size", lambda a: format_bytes(a.file_size)),
            ("Created", lambda a: format_date(a.created_at)),
        ])


@app.command("upload")
def upload_command(
    ctx: typer.Context,
    file_path: str = typer.Argument(..., help="Local file to upload"),
    folder: str = typer.Option("", "--folder", help="Target folder"),
    rename: Optional[str] = typer.Option(None, "--rename", help="Stored filename"),
) -> None:
    """Upload a file as an asset."""
    state = _state(ctx)
    output = state.output
    with _command_errors(output):
        with output.spinner("Uploading..."):
            result = state.assets.upload_asset(file_path, folder=folder, rename=rename)

        if output.json_mode:
            output.print_json(result)
        else:
            output.success(f"Uploaded {rename or Path(file_path).name}")


@app.command("delete-asset")
def delete_asset_command(
    ctx: typer.Context,
    asset_id: str = typer.Argument(..., help="Asset ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Delete a media asset."""
    state = _state(ctx)
    output = state.output
    _confirm(f"Delete asset {asset_id}?", yes)
    with _command_errors(output):
        with output.spinner("Deleting asset..."):
            state.assets.delete_asset(asset_id)
        output.success(f"Deleted asset {asset_id}")


# System


@app.command("health")
def health_command(ctx: typer.Context) -> None:
    """Check connectivity and show server information."""
    state = _state(ctx)
    output = state.output
    with _command_errors(output):
        with output.spinner("Contacting server..."):
            info = state.system.get_health()

        if output.json_mode:
            output.print_json(info)
            return

        output.success(f"Connected to {state.client.config.url}")
        output.print(f"Version:  {info.current_version} (latest: {info.latest_version})")
        output.print(f"OS:       {info.operating_system}")
        output.print(f"Hostname: {info.hostname}")
        output.print(f"Platform: {info.platform}")


@app.command("stats")
def stats_command(
    ctx: typer.Context,
    top: int = typer.Option(10, "--top", min=1, help="Number of tags shown"),
) -> None:
    """Show page statistics."""
    state = _state(ctx)
    output = state.output
    with _command_errors(output):
        with output.spinner("Computing statistics..."):
            stats = state.system.get_stats()

        if output.json_mode:
            output.print_json(stats)
            return

        output.print(f"Total pages:     {stats.total_pages}")
        output.print(f"Published:       {stats.published_pages}")
        output.print(f"Drafts:          {stats.draft_pages}")
        output.print("Locales:")
        for locale, count in top_counts(stats.locales, limit=len(stats.locales)):
            output.print(f"  {locale}: {count}")
        if stats.top_tags:
            output.print("Top tags:")
            for tag, count in top_counts(stats.top_tags, limit=top):
                output.print(f"  {tag}: {count}")


# Content analysis


@app.command("tree")
def tree_command(
    ctx: typer.Context,
    locale: Optional[str] = typer.Option(None, "--locale", "-l", help="Only pages in this locale"),
    tag: Optional[str] = typer.Option(None, "--tag", "-t", help="Only pages with this tag"),
    limit: int = typer.Option(1000, "--limit", "-n", min=1, help="Maximum number of pages"),
) -> None:
    """Show pages as a directory tree."""
    state = _state(ctx)
    output = state.output
    with _command_errors(output):
        with output.spinner("Fetching pages..."):
            pages = state.pages.list_pages(tag=tag, locale=locale, limit=limit)

        if output.json_mode:
            output.print_json(pages)
            return
        if not pages:
            output.warning("No pages found")
            return
        output.print(render_tree(pages, plain=output.no_color))


@app.command("diff")
def diff_command(
    ctx: typer.Context,
    id_or_path: str = typer.Argument(..., help="Page ID or path"),
    file_path: str = typer.Argument(..., help="Local file to compare with the page"),
    context: int = typer.Option(3, "--context", "-C", min=0, help="Unchanged lines around changes"),
) -> None:
    """Compare a page's content with a local file."""
    state = _state(ctx)
    output = state.output
    with _command_errors(output):
        local = _read_text(file_path)
        with output.spinner("Fetching page..."):
            page = state.pages.get_page(parse_id_or_path(id_or_path))

        entries = diff_lines(page.content, local)
        if output.json_mode:
            output.print_json(entries)
            return
        output.print_diff(format_diff(entries, context_lines=context))


@app.command("lint")
def lint_command(
    ctx: typer.Context,
    target: str = typer.Argument(..., help="Local markdown file, or page ID/path with --page"),
    page: bool = typer.Option(False, "--page", "-p", help="Lint a wiki page instead of a file"),
) -> None:
    """Lint markdown content; exits with 2 when errors are found."""
    state = _state(ctx)
    output = state.output
    with _command_errors(output):
        if page:
            with output.spinner("Fetching page..."):
                content = state.pages.get_page(parse_id_or_path(target)).content
        else:
            content = _read_text(target)

        result = lint_markdown(content)
        if output.json_mode:
            output.print_json({
                "valid": result.valid,
                "errors": result.errors,
                "warnings": result.warnings,
            })
        else:
            output.print_lint(result)

    if not result.valid:
        raise typer.Exit(ExitCode.LINT_FAILED)


@app.command("links")
def links_command(
    ctx: typer.Context,
    id_or_path: str = typer.Argument(..., help="Page ID or path"),
    internal: bool = typer.Option(False, "--internal", help="Only internal links"),
) -> None:
    """List the links found in a page."""
    state = _state(ctx)
    output = state.output
    with _command_errors(output):
        with output.spinner("Fetching page..."):
            page = state.pages.get_page(parse_id_or_path(id_or_path))

        links = extract_links(page.content)
        if internal:
            links = [link for link in links if is_internal_link(link.url)]

        output.print_data(links, [
            ("Kind", lambda link: link.kind.value),
            ("Text", lambda link: truncate(link.text, 40)),
            ("URL", lambda link: link.url),
            ("Internal", lambda link: is_internal_link(link.url)),
        ])


@app.command("toc")
def toc_command(
    ctx: typer.Context,
    id_or_path: str = typer.Argument(..., help="Page ID or path"),
    depth: int = typer.Option(6, "--depth", min=1, max=6, help="Deepest heading level"),
) -> None:
    """Print a table of contents for a page."""
    state = _state(ctx)
    output = state.output
    with _command_errors(output):
        with output.spinner("Fetching page..."):
            page = state.pages.get_page(parse_id_or_path(id_or_path))

        headings = extract_headings(page.content, max_depth=depth)
        if output.json_mode:
            output.print_json(headings)
        elif not headings:
            output.warning("No headings found")
        else:
            output.print(build_toc(headings))


@app.command("similar")
def similar_command(
    ctx: typer.Context,
    id_or_path: str = typer.Argument(..., help="Page ID or path"),
    threshold: float = typer.Option(0.3, "--threshold", min=0.0, max=1.0, help="Minimum similarity"),
    limit: int = typer.Option(50, "--limit", "-n", min=1, help="Maximum number of pages compared"),
) -> None:
    """Find pages with similar wording (one request per compared page)."""
    state = _state(ctx)
    output = state.output
    with _command_errors(output):
        ops = state.pages
        with output.spinner("Comparing pages..."):
            reference = ops.get_page(parse_id_or_path(id_or_path))
            candidates = [
                p for p in ops.list_pages(locale=reference.locale or None, limit=limit)
                if p.id != reference.id
            ]
            documents = {p.id: ops.get_page(p.id).content for p in candidates}

        by_id = {p.id: p for p in candidates}
        ranked = [
            {"id": page_id, "path": by_id[page_id].path, "title": by_id[page_id].title,
             "score": round(score, 3)}
            for page_id, score in rank_similar(reference.content, documents, threshold)
        ]

        output.print_data(ranked, [
            ("ID", lambda r: r["id"]),
            ("Path", lambda r: r["path"]),
            ("Title", lambda r: truncate(r["title"], 40)),
            ("Score", lambda r: f"{r['score']:.0%}"),
        ])


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


# Allow running as: python -m src.cli.main
if __name__ == "__main__":
    main()
