"""CLI command implementations"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Annotated, Optional

import typer
from sqlmodel import Session

from mdpost.config import Settings, load_config
from mdpost.core.body import code_languages, links
from mdpost.core.errors import ParseError
from mdpost.core.export import run_export
from mdpost.core.loader import discover_files, load_file, load_path
from mdpost.core.models import LoadFailure, thaw
from mdpost.crud.database import init_db, make_engine, reset_db
from mdpost.crud.posts import commit_post, get_all_posts, get_by_category, get_by_tag


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling and apply the configured log level."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    return settings


def _echo_failures(failed: list[LoadFailure]) -> None:
    for f in failed:
        typer.echo(f"  FAIL: {f.path}: {f.error}", err=True)


def check_cmd(
    path: Annotated[Path, typer.Argument(help="File or directory to validate")],
    ):
    """Parse every post under PATH and report which ones fail."""
    settings = _settings()
    if not path.exists():
        _fail(f"No such file or directory: {path}")

    loaded, failed = load_path(path, settings.toc_default)
    for post in loaded:
        typer.echo(f"  ok: {post.path}")
    _echo_failures(failed)
    typer.echo(f"Checked {len(loaded) + len(failed)} post(s): {len(loaded)} ok, {len(failed)} failed")
    if failed:
        raise typer.Exit(1)


def show_cmd(
    path: Annotated[Path, typer.Argument(help="Post to parse")],
    ):
    """Print a single post's parsed metadata as JSON."""
    settings = _settings()
    if discover_files(path) != [path]:
        _fail(f"Not a markdown file: {path}")
    try:
        post = load_file(path, settings.toc_default)
    except ParseError as e:
        _fail(f"Cannot parse {path}", e)

    doc = post.document
    typer.echo(json.dumps({
        "slug": post.slug,
        "title": doc.title,
        "date": doc.date.isoformat(),
        "categories": list(doc.categories),
        "tags": list(doc.tags),
        "toc": doc.toc,
        "extra": thaw(doc.extra),
        "code_languages": code_languages(doc.body, settings.parser_config),
        "links": links(doc.body, settings.parser_config),
    }, indent=2, ensure_ascii=False, default=str))


def index_cmd(
    path: Annotated[Path, typer.Argument(help="File or directory to index")],
    db_url: Annotated[Optional[str], typer.Option("--db-url", help="Database URL")] = None,
    ):
    """Load posts under PATH and upsert them into the index."""
    settings = _settings(overrides={"db_url": db_url})
    if not path.exists():
        _fail(f"No such file or directory: {path}")
    engine = make_engine(settings.db_url)
    init_db(engine)

    loaded, failed = load_path(path, settings.toc_default)
    counts = {"created": 0, "updated": 0, "unchanged": 0}
    indexed_at = datetime.now()
    try:
        with Session(engine) as session:
            for post in loaded:
                row, status = commit_post(session, post, indexed_at)
                counts[status] += 1
                if status != 'unchanged':
                    typer.echo(f"  {status}: {row.slug}")
            session.commit()
    except Exception as e:
        _fail("Index failed", e)

    _echo_failures(failed)
    typer.echo(
        f"Index complete - "
        f"{counts['created']} created, "
        f"{counts['updated']} updated, "
        f"{counts['unchanged']} unchanged, "
        f"{len(failed)} failed"
    )
    if failed:
        raise typer.Exit(1)


def list_cmd(
    tag: Annotated[Optional[str], typer.Option("--tag", help="Only posts with this tag")] = None,
    category: Annotated[Optional[str], typer.Option("--category", help="Only posts in this category")] = None,
    db_url: Annotated[Optional[str], typer.Option("--db-url", help="Database URL")] = None,
    ):
    """List indexed posts, newest first."""
    settings = _settings(overrides={"db_url": db_url})
    engine = make_engine(settings.db_url)
    init_db(engine)
    with Session(engine) as session:
        if tag:
            posts = get_by_tag(session, tag)
        elif category:
            posts = get_by_category(session, category)
        else:
            posts = get_all_posts(session)
        rows = [(p.date, p.slug, p.title) for p in posts]

    if not rows:
        typer.echo("No posts found.")
        raise typer.Exit(1)
    for date, slug, title in rows:
        typer.echo(f"{date}  {slug}  {title}")


def export_cmd(
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    db_url: Annotated[Optional[str], typer.Option("--db-url", help="Database URL")] = None,
    ):
    """Write normalized MD + sidecar JSON for every indexed post."""
    settings = _settings(overrides={"output_dir": out, "db_url": db_url})
    engine = make_engine(settings.db_url)
    init_db(engine)
    output_dir = Path(settings.output_dir)

    try:
        with Session(engine) as session:
            posts = get_all_posts(session)
            if not posts:
                typer.echo("No posts indexed. Run 'mdpost index <path>' first.")
                raise typer.Exit(1)
            results = run_export(posts, output_dir, settings.parser_config)
    except typer.Exit:
        raise
    except Exception as e:
        _fail("Export failed", e)

    for slug, md_path in results:
        typer.echo(f"  {slug} -> {md_path}")
    typer.echo(f"Exported {len(results)} post(s) to {output_dir}/")


def init_cmd(
    reset: Annotated[bool, typer.Option("--reset", help="Drop and recreate all tables")] = False,
    db_url: Annotated[Optional[str], typer.Option("--db-url", help="Database URL")] = None,
    ):
    """Initialize the index schema. Use --reset to clear existing data."""
    settings = _settings(overrides={"db_url": db_url})
    engine = make_engine(settings.db_url)
    if reset:
        reset_db(engine)
        typer.echo("Existing data cleared.")
    else:
        init_db(engine)
    typer.echo(f"Database initialized at: {settings.db_url}")
