"""File discovery and batch loading of posts; failures are collected, not raised"""

import logging
from pathlib import Path

from mdpost.core.errors import MalformedDocument, ParseError
from mdpost.core.models import LoadedPost, LoadFailure
from mdpost.core.parse import parse
from mdpost.core.utils.ids import content_hash, slugify


logger = logging.getLogger(__name__)

MD_EXTENSIONS = {'.md', '.mdx'}


def discover_files(path: Path) -> list[Path]:
    """Return sorted .md/.mdx files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.is_file() and p.suffix in MD_EXTENSIONS)


def load_file(path: Path, toc_default: bool = False) -> LoadedPost:
    """Read and parse a single post. Unreadable files raise MalformedDocument."""
    try:
        raw = path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise MalformedDocument(f"cannot read {path}: {e}") from e

    doc = parse(raw, toc_default=toc_default)
    slug = doc.extra.get('slug')
    return LoadedPost(
        path=path,
        slug=slugify(slug) if isinstance(slug, str) else slugify(path.stem),
        hash=content_hash(raw),
        document=doc,
    )


def load_path(path: Path, toc_default: bool = False) -> tuple[list[LoadedPost], list[LoadFailure]]:
    """Load every post under path. A failing file is logged and skipped; the batch continues."""
    loaded, failed = [], []
    for p in discover_files(path):
        try:
            loaded.append(load_file(p, toc_default))
        except ParseError as e:
            logger.warning("Skipping %s: %s", p, e)
            failed.append(LoadFailure(path=p, error=e))
    logger.info("Loaded %d post(s), %d failure(s) under %s", len(loaded), len(failed), path)
    return loaded, failed
