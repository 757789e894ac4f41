"""Export pipeline: normalized markdown and sidecar JSON per indexed post"""

import json
from pathlib import Path

from mdpost.core.body import code_languages, links
from mdpost.core.models import Document, thaw
from mdpost.core.serialize import serialize
from mdpost.crud.models import Post
from mdpost.crud.posts import post_to_document


def build_sidecar(slug: str, path: str, doc: Document, parser_config: str = 'gfm-like') -> dict:
    """Build the sidecar JSON dict: identity, metadata, and what the body references.

    Extra front-matter values that JSON cannot hold (YAML dates) are written as strings.
    """
    return {
        "slug": slug,
        "path": path,
        "title": doc.title,
        "date": doc.date.isoformat(),
        "categories": list(doc.categories),
        "tags": list(doc.tags),
        "toc": doc.toc,
        "extra": json.loads(json.dumps(thaw(doc.extra), default=str)),
        "code_languages": code_languages(doc.body, parser_config),
        "links": links(doc.body, parser_config),
    }


def _dest_dir(post: Post, output_dir: Path) -> Path:
    parent = Path(post.path).parent
    return output_dir if parent.is_absolute() else output_dir / parent


def write_post(post: Post, output_dir: Path, parser_config: str = 'gfm-like') -> tuple[Path, Path]:
    """Write <slug>.md + <slug>.json for a single post.

    Output path mirrors the source directory structure:
      output_dir / Path(post.path).parent / post.slug.{md|json}
    Posts indexed under an absolute path are written flat into output_dir.

    Returns (md_path, json_path).
    """
    dest_dir = _dest_dir(post, output_dir)
    dest_dir.mkdir(parents=True, exist_ok=True)

    doc = post_to_document(post)
    md_path = dest_dir / f"{post.slug}.md"
    json_path = dest_dir / f"{post.slug}.json"

    md_path.write_text(serialize(doc), encoding='utf-8')
    json_path.write_text(
        json.dumps(build_sidecar(post.slug, post.path, doc, parser_config), indent=2, ensure_ascii=False),
        encoding='utf-8',
    )
    return md_path, json_path


def run_export(posts: list[Post], output_dir: Path, parser_config: str = 'gfm-like') -> list[tuple[str, Path]]:
    """Write posts to output_dir. Returns (slug, md_path) pairs.

    Raises ValueError before writing anything if two posts would export to the same file.
    """
    targets: dict[Path, str] = {}
    for post in posts:
        md_path = _dest_dir(post, output_dir) / f"{post.slug}.md"
        if md_path in targets:
            raise ValueError(f"{targets[md_path]} and {post.path} both export to {md_path}")
        targets[md_path] = post.path

    return [(post.slug, write_post(post, output_dir, parser_config)[0]) for post in posts]
