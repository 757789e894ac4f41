"""Post persistence: upsert by source path, lookups, and tag/category queries"""

from datetime import datetime, timezone

import yaml
from sqlmodel import Session, select

from mdpost.core.models import Document, LoadedPost, thaw
from mdpost.crud.models import Post


def get_by_path(session: Session, path: str) -> Post | None:
    """Return the Post with the given source path, or None if not found."""
    return session.exec(select(Post).where(Post.path == path)).one_or_none()


def get_by_slug(session: Session, slug: str) -> Post | None:
    """Return the first Post with the given slug, or None if not found."""
    return session.exec(select(Post).where(Post.slug == slug)).first()


def get_all_posts(session: Session) -> list[Post]:
    """Return all posts, newest first."""
    return list(session.exec(select(Post).order_by(Post.published_at.desc())).all())


def get_by_tag(session: Session, tag: str) -> list[Post]:
    """Return posts carrying tag, newest first."""
    return [p for p in get_all_posts(session) if tag in p.tags]


def get_by_category(session: Session, category: str) -> list[Post]:
    """Return posts filed under category, newest first."""
    return [p for p in get_all_posts(session) if category in p.categories]


def list_tags(session: Session) -> list[str]:
    return sorted({t for tags in session.exec(select(Post.tags)).all() for t in tags})


def list_categories(session: Session) -> list[str]:
    return sorted({c for cats in session.exec(select(Post.categories)).all() for c in cats})


def _columns(loaded: LoadedPost) -> dict:
    """Column values for a freshly loaded post."""
    doc = loaded.document
    return {
        "slug": loaded.slug,
        "hash": loaded.hash,
        "title": doc.title,
        "date": doc.date.isoformat(),
        "published_at": doc.date.astimezone(timezone.utc).replace(tzinfo=None),
        "categories": list(doc.categories),
        "tags": list(doc.tags),
        "toc": doc.toc,
        "extra": yaml.safe_dump(thaw(doc.extra), allow_unicode=True, sort_keys=False) if doc.extra else None,
        "body": doc.body,
    }


def commit_post(
    session: Session,
    loaded: LoadedPost,
    indexed_at: datetime | None = None,
    ) -> tuple[Post, str]:
    """Upsert a loaded post keyed by its source path.

    Returns (post, status) where status is 'created', 'updated', or 'unchanged'.
    Flushes but does not commit; caller controls the transaction.
    An updated post has every column replaced; nothing is merged.
    """
    path = str(loaded.path)
    post = get_by_path(session, path)

    if post:
        if post.hash == loaded.hash:
            return post, 'unchanged'
        for name, value in _columns(loaded).items():
            setattr(post, name, value)
        post.indexed_at = indexed_at or datetime.now()
        session.add(post)
        session.flush()
        return post, 'updated'

    post = Post(path=path, indexed_at=indexed_at or datetime.now(), **_columns(loaded))
    session.add(post)
    session.flush()
    return post, 'created'


def post_to_document(post: Post) -> Document:
    """Rebuild the immutable Document a stored Post was indexed from."""
    return Document(
        title=post.title,
        date=datetime.fromisoformat(post.date),
        categories=list(post.categories),
        tags=list(post.tags),
        toc=post.toc,
        extra=yaml.safe_load(post.extra) if post.extra else {},
        body=post.body,
    )
