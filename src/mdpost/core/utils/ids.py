"""Post identifiers: source content hashes and URL slugs"""

import hashlib
import re
import unicodedata


def content_hash(raw: str) -> str:
    """Hex SHA-256 of a post's raw source text; the index skips rows whose hash is unchanged."""
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


def slugify(text: str, fallback: str = "post") -> str:
    """Lowercase ASCII slug joined by hyphens; `fallback` when nothing survives."""
    text = unicodedata.normalize('NFKD', text).encode('ascii', 'ignore').decode('ascii')
    text = re.sub(r'[^\w\s-]', '', text.lower())
    text = re.sub(r'[\s_-]+', '-', text).strip('-')
    return text or fallback
