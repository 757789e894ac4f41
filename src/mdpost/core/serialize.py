"""Inverse of parse(): render a Document back to front matter + body text"""

from datetime import datetime
from typing import Any

import yaml

from mdpost.core.models import Document, thaw
from mdpost.core.parse import DELIMITER


def format_date(value: datetime) -> str:
    """Render an aware datetime as 'YYYY-MM-DD HH:MM:SS[.ffffff] +HHMM'."""
    text = f"{value.year:04d}-{value.strftime('%m-%d %H:%M:%S')}"
    if value.microsecond:
        text += f'.{value.microsecond:06d}'
    return f"{text} {value.strftime('%z')}"


def front_matter(doc: Document) -> dict[str, Any]:
    """Ordered front-matter mapping: recognized keys first, then extra keys as given."""
    fm = {
        'title': doc.title,
        'date': format_date(doc.date),
        'categories': list(doc.categories),
        'tags': list(doc.tags),
        'toc': doc.toc,
    }
    fm.update(thaw(doc.extra))
    return fm


def serialize(doc: Document) -> str:
    """Return text that parse() turns back into an equal Document."""
    header = yaml.safe_dump(front_matter(doc), default_flow_style=False, allow_unicode=True, sort_keys=False)
    return f"{DELIMITER}\n{header}{DELIMITER}\n{doc.body}"
