"""Front-matter splitting, YAML decoding, and field validation"""

import logging
import re
from datetime import date, datetime, timedelta, timezone
from typing import Any

import yaml

from mdpost.core.errors import InvalidFieldValue, MalformedDocument, MissingRequiredField
from mdpost.core.models import RECOGNIZED_FIELDS, Document


logger = logging.getLogger(__name__)

DELIMITER = '---'
REQUIRED_FIELDS = ('title', 'date')
TEXT_FIELDS = ('title', 'categories', 'tags')
NULL_TAG = 'tag:yaml.org,2002:null'

DATE_RE = re.compile(
    r'^(?P<year>\d{4})-(?P<month>\d{1,2})-(?P<day>\d{1,2})'
    r'(?:[Tt]|[ \t]+)'
    r'(?P<hour>\d{1,2}):(?P<minute>\d{2})(?::(?P<second>\d{2})(?:\.(?P<fraction>\d{1,6}))?)?'
    r'[ \t]*(?P<tz>[Zz]|[-+]\d{2}(?::?\d{2})?)$'
)


def _is_delimiter(line: str) -> bool:
    return line.rstrip() == DELIMITER


def split_front_matter(text: str) -> tuple[str, str]:
    """Return (metadata_region, body). Raises MalformedDocument if either delimiter is missing."""
    lines = text.removeprefix('\ufeff').splitlines(keepends=True)
    if not lines or not _is_delimiter(lines[0]):
        raise MalformedDocument(f"document must start with a '{DELIMITER}' line")

    for i in range(1, len(lines)):
        if _is_delimiter(lines[i]):
            return ''.join(lines[1:i]), ''.join(lines[i + 1:])
    raise MalformedDocument(f"no closing '{DELIMITER}' line after the front matter")


def _as_text(node: yaml.Node, keep_null: bool) -> None:
    """Retag a plain scalar as str so it keeps its source spelling (1.10, yes, 0x1F)."""
    if isinstance(node, yaml.ScalarNode):
        if not (keep_null and node.tag == NULL_TAG):
            node.tag = yaml.resolver.BaseResolver.DEFAULT_SCALAR_TAG
    elif isinstance(node, yaml.SequenceNode):
        for item in node.value:
            if isinstance(item, yaml.ScalarNode):
                _as_text(item, keep_null=False)


class FrontMatterLoader(yaml.SafeLoader):
    """SafeLoader that reads title and list items as written instead of resolving them.

    An empty or null field value still means "absent"; toc, date and extra keys
    resolve as usual.
    """

    def construct_document(self, node):
        if isinstance(node, yaml.MappingNode):
            for key, value in node.value:
                if isinstance(key, yaml.ScalarNode) and key.value in TEXT_FIELDS:
                    _as_text(value, keep_null=True)
        return super().construct_document(node)


def _load_mapping(region: str) -> dict[str, Any]:
    """Decode the metadata region as a YAML mapping."""
    try:
        data = yaml.load(region, Loader=FrontMatterLoader)
    except yaml.YAMLError as e:
        raise MalformedDocument(f"invalid YAML front matter: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MalformedDocument(f"front matter must be key: value entries, got {type(data).__name__}")
    return {str(k): v for k, v in data.items()}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _scalar_text(value: Any) -> str | None:
    """Text of a scalar read by FrontMatterLoader; None for lists and mappings."""
    return value if isinstance(value, str) else None


def _decode_title(value: Any) -> str:
    text = _scalar_text(value)
    if text is None:
        raise InvalidFieldValue('title', f"expected text, got {type(value).__name__}")
    return text


def _offset(tz: str) -> timezone:
    if tz in ('Z', 'z'):
        return timezone.utc
    sign = -1 if tz[0] == '-' else 1
    digits = tz[1:].replace(':', '')
    hours, minutes = int(digits[:2]), int(digits[2:] or 0)
    return timezone(sign * timedelta(hours=hours, minutes=minutes))


def parse_date(text: str) -> datetime:
    """Parse 'YYYY-MM-DD HH:MM[:SS[.ffffff]] <offset>' into an aware datetime.

    The offset may be Z, +HH, +HHMM or +HH:MM. Raises ValueError otherwise.
    """
    m = DATE_RE.match(text.strip())
    if not m:
        raise ValueError(f"'{text}' is not a date-time with offset")
    fraction = (m['fraction'] or '').ljust(6, '0')
    return datetime(
        int(m['year']), int(m['month']), int(m['day']),
        int(m['hour']), int(m['minute']), int(m['second'] or 0), int(fraction),
        tzinfo=_offset(m['tz']),
    )


def _decode_date(value: Any) -> datetime:
    # YAML resolves ISO timestamps itself; '+0000' style offsets stay strings
    if isinstance(value, datetime):
        if value.tzinfo is None or value.utcoffset() is None:
            raise InvalidFieldValue('date', "date-time has no timezone offset")
        return value
    if isinstance(value, date):
        raise InvalidFieldValue('date', "expected a date-time with offset, got a bare date")
    if not isinstance(value, str):
        raise InvalidFieldValue('date', f"expected a date-time with offset, got {type(value).__name__}")
    try:
        return parse_date(value)
    except ValueError as e:
        raise InvalidFieldValue('date', str(e)) from e


def _decode_list(name: str, value: Any) -> tuple[str, ...]:
    """Accept a bracketed/line-itemized list or a single scalar."""
    if value is None:
        return ()
    if not isinstance(value, list):
        value = [value]

    items = []
    for i, item in enumerate(value):
        text = _scalar_text(item)
        if text is None:
            raise InvalidFieldValue(name, f"item {i} must be text, got {type(item).__name__}")
        items.append(text)
    return tuple(items)


def _decode_toc(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise InvalidFieldValue('toc', f"expected true or false, got {value!r}")
    return value


def parse(text: str, *, toc_default: bool = False) -> Document:
    """Parse one document's raw text into an immutable Document.

    Raises MalformedDocument, MissingRequiredField, or InvalidFieldValue.
    Keys other than title/date/categories/tags/toc are kept in Document.extra.
    """
    region, body = split_front_matter(text)
    fm = _load_mapping(region)

    for name in REQUIRED_FIELDS:
        if _is_blank(fm.get(name)):
            raise MissingRequiredField(name)

    extra = {k: v for k, v in fm.items() if k not in RECOGNIZED_FIELDS}
    if extra:
        logger.debug("Passing through unrecognized front matter keys: %s", ', '.join(extra))

    return Document(
        title=_decode_title(fm['title']),
        date=_decode_date(fm['date']),
        categories=_decode_list('categories', fm.get('categories')),
        tags=_decode_list('tags', fm.get('tags')),
        toc=_decode_toc(fm.get('toc'), toc_default),
        extra=extra,
        body=body,
    )
