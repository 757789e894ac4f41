"""Data models for parsed posts and batch load results"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mdpost.core.errors import ParseError


RECOGNIZED_FIELDS = ('title', 'date', 'categories', 'tags', 'toc')


def freeze(value: Any) -> Any:
    """Read-only copy of a YAML value: mappings become proxies, lists become tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({k: freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(v) for v in value)
    return value


def thaw(value: Any) -> Any:
    """Inverse of freeze(), for handing values to yaml/json dumpers."""
    if isinstance(value, Mapping):
        return {k: thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [thaw(v) for v in value]
    return value


class Document(BaseModel):
    """One parsed article: decoded front matter plus the verbatim body."""
    model_config = ConfigDict(frozen=True)

    title:      str
    date:       datetime                 # always timezone-aware
    categories: tuple[str, ...] = ()
    tags:       tuple[str, ...] = ()
    toc:        bool = False
    extra:      Mapping[str, Any] = Field(default_factory=dict, validate_default=True)   # unrecognized keys
    body:       str = ""

    @field_validator('extra')
    @classmethod
    def _freeze_extra(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        clash = [k for k in value if k in RECOGNIZED_FIELDS]
        if clash:
            raise ValueError(f"extra keys shadow recognized fields: {', '.join(clash)}")
        return freeze(value)


@dataclass(frozen=True)
class LoadedPost:
    """A Document together with where it came from."""
    path:     Path
    slug:     str
    hash:     str          # sha256 of the raw file content
    document: Document


@dataclass(frozen=True)
class LoadFailure:
    """A source file that could not be turned into a Document."""
    path:  Path
    error: ParseError
