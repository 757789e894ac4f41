"""Database table definition for indexed posts"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from sqlalchemy import Column, DateTime, JSON, String, Text
from sqlmodel import Field, SQLModel


class Post(SQLModel, table=True):
    """One loaded post, replaced wholesale when its source content hash changes"""
    __tablename__ = "posts"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    path: str = Field(..., sa_column=Column(Text, nullable=False, unique=True))
    slug: str = Field(..., index=True, nullable=False)
    hash: str = Field(..., sa_column=Column(String(64), nullable=False))
    title: str = Field(..., sa_column=Column(Text, nullable=False))
    date: str = Field(..., sa_column=Column(String(40), nullable=False), description="ISO date-time with offset")
    published_at: datetime = Field(..., sa_column=Column(DateTime(timezone=False), nullable=False, index=True),
                                   description="date normalized to naive UTC for ordering")
    categories: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    toc: bool = Field(default=False, nullable=False)
    extra: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True), description="YAML of unrecognized keys")
    body: str = Field(..., sa_column=Column(Text, nullable=False))
    indexed_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
