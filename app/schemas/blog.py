from typing import List, Optional

from pydantic import BaseModel, Field


class PostSummary(BaseModel):
    id: str
    slug: str
    title: str
    layout: Optional[str] = None
    author: Optional[str] = None
    date: Optional[str] = None
    permalink: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    reviewers: List[str] = Field(default_factory=list)
    readingTime: Optional[str] = None
    draft: bool = False


class PostDetail(PostSummary):
    content: str


class TagSummary(BaseModel):
    tag: str
    count: int


class AuthorSummary(BaseModel):
    author: str
    count: int
