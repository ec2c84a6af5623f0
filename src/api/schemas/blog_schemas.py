# This file defines blog post response contracts.
# The image is exposed as its URL plus the media host identifier used for later deletion.

from __future__ import annotations

from datetime import datetime

from src.api.schemas.common import BlogPaginationMetadata, CamelModel, EnvelopeFields


class BlogV1(CamelModel):
    id: str
    title: str
    content: str
    author: str
    image: str | None = None
    image_public_id: str | None = None
    category: str | None = None
    tags: list[str]
    is_published: bool
    read_time: int
    created_at: datetime
    updated_at: datetime


class BlogResponseV1(EnvelopeFields):
    blog: BlogV1


class BlogListResponseV1(EnvelopeFields):
    blogs: list[BlogV1]
    pagination: BlogPaginationMetadata


class BlogCategoriesResponseV1(EnvelopeFields):
    categories: list[str]
