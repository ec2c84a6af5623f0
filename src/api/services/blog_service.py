# This file implements the blog post lifecycle: create, read, list, update, delete.
# Read time is derived from the content and recomputed whenever the content changes.
# Blog images are optional; when present their remote asset lives and dies with the post.

from __future__ import annotations

from typing import Any

from src.api.api_config import ApiConfig
from src.api.db_access import DatabaseClient
from src.api.ddl import BLOG_TABLE
from src.api.error_handlers import NotFoundError, ValidationError
from src.api.field_parsing import calculate_read_time, clean_text, find_missing_fields, parse_list_field
from src.api.identifiers import new_document_id, utc_now_iso
from src.api.image_lifecycle import BLOG_TRANSFORMATION, ImageManager
from src.api.media_client import MediaClient
from src.api.pagination import PaginationSpec
from src.api.services.content_service import (
    LOGGER,
    ContentService,
    contains_clause,
    dump_list,
    like_pattern,
    load_list,
)
from src.api.uploads import StagedUpload

BLOG_ORDER_SQL = "created_at DESC, id DESC"


class BlogService(ContentService):
    """Lifecycle operations for blog posts."""

    table_name = BLOG_TABLE

    def __init__(self, *, config: ApiConfig, db: DatabaseClient, media: MediaClient) -> None:
        super().__init__(config=config, db=db)
        self.images = ImageManager(
            media=media,
            folder=config.media_folder("blogs"),
            transformation=BLOG_TRANSFORMATION,
        )

    def list_blogs(
        self,
        *,
        category: str | None,
        search: str | None,
        pagination: PaginationSpec,
    ) -> dict[str, Any]:
        where_clauses = ["is_published = :is_published"]
        params: dict[str, Any] = {"is_published": True}

        if category:
            where_clauses.append("category = :category")
            params["category"] = category
        if search and search.strip():
            where_clauses.append(
                f"({contains_clause('title', 'search')} OR {contains_clause('content', 'search')})"
            )
            params["search"] = like_pattern(search)

        rows, total_count = self._fetch_page(
            where_clauses=where_clauses,
            params=params,
            order_sql=BLOG_ORDER_SQL,
            pagination=pagination,
        )
        return {"rows": [self._to_blog(row) for row in rows], "total_count": total_count}

    def list_categories(self) -> list[str]:
        query = f"""
        SELECT DISTINCT category
        FROM {self.table_name}
        WHERE is_published = :is_published AND category IS NOT NULL
        ORDER BY category ASC
        """
        rows = self.db.fetch_all(query, {"is_published": True})
        return [str(row["category"]) for row in rows]

    def get_blog(self, blog_id: str) -> dict[str, Any]:
        row = self._get_row(blog_id)
        if row is None:
            raise NotFoundError("Blog not found")
        return self._to_blog(row)

    def create_blog(
        self,
        *,
        title: str | None,
        content: str | None,
        author: str | None,
        category: str | None = None,
        tags: str | list[str] | None = None,
        is_published: bool | None = None,
        image: StagedUpload | None = None,
    ) -> dict[str, Any]:
        values = {"title": clean_text(title), "content": content, "author": clean_text(author)}
        missing = find_missing_fields(values, ["title", "content", "author"])
        if missing:
            raise ValidationError.missing_fields(missing, "Title, content, and author are required")

        image_url: str | None = None
        image_public_id: str | None = None
        if image is not None:
            asset = self.images.upload(image)
            image_url, image_public_id = asset.url, asset.public_id

        now = utc_now_iso()
        blog_id = new_document_id()
        columns = {
            "id": blog_id,
            "title": values["title"],
            "content": content,
            "author": values["author"],
            "image_url": image_url,
            "image_public_id": image_public_id,
            "category": clean_text(category),
            "tags_json": dump_list(parse_list_field(tags) or []),
            "is_published": True if is_published is None else is_published,
            "read_time": calculate_read_time(str(content)),
            "created_at": now,
            "updated_at": now,
        }
        try:
            self._insert(columns)
        except Exception:
            self.images.discard_remote(image_public_id)
            raise

        LOGGER.info("Created blog %s", blog_id)
        return self.get_blog(blog_id)

    def update_blog(
        self,
        blog_id: str,
        *,
        title: str | None = None,
        content: str | None = None,
        author: str | None = None,
        category: str | None = None,
        tags: str | list[str] | None = None,
        is_published: bool | None = None,
        image: StagedUpload | None = None,
    ) -> dict[str, Any]:
        row = self._get_row(blog_id)
        if row is None:
            raise NotFoundError("Blog not found")

        updates: dict[str, Any] = {}
        if clean_text(title):
            updates["title"] = clean_text(title)
        if content and content.strip():
            updates["content"] = content
            updates["read_time"] = calculate_read_time(content)
        if clean_text(author):
            updates["author"] = clean_text(author)
        if category is not None:
            # An explicit empty category clears it.
            updates["category"] = clean_text(category)
        parsed_tags = parse_list_field(tags)
        if parsed_tags is not None:
            updates["tags_json"] = dump_list(parsed_tags)
        if is_published is not None:
            updates["is_published"] = is_published

        if image is not None:
            asset = self.images.replace(image, row.get("image_public_id"))
            updates["image_url"] = asset.url
            updates["image_public_id"] = asset.public_id

        updates["updated_at"] = utc_now_iso()
        self._update_columns(blog_id, updates)
        LOGGER.info("Updated blog %s (%s)", blog_id, ", ".join(sorted(updates)))
        return self.get_blog(blog_id)

    def delete_blog(self, blog_id: str) -> None:
        row = self._get_row(blog_id)
        if row is None:
            raise NotFoundError("Blog not found")
        self.images.discard_remote(row.get("image_public_id"))
        self._delete_row(blog_id)
        LOGGER.info("Deleted blog %s", blog_id)

    @staticmethod
    def _to_blog(row: dict[str, Any]) -> dict[str, Any]:
        return {
            "id": row["id"],
            "title": row["title"],
            "content": row["content"],
            "author": row["author"],
            "image": row.get("image_url"),
            "image_public_id": row.get("image_public_id"),
            "category": row.get("category"),
            "tags": load_list(row.get("tags_json")),
            "is_published": bool(row["is_published"]),
            "read_time": int(row["read_time"]),
            "created_at": row["created_at"],
            "updated_at": row["updated_at"],
        }
