# This file defines the blog endpoints.
# Create and update accept multipart forms so a post can carry an optional `image` part.
# Public listings only ever show published posts, newest first.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile

from src.api.api_config import ApiConfig
from src.api.dependencies import (
    clearable_form_value,
    get_blog_service,
    get_config,
    get_pagination,
    get_submitted_fields,
)
from src.api.pagination import PaginationSpec, build_pagination_meta
from src.api.response_envelope import build_list_envelope, build_message_envelope, build_object_envelope
from src.api.schemas.blog_schemas import BlogCategoriesResponseV1, BlogListResponseV1, BlogResponseV1
from src.api.schemas.common import MessageResponse
from src.api.services.blog_service import BlogService
from src.api.uploads import stage_upload

router = APIRouter(prefix="/blogs", tags=["blogs"])
BlogServiceDep = Annotated[BlogService, Depends(get_blog_service)]
ConfigDep = Annotated[ApiConfig, Depends(get_config)]
PaginationDep = Annotated[PaginationSpec, Depends(get_pagination)]
SubmittedFieldsDep = Annotated[frozenset[str], Depends(get_submitted_fields)]


def _blog_list_envelope(result: dict[str, object], pagination: PaginationSpec) -> dict[str, object]:
    return build_list_envelope(
        data=list(result["rows"]),
        payload_key="blogs",
        pagination=build_pagination_meta(
            pagination=pagination,
            total_count=int(result["total_count"]),
            total_key="totalBlogs",
        ),
    )


@router.get("", response_model=BlogListResponseV1, response_model_exclude_none=True)
def list_blogs(
    service: BlogServiceDep,
    pagination: PaginationDep,
    category: str | None = None,
    search: str | None = None,
) -> dict[str, object]:
    result = service.list_blogs(category=category, search=search, pagination=pagination)
    return _blog_list_envelope(result, pagination)


@router.get("/categories", response_model=BlogCategoriesResponseV1, response_model_exclude_none=True)
def list_blog_categories(service: BlogServiceDep) -> dict[str, object]:
    return build_object_envelope(data=service.list_categories(), payload_key="categories")


@router.get(
    "/category/{category}",
    response_model=BlogListResponseV1,
    response_model_exclude_none=True,
)
def list_blogs_by_category(
    category: str,
    service: BlogServiceDep,
    pagination: PaginationDep,
) -> dict[str, object]:
    result = service.list_blogs(category=category, search=None, pagination=pagination)
    return _blog_list_envelope(result, pagination)


@router.get("/{blog_id}", response_model=BlogResponseV1, response_model_exclude_none=True)
def get_blog(blog_id: str, service: BlogServiceDep) -> dict[str, object]:
    return build_object_envelope(data=service.get_blog(blog_id), payload_key="blog")


@router.post(
    "",
    status_code=201,
    response_model=BlogResponseV1,
    response_model_exclude_none=True,
)
def create_blog(
    service: BlogServiceDep,
    config: ConfigDep,
    title: str | None = Form(default=None),
    content: str | None = Form(default=None),
    author: str | None = Form(default=None),
    category: str | None = Form(default=None),
    tags: list[str] | None = Form(default=None),
    is_published: bool | None = Form(default=None, alias="isPublished"),
    image: UploadFile | None = File(default=None),
) -> dict[str, object]:
    with stage_upload(image, config.upload_dir) as staged:
        blog = service.create_blog(
            title=title,
            content=content,
            author=author,
            category=category,
            tags=tags,
            is_published=is_published,
            image=staged,
        )
    return build_object_envelope(data=blog, message="Blog created successfully", payload_key="blog")


@router.put("/{blog_id}", response_model=BlogResponseV1, response_model_exclude_none=True)
def update_blog(
    blog_id: str,
    service: BlogServiceDep,
    config: ConfigDep,
    submitted: SubmittedFieldsDep,
    title: str | None = Form(default=None),
    content: str | None = Form(default=None),
    author: str | None = Form(default=None),
    category: str | None = Form(default=None),
    tags: list[str] | None = Form(default=None),
    is_published: bool | None = Form(default=None, alias="isPublished"),
    image: UploadFile | None = File(default=None),
) -> dict[str, object]:
    with stage_upload(image, config.upload_dir) as staged:
        blog = service.update_blog(
            blog_id,
            title=title,
            content=content,
            author=author,
            category=clearable_form_value(category, "category", submitted),
            tags=tags,
            is_published=is_published,
            image=staged,
        )
    return build_object_envelope(data=blog, message="Blog updated successfully", payload_key="blog")


@router.delete("/{blog_id}", response_model=MessageResponse, response_model_exclude_none=True)
def delete_blog(blog_id: str, service: BlogServiceDep) -> dict[str, object]:
    service.delete_blog(blog_id)
    return build_message_envelope("Blog deleted successfully")
