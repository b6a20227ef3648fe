"""
Blog API routes.
"""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from travel_cms.api.dependencies import get_db, require_admin
from travel_cms.api.routes.packages import update_changes
from travel_cms.api.schemas import BlogPostResponse, CamelModel, MessageResponse
from travel_cms.models.users import User
from travel_cms.services.blog_service import BlogService


CLEARABLE_FIELDS = frozenset({"excerpt", "image", "category", "read_time"})


class BlogPostFields(CamelModel):
    title: Optional[str] = None
    excerpt: Optional[str] = None
    content: Optional[str] = None
    image: Optional[str] = None
    author: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[List[str]] = None
    featured: Optional[bool] = None
    published: Optional[bool] = None
    read_time: Optional[str] = None


router = APIRouter(prefix="/blog", tags=["blog"])


@router.get("", response_model=List[BlogPostResponse])
def list_posts(
    published: Optional[bool] = Query(None, description="true/false; omit for all posts"),
    featured: bool = Query(False),
    category: Optional[str] = Query(None),
    limit: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
) -> List[BlogPostResponse]:
    posts = BlogService(db).list_posts(
        published=published,
        featured=featured,
        category=category,
        limit=limit,
    )
    return [BlogPostResponse.model_validate(p) for p in posts]


@router.get("/{id_or_slug}", response_model=BlogPostResponse)
def get_post(id_or_slug: str, db: Session = Depends(get_db)) -> BlogPostResponse:
    """Fetch a post by id or slug. Each fetch counts as one view."""
    return BlogPostResponse.model_validate(BlogService(db).get_post(id_or_slug))


@router.post("", response_model=BlogPostResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    request: BlogPostFields,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> BlogPostResponse:
    post = BlogService(db).create_post(request.model_dump(exclude_none=True), author=admin.name)
    return BlogPostResponse.model_validate(post)


@router.put("/{post_id}", response_model=BlogPostResponse)
def update_post(
    post_id: UUID,
    request: BlogPostFields,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> BlogPostResponse:
    """Partial update; publishing for the first time stamps publishedAt."""
    post = BlogService(db).update_post(post_id, update_changes(request, CLEARABLE_FIELDS))
    return BlogPostResponse.model_validate(post)


@router.delete("/{post_id}", response_model=MessageResponse)
def delete_post(
    post_id: UUID,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> MessageResponse:
    BlogService(db).delete_post(post_id)
    return MessageResponse(message="Blog post deleted successfully")
