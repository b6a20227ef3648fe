"""Blog post service."""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import or_, select, update
from sqlalchemy.orm import Session

from travel_cms.api.middleware.error_handler import NotFoundException, ValidationException
from travel_cms.lib.db import transaction
from travel_cms.lib.events import ContentChanged, EventBus, get_event_bus
from travel_cms.lib.logging import get_logger
from travel_cms.lib.slugs import unique_slug
from travel_cms.models.blog_posts import BlogPost
from travel_cms.services.package_service import as_uuid


logger = get_logger(__name__)

DEFAULT_AUTHOR = "Admin"


class BlogService:
    """Blog reads and admin mutations."""

    def __init__(self, session: Session, event_bus: Optional[EventBus] = None):
        self.session = session
        self.event_bus = event_bus or get_event_bus()

    def list_posts(
        self,
        published: Optional[bool] = None,
        featured: bool = False,
        category: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[BlogPost]:
        stmt = select(BlogPost)
        if published is not None:
            stmt = stmt.where(BlogPost.published.is_(published))
        if featured:
            stmt = stmt.where(BlogPost.featured.is_(True))
        if category:
            stmt = stmt.where(BlogPost.category == category)
        stmt = stmt.order_by(BlogPost.featured.desc(), BlogPost.published_at.desc())
        if limit:
            stmt = stmt.limit(limit)
        return list(self.session.execute(stmt).scalars().all())

    def get_post(self, id_or_slug: str) -> BlogPost:
        """Fetch a post by id or slug and count the view."""
        post_id = as_uuid(id_or_slug)
        condition = BlogPost.slug == str(id_or_slug)
        if post_id is not None:
            condition = or_(BlogPost.id == post_id, condition)

        post = self.session.execute(select(BlogPost).where(condition)).scalars().first()
        if post is None:
            raise NotFoundException("Blog post")

        with transaction(self.session):
            self.session.execute(
                update(BlogPost)
                .where(BlogPost.id == post.id)
                .values(views=BlogPost.views + 1)
                .execution_options(synchronize_session=False)
            )
        self.session.refresh(post)
        return post

    def _get_by_id(self, post_id: UUID) -> BlogPost:
        post = self.session.get(BlogPost, post_id)
        if post is None:
            raise NotFoundException("Blog post", str(post_id))
        return post

    def _slug_exists(self, slug: str) -> bool:
        return self.session.execute(
            select(BlogPost.id).where(BlogPost.slug == slug)
        ).first() is not None

    def create_post(self, data: Dict[str, Any], author: Optional[str] = None) -> BlogPost:
        """
        Create a post. The author falls back to the given admin name, then "Admin".
        """
        title = (data.get("title") or "").strip()
        if not title:
            raise ValidationException("Title is required")

        fields = {k: v for k, v in data.items() if v is not None}
        fields["title"] = title
        fields["author"] = fields.get("author") or author or DEFAULT_AUTHOR
        if fields.get("published"):
            fields["published_at"] = datetime.now(timezone.utc)

        with transaction(self.session):
            post = BlogPost(slug=unique_slug(title, self._slug_exists), **fields)
            self.session.add(post)

        logger.info(f"Blog post {post.id} created", extra={"published": post.published})
        self._publish(post)
        return post

    def update_post(self, post_id: UUID, changes: Dict[str, Any]) -> BlogPost:
        """Partial update; the first move to published stamps published_at."""
        post = self._get_by_id(post_id)

        with transaction(self.session):
            for key, value in changes.items():
                setattr(post, key, value)
            if post.published and post.published_at is None:
                post.published_at = datetime.now(timezone.utc)

        logger.info(f"Blog post {post.id} updated", extra={"fields": sorted(changes)})
        self._publish(post)
        return post

    def delete_post(self, post_id: UUID) -> None:
        post = self._get_by_id(post_id)
        slug = post.slug

        with transaction(self.session):
            self.session.delete(post)

        logger.info(f"Blog post {post_id} deleted")
        self.event_bus.publish(ContentChanged(paths=("/", "/blog", f"/blog/{slug}")))

    def _publish(self, post: BlogPost) -> None:
        self.event_bus.publish(ContentChanged(paths=("/", "/blog", f"/blog/{post.slug}")))
