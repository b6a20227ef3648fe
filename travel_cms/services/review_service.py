"""Review submission, listing, moderation and helpful votes.

Workflow:
1. Submit: visitor review stored as PENDING on an ACTIVE package
2. Moderate: admin moves the review between PENDING/APPROVED/REJECTED
3. Aggregate: package rating/count recomputed in the same transaction
   whenever APPROVED-set membership can change
4. Publish: a PackageChanged event once the transaction has committed
"""
import math
from typing import Optional, Sequence, Union
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from travel_cms.api.middleware.error_handler import NotFoundException, ValidationException
from travel_cms.lib.db import transaction
from travel_cms.lib.events import EventBus, PackageChanged, get_event_bus
from travel_cms.lib.logging import get_logger
from travel_cms.lib.metrics import get_metrics_collector
from travel_cms.models.packages import Package, PackageStatus
from travel_cms.models.reviews import Review, ReviewStatus
from travel_cms.services.rating_service import RatingAggregator


logger = get_logger(__name__)

PENDING_MESSAGE = "Review submitted successfully and is pending approval"
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def parse_review_status(value: Union[str, ReviewStatus, None]) -> ReviewStatus:
    """Map user input to a ReviewStatus or raise ValidationException."""
    if isinstance(value, ReviewStatus):
        return value
    try:
        return ReviewStatus(str(value).upper())
    except ValueError:
        raise ValidationException("Invalid status")


class ReviewService:
    """Review workflow over a single database session.

    Args:
        session: SQLAlchemy session for database operations
        event_bus: Where change events are published (global bus by default)
    """

    def __init__(self, session: Session, event_bus: Optional[EventBus] = None):
        self.session = session
        self.event_bus = event_bus or get_event_bus()
        self.aggregator = RatingAggregator(session)
        self.metrics = get_metrics_collector()

    # ===== Queries =====

    def list_reviews(
        self,
        package_id: Optional[UUID] = None,
        status: Optional[str] = None,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        include_all: bool = False,
    ) -> dict:
        """List reviews newest first.

        Public callers (include_all=False) must name a package and only see
        APPROVED reviews. Admin callers may list across packages and filter
        by any status.

        Returns:
            {"reviews": [...], "total": int, "page": int, "total_pages": int}
        """
        if package_id is None and not include_all:
            raise ValidationException("Package ID is required")
        if page < 1 or not 1 <= limit <= MAX_PAGE_SIZE:
            raise ValidationException("Invalid pagination parameters")

        conditions = []
        if package_id is not None:
            conditions.append(Review.package_id == package_id)
        if not include_all:
            conditions.append(Review.status == ReviewStatus.APPROVED)
        elif status:
            conditions.append(Review.status == parse_review_status(status))

        stmt = (
            select(Review)
            .where(*conditions)
            .order_by(Review.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        reviews = self.session.execute(stmt).scalars().all()
        total = self.session.execute(
            select(func.count(Review.id)).where(*conditions)
        ).scalar_one()

        return {
            "reviews": list(reviews),
            "total": total,
            "page": page,
            "total_pages": math.ceil(total / limit),
        }

    def get_review(self, review_id: UUID) -> Review:
        review = self.session.get(Review, review_id)
        if review is None:
            raise NotFoundException("Review", str(review_id))
        return review

    # ===== Mutations =====

    def submit_review(
        self,
        package_id: Optional[UUID],
        name: Optional[str],
        comment: Optional[str],
        rating: Optional[int],
        email: Optional[str] = None,
        location: Optional[str] = None,
        title: Optional[str] = None,
        images: Optional[Sequence[str]] = None,
    ) -> Review:
        """Store a visitor review as PENDING.

        Raises:
            ValidationException: required field missing or rating outside 1-5
            NotFoundException: package missing or not ACTIVE
        """
        if not package_id or not (name or "").strip() or not (comment or "").strip():
            raise ValidationException("Package ID, name, and comment are required")
        if isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
            raise ValidationException("Rating must be between 1 and 5")

        package = self.session.get(Package, package_id)
        if package is None or package.status != PackageStatus.ACTIVE:
            raise NotFoundException("Package")

        with transaction(self.session):
            review = Review(
                package_id=package.id,
                name=name.strip(),
                email=email,
                location=location,
                rating=rating,
                title=title,
                comment=comment.strip(),
                images=list(images or []),
                status=ReviewStatus.PENDING,
            )
            self.session.add(review)
            # Pending reviews are not counted; the recompute keeps the
            # aggregate honest if it had drifted.
            self.aggregator.recompute(package.id)

        logger.info(
            f"Review {review.id} submitted for package {package.id}",
            extra={"package_id": str(package.id), "rating": rating},
        )
        self.metrics.increment_reviews_submitted()
        self._publish(package)
        return review

    def moderate_review(
        self,
        review_id: UUID,
        status: Union[str, ReviewStatus, None],
        verified: Optional[bool] = None,
    ) -> Review:
        """Change a review's moderation status.

        `verified` falls back to False when omitted. The package aggregate is
        recomputed when the review leaves or enters the APPROVED set.
        """
        new_status = parse_review_status(status)
        review = self.get_review(review_id)
        previous_status = review.status

        with transaction(self.session):
            review.status = new_status
            review.verified = bool(verified) if verified is not None else False
            if ReviewStatus.APPROVED in (previous_status, new_status):
                self.aggregator.recompute(review.package_id)

        logger.info(
            f"Review {review.id} moderated {previous_status.value} -> {new_status.value}",
            extra={"package_id": str(review.package_id)},
        )
        self.metrics.increment_reviews_moderated(new_status.value)
        self._publish(self.session.get(Package, review.package_id))
        return review

    def mark_helpful(self, review_id: UUID) -> Review:
        """Increment the helpful counter by exactly one.

        There is no per-visitor dedup: repeated calls keep incrementing.
        """
        with transaction(self.session):
            result = self.session.execute(
                update(Review)
                .where(Review.id == review_id)
                .values(helpful=Review.helpful + 1)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise NotFoundException("Review", str(review_id))

        review = self.get_review(review_id)
        self.session.refresh(review)

        self.metrics.increment_helpful_votes()
        self._publish(self.session.get(Package, review.package_id))
        return review

    def delete_review(self, review_id: UUID) -> None:
        """Delete a review and recompute its package aggregate."""
        review = self.get_review(review_id)
        package_id = review.package_id

        with transaction(self.session):
            self.session.delete(review)
            self.aggregator.recompute(package_id)

        logger.info(f"Review {review_id} deleted", extra={"package_id": str(package_id)})
        self._publish(self.session.get(Package, package_id))

    def _publish(self, package: Optional[Package]) -> None:
        if package is None:
            return
        self.event_bus.publish(
            PackageChanged(
                package_id=package.id,
                slug=package.slug,
                rating=package.rating,
                reviews=package.reviews,
            )
        )
