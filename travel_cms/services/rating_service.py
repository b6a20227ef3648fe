"""Package rating aggregation.

A package's `rating` and `reviews` fields are derived from its APPROVED
reviews only. The aggregator writes them through the caller's session and
never commits, so the recompute lands in the same transaction as the
review mutation that triggered it.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Tuple
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from travel_cms.lib.logging import get_logger
from travel_cms.models.packages import Package
from travel_cms.models.reviews import Review, ReviewStatus


logger = get_logger(__name__)

_ONE_DECIMAL = Decimal("0.1")


def average_rating(ratings: Iterable[int]) -> Tuple[float, int]:
    """Return (average rounded half-up to one decimal, count); (0.0, 0) when empty.

    Example:
        >>> average_rating([3, 4, 4, 4, 5, 5])
        (4.2, 6)
    """
    values = list(ratings)
    count = len(values)
    if count == 0:
        return 0.0, 0
    mean = Decimal(sum(values)) / Decimal(count)
    return float(mean.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP)), count


class RatingAggregator:
    """Recomputes denormalized review aggregates on packages."""

    def __init__(self, session: Session):
        self.session = session

    def approved_ratings(self, package_id: UUID) -> list[int]:
        stmt = select(Review.rating).where(
            Review.package_id == package_id,
            Review.status == ReviewStatus.APPROVED,
        )
        return list(self.session.execute(stmt).scalars().all())

    def recompute(self, package_id: UUID) -> Optional[Package]:
        """
        Refresh `rating`/`reviews` on the package from the current review set.

        Pending session changes are flushed first so the recompute sees the
        triggering mutation. Returns None when the package no longer exists.
        """
        self.session.flush()

        package = self.session.get(Package, package_id)
        if package is None:
            logger.warning(f"Rating recompute skipped, package {package_id} not found")
            return None

        rating, count = average_rating(self.approved_ratings(package_id))
        package.rating = rating
        package.reviews = count
        self.session.flush()

        logger.debug(f"Package {package_id} aggregate: rating={rating} reviews={count}")
        return package
