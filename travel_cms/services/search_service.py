"""Search across packages, destinations and back-office content.

Matching is a case-insensitive substring test on a fixed set of columns;
results are not tokenized or ranked beyond each entity's fixed ordering.
"""
from typing import Any, Dict, List

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from travel_cms.api.middleware.error_handler import SearchException
from travel_cms.lib.logging import get_logger
from travel_cms.lib.metrics import get_metrics_collector
from travel_cms.models.blog_posts import BlogPost
from travel_cms.models.destinations import Destination, DestinationStatus
from travel_cms.models.enquiries import ContactInquiry, PackageEnquiry
from travel_cms.models.packages import Package, PackageStatus
from travel_cms.models.testimonials import Testimonial


logger = get_logger(__name__)

MIN_QUERY_LENGTH = 2
PACKAGE_LIMIT = 6
DESTINATION_LIMIT = 4
ADMIN_LIMIT = 5


def _matches(term: str, *columns):
    return or_(*[column.icontains(term, autoescape=True) for column in columns])


class SearchService:
    """Unified search for the public site and the admin dashboard."""

    def __init__(self, session: Session):
        self.session = session
        self.metrics = get_metrics_collector()

    @staticmethod
    def normalize(query: str | None) -> str | None:
        """Return the trimmed query, or None when it is too short to run."""
        term = (query or "").strip()
        if len(term) < MIN_QUERY_LENGTH:
            return None
        return term

    def search(self, query: str | None) -> Dict[str, Any]:
        """Public search over ACTIVE packages and destinations.

        Returns:
            {"results": [...]} for short queries, otherwise
            {"results": [...], "counts": {"packages": n, "destinations": m}}

        Raises:
            SearchException: any store error; no partial results
        """
        term = self.normalize(query)
        if term is None:
            return {"results": []}

        try:
            packages = self.session.execute(
                select(Package)
                .where(
                    Package.status == PackageStatus.ACTIVE,
                    _matches(
                        term,
                        Package.name,
                        Package.destination_name,
                        Package.location,
                        Package.country,
                    ),
                )
                .order_by(Package.featured.desc(), Package.rating.desc())
                .limit(PACKAGE_LIMIT)
            ).scalars().all()

            destinations = self.session.execute(
                select(Destination)
                .where(
                    Destination.status == DestinationStatus.ACTIVE,
                    _matches(term, Destination.name, Destination.location, Destination.country),
                )
                .order_by(Destination.featured.desc(), Destination.rating.desc())
                .limit(DESTINATION_LIMIT)
            ).scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Search failed for query {term!r}", exc_info=True)
            raise SearchException() from e

        self.metrics.increment_search_queries("public")

        results: List[Dict[str, Any]] = [
            {
                "id": p.id,
                "type": "package",
                "title": p.name,
                "subtitle": f"{p.destination_name} • {p.duration}",
                "price": p.price,
                "href": f"/packages/{p.slug}",
                "image": p.image,
                "rating": p.rating,
            }
            for p in packages
        ]
        results.extend(
            {
                "id": d.id,
                "type": "destination",
                "title": d.name,
                "subtitle": f"{d.location}, {d.country}",
                "href": f"/destinations?search={d.slug}",
                "image": d.image,
                "rating": d.rating,
            }
            for d in destinations
        )

        return {
            "results": results,
            "counts": {"packages": len(packages), "destinations": len(destinations)},
        }

    def admin_search(self, query: str | None) -> Dict[str, Any]:
        """Back-office search across every content type, any status."""
        term = self.normalize(query)
        if term is None:
            return {"results": []}

        try:
            packages = self._find(
                select(Package).where(
                    _matches(term, Package.name, Package.destination_name, Package.location)
                )
            )
            destinations = self._find(
                select(Destination).where(
                    _matches(term, Destination.name, Destination.location, Destination.country)
                )
            )
            enquiries = self._find(
                select(PackageEnquiry)
                .options(selectinload(PackageEnquiry.package))
                .where(
                    _matches(term, PackageEnquiry.name, PackageEnquiry.email, PackageEnquiry.phone)
                )
                .order_by(PackageEnquiry.created_at.desc())
            )
            contacts = self._find(
                select(ContactInquiry)
                .where(
                    _matches(term, ContactInquiry.name, ContactInquiry.email, ContactInquiry.subject)
                )
                .order_by(ContactInquiry.created_at.desc())
            )
            blog_posts = self._find(
                select(BlogPost).where(
                    _matches(term, BlogPost.title, BlogPost.author, BlogPost.category)
                )
            )
            testimonials = self._find(
                select(Testimonial).where(
                    _matches(term, Testimonial.name, Testimonial.location)
                )
            )
        except SQLAlchemyError as e:
            logger.error(f"Admin search failed for query {term!r}", exc_info=True)
            raise SearchException() from e

        self.metrics.increment_search_queries("admin")

        results: List[Dict[str, Any]] = []
        results += [
            {
                "id": p.id, "type": "package", "title": p.name,
                "subtitle": p.destination_name, "href": f"/admin/packages/{p.id}",
                "status": p.status.value,
            }
            for p in packages
        ]
        results += [
            {
                "id": d.id, "type": "destination", "title": d.name,
                "subtitle": d.location, "href": f"/admin/destinations/{d.id}",
                "status": d.status.value,
            }
            for d in destinations
        ]
        results += [
            {
                "id": e.id, "type": "enquiry", "title": e.name,
                "subtitle": e.package.name if e.package else e.email,
                "href": "/admin/enquiries", "status": e.status.value,
            }
            for e in enquiries
        ]
        results += [
            {
                "id": c.id, "type": "contact", "title": c.name,
                "subtitle": c.subject or c.email, "href": "/admin/contacts",
                "status": c.status.value,
            }
            for c in contacts
        ]
        results += [
            {
                "id": b.id, "type": "blog", "title": b.title,
                "subtitle": f"By {b.author}", "href": "/admin/blog",
                "status": "PUBLISHED" if b.published else "DRAFT",
            }
            for b in blog_posts
        ]
        results += [
            {
                "id": t.id, "type": "testimonial", "title": t.name,
                "subtitle": f"{t.location} - {t.rating}★", "href": "/admin/testimonials",
                "status": t.status.value,
            }
            for t in testimonials
        ]

        return {
            "results": results,
            "counts": {
                "packages": len(packages),
                "destinations": len(destinations),
                "enquiries": len(enquiries),
                "contacts": len(contacts),
                "blog_posts": len(blog_posts),
                "testimonials": len(testimonials),
            },
        }

    def _find(self, stmt) -> list:
        return list(self.session.execute(stmt.limit(ADMIN_LIMIT)).scalars().all())
