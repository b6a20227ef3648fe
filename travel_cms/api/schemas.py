"""
Shared API schemas.

Every JSON body uses camelCase keys on the wire; Python code keeps
snake_case attribute names and reads straight from ORM objects.
"""
from datetime import date, datetime
from typing import Any, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from travel_cms.models.destinations import DestinationCategory, DestinationStatus, Region
from travel_cms.models.enquiries import ContactStatus, ContactType, EnquiryStatus
from travel_cms.models.packages import Difficulty, Package, PackageStatus, PackageType
from travel_cms.models.reviews import ReviewStatus
from travel_cms.models.testimonials import TestimonialStatus


class CamelModel(BaseModel):
    """Base schema: camelCase aliases, populated by name or alias, ORM-readable."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(CamelModel):
    message: str


# ===== Reviews =====

class PublicReviewResponse(CamelModel):
    """Review as shown to site visitors; the reviewer's email is withheld."""
    id: UUID
    package_id: UUID
    name: str
    location: Optional[str] = None
    rating: int
    title: Optional[str] = None
    comment: str
    images: List[str] = []
    verified: bool
    helpful: int
    status: ReviewStatus
    created_at: datetime


class ReviewResponse(PublicReviewResponse):
    email: Optional[str] = None


# ===== Packages =====

class DestinationSummary(CamelModel):
    id: UUID
    name: str
    slug: str


class PackageResponse(CamelModel):
    """Package as shown on listing and detail pages."""
    id: UUID
    name: str
    slug: str
    destination_id: Optional[UUID] = None
    destination_name: Optional[str] = None
    location: Optional[str] = None
    country: str
    image: Optional[str] = None
    images: List[str] = []
    price: float
    original_price: Optional[float] = None
    duration: Optional[str] = None
    group_size: Optional[str] = None
    description: Optional[str] = None
    highlights: List[str] = []
    inclusions: List[str] = []
    exclusions: List[str] = []
    itinerary: Optional[List[Any]] = None
    faqs: Optional[List[Any]] = None
    policies: Optional[dict] = None
    best_time: Optional[str] = None
    difficulty: Difficulty
    type: PackageType
    badge: Optional[str] = None
    rating: float
    reviews: int
    status: PackageStatus
    featured: bool
    destination: Optional[DestinationSummary] = None
    created_at: datetime
    updated_at: datetime


def package_response(package: Package) -> PackageResponse:
    """Serialize a package; destinationName prefers the linked destination's name."""
    response = PackageResponse.model_validate(package)
    if package.destination is not None:
        response.destination_name = package.destination.name
    return response


class PackageSummary(CamelModel):
    id: UUID
    name: str
    slug: str
    price: float
    destination_name: Optional[str] = None


# ===== Destinations =====

class DestinationResponse(CamelModel):
    id: UUID
    name: str
    slug: str
    location: str
    country: str
    region: Region
    category: DestinationCategory
    image: Optional[str] = None
    images: List[str] = []
    description: Optional[str] = None
    highlights: List[str] = []
    best_time: Optional[str] = None
    status: DestinationStatus
    featured: bool
    rating: float
    package_count: int = 0
    created_at: datetime
    updated_at: datetime


# ===== Blog =====

class BlogPostResponse(CamelModel):
    id: UUID
    title: str
    slug: str
    excerpt: Optional[str] = None
    content: str
    image: Optional[str] = None
    author: str
    category: Optional[str] = None
    tags: List[str] = []
    read_time: Optional[str] = None
    featured: bool
    published: bool
    published_at: Optional[datetime] = None
    views: int
    created_at: datetime
    updated_at: datetime


# ===== Enquiries =====

class EnquiryResponse(CamelModel):
    id: UUID
    name: str
    email: str
    phone: str
    package_id: Optional[UUID] = None
    package_name: Optional[str] = None
    travel_date: Optional[date] = None
    travel_time: Optional[str] = None
    adults: int
    children: int
    rooms: int
    message: Optional[str] = None
    status: EnquiryStatus
    created_at: datetime
    package: Optional[PackageSummary] = None


class ContactResponse(CamelModel):
    id: UUID
    name: str
    email: str
    phone: Optional[str] = None
    subject: str
    message: str
    type: ContactType
    destination: Optional[str] = None
    travel_date: Optional[str] = None
    travelers: Optional[str] = None
    budget: Optional[str] = None
    hotel_type: Optional[str] = None
    group_size: Optional[str] = None
    special_requirements: Optional[str] = None
    status: ContactStatus
    notes: Optional[str] = None
    created_at: datetime


# ===== Testimonials =====

class TestimonialResponse(CamelModel):
    id: UUID
    name: str
    email: Optional[str] = None
    location: str
    rating: int
    comment: str
    image: Optional[str] = None
    package_id: Optional[UUID] = None
    trip_date: Optional[str] = None
    featured: bool
    verified: bool
    status: TestimonialStatus
    created_at: datetime
