"""
SQLAlchemy models package.
Import all models here to ensure they're registered with Base.metadata.
"""
from travel_cms.models.users import User, UserRole
from travel_cms.models.destinations import Destination, DestinationCategory, DestinationStatus, Region
from travel_cms.models.packages import Package, PackageStatus, PackageType, Difficulty
from travel_cms.models.reviews import Review, ReviewStatus
from travel_cms.models.enquiries import (
    PackageEnquiry,
    EnquiryStatus,
    ContactInquiry,
    ContactStatus,
    ContactType,
)
from travel_cms.models.blog_posts import BlogPost
from travel_cms.models.testimonials import Testimonial, TestimonialStatus
from travel_cms.models.site_settings import SiteSettings

__all__ = [
    "User",
    "UserRole",
    "Destination",
    "DestinationCategory",
    "DestinationStatus",
    "Region",
    "Package",
    "PackageStatus",
    "PackageType",
    "Difficulty",
    "Review",
    "ReviewStatus",
    "PackageEnquiry",
    "EnquiryStatus",
    "ContactInquiry",
    "ContactStatus",
    "ContactType",
    "BlogPost",
    "Testimonial",
    "TestimonialStatus",
    "SiteSettings",
]
