"""create_travel_cms_schema

Revision ID: 3f9a1c2d7b10
Revises:
Create Date: 2026-10-18 10:12:41.204518

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9a1c2d7b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


user_role = sa.Enum('ADMIN', 'EDITOR', name='user_role')
destination_region = sa.Enum('INDIA', 'WORLD', name='destination_region')
destination_category = sa.Enum(
    'MOUNTAIN', 'BEACH', 'HERITAGE', 'WILDLIFE', 'ADVENTURE', 'SPIRITUAL', 'CITY',
    name='destination_category',
)
destination_status = sa.Enum('ACTIVE', 'INACTIVE', name='destination_status')
package_difficulty = sa.Enum('EASY', 'MODERATE', 'CHALLENGING', name='package_difficulty')
package_type = sa.Enum('BUDGET', 'STANDARD', 'PREMIUM', 'LUXURY', name='package_type')
package_status = sa.Enum('ACTIVE', 'INACTIVE', 'DRAFT', name='package_status')
review_status = sa.Enum('PENDING', 'APPROVED', 'REJECTED', name='review_status')
enquiry_status = sa.Enum('NEW', 'CONTACTED', 'CONFIRMED', 'CANCELLED', name='enquiry_status')
contact_type = sa.Enum('CONTACT', 'CONSULTATION', name='contact_type')
contact_status = sa.Enum('NEW', 'IN_PROGRESS', 'RESOLVED', 'CLOSED', name='contact_status')
testimonial_status = sa.Enum('PENDING', 'APPROVED', 'REJECTED', name='testimonial_status')


def _timestamps(updated: bool = True) -> list:
    columns = [sa.Column('created_at', sa.DateTime(timezone=True), nullable=False)]
    if updated:
        columns.append(sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False))
    return columns


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('role', user_role, nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'destinations',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=False),
        sa.Column('country', sa.String(length=100), nullable=False),
        sa.Column('region', destination_region, nullable=False),
        sa.Column('category', destination_category, nullable=False),
        sa.Column('image', sa.String(length=1000), nullable=True),
        sa.Column('images', sa.JSON(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('highlights', sa.JSON(), nullable=False),
        sa.Column('best_time', sa.String(length=255), nullable=True),
        sa.Column('status', destination_status, nullable=False),
        sa.Column('featured', sa.Boolean(), nullable=False),
        sa.Column('rating', sa.Float(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_destinations_name', 'destinations', ['name'])
    op.create_index('ix_destinations_slug', 'destinations', ['slug'], unique=True)
    op.create_index('ix_destinations_region', 'destinations', ['region'])
    op.create_index('ix_destinations_category', 'destinations', ['category'])
    op.create_index('ix_destinations_status', 'destinations', ['status'])

    op.create_table(
        'packages',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('destination_id', sa.Uuid(), nullable=True),
        sa.Column('destination_name', sa.String(length=255), nullable=True),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('country', sa.String(length=100), nullable=False),
        sa.Column('image', sa.String(length=1000), nullable=True),
        sa.Column('images', sa.JSON(), nullable=False),
        sa.Column('price', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('original_price', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('duration', sa.String(length=100), nullable=True),
        sa.Column('group_size', sa.String(length=100), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('highlights', sa.JSON(), nullable=False),
        sa.Column('inclusions', sa.JSON(), nullable=False),
        sa.Column('exclusions', sa.JSON(), nullable=False),
        sa.Column('itinerary', sa.JSON(), nullable=True),
        sa.Column('faqs', sa.JSON(), nullable=True),
        sa.Column('policies', sa.JSON(), nullable=True),
        sa.Column('best_time', sa.String(length=255), nullable=True),
        sa.Column('difficulty', package_difficulty, nullable=False),
        sa.Column('type', package_type, nullable=False),
        sa.Column('badge', sa.String(length=100), nullable=True),
        sa.Column('rating', sa.Float(), nullable=False),
        sa.Column('reviews', sa.Integer(), nullable=False),
        sa.Column('status', package_status, nullable=False),
        sa.Column('featured', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['destination_id'], ['destinations.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_packages_name', 'packages', ['name'])
    op.create_index('ix_packages_slug', 'packages', ['slug'], unique=True)
    op.create_index('ix_packages_destination_id', 'packages', ['destination_id'])
    op.create_index('ix_packages_type', 'packages', ['type'])
    op.create_index('ix_packages_status', 'packages', ['status'])

    op.create_table(
        'reviews',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('package_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=True),
        sa.Column('comment', sa.Text(), nullable=False),
        sa.Column('images', sa.JSON(), nullable=False),
        sa.Column('verified', sa.Boolean(), nullable=False),
        sa.Column('helpful', sa.Integer(), nullable=False),
        sa.Column('status', review_status, nullable=False),
        *_timestamps(updated=False),
        sa.CheckConstraint('rating >= 1 AND rating <= 5', name='review_rating_range'),
        sa.ForeignKeyConstraint(['package_id'], ['packages.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_reviews_package_id', 'reviews', ['package_id'])
    op.create_index('ix_reviews_status', 'reviews', ['status'])

    op.create_table(
        'package_enquiries',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=False),
        sa.Column('package_id', sa.Uuid(), nullable=True),
        sa.Column('package_name', sa.String(length=255), nullable=True),
        sa.Column('travel_date', sa.Date(), nullable=True),
        sa.Column('travel_time', sa.String(length=50), nullable=True),
        sa.Column('adults', sa.Integer(), nullable=False),
        sa.Column('children', sa.Integer(), nullable=False),
        sa.Column('rooms', sa.Integer(), nullable=False),
        sa.Column('message', sa.Text(), nullable=True),
        sa.Column('status', enquiry_status, nullable=False),
        *_timestamps(updated=False),
        sa.ForeignKeyConstraint(['package_id'], ['packages.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_package_enquiries_email', 'package_enquiries', ['email'])
    op.create_index('ix_package_enquiries_package_id', 'package_enquiries', ['package_id'])
    op.create_index('ix_package_enquiries_status', 'package_enquiries', ['status'])
    op.create_index('ix_package_enquiries_created_at', 'package_enquiries', ['created_at'])

    op.create_table(
        'contact_inquiries',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('subject', sa.String(length=255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('type', contact_type, nullable=False),
        sa.Column('destination', sa.String(length=255), nullable=True),
        sa.Column('travel_date', sa.String(length=50), nullable=True),
        sa.Column('travelers', sa.String(length=50), nullable=True),
        sa.Column('budget', sa.String(length=100), nullable=True),
        sa.Column('hotel_type', sa.String(length=100), nullable=True),
        sa.Column('group_size', sa.String(length=100), nullable=True),
        sa.Column('special_requirements', sa.Text(), nullable=True),
        sa.Column('status', contact_status, nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_contact_inquiries_email', 'contact_inquiries', ['email'])
    op.create_index('ix_contact_inquiries_status', 'contact_inquiries', ['status'])

    op.create_table(
        'blog_posts',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('excerpt', sa.Text(), nullable=True),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('image', sa.String(length=1000), nullable=True),
        sa.Column('author', sa.String(length=255), nullable=False),
        sa.Column('category', sa.String(length=100), nullable=True),
        sa.Column('tags', sa.JSON(), nullable=False),
        sa.Column('read_time', sa.String(length=50), nullable=True),
        sa.Column('featured', sa.Boolean(), nullable=False),
        sa.Column('published', sa.Boolean(), nullable=False),
        sa.Column('published_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('views', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_blog_posts_slug', 'blog_posts', ['slug'], unique=True)
    op.create_index('ix_blog_posts_category', 'blog_posts', ['category'])
    op.create_index('ix_blog_posts_published', 'blog_posts', ['published'])

    op.create_table(
        'testimonials',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('location', sa.String(length=255), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('comment', sa.Text(), nullable=False),
        sa.Column('image', sa.String(length=1000), nullable=True),
        sa.Column('package_id', sa.Uuid(), nullable=True),
        sa.Column('trip_date', sa.String(length=50), nullable=True),
        sa.Column('featured', sa.Boolean(), nullable=False),
        sa.Column('verified', sa.Boolean(), nullable=False),
        sa.Column('status', testimonial_status, nullable=False),
        *_timestamps(updated=False),
        sa.CheckConstraint('rating >= 1 AND rating <= 5', name='testimonial_rating_range'),
        sa.ForeignKeyConstraint(['package_id'], ['packages.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_testimonials_status', 'testimonials', ['status'])


def downgrade() -> None:
    """Downgrade schema."""
    for table in (
        'testimonials', 'blog_posts', 'contact_inquiries', 'package_enquiries',
        'reviews', 'packages', 'destinations', 'users',
    ):
        op.drop_table(table)

    # Enum types outlive their tables in PostgreSQL
    bind = op.get_bind()
    for enum_type in (
        testimonial_status, contact_status, contact_type, enquiry_status, review_status,
        package_status, package_type, package_difficulty, destination_status,
        destination_category, destination_region, user_role,
    ):
        enum_type.drop(bind, checkfirst=True)
