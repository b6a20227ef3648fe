"""
URL slug helpers shared by packages, destinations and blog posts.
"""
import re
import time
from typing import Callable

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    """
    Lower-case the value, collapse non-alphanumeric runs into '-' and trim dashes.

    Example:
        >>> slugify("Goa Beach Paradise!")
        'goa-beach-paradise'
    """
    return _NON_ALNUM.sub("-", value.lower()).strip("-")


def unique_slug(value: str, exists: Callable[[str], bool]) -> str:
    """
    Slugify value and append a millisecond timestamp when the slug is taken.

    Args:
        value: Name or title to derive the slug from
        exists: Predicate telling whether a slug is already in use
    """
    slug = slugify(value)
    if exists(slug):
        return f"{slug}-{int(time.time() * 1000)}"
    return slug


def copy_slug(base_slug: str, exists: Callable[[str], bool]) -> str:
    """
    Slug for a duplicated record: '<base>-copy', then '<base>-copy-2', '-3', ...
    """
    candidate = f"{base_slug}-copy"
    counter = 1
    while exists(candidate):
        counter += 1
        candidate = f"{base_slug}-copy-{counter}"
    return candidate
