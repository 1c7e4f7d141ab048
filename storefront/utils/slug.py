# storefront/utils/slug.py
import re


def generate_slug(text: str) -> str:
    """Lowercase, spaces to dashes, drop anything that is not a word char or dash."""
    slug = str(text).lower().strip()
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"[^\w\-]+", "", slug)
    slug = re.sub(r"-{2,}", "-", slug)
    return slug.strip("-")
