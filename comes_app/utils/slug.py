"""Slug generation for human-readable identifiers."""

import re
import unicodedata


def slugify(value: str, fallback: str = 'item') -> str:
    """Lower-case ``value`` and keep only ASCII letters, digits and single hyphens."""
    value = unicodedata.normalize('NFKD', value or '').encode('ascii', 'ignore').decode('ascii')
    value = value.strip().lower()
    if not value:
        return fallback
    value = re.sub(r'[^a-z0-9\-]+', '-', value)
    value = re.sub(r'-{2,}', '-', value).strip('-')
    return value or fallback


def unique_slug(base: str, exists) -> str:
    """Append ``-2``, ``-3``... to ``base`` until ``exists(candidate)`` is false."""
    candidate = base
    counter = 2
    while exists(candidate):
        candidate = f'{base}-{counter}'
        counter += 1
    return candidate
