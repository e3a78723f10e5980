"""Slug generation for display names.

Functions:
    - make_slug: Normalize a display name into a URL-safe identifier
"""

import re
import unicodedata

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]+")


def make_slug(name: str) -> str:
    """Build the URL-safe slug for a display name.

    Accents are folded to their ASCII base letter, everything is lowercased
    and each run of other characters collapses into a single hyphen.

    Args:
        name (str): Display name to normalize.

    Returns:
        str: The slug, possibly empty when the name has no usable characters.

    Example:
        >>> make_slug("Feature Request!")
        'feature-request'
        >>> make_slug("Café")
        'cafe'
    """
    folded = (
        unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode("ascii")
    )
    return _NON_ALPHANUMERIC.sub("-", folded.lower()).strip("-")
