"""
Input Validation Utilities
===========================

Common validation functions for request headers and path parameters.
"""

import re
from typing import Optional


BEARER_PREFIX = "Bearer "


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """
    Pull the token out of an Authorization header.

    Expected format: "Bearer <token>" (the prefix is case-sensitive)

    Args:
        authorization: Value of the Authorization header

    Returns:
        The token, or None if the header is missing or malformed
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None


def validate_location(location: str) -> bool:
    """
    Validate a weather location query.

    Accepts city names, postcodes and "lat,lng" pairs.

    Args:
        location: Location string (e.g., "Davao", "7.07,125.61")

    Returns:
        True if non-blank and free of control characters, False otherwise
    """
    if not location or not location.strip():
        return False
    return not re.search(r'[\x00-\x1f]', location)


def validate_farm_name(farm_name: str) -> bool:
    """
    Validate a farm name used in a path.

    Args:
        farm_name: Farm name (e.g., "North Field")

    Returns:
        True if 1-100 characters after trimming, False otherwise
    """
    return 1 <= len(farm_name.strip()) <= 100
