"""
Utility modules for the soil advisor backend.
"""

from app.utils.validation import (
    extract_bearer_token,
    validate_location,
    validate_farm_name,
)

__all__ = [
    "extract_bearer_token",
    "validate_location",
    "validate_farm_name",
]
