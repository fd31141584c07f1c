"""
Bearer Token Dependency
=======================

Every user-facing endpoint needs "Authorization: Bearer <token>".
This dependency pulls the token out of the header. Checking what's inside
it is the TokenService's job.
"""

from typing import Optional

from fastapi import Header, HTTPException

from app.utils import extract_bearer_token


def require_bearer_token(authorization: Optional[str] = Header(None)) -> str:
    """
    Get the bearer token from the Authorization header.

    Raises:
        HTTPException: 401 if the header is missing or not a bearer token
    """
    token = extract_bearer_token(authorization)
    if token is None:
        raise HTTPException(
            status_code=401,
            detail="Bearer token not found in Authorization header"
        )
    return token
