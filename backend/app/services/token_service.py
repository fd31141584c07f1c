"""
Token Service
=============

Checks the access tokens the frontend sends in "Authorization: Bearer ...".

Tokens are HS256 JWTs signed with JWT_SECRET_KEY. The "username" claim says
who the user is. We don't issue tokens for real users here (the auth server
does that), create_access_token() is only for tests and local tooling.
"""

import logging
from datetime import datetime, timedelta, timezone

import jwt
from jwt import ExpiredSignatureError, InvalidTokenError

logger = logging.getLogger(__name__)


class TokenError(Exception):
    """The access token is missing, expired or not ours."""


class TokenService:
    """
    Verifies access tokens.

    HOW TO USE:
    ----------
    tokens = TokenService(secret_key="...")
    username = tokens.verify_access_token(token)   # raises TokenError
    """

    ALGORITHM = "HS256"

    def __init__(self, secret_key: str):
        self.secret_key = secret_key

    def verify_access_token(self, token: str) -> str:
        """
        Decode a token and return the username inside it.

        Raises:
            TokenError: If the token is expired, tampered with or has no username
        """
        if not token:
            raise TokenError("Access token is empty")

        try:
            claims = jwt.decode(token, self.secret_key, algorithms=[self.ALGORITHM])
        except ExpiredSignatureError:
            raise TokenError("Access token has expired")
        except InvalidTokenError as e:
            logger.warning(f"Rejected access token: {e}")
            raise TokenError("Invalid access token")

        username = claims.get("username")
        if not isinstance(username, str) or not username:
            raise TokenError("Access token has no username")
        return username

    def create_access_token(self, username: str, expires_in: timedelta = timedelta(hours=1)) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "username": username,
            "iat": now,
            "exp": now + expires_in,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.ALGORITHM)
