"""Bearer JWT validation against the identity provider's JWKS, and role checks."""

import os
import time
import logging
from typing import Optional, Dict, Any
from uuid import UUID

import jwt
from jwt import PyJWKClient
from fastapi import HTTPException, status, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from gymlog.models.user import User
from gymlog.db.users import get_or_create_user

logger = logging.getLogger(__name__)
oauth_scheme = HTTPBearer(auto_error=False)

_jwks_client: Optional[PyJWKClient] = None
_jwks_cache_time: float = 0
JWKS_CACHE_DURATION = 3600  # seconds


def get_identity_provider_url() -> str:
    return os.environ["IDENTITY_PROVIDER_URL"].rstrip("/")


def get_jwt_audience() -> str:
    return os.environ["JWT_AUDIENCE"]


def get_jwks_client() -> PyJWKClient:
    """Get the JWKS client, rebuilding it once the cache duration has passed."""
    global _jwks_client, _jwks_cache_time

    now = time.time()
    if _jwks_client is None or (now - _jwks_cache_time) > JWKS_CACHE_DURATION:
        jwks_url = f"{get_identity_provider_url()}/.well-known/jwks.json"
        _jwks_client = PyJWKClient(jwks_url, cache_keys=True, lifespan=JWKS_CACHE_DURATION)
        _jwks_cache_time = now
        logger.info(f"Refreshed JWKS client from {jwks_url}")

    return _jwks_client


def validate_jwt_token(token: str) -> Optional[Dict[str, Any]]:
    """Validate an access token. Returns its claims, or None if it is not valid."""
    try:
        signing_key = get_jwks_client().get_signing_key_from_jwt(token)
        return jwt.decode(
            token,
            signing_key.key,
            algorithms=["ES256"],
            issuer=get_identity_provider_url(),
            audience=get_jwt_audience(),
            options={"require": ["exp", "iss", "sub", "aud"]},
        )
    except jwt.ExpiredSignatureError:
        logger.warning("JWT token expired")
        return None
    except jwt.PyJWTError as e:
        logger.warning(f"Invalid JWT token: {e}")
        return None


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(oauth_scheme),
) -> User:
    """Resolve the bearer token to a user, creating the user on first login.

    Raises:
        HTTPException 401 if the token is missing or invalid.
    """
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )

    claims = validate_jwt_token(credentials.credentials)
    if not claims:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        idp_user_id = UUID(claims["sub"])
    except (KeyError, ValueError):
        logger.error(f"Invalid sub claim in token: {claims.get('sub')!r}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Invalid token claims",
        )

    return get_or_create_user(idp_user_id, claims.get("email"), claims.get("username"))


async def require_viewer(user: User = Depends(get_current_user)) -> User:
    """Any authenticated user may read their own data."""
    return user


async def require_editor(user: User = Depends(get_current_user)) -> User:
    """Only editors may import or modify data.

    Raises:
        HTTPException 403 if the user is a viewer.
    """
    if not user.is_editor:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Editor access required",
        )
    return user
