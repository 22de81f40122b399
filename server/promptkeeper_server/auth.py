"""Authentication for the Promptkeeper API.

This module provides FastAPI dependencies that resolve the signed-in Clerk
user. The only thing the rest of the system learns about a user is the
opaque id in the session token's ``sub`` claim.
"""

import jwt
from typing import Optional
from fastapi import Depends, Header, HTTPException
from pydantic import BaseModel

from .config import settings
from .core.exceptions import Unauthenticated
from .core.identity import resolve_current_user


class AuthContext(BaseModel):
    """Authentication context for a request."""

    user_id: Optional[str] = None
    auth_method: str  # "jwt", "none"


def decode_session_token(token: str) -> dict:
    """Decode a Clerk session token.

    The signature is verified against Clerk's JWKS when the issuer and JWKS
    URL are configured. Without them the token is only decoded, which is
    meant for local development.

    Raises:
        jwt.InvalidTokenError: If the token is malformed, expired or forged
    """
    if settings.clerk_jwt_issuer and settings.clerk_jwks_url:
        from jwt import PyJWKClient

        jwks_client = PyJWKClient(settings.clerk_jwks_url)
        signing_key = jwks_client.get_signing_key_from_jwt(token)

        return jwt.decode(
            token,
            signing_key.key,
            algorithms=["RS256"],
            issuer=settings.clerk_jwt_issuer,
            options={"verify_signature": True, "verify_exp": True},
        )

    return jwt.decode(token, options={"verify_signature": False})


async def get_auth_context(
    authorization: Optional[str] = Header(None),
) -> AuthContext:
    """Extract authentication context from the Authorization header.

    Args:
        authorization: Authorization header (Bearer token)

    Returns:
        AuthContext with the Clerk user id, or with no user id when the
        request carries no session

    Raises:
        HTTPException: 401 if a token is present but invalid
    """
    if not authorization or not authorization.startswith("Bearer "):
        return AuthContext(user_id=None, auth_method="none")

    token = authorization.split(" ", 1)[1]

    try:
        payload = decode_session_token(token)
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token has expired")
    except jwt.InvalidTokenError as e:
        raise HTTPException(status_code=401, detail=f"Invalid token: {str(e)}")
    except Exception as e:
        raise HTTPException(status_code=401, detail=f"Authentication error: {str(e)}")

    user_id = payload.get("sub") or payload.get("user_id")
    if not user_id:
        raise HTTPException(status_code=401, detail="Invalid token: missing user_id")

    return AuthContext(user_id=user_id, auth_method="jwt")


async def get_current_user_id(
    auth_ctx: AuthContext = Depends(get_auth_context),
) -> str:
    """Get the signed-in user's id or reject the request.

    Raises:
        HTTPException: 401 if there is no signed-in user
    """
    try:
        return resolve_current_user(auth_ctx.user_id)
    except Unauthenticated as e:
        raise HTTPException(status_code=401, detail=str(e))
