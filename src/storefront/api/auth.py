"""Bearer-token authentication producing a ``Requester``.

Tokens are HS256 JWTs carrying the user id in ``sub``. The admin flag is
always re-read from the stored user, so revoking admin rights takes effect
on the next request rather than when the token expires.
"""

import os
from datetime import UTC, datetime, timedelta

import jwt
from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.exceptions import ForbiddenError
from storefront.identity.requester import Requester
from storefront.identity.user import User
from storefront.utils.logging import add_context

JWT_ALGORITHM = "HS256"

bearer = HTTPBearer(auto_error=False)


def _secret() -> str:
    return os.getenv("JWT_SECRET", "devsecret")


def _ttl() -> timedelta:
    return timedelta(days=int(os.getenv("JWT_TTL_DAYS", "7")))


def issue_token(user: User) -> str:
    now = datetime.now(UTC)
    payload = {"sub": str(user.id), "iat": now, "exp": now + _ttl()}
    return jwt.encode(payload, _secret(), algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> dict:
    try:
        return jwt.decode(token, _secret(), algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired") from None
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail="Invalid token") from None


async def get_requester(
    request: Request, credentials: HTTPAuthorizationCredentials | None = Depends(bearer)
) -> Requester:
    if credentials is None:
        raise HTTPException(status_code=401, detail="Not authorized, no token")

    payload = decode_token(credentials.credentials)
    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(status_code=401, detail="Invalid token payload")

    try:
        user = current_domain.repository_for(User).get(user_id)
    except ObjectNotFoundError:
        raise HTTPException(status_code=401, detail="User not found") from None

    # Error handlers run outside the endpoint context and read request.state instead
    request.state.user_id = str(user.id)
    add_context(user_id=str(user.id))
    return Requester(user_id=str(user.id), is_admin=bool(user.is_admin))


async def require_admin(requester: Requester = Depends(get_requester)) -> Requester:
    if not requester.is_admin:
        raise ForbiddenError()
    return requester
