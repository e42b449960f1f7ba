"""Bearer-token identity for the HTTP surface.

Tokens are HMAC-signed JWTs issued by the account service. The claims this
backend relies on are ``sub`` (or ``id``), ``is_admin``, ``name`` and
``email``. The mobile client sends the token as ``x-access-token``; other
clients use ``Authorization: Bearer``.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import structlog
from fastapi import Depends, Header, HTTPException
from jose import JWTError, jwt

from chairup.config import jwt_algorithm, jwt_secret
from chairup.exceptions import Forbidden

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Actor:
    user_id: str
    is_admin: bool = False
    name: str | None = None
    email: str | None = None


def issue_token(user_id, is_admin=False, name=None, email=None, expires_in=timedelta(days=1)) -> str:
    now = datetime.now(UTC)
    payload = {
        "sub": str(user_id),
        "is_admin": bool(is_admin),
        "iat": now,
        "exp": now + expires_in,
    }
    if name:
        payload["name"] = name
    if email:
        payload["email"] = email
    return jwt.encode(payload, jwt_secret(), algorithm=jwt_algorithm())


def decode_token(token: str) -> Actor:
    try:
        payload = jwt.decode(token, jwt_secret(), algorithms=[jwt_algorithm()])
    except JWTError as exc:
        logger.info("Rejected bearer token", reason=str(exc))
        raise HTTPException(status_code=401, detail="Invalid or expired token") from None

    user_id = payload.get("sub") or payload.get("id")
    if not user_id:
        raise HTTPException(status_code=401, detail="Token does not identify a user")

    return Actor(
        user_id=str(user_id),
        is_admin=bool(payload.get("is_admin", payload.get("isAdmin", False))),
        name=payload.get("name"),
        email=payload.get("email"),
    )


def current_actor(
    authorization: str | None = Header(None),
    x_access_token: str | None = Header(None),
) -> Actor:
    token = x_access_token
    if not token and authorization:
        token = authorization.removeprefix("Bearer ").strip()
    if not token:
        raise HTTPException(status_code=401, detail="No token provided")
    return decode_token(token)


def require_admin(actor: Actor = Depends(current_actor)) -> Actor:
    if not actor.is_admin:
        raise Forbidden({"user": ["Requires admin role"]})
    return actor
