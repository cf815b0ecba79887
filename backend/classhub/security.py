"""
ClassHub Backend — Request Identity
=====================================

What:  Turns the `Authorization: Bearer <jwt>` header into an `Identity`.
How:   Decodes the token with PyJWT using the configured secret/algorithm and
       reads the `sub` (record id) and `type` (teacher | student) claims.
Who:   Injected into the authorization dependencies of protected routes.

Tokens are issued by another service. A missing, expired or otherwise
undecodable token yields `None`; the authorization step turns that into 403.
"""

import logging
from typing import Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from classhub.config import settings

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


class Identity(BaseModel):
    """Already-decoded caller: record id and role."""
    id: str
    type: str


def decode_identity(token: str) -> Optional[Identity]:
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        logger.warning("Bearer token expired")
        return None
    except jwt.InvalidTokenError as e:
        logger.warning("Bearer token rejected: %s", e)
        return None

    subject = payload.get("sub")
    role = payload.get("type")
    if not subject or not role:
        logger.warning("Bearer token is missing the 'sub' or 'type' claim")
        return None
    return Identity(id=str(subject), type=str(role))


async def get_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[Identity]:
    """FastAPI dependency: the caller's identity, or None when there is no usable token."""
    if credentials is None:
        return None
    return decode_identity(credentials.credentials)
