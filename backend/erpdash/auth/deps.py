"""FastAPI dependency that resolves the bearer token into a UserSession.

A missing, expired or malformed token yields an anonymous session rather
than a 401: list endpoints then return empty collections, and write
endpoints fail with NOT_AUTHENTICATED from the repository or ledger.
"""

import logging

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from erpdash.auth.jwt import decode_token
from erpdash.auth.session import UserSession

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_session(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> UserSession:
    if credentials is None:
        return UserSession()

    payload = decode_token(credentials.credentials)
    user_id: str | None = payload.get("sub")
    if not user_id or payload.get("type") != "access":
        logger.debug("Ignoring invalid or expired bearer token")
        return UserSession()
    return UserSession(user_id=user_id)
