"""
JWT bearer authentication for the anti-cheat API.
"""
from fastapi import Depends, HTTPException, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
import jwt

from ..config import settings

security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Security(security)
) -> dict:
    """
    Decode the access token and return {"user_id", "role", ...payload}.
    Used as a FastAPI dependency.
    """
    if credentials is None:
        raise HTTPException(status_code=401, detail="Unauthorized")

    try:
        payload = jwt.decode(credentials.credentials, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token has expired")
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail="Unauthorized")

    if payload.get("type") != "access":
        raise HTTPException(status_code=401, detail="Invalid token type")

    user_id = payload.get("user_id")
    if not user_id:
        raise HTTPException(status_code=401, detail="Invalid token payload")

    return {**payload, "user_id": str(user_id), "role": payload.get("role")}


def require_role(role: str):
    """Dependency factory: 403 unless the caller has `role`."""
    async def _check(user: dict = Depends(get_current_user)) -> dict:
        if (user.get("role") or "").upper() != role:
            raise HTTPException(status_code=403, detail="Forbidden")
        return user
    return _check
