from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import BaseModel

from hiregenius.core.config import settings

security = HTTPBearer(auto_error=False)

# Used when no JWT is provided and demo access is enabled
DEMO_USER_ID = "demo-user"


class UserContext(BaseModel):
    user_id: str
    role: str


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> UserContext:
    """Extract the acting user from the JWT, or fall back to the demo user.

    The fallback is controlled by ``HIREGENIUS_ALLOW_DEMO_USER``.
    """
    if credentials is None:
        if not settings.allow_demo_user:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Not authenticated",
            )
        return UserContext(user_id=DEMO_USER_ID, role="admin")

    try:
        payload = jwt.decode(
            credentials.credentials,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
        )
        user_id = payload["sub"]
        if not user_id:
            raise ValueError("empty subject")
        return UserContext(user_id=user_id, role=payload.get("role", "recruiter"))
    except (JWTError, KeyError, ValueError) as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        ) from exc
