from dataclasses import dataclass

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError

from app.core.config import Settings
from app.core.security import decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


@dataclass(frozen=True)
class Identity:
    """Caller identity carried in a verified access token."""
    id: int
    role: str


def get_settings(request: Request) -> Settings:
    """Settings instance the running app was created with."""
    return request.app.state.settings


def get_current_identity(
    token: str = Depends(oauth2_scheme),
    settings: Settings = Depends(get_settings),
) -> Identity:
    """Decode the bearer token into an Identity, or fail with 401."""
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access denied. No token provided",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = decode_access_token(token, settings.secret_key, settings.algorithm)
        user_id = payload.get("id")
        role = payload.get("role")
        if user_id is None or role is None:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
        return Identity(id=int(user_id), role=str(role))

    except (JWTError, TypeError, ValueError):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")


def require_roles(*roles: str):
    """
    Dependency factory that admits only callers holding one of the given roles.

    Args:
        roles: Allowed role names (e.g. "employer", "admin")

    Returns:
        Dependency resolving to the caller's Identity

    Raises:
        HTTPException 401: Missing or invalid token
        HTTPException 403: Role not allowed
    """
    allowed = {str(getattr(role, "value", role)) for role in roles}

    def role_checker(identity: Identity = Depends(get_current_identity)) -> Identity:
        if identity.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Access denied. Insufficient permissions"
            )
        return identity

    return role_checker
