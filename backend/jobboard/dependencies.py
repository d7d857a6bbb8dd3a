from dataclasses import dataclass

from fastapi import Depends, Header

from jobboard.errors import AuthenticationError, AuthorizationError
from jobboard.utils.security import decode_access_token


@dataclass(frozen=True)
class CurrentUser:
    id: str
    role: str
    email: str = ""
    full_name: str = ""


async def get_current_user(authorization: str | None = Header(None)) -> CurrentUser:
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthenticationError("No token provided")
    token = authorization[7:].strip()
    if not token:
        raise AuthenticationError("No token provided")
    payload = decode_access_token(token)
    return CurrentUser(
        id=payload["sub"],
        role=payload["role"],
        email=payload.get("email", ""),
        full_name=payload.get("full_name", ""),
    )


async def require_employer(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if user.role != "employer":
        raise AuthorizationError("Access denied. Employers only.")
    return user


async def require_jobseeker(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if user.role != "jobseeker":
        raise AuthorizationError("Access denied. Jobseekers only.")
    return user
