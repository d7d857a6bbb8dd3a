from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobboard.database import get_db
from jobboard.dependencies import CurrentUser, get_current_user
from jobboard.models.user import User
from jobboard.schemas.user import (
    LoginRequest,
    LoginResponse,
    ProfileStatsResponse,
    ProfileUpdate,
    ProfileUpdateResponse,
    RegisterRequest,
    UserResponse,
)
from jobboard.services.user_service import user_service

router = APIRouter(prefix="/users", tags=["users"])


def _user_to_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        full_name=user.full_name,
        email=user.email,
        role=user.role,
        profile_data=user.profile_data or {},
        profile_completed=bool(user.profile_completed),
        created_at=user.created_at,
    )


@router.post("/register", status_code=201)
async def register(req: RegisterRequest, db: Session = Depends(get_db)):
    user = user_service.register(db, req.full_name, req.email, req.password, req.role)
    return {"message": "User registered successfully.", "user_id": user.id}


@router.post("/login", response_model=LoginResponse)
async def login(req: LoginRequest, db: Session = Depends(get_db)):
    token = user_service.login(db, req.email, req.password, req.role)
    return LoginResponse(message="Login successful", token=token)


@router.get("/profile", response_model=UserResponse)
async def my_profile(user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return _user_to_response(user_service.get(db, user.id))


@router.put("/profile", response_model=ProfileUpdateResponse)
async def update_profile(
    req: ProfileUpdate,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    updated = user_service.update_profile(db, user.id, req.model_dump(exclude_unset=True))
    return ProfileUpdateResponse(message="Profile updated successfully", user=_user_to_response(updated))


@router.get("/profile-stats", response_model=ProfileStatsResponse)
async def profile_stats(user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    stats = user_service.stats(db, user.id)
    if stats is None:
        return ProfileStatsResponse()
    return ProfileStatsResponse(
        view_count=stats.view_count,
        last_viewed=stats.last_viewed,
        recent_viewers=stats.recent_viewers or [],
    )


@router.get("/profile/{user_id}", response_model=UserResponse)
async def view_profile(
    user_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return _user_to_response(user_service.view_profile(db, user_id, user.id))


@router.get("/carers", response_model=list[UserResponse])
async def list_carers(_user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return [_user_to_response(u) for u in user_service.jobseekers(db)]
