from pydantic import BaseModel


class RegisterRequest(BaseModel):
    full_name: str | None = None
    email: str | None = None
    password: str | None = None
    role: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None
    role: str | None = None


class LoginResponse(BaseModel):
    message: str
    token: str


class ProfileUpdate(BaseModel):
    full_name: str | None = None
    email: str | None = None
    current_password: str | None = None
    new_password: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    gender: str | None = None
    location: str | None = None
    english_level: str | None = None
    qualification: list[str] | str | None = None
    care_experience: list[str] | str | None = None
    live_in_experience: str | None = None
    driving_licence: str | None = None
    about_yourself: str | None = None
    company_name: str | None = None


class UserResponse(BaseModel):
    id: str
    full_name: str
    email: str
    role: str
    profile_data: dict = {}
    profile_completed: bool
    created_at: str


class ProfileUpdateResponse(BaseModel):
    message: str
    user: UserResponse


class ProfileViewer(BaseModel):
    user_id: str
    viewed_at: str


class ProfileStatsResponse(BaseModel):
    view_count: int = 0
    last_viewed: str | None = None
    recent_viewers: list[ProfileViewer] = []
