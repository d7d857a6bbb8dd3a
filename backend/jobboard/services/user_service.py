import logging

from sqlalchemy.orm import Session

from jobboard.errors import ConflictError, NotFoundError, ValidationError
from jobboard.models.user import ProfileStats, User
from jobboard.repositories.users import user_repository
from jobboard.utils.clock import utcnow
from jobboard.utils.ids import validate_id
from jobboard.utils.security import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)

VALID_ROLES = ("jobseeker", "employer")

PROFILE_FIELDS = (
    "first_name", "last_name", "phone", "gender", "location", "english_level",
    "qualification", "care_experience", "live_in_experience", "driving_licence",
    "about_yourself", "company_name",
)
LIST_FIELDS = ("qualification", "care_experience")

REQUIRED_FOR_COMPLETION = {
    "jobseeker": (
        "gender", "location", "english_level", "qualification", "care_experience",
        "live_in_experience", "driving_licence",
    ),
    "employer": ("gender", "location", "company_name"),
}


def is_profile_complete(role: str, profile: dict) -> bool:
    required = REQUIRED_FOR_COMPLETION.get(role, ())
    return all(bool(profile.get(field)) for field in required)


class UserService:
    def register(self, db: Session, full_name: str, email: str, password: str, role: str) -> User:
        if not full_name or not email or not password or not role:
            raise ValidationError("All fields are required.")
        if role not in VALID_ROLES:
            raise ValidationError("Invalid role selected.")
        email = email.strip().lower()
        if user_repository.by_email(db, email):
            raise ConflictError("Email already in use.")

        now = utcnow()
        user = user_repository.create(
            db,
            full_name=full_name,
            email=email,
            password_hash=hash_password(password),
            role=role,
            profile_data={},
            profile_completed=False,
            created_at=now,
            updated_at=now,
        )
        logger.info("Registered %s %s", role, user.id)
        return user

    def login(self, db: Session, email: str, password: str, role: str) -> str:
        if not email or not password or not role:
            raise ValidationError("All fields are required.")
        if role not in VALID_ROLES:
            raise ValidationError("Invalid role selected.")
        user = user_repository.by_email(db, email.strip().lower())
        if not user or user.role != role or not verify_password(user.password_hash, password):
            raise ValidationError("Invalid email, password or role.")
        return create_access_token(user.id, user.role, user.email, user.full_name)

    def get(self, db: Session, user_id: str) -> User:
        return user_repository.get(db, user_id)

    def update_profile(self, db: Session, user_id: str, changes: dict) -> User:
        user = user_repository.get(db, user_id)
        patch: dict = {}

        email = changes.get("email")
        if email:
            email = email.strip().lower()
            other = user_repository.by_email(db, email)
            if other and other.id != user.id:
                raise ConflictError("Email is already in use.")
            patch["email"] = email

        if changes.get("full_name"):
            patch["full_name"] = changes["full_name"]

        current_password = changes.get("current_password")
        new_password = changes.get("new_password")
        if current_password and new_password:
            if not verify_password(user.password_hash, current_password):
                raise ValidationError("Current password is incorrect.")
            patch["password_hash"] = hash_password(new_password)

        profile = dict(user.profile_data or {})
        for field in PROFILE_FIELDS:
            if changes.get(field) is None:
                continue
            value = changes[field]
            if field in LIST_FIELDS and not isinstance(value, list):
                value = [value]
            profile[field] = value
        patch["profile_data"] = profile
        patch["profile_completed"] = is_profile_complete(user.role, profile)

        if any(getattr(user, k) != v for k, v in patch.items()):
            patch["updated_at"] = utcnow()
            user = user_repository.update(db, user.id, patch)
        return user

    def view_profile(self, db: Session, user_id: str, viewer_id: str) -> User:
        user_id = validate_id(user_id, "user")
        user = user_repository.find_one(db, User.id == user_id)
        if user is None:
            raise NotFoundError("User not found")
        if user.id != viewer_id:
            user_repository.record_view(db, user.id, viewer_id)
        return user

    def stats(self, db: Session, user_id: str) -> ProfileStats | None:
        return user_repository.get_stats(db, user_id)

    def jobseekers(self, db: Session) -> list[User]:
        return user_repository.jobseekers(db)


user_service = UserService()
