from sqlalchemy.orm import Session

from jobboard.errors import ConflictError
from jobboard.models.user import ProfileStats, User
from jobboard.repositories.base import Repository
from jobboard.utils.clock import utcnow

RECENT_VIEWERS_KEPT = 10


class UserRepository(Repository):
    model = User
    label = "User"
    conflict_message = "Email already in use."

    def by_email(self, db: Session, email: str) -> User | None:
        return self.find_one(db, User.email == email)

    def by_ids(self, db: Session, ids) -> dict[str, User]:
        ids = set(ids)
        if not ids:
            return {}
        return {u.id: u for u in self.find_by(db, User.id.in_(ids))}

    def jobseekers(self, db: Session) -> list[User]:
        return self.find_by(db, User.role == "jobseeker", order_by=User.created_at.desc())

    def get_stats(self, db: Session, user_id: str) -> ProfileStats | None:
        return db.get(ProfileStats, user_id)

    def record_view(self, db: Session, user_id: str, viewer_id: str) -> ProfileStats:
        try:
            return self._add_view(db, user_id, viewer_id)
        except ConflictError:
            # A concurrent first view inserted the stats row; count against it.
            return self._add_view(db, user_id, viewer_id)

    def _add_view(self, db: Session, user_id: str, viewer_id: str) -> ProfileStats:
        now = utcnow()
        stats = db.get(ProfileStats, user_id)
        if stats is None:
            stats = ProfileStats(user_id=user_id, view_count=0, recent_viewers=[])
            db.add(stats)
        stats.view_count = (stats.view_count or 0) + 1
        stats.last_viewed = now
        # Reassign so the JSON column is flagged dirty.
        viewers = list(stats.recent_viewers or []) + [{"user_id": viewer_id, "viewed_at": now}]
        stats.recent_viewers = viewers[-RECENT_VIEWERS_KEPT:]
        self._commit(db)
        return stats


user_repository = UserRepository()
