import logging

from sqlalchemy.orm import Session

from jobboard.errors import ConflictError, NotFoundError
from jobboard.models.saved_job import SavedJob
from jobboard.repositories.jobs import job_repository
from jobboard.repositories.saved_jobs import saved_job_repository
from jobboard.utils.clock import utcnow
from jobboard.utils.ids import validate_id

logger = logging.getLogger(__name__)


class SavedJobService:
    def save(self, db: Session, job_id: str, user_id: str) -> tuple[SavedJob, bool]:
        """Save a job for a user. Returns (saved_job, created)."""
        job = job_repository.get(db, job_id)
        existing = saved_job_repository.find_for(db, user_id, job.id)
        if existing:
            return existing, False
        try:
            saved = saved_job_repository.create(db, user_id=user_id, job_id=job.id, saved_date=utcnow())
        except ConflictError:
            # Lost a race with a concurrent save; the index kept one row.
            return saved_job_repository.find_for(db, user_id, job.id), False
        return saved, True

    def unsave(self, db: Session, job_id: str, user_id: str) -> None:
        job_id = validate_id(job_id, "job")
        existing = saved_job_repository.find_for(db, user_id, job_id)
        if not existing:
            raise NotFoundError("Saved job not found")
        saved_job_repository.delete(db, existing.id)

    def is_saved(self, db: Session, job_id: str, user_id: str) -> bool:
        job_id = validate_id(job_id, "job")
        return saved_job_repository.find_for(db, user_id, job_id) is not None

    def list_for(self, db: Session, user_id: str) -> list[SavedJob]:
        return saved_job_repository.by_user(db, user_id)


saved_job_service = SavedJobService()
