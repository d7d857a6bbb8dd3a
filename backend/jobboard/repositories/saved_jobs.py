from sqlalchemy.orm import Session

from jobboard.models.saved_job import SavedJob
from jobboard.repositories.base import Repository


class SavedJobRepository(Repository):
    model = SavedJob
    label = "Saved job"
    conflict_message = "Job already saved"

    def find_for(self, db: Session, user_id: str, job_id: str) -> SavedJob | None:
        return self.find_one(db, SavedJob.user_id == user_id, SavedJob.job_id == job_id)

    def by_user(self, db: Session, user_id: str) -> list[SavedJob]:
        return self.find_by(db, SavedJob.user_id == user_id, order_by=SavedJob.saved_date.desc())


saved_job_repository = SavedJobRepository()
