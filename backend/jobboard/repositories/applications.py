from collections import defaultdict

from sqlalchemy.orm import Session

from jobboard.models.application import Application
from jobboard.repositories.base import Repository

OPEN_STATUSES = ("Pending", "Reviewed", "Interviewing")


class ApplicationRepository(Repository):
    model = Application
    label = "Application"
    conflict_message = "You have already applied for this job"

    def find_for(self, db: Session, job_id: str, applicant_id: str) -> Application | None:
        return self.find_one(db, Application.job_id == job_id, Application.applicant_id == applicant_id)

    def by_applicant(self, db: Session, applicant_id: str) -> list[Application]:
        return self.find_by(
            db, Application.applicant_id == applicant_id, order_by=Application.applied_date.desc()
        )

    def by_employer(self, db: Session, employer_id: str) -> list[Application]:
        return self.find_by(
            db, Application.employer_id == employer_id, order_by=Application.applied_date.desc()
        )

    def by_job(self, db: Session, job_id: str, open_only: bool = False) -> list[Application]:
        criteria = [Application.job_id == job_id]
        if open_only:
            criteria.append(Application.status.in_(OPEN_STATUSES))
        return self.find_by(db, *criteria, order_by=Application.applied_date.asc())

    def ids_by_job(self, db: Session, job_ids) -> dict[str, list[str]]:
        """Application ids per job, read from the authoritative collection."""
        job_ids = set(job_ids)
        result: dict[str, list[str]] = defaultdict(list)
        if not job_ids:
            return result
        rows = (
            db.query(Application.job_id, Application.id)
            .filter(Application.job_id.in_(job_ids))
            .order_by(Application.applied_date.asc())
            .all()
        )
        for job_id, app_id in rows:
            result[job_id].append(app_id)
        return result


application_repository = ApplicationRepository()
