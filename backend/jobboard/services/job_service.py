import logging

from sqlalchemy.orm import Session

from jobboard.errors import AuthorizationError, ValidationError
from jobboard.models.job import Job
from jobboard.repositories.applications import application_repository
from jobboard.repositories.jobs import job_repository
from jobboard.services.notification_service import JOB_CLOSED, notification_service
from jobboard.utils.clock import utcnow

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "salary", "employment_type", "location", "description")


class JobService:
    def create(self, db: Session, employer_id: str, data: dict) -> Job:
        missing = [f for f in REQUIRED_FIELDS if data.get(f) in (None, "")]
        if missing:
            raise ValidationError("Missing required fields")
        data = dict(data)
        data["requirements"] = data.get("requirements") or []
        data["posted_date"] = data.get("posted_date") or utcnow()
        if data.get("active") is None:
            data["active"] = True
        job = job_repository.create(db, employer_id=employer_id, **data)
        logger.info("Job %s posted by %s", job.id, employer_id)
        return job

    def update(self, db: Session, job_id: str, requester_id: str, patch: dict) -> Job:
        job = self._owned(db, job_id, requester_id, "update")
        patch = {k: v for k, v in patch.items() if v is not None}
        return job_repository.update(db, job.id, patch)

    def delete(self, db: Session, job_id: str, requester_id: str) -> int:
        """Delete the posting and tell applicants with open applications.

        Application rows are kept; readers render a placeholder for the
        missing job. Returns the number of applicants notified.
        """
        job = self._owned(db, job_id, requester_id, "delete")
        open_applications = application_repository.by_job(db, job.id, open_only=True)
        title = job.title
        job_repository.delete(db, job.id)
        logger.info("Job %s deleted; %d open applications remain", job_id, len(open_applications))

        notified = 0
        for application in open_applications:
            if notification_service.fan_out(
                db,
                recipient_id=application.applicant_id,
                sender_id=requester_id,
                type=JOB_CLOSED,
                title="Job No Longer Available",
                message=f"The job {title} you applied for has been removed by the employer",
                related_id=application.id,
                related_type="application",
            ):
                notified += 1
        return notified

    def _owned(self, db: Session, job_id: str, requester_id: str, action: str) -> Job:
        job = job_repository.get(db, job_id)
        if job.employer_id != requester_id:
            raise AuthorizationError(f"Not authorized to {action} this job")
        return job


job_service = JobService()
