"""Applying, withdrawing and status changes.

Application rows are the single source of truth for "who applied to what":
jobs carry no cached id list, so there is nothing to patch on the job side
and nothing that can drift. Uniqueness of (job, applicant) is a unique index,
so two racing submissions produce one row and one ConflictError.
"""
import logging

from sqlalchemy.orm import Session

from jobboard.errors import AuthorizationError, ConflictError, NoChangeError, ValidationError
from jobboard.models.application import Application
from jobboard.repositories.applications import application_repository
from jobboard.repositories.jobs import job_repository
from jobboard.repositories.users import user_repository
from jobboard.services.notification_service import (
    APPLICATION_STATUS,
    JOB_APPLICATION,
    notification_service,
)
from jobboard.services.resume_service import store_resume
from jobboard.utils.clock import utcnow
from jobboard.utils.ids import validate_id

logger = logging.getLogger(__name__)

VALID_STATUSES = ("Pending", "Reviewed", "Interviewing", "Hired", "Rejected")
UNKNOWN_JOB_TITLE = "Unknown Job"


class ApplicationService:
    def apply(
        self,
        db: Session,
        job_id: str,
        applicant_id: str,
        cover_letter: str,
        additional_notes: str | None = None,
        resume: tuple[str | None, bytes] | None = None,
    ) -> Application:
        job_id = validate_id(job_id, "job")
        if not cover_letter or not cover_letter.strip():
            raise ValidationError("Job ID and cover letter are required")

        job = job_repository.get(db, job_id)
        if not job.active:
            raise ConflictError("This job is no longer accepting applications")
        if application_repository.find_for(db, job_id, applicant_id):
            raise ConflictError(application_repository.conflict_message)
        applicant = user_repository.get(db, applicant_id)

        resume_path = store_resume(*resume) if resume else None
        now = utcnow()
        application = application_repository.create(
            db,
            job_id=job_id,
            applicant_id=applicant.id,
            employer_id=job.employer_id,
            applicant_name=applicant.full_name,
            applicant_email=applicant.email,
            cover_letter=cover_letter,
            additional_notes=additional_notes or "",
            resume_path=resume_path,
            status="Pending",
            applied_date=now,
            last_status_update=now,
        )
        logger.info("Application %s created for job %s", application.id, job_id)

        notification_service.fan_out(
            db,
            recipient_id=job.employer_id,
            sender_id=applicant.id,
            type=JOB_APPLICATION,
            title="New Job Application",
            message=f"{applicant.full_name} has applied for your job: {job.title}",
            related_id=application.id,
            related_type="application",
        )
        return application

    def withdraw(self, db: Session, application_id: str, requester_id: str) -> None:
        application = application_repository.get(db, application_id)
        if application.applicant_id != requester_id:
            raise AuthorizationError("Not authorized to withdraw this application")
        if application.status != "Pending":
            raise ConflictError("Can only withdraw pending applications")
        application_repository.delete(db, application.id)
        logger.info("Application %s withdrawn", application.id)

    def set_status(self, db: Session, application_id: str, requester_id: str, status: str | None) -> Application:
        application_id = validate_id(application_id, "application")
        if not status:
            raise ValidationError("Status is required")
        if status not in VALID_STATUSES:
            raise ValidationError("Invalid status")

        application = application_repository.get(db, application_id)
        if application.employer_id != requester_id:
            raise AuthorizationError("Not authorized to update this application")
        previous = application.status
        if previous == status:
            raise NoChangeError(f"Application is already {status}")

        application = application_repository.update(
            db, application.id, {"status": status, "last_status_update": utcnow()}
        )

        # Title is read from the live job so later edits show up.
        job = job_repository.find_one(db, job_repository.model.id == application.job_id)
        title = job.title if job else UNKNOWN_JOB_TITLE
        notification_service.fan_out(
            db,
            recipient_id=application.applicant_id,
            sender_id=requester_id,
            type=APPLICATION_STATUS,
            title="Application Status Update",
            message=f"Your application for {title} has been updated from {previous} to {status}",
            related_id=application.id,
            related_type="application",
        )
        return application

    def get_visible(self, db: Session, application_id: str, requester_id: str) -> Application:
        application = application_repository.get(db, application_id)
        if requester_id not in (application.applicant_id, application.employer_id):
            raise AuthorizationError("Not authorized to view this application")
        return application

    def has_applied(self, db: Session, job_id: str, applicant_id: str) -> bool:
        job_id = validate_id(job_id, "job")
        return application_repository.find_for(db, job_id, applicant_id) is not None


application_service = ApplicationService()
