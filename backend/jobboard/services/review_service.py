import logging

from sqlalchemy.orm import Session

from jobboard.errors import ConflictError, NotFoundError, ValidationError
from jobboard.models.review import Review
from jobboard.repositories.reviews import review_repository
from jobboard.repositories.users import user_repository
from jobboard.utils.clock import utcnow
from jobboard.utils.ids import validate_id

logger = logging.getLogger(__name__)


class ReviewService:
    def review_jobseeker(
        self,
        db: Session,
        employer_id: str,
        jobseeker_id: str,
        rating: int | None,
        comment: str | None = None,
        job_id: str | None = None,
    ) -> Review:
        if not jobseeker_id or rating is None or not 1 <= rating <= 5:
            raise ValidationError("Jobseeker ID and valid rating (1-5) are required")
        jobseeker_id = validate_id(jobseeker_id, "jobseeker")
        if job_id:
            job_id = validate_id(job_id, "job")

        jobseeker = user_repository.find_one(db, user_repository.model.id == jobseeker_id)
        if jobseeker is None or jobseeker.role != "jobseeker":
            raise NotFoundError("Jobseeker not found")
        if review_repository.exists(db, employer_id, jobseeker_id):
            raise ConflictError(review_repository.conflict_message)

        # The unique index turns a racing duplicate into ConflictError too.
        review = review_repository.create(
            db,
            employer_id=employer_id,
            jobseeker_id=jobseeker_id,
            rating=rating,
            comment=comment or "",
            job_id=job_id,
            created_at=utcnow(),
        )
        logger.info("Review %s left by %s for %s", review.id, employer_id, jobseeker_id)
        return review

    def for_jobseeker(self, db: Session, jobseeker_id: str) -> tuple[list[Review], dict]:
        jobseeker_id = validate_id(jobseeker_id, "jobseeker")
        return (
            review_repository.for_jobseeker(db, jobseeker_id),
            review_repository.average_rating(db, jobseeker_id),
        )

    def has_reviewed(self, db: Session, employer_id: str, jobseeker_id: str) -> bool:
        jobseeker_id = validate_id(jobseeker_id, "jobseeker")
        return review_repository.exists(db, employer_id, jobseeker_id)


review_service = ReviewService()
