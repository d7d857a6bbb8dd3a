from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobboard.database import get_db
from jobboard.dependencies import CurrentUser, require_employer
from jobboard.models.review import Review
from jobboard.models.user import User
from jobboard.repositories.reviews import review_repository
from jobboard.repositories.users import user_repository
from jobboard.schemas.review import (
    JobseekerReviewsResponse,
    ReviewCreate,
    ReviewerSummary,
    ReviewResponse,
)
from jobboard.services.review_service import review_service

router = APIRouter(prefix="/reviews", tags=["reviews"])


def _summary(user: User | None) -> ReviewerSummary | None:
    if user is None:
        return None
    return ReviewerSummary(
        id=user.id,
        full_name=user.full_name,
        company_name=(user.profile_data or {}).get("company_name") or "",
    )


def _review_to_response(review: Review, **embedded) -> ReviewResponse:
    return ReviewResponse(
        id=review.id,
        employer_id=review.employer_id,
        jobseeker_id=review.jobseeker_id,
        rating=review.rating,
        comment=review.comment or "",
        job_id=review.job_id,
        created_at=review.created_at,
        **embedded,
    )


@router.post("", status_code=201)
async def create_review(
    req: ReviewCreate,
    user: CurrentUser = Depends(require_employer),
    db: Session = Depends(get_db),
):
    review = review_service.review_jobseeker(
        db, user.id, req.jobseeker_id, req.rating, comment=req.comment, job_id=req.job_id
    )
    return {"message": "Review submitted successfully", "review": _review_to_response(review)}


@router.get("/jobseeker/{jobseeker_id}", response_model=JobseekerReviewsResponse)
async def jobseeker_reviews(jobseeker_id: str, db: Session = Depends(get_db)):
    reviews, rating = review_service.for_jobseeker(db, jobseeker_id)
    employers = user_repository.by_ids(db, [r.employer_id for r in reviews])
    return JobseekerReviewsResponse(
        reviews=[_review_to_response(r, employer=_summary(employers.get(r.employer_id))) for r in reviews],
        average_rating=rating["average"],
        review_count=rating["count"],
    )


@router.get("/employer", response_model=list[ReviewResponse])
async def employer_reviews(user: CurrentUser = Depends(require_employer), db: Session = Depends(get_db)):
    reviews = review_repository.by_employer(db, user.id)
    jobseekers = user_repository.by_ids(db, [r.jobseeker_id for r in reviews])
    return [_review_to_response(r, jobseeker=_summary(jobseekers.get(r.jobseeker_id))) for r in reviews]


@router.get("/check/{jobseeker_id}")
async def check_reviewed(
    jobseeker_id: str,
    user: CurrentUser = Depends(require_employer),
    db: Session = Depends(get_db),
):
    return {"has_reviewed": review_service.has_reviewed(db, user.id, jobseeker_id)}
