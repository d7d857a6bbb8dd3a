from pydantic import BaseModel


class ReviewCreate(BaseModel):
    jobseeker_id: str | None = None
    rating: int | None = None
    comment: str | None = None
    job_id: str | None = None


class ReviewerSummary(BaseModel):
    id: str
    full_name: str
    company_name: str = ""


class ReviewResponse(BaseModel):
    id: str
    employer_id: str
    jobseeker_id: str
    rating: int
    comment: str
    job_id: str | None
    created_at: str
    employer: ReviewerSummary | None = None
    jobseeker: ReviewerSummary | None = None


class JobseekerReviewsResponse(BaseModel):
    reviews: list[ReviewResponse]
    average_rating: float
    review_count: int
