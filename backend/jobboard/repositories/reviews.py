from sqlalchemy import func
from sqlalchemy.orm import Session

from jobboard.models.review import Review
from jobboard.repositories.base import Repository


class ReviewRepository(Repository):
    model = Review
    label = "Review"
    conflict_message = "You have already reviewed this jobseeker"

    def for_jobseeker(self, db: Session, jobseeker_id: str) -> list[Review]:
        return self.find_by(db, Review.jobseeker_id == jobseeker_id, order_by=Review.created_at.desc())

    def by_employer(self, db: Session, employer_id: str) -> list[Review]:
        return self.find_by(db, Review.employer_id == employer_id, order_by=Review.created_at.desc())

    def exists(self, db: Session, employer_id: str, jobseeker_id: str) -> bool:
        return self.count(db, Review.employer_id == employer_id, Review.jobseeker_id == jobseeker_id) > 0

    def average_rating(self, db: Session, jobseeker_id: str) -> dict:
        average, count = (
            db.query(func.avg(Review.rating), func.count(Review.id))
            .filter(Review.jobseeker_id == jobseeker_id)
            .one()
        )
        if not count:
            return {"average": 0, "count": 0}
        return {"average": float(average), "count": count}


review_repository = ReviewRepository()
