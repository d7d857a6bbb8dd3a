from sqlalchemy import Column, Integer, Text, UniqueConstraint
from jobboard.database import Base


class Review(Base):
    __tablename__ = "reviews"

    id = Column(Text, primary_key=True)
    employer_id = Column(Text, nullable=False, index=True)
    jobseeker_id = Column(Text, nullable=False, index=True)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=False, default="")
    job_id = Column(Text)
    created_at = Column(Text, nullable=False)

    __table_args__ = (
        UniqueConstraint("employer_id", "jobseeker_id", name="uq_reviews_employer_jobseeker"),
    )
