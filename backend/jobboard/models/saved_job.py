from sqlalchemy import Column, Text, UniqueConstraint
from jobboard.database import Base


class SavedJob(Base):
    __tablename__ = "saved_jobs"

    id = Column(Text, primary_key=True)
    user_id = Column(Text, nullable=False, index=True)
    job_id = Column(Text, nullable=False, index=True)
    saved_date = Column(Text, nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "job_id", name="uq_saved_jobs_user_job"),
    )
