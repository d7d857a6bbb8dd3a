from sqlalchemy import Column, Text, UniqueConstraint
from jobboard.database import Base


class Application(Base):
    __tablename__ = "applications"

    id = Column(Text, primary_key=True)
    # No foreign key: applications outlive a deleted job.
    job_id = Column(Text, nullable=False, index=True)
    applicant_id = Column(Text, nullable=False, index=True)
    employer_id = Column(Text, nullable=False, index=True)
    applicant_name = Column(Text)
    applicant_email = Column(Text)
    cover_letter = Column(Text, nullable=False)
    additional_notes = Column(Text, nullable=False, default="")
    resume_path = Column(Text)
    status = Column(Text, nullable=False, default="Pending")
    applied_date = Column(Text, nullable=False)
    last_status_update = Column(Text, nullable=False)

    __table_args__ = (
        UniqueConstraint("job_id", "applicant_id", name="uq_applications_job_applicant"),
    )
