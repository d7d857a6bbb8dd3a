from sqlalchemy import JSON, Boolean, Column, Float, Text
from jobboard.database import Base


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Text, primary_key=True)
    employer_id = Column(Text, nullable=False, index=True)
    title = Column(Text, nullable=False)
    salary = Column(Float, nullable=False)
    salary_period = Column(Text)
    employment_type = Column(Text, nullable=False, index=True)
    location = Column(Text, nullable=False, index=True)
    description = Column(Text, nullable=False)
    requirements = Column(JSON, nullable=False, default=list)
    posted_date = Column(Text, nullable=False, index=True)
    active = Column(Boolean, nullable=False, default=True)
