from pydantic import BaseModel


class JobCreate(BaseModel):
    title: str | None = None
    salary: float | None = None
    salary_period: str | None = None
    employment_type: str | None = None
    location: str | None = None
    description: str | None = None
    requirements: list[str] | None = None
    posted_date: str | None = None
    active: bool | None = None


class JobUpdate(BaseModel):
    title: str | None = None
    salary: float | None = None
    salary_period: str | None = None
    employment_type: str | None = None
    location: str | None = None
    description: str | None = None
    requirements: list[str] | None = None
    active: bool | None = None


class JobResponse(BaseModel):
    id: str
    employer_id: str
    title: str
    salary: float
    salary_period: str | None
    employment_type: str
    location: str
    description: str
    requirements: list[str]
    posted_date: str
    active: bool
    applications: list[str] = []
    application_count: int = 0


class JobCreateResponse(BaseModel):
    message: str
    job_id: str
    job: JobResponse


class JobSummary(BaseModel):
    """Job as embedded in other resources; ``missing`` marks a deleted job."""
    id: str
    title: str
    employer_id: str | None = None
    location: str | None = None
    salary: float | None = None
    salary_period: str | None = None
    employment_type: str | None = None
    active: bool | None = None
    missing: bool = False


class SavedJobResponse(BaseModel):
    id: str
    job_id: str
    saved_date: str
    job: JobSummary
