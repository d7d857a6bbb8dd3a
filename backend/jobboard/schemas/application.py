from pydantic import BaseModel

from jobboard.schemas.job import JobSummary


class StatusUpdate(BaseModel):
    status: str | None = None


class ApplicantSummary(BaseModel):
    id: str
    full_name: str | None = None
    email: str | None = None
    phone: str | None = None


class ApplicationResponse(BaseModel):
    id: str
    job_id: str
    applicant_id: str
    employer_id: str
    applicant_name: str | None
    applicant_email: str | None
    cover_letter: str
    additional_notes: str
    resume_url: str | None
    status: str
    applied_date: str
    last_status_update: str
    job: JobSummary | None = None
    applicant: ApplicantSummary | None = None


class ApplyResponse(BaseModel):
    message: str
    application_id: str
    application: ApplicationResponse


class StatusUpdateResponse(BaseModel):
    message: str
    status: str
