from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobboard.database import get_db
from jobboard.dependencies import CurrentUser, require_employer
from jobboard.models.job import Job
from jobboard.repositories.applications import application_repository
from jobboard.repositories.jobs import job_repository
from jobboard.schemas.job import JobCreate, JobCreateResponse, JobResponse, JobSummary, JobUpdate
from jobboard.services.application_service import UNKNOWN_JOB_TITLE
from jobboard.services.job_service import job_service

router = APIRouter(prefix="/jobs", tags=["jobs"])


def _job_to_response(job: Job, application_ids: list[str]) -> JobResponse:
    return JobResponse(
        id=job.id,
        employer_id=job.employer_id,
        title=job.title,
        salary=job.salary,
        salary_period=job.salary_period,
        employment_type=job.employment_type,
        location=job.location,
        description=job.description,
        requirements=job.requirements or [],
        posted_date=job.posted_date,
        active=job.active,
        applications=application_ids,
        application_count=len(application_ids),
    )


def _jobs_to_response(jobs: list[Job], db: Session) -> list[JobResponse]:
    index = application_repository.ids_by_job(db, [j.id for j in jobs])
    return [_job_to_response(j, index.get(j.id, [])) for j in jobs]


def job_summary(job_id: str, job: Job | None) -> JobSummary:
    """Embeddable job view; a deleted job degrades to a placeholder."""
    if job is None:
        return JobSummary(id=job_id, title=UNKNOWN_JOB_TITLE, missing=True)
    return JobSummary(
        id=job.id,
        title=job.title,
        employer_id=job.employer_id,
        location=job.location,
        salary=job.salary,
        salary_period=job.salary_period,
        employment_type=job.employment_type,
        active=job.active,
    )


@router.post("/create", response_model=JobCreateResponse, status_code=201)
async def create_job(
    req: JobCreate,
    user: CurrentUser = Depends(require_employer),
    db: Session = Depends(get_db),
):
    job = job_service.create(db, user.id, req.model_dump())
    return JobCreateResponse(
        message="Job posted successfully",
        job_id=job.id,
        job=_job_to_response(job, []),
    )


@router.get("", response_model=list[JobResponse])
async def list_jobs(
    location: str | None = None,
    employment_type: str | None = None,
    keyword: str | None = None,
    db: Session = Depends(get_db),
):
    jobs = job_repository.search(db, location=location, employment_type=employment_type, keyword=keyword)
    return _jobs_to_response(jobs, db)


@router.get("/my-jobs", response_model=list[JobResponse])
async def my_jobs(user: CurrentUser = Depends(require_employer), db: Session = Depends(get_db)):
    return _jobs_to_response(job_repository.by_employer(db, user.id), db)


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(job_id: str, db: Session = Depends(get_db)):
    job = job_repository.get(db, job_id)
    return _jobs_to_response([job], db)[0]


@router.put("/{job_id}", response_model=JobResponse)
async def update_job(
    job_id: str,
    req: JobUpdate,
    user: CurrentUser = Depends(require_employer),
    db: Session = Depends(get_db),
):
    job = job_service.update(db, job_id, user.id, req.model_dump(exclude_unset=True))
    return _jobs_to_response([job], db)[0]


@router.delete("/{job_id}")
async def delete_job(
    job_id: str,
    user: CurrentUser = Depends(require_employer),
    db: Session = Depends(get_db),
):
    notified = job_service.delete(db, job_id, user.id)
    return {"message": "Job deleted successfully", "applicants_notified": notified}
