from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session

from jobboard.config import settings
from jobboard.database import get_db
from jobboard.dependencies import CurrentUser, get_current_user, require_employer, require_jobseeker
from jobboard.errors import NotFoundError, PayloadTooLargeError, ValidationError
from jobboard.models.application import Application
from jobboard.models.user import User
from jobboard.repositories.applications import application_repository
from jobboard.repositories.jobs import job_repository
from jobboard.repositories.users import user_repository
from jobboard.routers.jobs import job_summary
from jobboard.schemas.application import (
    ApplicantSummary,
    ApplicationResponse,
    ApplyResponse,
    StatusUpdate,
    StatusUpdateResponse,
)
from jobboard.services.application_service import application_service
from jobboard.services.resume_service import get_resume_full_path

router = APIRouter(prefix="/applications", tags=["applications"])


def _applicant_summary(application: Application, user: User | None) -> ApplicantSummary:
    if user is None:
        return ApplicantSummary(
            id=application.applicant_id,
            full_name=application.applicant_name,
            email=application.applicant_email,
        )
    return ApplicantSummary(
        id=user.id,
        full_name=user.full_name,
        email=user.email,
        phone=(user.profile_data or {}).get("phone"),
    )


def _resume_url(application: Application) -> str | None:
    if not application.resume_path:
        return None
    return f"{settings.api_prefix}/applications/{application.id}/resume"


def _application_to_response(application: Application, **embedded) -> ApplicationResponse:
    return ApplicationResponse(
        id=application.id,
        job_id=application.job_id,
        applicant_id=application.applicant_id,
        employer_id=application.employer_id,
        applicant_name=application.applicant_name,
        applicant_email=application.applicant_email,
        cover_letter=application.cover_letter,
        additional_notes=application.additional_notes or "",
        resume_url=_resume_url(application),
        status=application.status,
        applied_date=application.applied_date,
        last_status_update=application.last_status_update,
        **embedded,
    )


async def _read_resume(resume: UploadFile | None) -> tuple[str | None, bytes] | None:
    if resume is None or not resume.filename:
        return None
    if resume.content_type not in settings.allowed_resume_types:
        raise ValidationError("Invalid file type. Only PDF and Word documents are allowed.")

    max_bytes = settings.max_resume_bytes
    size = 0
    chunks: list[bytes] = []
    while True:
        chunk = await resume.read(1024 * 1024)
        if not chunk:
            break
        size += len(chunk)
        if size > max_bytes:
            raise PayloadTooLargeError(f"File too large (max {max_bytes} bytes)")
        chunks.append(chunk)

    content = b"".join(chunks)
    if not content:
        raise ValidationError("Empty file")
    return resume.filename, content


@router.get("/my-applications", response_model=list[ApplicationResponse])
async def my_applications(user: CurrentUser = Depends(require_jobseeker), db: Session = Depends(get_db)):
    applications = application_repository.by_applicant(db, user.id)
    jobs = job_repository.by_ids(db, [a.job_id for a in applications])
    return [
        _application_to_response(a, job=job_summary(a.job_id, jobs.get(a.job_id)))
        for a in applications
    ]


@router.get("/employer-applications", response_model=list[ApplicationResponse])
async def employer_applications(user: CurrentUser = Depends(require_employer), db: Session = Depends(get_db)):
    applications = application_repository.by_employer(db, user.id)
    jobs = job_repository.by_ids(db, [a.job_id for a in applications])
    applicants = user_repository.by_ids(db, [a.applicant_id for a in applications])
    return [
        _application_to_response(
            a,
            job=job_summary(a.job_id, jobs.get(a.job_id)),
            applicant=_applicant_summary(a, applicants.get(a.applicant_id)),
        )
        for a in applications
    ]


@router.get("/check/{job_id}")
async def check_applied(job_id: str, user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return {"has_applied": application_service.has_applied(db, job_id, user.id)}


@router.post("/apply", response_model=ApplyResponse, status_code=201)
async def apply(
    job_id: str | None = Form(None),
    cover_letter: str | None = Form(None),
    additional_notes: str | None = Form(None),
    resume: UploadFile | None = File(None),
    user: CurrentUser = Depends(require_jobseeker),
    db: Session = Depends(get_db),
):
    if not job_id or not cover_letter:
        raise ValidationError("Job ID and cover letter are required")
    upload = await _read_resume(resume)
    application = application_service.apply(
        db, job_id, user.id, cover_letter, additional_notes=additional_notes, resume=upload
    )
    return ApplyResponse(
        message="Application submitted successfully",
        application_id=application.id,
        application=_application_to_response(application),
    )


@router.get("/{application_id}", response_model=ApplicationResponse)
async def get_application(
    application_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    application = application_service.get_visible(db, application_id, user.id)
    job = job_repository.by_ids(db, [application.job_id]).get(application.job_id)
    return _application_to_response(application, job=job_summary(application.job_id, job))


@router.get("/{application_id}/resume")
async def download_resume(
    application_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    application = application_service.get_visible(db, application_id, user.id)
    if not application.resume_path:
        raise NotFoundError("No resume attached to this application")
    full_path = get_resume_full_path(application.resume_path)
    if not full_path.exists():
        raise NotFoundError("Resume file missing from storage")
    return FileResponse(path=str(full_path), filename=full_path.name)


@router.put("/{application_id}/status", response_model=StatusUpdateResponse)
async def update_status(
    application_id: str,
    req: StatusUpdate,
    user: CurrentUser = Depends(require_employer),
    db: Session = Depends(get_db),
):
    application = application_service.set_status(db, application_id, user.id, req.status)
    return StatusUpdateResponse(message="Application status updated successfully", status=application.status)


@router.delete("/{application_id}")
async def withdraw_application(
    application_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    application_service.withdraw(db, application_id, user.id)
    return {"message": "Application withdrawn successfully"}
