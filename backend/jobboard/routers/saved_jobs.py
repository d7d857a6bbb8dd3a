from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from jobboard.database import get_db
from jobboard.dependencies import CurrentUser, get_current_user
from jobboard.repositories.jobs import job_repository
from jobboard.routers.jobs import job_summary
from jobboard.schemas.job import SavedJobResponse
from jobboard.services.saved_job_service import saved_job_service

router = APIRouter(prefix="/jobs/saved", tags=["saved-jobs"])


@router.get("", response_model=list[SavedJobResponse])
async def list_saved_jobs(user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    saved = saved_job_service.list_for(db, user.id)
    jobs = job_repository.by_ids(db, [s.job_id for s in saved])
    return [
        SavedJobResponse(
            id=s.id,
            job_id=s.job_id,
            saved_date=s.saved_date,
            job=job_summary(s.job_id, jobs.get(s.job_id)),
        )
        for s in saved
    ]


@router.get("/check/{job_id}")
async def check_saved(job_id: str, user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return {"is_saved": saved_job_service.is_saved(db, job_id, user.id)}


@router.post("/{job_id}")
async def save_job(job_id: str, user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    saved, created = saved_job_service.save(db, job_id, user.id)
    if created:
        return JSONResponse(status_code=201, content={"message": "Job saved successfully", "saved_job_id": saved.id})
    return {"message": "Job already saved", "saved_job_id": saved.id}


@router.delete("/{job_id}")
async def unsave_job(job_id: str, user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    saved_job_service.unsave(db, job_id, user.id)
    return {"message": "Job removed from saved jobs"}
