import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from azport.database import get_db
from azport.dependencies import get_current_user
from azport.models.job_opening import JobOpening
from azport.models.user import User
from azport.repos import job_opening_repo
from azport.schemas.job_opening import JobOpeningPayload

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/job-openings", tags=["job-openings"])


def job_opening_to_response(j: JobOpening) -> dict:
    return {
        "id": j.id,
        "title": j.title,
        "department": j.department,
        "location": j.location,
        "type": j.type,
        "description": j.description,
        "created_at": j.created_at.isoformat() if j.created_at else None,
        "active": bool(j.active),
    }


def _fields_from_payload(data: JobOpeningPayload) -> dict:
    if data.missing_required():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Required fields are missing")
    return {
        "title": data.title,
        "department": data.department or "general",
        "location": data.location,
        "type": data.type,
        "description": data.description,
    }


@router.get("")
def list_job_openings(active: str | None = None, db: Session = Depends(get_db)):
    """All job openings newest first; ?active=true keeps only active ones. Public."""
    active_only = (active or "").lower() == "true"
    try:
        jobs = job_opening_repo.get_all(db, active_only=active_only)
    except Exception as e:
        logger.exception("Job openings query failed: %s", e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database query failed") from e
    logger.debug("Listed %d job openings (active_only=%s)", len(jobs), active_only)
    return [job_opening_to_response(j) for j in jobs]


@router.get("/{job_id}")
def get_job_opening(job_id: int, db: Session = Depends(get_db)):
    job = job_opening_repo.get_by_id(db, job_id)
    if not job:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job opening not found")
    return job_opening_to_response(job)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_job_opening(
    data: JobOpeningPayload,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    fields = _fields_from_payload(data)
    try:
        job = job_opening_repo.create(db, active=True if data.active is None else data.active, **fields)
        logger.info("Job opening created: id=%s title=%s by %s", job.id, job.title, user.username)
        return job_opening_to_response(job)
    except Exception as e:
        logger.exception("Job opening create failed: %s", e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create job opening") from e


@router.put("")
def update_job_opening(
    data: JobOpeningPayload,
    id: int | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Replace a job opening. The id comes from ?id= or the body; omitted `active` keeps the stored flag."""
    job_id = id if id is not None else data.id
    if job_id is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Required fields are missing")
    fields = _fields_from_payload(data)
    try:
        job = job_opening_repo.update(db, job_id, active=data.active, **fields)
    except Exception as e:
        logger.exception("Job opening update failed for id=%s: %s", job_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update job opening") from e
    if not job:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job opening not found")
    logger.info("Job opening updated: id=%s active=%s by %s", job.id, job.active, user.username)
    return job_opening_to_response(job)


@router.delete("")
def delete_job_opening(
    id: int | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    if id is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Job opening ID is required")
    try:
        deleted = job_opening_repo.delete(db, id)
    except Exception as e:
        logger.exception("Job opening delete failed for id=%s: %s", id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to delete job opening") from e
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job opening not found")
    logger.info("Job opening deleted: id=%s by %s", id, user.username)
    return {"message": "Job opening deleted successfully"}
