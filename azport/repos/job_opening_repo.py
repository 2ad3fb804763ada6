from sqlalchemy.orm import Session

from azport.models.job_opening import JobOpening


def get_all(db: Session, active_only: bool = False) -> list[JobOpening]:
    """List job openings newest first. Optionally only the active ones."""
    q = db.query(JobOpening)
    if active_only:
        q = q.filter(JobOpening.active == True)  # noqa: E712
    return q.order_by(JobOpening.created_at.desc(), JobOpening.id.desc()).all()


def get_by_id(db: Session, job_id: int) -> JobOpening | None:
    return db.query(JobOpening).filter(JobOpening.id == job_id).first()


def create(
    db: Session,
    *,
    title: str,
    location: str,
    type: str,
    description: str,
    department: str = "general",
    active: bool = True,
) -> JobOpening:
    job = JobOpening(
        title=title,
        department=department,
        location=location,
        type=type,
        description=description,
        active=active,
    )
    db.add(job)
    db.commit()
    db.refresh(job)
    return job


def update(
    db: Session,
    job_id: int,
    *,
    title: str,
    location: str,
    type: str,
    description: str,
    department: str = "general",
    active: bool | None = None,
) -> JobOpening | None:
    job = get_by_id(db, job_id)
    if not job:
        return None
    job.title = title
    job.department = department
    job.location = location
    job.type = type
    job.description = description
    if active is not None:
        job.active = active
    db.commit()
    db.refresh(job)
    return job


def delete(db: Session, job_id: int) -> bool:
    job = get_by_id(db, job_id)
    if not job:
        return False
    db.delete(job)
    db.commit()
    return True


def count(db: Session) -> int:
    return db.query(JobOpening).count()


def seed_default_job_openings(db: Session, defaults: list[dict]) -> tuple[list[JobOpening], int]:
    """
    Seed job openings if table is empty.
    Returns (list of openings, number_created). number_created is 0 if table already had rows.
    """
    existing = get_all(db)
    if existing:
        return existing, 0
    created = [create(db, **row) for row in defaults]
    return created, len(created)
