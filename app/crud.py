from __future__ import annotations
import logging
from typing import Any

from sqlalchemy import select, update, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from . import models, security
from .resume_text import resume_to_text

logger = logging.getLogger(__name__)

# ---------- Users ----------

def get_user_by_email(db: Session, email: str) -> models.User | None:
    return db.query(models.User).filter(models.User.email == email).first()

def get_user(db: Session, user_id: int) -> models.User | None:
    return db.get(models.User, user_id)

def create_user(db: Session, email: str, password: str, name: str | None = None) -> models.User:
    """
    Insert a user. The unique index on email is the authoritative duplicate
    check: on IntegrityError the session is rolled back and the error re-raised.
    """
    hashed_pw = security.hash_password(password)
    user = models.User(email=email, hashed_password=hashed_pw, name=name)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise
    db.refresh(user)
    logger.info("Registered user id=%s", user.id)
    return user

# Largest id an INTEGER primary key holds on every supported backend
MAX_RECORD_ID = 2**31 - 1

def parse_record_id(raw: str) -> int | None:
    """Return the id named by a path segment, or None when no row could have it."""
    if not (raw.isascii() and raw.isdigit()) or len(raw) > len(str(MAX_RECORD_ID)):
        return None
    record_id = int(raw)
    if not 0 < record_id <= MAX_RECORD_ID:
        return None
    return record_id

# ---------- Owner-scoped primitives ----------
# Every mutation of an owned record goes through these. The predicate always
# pairs the record id with the owner id, and the affected-row count is the only
# signal for "not found or not yours".

def _scoped_update(db: Session, model, record_id: int, user_id: int, values: dict[str, Any]) -> int:
    stmt = (
        update(model)
        .where(model.id == record_id, model.user_id == user_id)
        .values(**values, updated_at=models.utcnow())
        .execution_options(synchronize_session=False)
    )
    count = db.execute(stmt).rowcount or 0
    db.commit()
    return count

def _scoped_delete(db: Session, model, record_id: int, user_id: int) -> int:
    stmt = (
        delete(model)
        .where(model.id == record_id, model.user_id == user_id)
        .execution_options(synchronize_session=False)
    )
    count = db.execute(stmt).rowcount or 0
    db.commit()
    return count

def _scoped_get(db: Session, model, record_id: int, user_id: int):
    return db.execute(
        select(model).where(model.id == record_id, model.user_id == user_id)
    ).scalar_one_or_none()

# ---------- Job applications ----------

def create_application(db: Session, user_id: int, fields: dict[str, Any]) -> models.JobApplication:
    # user_id is set last so nothing in `fields` can override it
    app_row = models.JobApplication(**{**fields, "user_id": user_id})
    db.add(app_row)
    db.commit()
    db.refresh(app_row)
    return app_row

def list_applications(db: Session, user_id: int) -> list[models.JobApplication]:
    """Newest application first"""
    stmt = (
        select(models.JobApplication)
        .where(models.JobApplication.user_id == user_id)
        .order_by(models.JobApplication.application_date.desc(), models.JobApplication.id.desc())
    )
    return list(db.execute(stmt).scalars())

def get_application(db: Session, application_id: int, user_id: int) -> models.JobApplication | None:
    return _scoped_get(db, models.JobApplication, application_id, user_id)

def get_application_by_id(db: Session, application_id: int) -> models.JobApplication | None:
    """Unscoped read; only used right after a successful scoped update."""
    return db.get(models.JobApplication, application_id, populate_existing=True)

def update_application(db: Session, application_id: int, user_id: int, fields: dict[str, Any]) -> int:
    fields = {k: v for k, v in fields.items() if k != "user_id"}
    return _scoped_update(db, models.JobApplication, application_id, user_id, fields)

def delete_application(db: Session, application_id: int, user_id: int) -> int:
    return _scoped_delete(db, models.JobApplication, application_id, user_id)

# ---------- Resumes ----------

def create_resume(db: Session, user_id: int, name: str, data: dict[str, Any]) -> models.Resume:
    resume = models.Resume(name=name, data=data, context=resume_to_text(data), user_id=user_id)
    db.add(resume)
    db.commit()
    db.refresh(resume)
    return resume

def list_resumes(db: Session, user_id: int) -> list[dict[str, Any]]:
    """Summary columns only; `data` and `context` are never loaded for lists."""
    stmt = (
        select(
            models.Resume.id,
            models.Resume.name,
            models.Resume.created_at,
            models.Resume.updated_at,
        )
        .where(models.Resume.user_id == user_id)
        .order_by(models.Resume.updated_at.desc(), models.Resume.id.desc())
    )
    return [row._asdict() for row in db.execute(stmt)]

def get_resume(db: Session, resume_id: int, user_id: int) -> models.Resume | None:
    return _scoped_get(db, models.Resume, resume_id, user_id)

def get_resume_by_id(db: Session, resume_id: int) -> models.Resume | None:
    """Unscoped read; only used right after a successful scoped update."""
    return db.get(models.Resume, resume_id, populate_existing=True)

def update_resume(db: Session, resume_id: int, user_id: int, name: str, data: dict[str, Any]) -> int:
    values = {"name": name, "data": data, "context": resume_to_text(data)}
    return _scoped_update(db, models.Resume, resume_id, user_id, values)

def delete_resume(db: Session, resume_id: int, user_id: int) -> int:
    return _scoped_delete(db, models.Resume, resume_id, user_id)
