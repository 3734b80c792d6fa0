from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from .. import crud
from ..auth import AuthenticatedRoute, get_current_user_id
from ..database import get_db
from ..errors import NotFound
from ..schemas import ResumeDetailOut, ResumeIn, ResumeOut, ResumeSummaryOut

router = APIRouter(
    prefix="/api/resumes",
    tags=["resumes"],
    route_class=AuthenticatedRoute,
)

NOT_FOUND = "Resume not found."
NOT_FOUND_OR_NOT_AUTHORIZED = "Resume not found or not authorized."
NOT_BUILDER_RESUME = "This resume was not created with the builder and cannot be edited."


def _resume_id(raw: str, message: str) -> int:
    resume_id = crud.parse_record_id(raw)
    if resume_id is None:
        raise NotFound(message)
    return resume_id


@router.post("", response_model=ResumeOut, status_code=status.HTTP_201_CREATED)
def create_resume(
    payload: ResumeIn,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return crud.create_resume(db, user_id, payload.name, payload.data.to_document())


@router.get("", response_model=list[ResumeSummaryOut])
def list_resumes(user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)):
    return crud.list_resumes(db, user_id)


@router.get("/{resume_id}", response_model=ResumeDetailOut)
def get_resume(
    resume_id: str,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    resume = crud.get_resume(db, _resume_id(resume_id, NOT_FOUND), user_id)
    if resume is None:
        raise NotFound(NOT_FOUND)
    # Legacy free-form resumes have no builder document to edit
    if resume.data is None:
        raise NotFound(NOT_BUILDER_RESUME)
    return resume


@router.put("/{resume_id}", response_model=ResumeDetailOut)
def update_resume(
    resume_id: str,
    payload: ResumeIn,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    record_id = _resume_id(resume_id, NOT_FOUND_OR_NOT_AUTHORIZED)
    updated = crud.update_resume(db, record_id, user_id, payload.name, payload.data.to_document())
    if updated == 0:
        raise NotFound(NOT_FOUND_OR_NOT_AUTHORIZED)
    return crud.get_resume_by_id(db, record_id)


@router.delete("/{resume_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_resume(
    resume_id: str,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    record_id = _resume_id(resume_id, NOT_FOUND_OR_NOT_AUTHORIZED)
    deleted = crud.delete_resume(db, record_id, user_id)
    if deleted == 0:
        raise NotFound(NOT_FOUND_OR_NOT_AUTHORIZED)
    return None
