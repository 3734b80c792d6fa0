from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from .. import crud
from ..auth import AuthenticatedRoute, get_current_user_id
from ..database import get_db
from ..errors import NotFound
from ..schemas import ApplicationCreate, ApplicationOut, ApplicationUpdate

router = APIRouter(
    prefix="/api/application",
    tags=["applications"],
    route_class=AuthenticatedRoute,
)

NOT_FOUND = "Job application not found."
NOT_FOUND_OR_NOT_AUTHORIZED = "Job application not found or not authorized."


def _application_id(raw: str, message: str) -> int:
    # An id no row can have is reported exactly like a missing row
    application_id = crud.parse_record_id(raw)
    if application_id is None:
        raise NotFound(message)
    return application_id


@router.post("", response_model=ApplicationOut, status_code=status.HTTP_201_CREATED)
def create_application(
    payload: ApplicationCreate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return crud.create_application(db, user_id, payload.model_dump())


@router.get("", response_model=list[ApplicationOut])
def list_applications(user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)):
    return crud.list_applications(db, user_id)


@router.get("/{application_id}", response_model=ApplicationOut)
def get_application(
    application_id: str,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    row = crud.get_application(db, _application_id(application_id, NOT_FOUND), user_id)
    if row is None:
        raise NotFound(NOT_FOUND)
    return row


@router.put("/{application_id}", response_model=ApplicationOut)
def update_application(
    application_id: str,
    payload: ApplicationUpdate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    record_id = _application_id(application_id, NOT_FOUND_OR_NOT_AUTHORIZED)
    updated = crud.update_application(db, record_id, user_id, payload.model_dump(exclude_unset=True))
    if updated == 0:
        raise NotFound(NOT_FOUND_OR_NOT_AUTHORIZED)
    # Ownership was proven by the scoped update above
    return crud.get_application_by_id(db, record_id)


@router.delete("/{application_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_application(
    application_id: str,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    record_id = _application_id(application_id, NOT_FOUND_OR_NOT_AUTHORIZED)
    deleted = crud.delete_application(db, record_id, user_id)
    if deleted == 0:
        raise NotFound(NOT_FOUND_OR_NOT_AUTHORIZED)
    return None
