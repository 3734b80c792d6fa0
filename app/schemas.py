from datetime import datetime
from typing import Annotated, Any
from email_validator import EmailNotValidError, validate_email
from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    HttpUrl,
    TypeAdapter,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel

from .models import ApplicationStatus


_http_url = TypeAdapter(HttpUrl)

def _check_url(value: str) -> str:
    try:
        _http_url.validate_python(value)
    except ValidationError:
        raise ValueError("Must be a valid URL.") from None
    return value

def _check_email(value: str) -> str:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValueError(f"value is not a valid email address: {exc}") from None
    return value

# Checked like HttpUrl / EmailStr but kept exactly as the caller sent them
UrlString = Annotated[str, AfterValidator(_check_url)]
EmailString = Annotated[str, AfterValidator(_check_email)]


class CamelModel(BaseModel):
    """JSON bodies use camelCase keys; Python code uses snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# Auth
class RegisterIn(CamelModel):
    email: EmailStr
    password: str = Field(min_length=8)
    name: str | None = None

class LoginIn(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)

class RegisteredUserOut(CamelModel):
    id: int
    email: EmailStr
    name: str | None = None

class UserOut(RegisteredUserOut):
    created_at: datetime

class LoginOut(CamelModel):
    message: str = "Login successful."
    token: str


# Job applications
class ApplicationCreate(CamelModel):
    title: str = Field(min_length=1)
    company: str = Field(min_length=1)
    job_description: str = Field(min_length=1)
    status: ApplicationStatus = ApplicationStatus.APPLIED
    job_url: UrlString | None = None
    notes: str | None = None

class ApplicationUpdate(CamelModel):
    title: str | None = Field(None, min_length=1)
    company: str | None = Field(None, min_length=1)
    job_description: str | None = Field(None, min_length=1)
    status: ApplicationStatus | None = None
    job_url: UrlString | None = None
    notes: str | None = None

    @field_validator("title", "company", "job_description", "status", mode="before")
    @classmethod
    def _not_null(cls, v: Any) -> Any:
        # Omit the field to leave it unchanged; these columns cannot be cleared.
        if v is None:
            raise ValueError("Field cannot be null.")
        return v

class ApplicationOut(CamelModel):
    id: int
    title: str
    company: str
    job_description: str
    status: ApplicationStatus
    job_url: str | None = None
    notes: str | None = None
    application_date: datetime
    user_id: int
    created_at: datetime
    updated_at: datetime


# Resumes
class WorkExperience(CamelModel):
    title: str = Field(min_length=1)
    company: str = Field(min_length=1)
    description: str | None = None

class Education(CamelModel):
    institution: str = Field(min_length=1)
    degree: str = Field(min_length=1)
    field_of_study: str | None = None
    graduation_year: str | None = None

class ResumeData(CamelModel):
    name: str | None = None
    email: EmailString | None = None
    phone: str | None = None
    summary: str | None = None
    work_experience: list[WorkExperience] = Field(default_factory=list)
    education: list[Education] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)

    def to_document(self) -> dict[str, Any]:
        """The stored JSON form: camelCase keys, only the fields the caller sent."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)

class ResumeIn(CamelModel):
    name: str = Field(min_length=1)
    data: ResumeData

class ResumeSummaryOut(CamelModel):
    id: int
    name: str
    created_at: datetime
    updated_at: datetime

class ResumeDetailOut(CamelModel):
    id: int
    name: str
    data: dict[str, Any] | None = None

class ResumeOut(ResumeDetailOut):
    context: str | None = None
    user_id: int
    created_at: datetime
    updated_at: datetime
