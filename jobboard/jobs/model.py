from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

EmploymentType = Literal["Full-time", "Part-time", "Contract", "Internship", "Freelance"]
ExperienceLevel = Literal["Entry-level", "Mid-level", "Senior", "Executive"]
Category = Literal["tech", "sales", "marketing", "design", "product", "operations", "finance", "hr", "other"]

# Keys owned by the store/engine; ignored when they appear in a payload
SYSTEM_FIELDS = ("_id", "createdAt", "updatedAt", "__v")


def _non_empty(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be empty")
    return value


class _Document(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        str_strip_whitespace=True,
    )


class Requirements(_Document):
    required: List[str] = Field(min_length=1)
    preferred: List[str] = Field(default_factory=list)

    @field_validator("required")
    @classmethod
    def _required_items(cls, items: List[str]) -> List[str]:
        return [_non_empty(item) for item in items]


class JobListing(_Document):
    """
    A job posting as stored in the `jobs` collection.

    Field names are snake_case in Python and camelCase on the wire and in
    MongoDB (`job_title` <-> `jobTitle`). `_id`, `createdAt` and
    `updatedAt` are assigned by the engine, not by callers.
    """

    job_title: str
    company_name: str
    company_overview: str
    location: str
    employment_type: EmploymentType
    salary_range: Optional[str] = None
    job_description: str
    responsibilities: List[str] = Field(min_length=1)
    requirements: Requirements
    application_deadline: Optional[datetime] = None
    application_link: str
    education_level: Optional[str] = None
    experience_level: ExperienceLevel
    category: Category
    is_remote: bool = False
    is_hybrid: bool = False
    is_onsite: bool = False
    apply_click_count: int = Field(default=0, ge=0)
    is_active: bool = True

    @field_validator(
        "job_title",
        "company_name",
        "company_overview",
        "location",
        "job_description",
        "application_link",
    )
    @classmethod
    def _required_text(cls, value: str) -> str:
        return _non_empty(value)

    @field_validator("responsibilities")
    @classmethod
    def _responsibility_items(cls, items: List[str]) -> List[str]:
        return [_non_empty(item) for item in items]

    def to_document(self) -> dict:
        """Storage form: camelCase keys, unset optionals left out."""
        return self.model_dump(by_alias=True, exclude_none=True)


def strip_system_fields(payload: dict) -> dict:
    return {k: v for k, v in payload.items() if k not in SYSTEM_FIELDS}
