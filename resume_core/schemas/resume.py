# resume_core/schemas/resume.py
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from resume_core.schemas.sections import (
    CertificationOut,
    EducationOut,
    ExperienceOut,
    ProjectOut,
    SkillOut,
)

class ResumeCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    user_id: str = Field(min_length=1)
    title: str
    template: str

class ResumeUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    template: str | None = None

class ResumeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    title: str
    template: str
    created_at: datetime
    updated_at: datetime


class FullResume(ResumeOut):
    """
    Resume scalars joined with all six sections. Every section key is
    always present: an absent personal info is {} and empty lists are [].
    """
    model_config = ConfigDict(populate_by_name=True, serialize_by_alias=True)

    personal_info: dict[str, Any] = Field(default_factory=dict, alias="personalInfo")
    experiences: list[ExperienceOut] = Field(default_factory=list)
    educations: list[EducationOut] = Field(default_factory=list)
    skills: list[SkillOut] = Field(default_factory=list)
    projects: list[ProjectOut] = Field(default_factory=list)
    certifications: list[CertificationOut] = Field(default_factory=list)

    def as_document(self) -> dict[str, Any]:
        """Plain dict with the camelCase section keys the editor expects."""
        return self.model_dump()
