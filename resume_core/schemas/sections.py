# resume_core/schemas/sections.py
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class _Input(BaseModel):
    # id, resume_id on updates and timestamps are owned by the store
    model_config = ConfigDict(extra="ignore")


class _Record(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    resume_id: str
    created_at: datetime
    updated_at: datetime


class _OrderedRecord(_Record):
    order_index: int


# ---------- Personal info ----------
class PersonalInfoFields(_Input):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    linkedin: str | None = None
    github: str | None = None
    website: str | None = None
    summary: str | None = None

class PersonalInfoCreate(PersonalInfoFields):
    resume_id: str

class PersonalInfoOut(_Record):
    first_name: str | None
    last_name: str | None
    email: str | None
    phone: str | None
    address: str | None
    linkedin: str | None
    github: str | None
    website: str | None
    summary: str | None


# ---------- Experience ----------
class ExperienceCreate(_Input):
    resume_id: str
    company: str = ""
    position: str = ""
    duration: str = ""
    bullets: list[str] = Field(default_factory=list)
    order_index: int | None = Field(default=None, ge=0)

class ExperienceUpdate(_Input):
    company: str | None = None
    position: str | None = None
    duration: str | None = None
    bullets: list[str] | None = None
    order_index: int | None = Field(default=None, ge=0)

class ExperienceOut(_OrderedRecord):
    company: str
    position: str
    duration: str
    bullets: list[str]


# ---------- Education ----------
class EducationCreate(_Input):
    resume_id: str
    institution: str = ""
    degree: str = ""
    duration: str = ""
    achievements: list[str] = Field(default_factory=list)
    order_index: int | None = Field(default=None, ge=0)

class EducationUpdate(_Input):
    institution: str | None = None
    degree: str | None = None
    duration: str | None = None
    achievements: list[str] | None = None
    order_index: int | None = Field(default=None, ge=0)

class EducationOut(_OrderedRecord):
    institution: str
    degree: str
    duration: str
    achievements: list[str]


# ---------- Skill ----------
class SkillCreate(_Input):
    resume_id: str
    name: str
    level: str = "Intermediate"
    order_index: int | None = Field(default=None, ge=0)

class SkillUpdate(_Input):
    name: str | None = None
    level: str | None = None
    order_index: int | None = Field(default=None, ge=0)

class SkillOut(_OrderedRecord):
    name: str
    level: str


# ---------- Project ----------
class ProjectCreate(_Input):
    resume_id: str
    name: str
    description: str = ""
    technologies: str = ""
    link: str = ""
    order_index: int | None = Field(default=None, ge=0)

class ProjectUpdate(_Input):
    name: str | None = None
    description: str | None = None
    technologies: str | None = None
    link: str | None = None
    order_index: int | None = Field(default=None, ge=0)

class ProjectOut(_OrderedRecord):
    name: str
    description: str
    technologies: str
    link: str


# ---------- Certification ----------
class CertificationCreate(_Input):
    resume_id: str
    name: str
    issuer: str = ""
    date: str = ""
    link: str = ""
    order_index: int | None = Field(default=None, ge=0)

class CertificationUpdate(_Input):
    name: str | None = None
    issuer: str | None = None
    date: str | None = None
    link: str | None = None
    order_index: int | None = Field(default=None, ge=0)

class CertificationOut(_OrderedRecord):
    name: str
    issuer: str
    date: str
    link: str
