import enum

from sqlalchemy import JSON, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from resume_core.db.base import Base, KeyedMixin


class OrderedSectionMixin:
    """List item scoped to one resume and ordered by order_index."""
    resume_id: Mapped[str] = mapped_column(String(32), ForeignKey("resumes.id"), index=True, nullable=False)
    order_index: Mapped[int] = mapped_column(Integer, index=True, nullable=False, default=0)


class PersonalInfo(KeyedMixin, Base):
    __tablename__ = "personal_info"

    # Conflict target for the singleton upsert
    resume_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("resumes.id"), unique=True, index=True, nullable=False
    )
    first_name: Mapped[str | None] = mapped_column(String(120))
    last_name: Mapped[str | None] = mapped_column(String(120))
    email: Mapped[str | None] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(64))
    address: Mapped[str | None] = mapped_column(String(255))
    linkedin: Mapped[str | None] = mapped_column(String(255))
    github: Mapped[str | None] = mapped_column(String(255))
    website: Mapped[str | None] = mapped_column(String(255))
    summary: Mapped[str | None] = mapped_column(Text)


class Experience(OrderedSectionMixin, KeyedMixin, Base):
    __tablename__ = "experiences"

    company: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    position: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    duration: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    bullets: Mapped[list] = mapped_column(JSON, nullable=False, default=list)


class Education(OrderedSectionMixin, KeyedMixin, Base):
    __tablename__ = "educations"

    institution: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    degree: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    duration: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    achievements: Mapped[list] = mapped_column(JSON, nullable=False, default=list)


class Skill(OrderedSectionMixin, KeyedMixin, Base):
    __tablename__ = "skills"

    name: Mapped[str] = mapped_column(String(120), nullable=False)
    level: Mapped[str] = mapped_column(String(64), nullable=False, default="Intermediate")


class Project(OrderedSectionMixin, KeyedMixin, Base):
    __tablename__ = "projects"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    technologies: Mapped[str] = mapped_column(String(512), nullable=False, default="")
    link: Mapped[str] = mapped_column(String(1024), nullable=False, default="")


class Certification(OrderedSectionMixin, KeyedMixin, Base):
    __tablename__ = "certifications"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    issuer: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    date: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    link: Mapped[str] = mapped_column(String(1024), nullable=False, default="")


class SectionKind(str, enum.Enum):
    """The five ordered list sections of a resume, keyed by table name."""
    EXPERIENCE = "experiences"
    EDUCATION = "educations"
    SKILL = "skills"
    PROJECT = "projects"
    CERTIFICATION = "certifications"

    @property
    def model(self) -> type:
        return SECTION_MODELS[self]


SECTION_MODELS: dict[SectionKind, type] = {
    SectionKind.EXPERIENCE: Experience,
    SectionKind.EDUCATION: Education,
    SectionKind.SKILL: Skill,
    SectionKind.PROJECT: Project,
    SectionKind.CERTIFICATION: Certification,
}
