"""
Operations consumed by the HTTP layer.

One ResumeService is built per process around an already-connected Database
and shared by all request handlers. Raw identifiers are accepted everywhere;
malformed ones read as "not found" (None / False / []).
"""
from typing import Any, Iterable, Mapping

from resume_core.core.config import Settings
from resume_core.core.identity import parse_key
from resume_core.core.logging import get_logger
from resume_core.db.session import Database
from resume_core.models.sections import SectionKind
from resume_core.repositories.personal_info import PersonalInfoStore
from resume_core.repositories.resumes import ResumeStore
from resume_core.repositories.sections import SECTION_STORES, OrderedSectionStore
from resume_core.repositories.users import UserStore
from resume_core.schemas.resume import FullResume, ResumeOut
from resume_core.schemas.sections import (
    CertificationOut,
    EducationOut,
    ExperienceOut,
    PersonalInfoOut,
    ProjectOut,
    SkillOut,
)
from resume_core.schemas.user import UserOut
from resume_core.services.assembler import INVALID_IDENTITY, MISSING, AggregateAssembler, NotFound
from resume_core.services.cascade import CascadeCreator
from resume_core.services.ordering import OrderingPolicy

logger = get_logger(__name__)


class ResumeService:
    def __init__(self, database: Database, settings: Settings | None = None):
        self.database = database
        self.settings = settings or database.settings

        self.ordering = OrderingPolicy(database)
        self.users = UserStore(database, self.ordering)
        self.resumes = ResumeStore(database, self.ordering)
        self.personal_info = PersonalInfoStore(database, self.ordering)
        self.sections: dict[SectionKind, OrderedSectionStore] = {
            kind: store_cls(database, self.ordering) for kind, store_cls in SECTION_STORES.items()
        }

        self.cascade = CascadeCreator(
            self.resumes,
            self.personal_info,
            self.sections[SectionKind.EXPERIENCE],
            self.sections[SectionKind.EDUCATION],
            settings=self.settings,
        )
        self.assembler = AggregateAssembler(
            self.resumes,
            self.personal_info,
            self.sections,
            timeout=self.settings.SECTION_FETCH_TIMEOUT_SECONDS,
        )

    # ---------- Users ----------
    async def create_user(self, fields: Mapping[str, Any]) -> UserOut:
        return await self.users.create(fields)

    async def find_user_by_email(self, email: str) -> UserOut | None:
        return await self.users.find_by_email(email)

    async def find_user_by_id(self, raw_id) -> UserOut | None:
        return await self.users.find_by_id(raw_id)

    async def update_user(self, raw_id, fields: Mapping[str, Any]) -> bool:
        return await self.users.update(raw_id, fields)

    # ---------- Resumes ----------
    async def create_resume(self, user_id: str, title: str | None = None, template: str | None = None) -> ResumeOut:
        """Create a resume with its default personal info, experience and education."""
        return await self.cascade.create_resume(user_id, title=title, template=template)

    async def duplicate_resume(self, raw_id) -> ResumeOut | None:
        return await self.cascade.duplicate_resume(raw_id)

    async def find_resumes_by_user_id(self, user_id: str) -> list[ResumeOut]:
        return await self.resumes.find_by_user_id(user_id)

    async def find_resume_by_id(self, raw_id) -> ResumeOut | None:
        return await self.resumes.find_by_id(raw_id)

    async def update_resume(self, raw_id, fields: Mapping[str, Any]) -> bool:
        return await self.resumes.update(raw_id, fields)

    async def delete_resume(self, raw_id) -> bool:
        """Deletes the resume and all of its sections."""
        return await self.resumes.delete(raw_id)

    async def get_full_resume(self, raw_id) -> FullResume | NotFound:
        return await self.assembler.get_full_resume(raw_id)

    async def save_resume(self, raw_id, document: Mapping[str, Any]) -> FullResume | NotFound:
        """
        Editor save of a whole resume in one transaction.

        ``document`` uses the full-resume keys: ``title`` and ``template``
        update the resume, ``personalInfo`` is upserted and every section
        list present replaces that section (see ``replace_section``).
        Sections left out of ``document`` are not touched. Returns the
        resume as read back after the commit.
        """
        key = parse_key(raw_id)
        if not key:
            return NotFound(raw_id, INVALID_IDENTITY)

        resume_fields = {name: document[name] for name in ("title", "template") if name in document}
        saved = []
        async with self.database.transaction() as s:
            if not await self.resumes.resume_exists(s, key):
                return NotFound(raw_id, MISSING)
            await self.resumes.update(key, resume_fields, s=s)
            if "personalInfo" in document:
                await self.personal_info.upsert(key, document["personalInfo"] or {}, s=s)
                saved.append("personalInfo")
            for kind in SectionKind:
                if kind.value in document:
                    await self.sections[kind].replace_all(key, document[kind.value] or [], s=s)
                    saved.append(kind.value)

        logger.info("resume_saved", id=key.value, fields=sorted(resume_fields), sections=saved)
        return await self.get_full_resume(key)

    # ---------- Personal info ----------
    async def create_personal_info(self, fields: Mapping[str, Any]) -> PersonalInfoOut | None:
        return await self.personal_info.create(fields)

    async def find_personal_info_by_resume_id(self, raw_resume_id) -> PersonalInfoOut | None:
        return await self.personal_info.find_by_resume_id(raw_resume_id)

    async def update_personal_info(self, raw_resume_id, fields: Mapping[str, Any]) -> PersonalInfoOut | None:
        """Upsert keyed by resume id."""
        return await self.personal_info.upsert(raw_resume_id, fields)

    # ---------- List sections ----------
    def section(self, kind: SectionKind | str) -> OrderedSectionStore:
        return self.sections[SectionKind(kind)]

    async def reorder_section(self, raw_resume_id, kind: SectionKind | str, ordered_ids: list) -> bool:
        return await self.ordering.reorder(raw_resume_id, kind, ordered_ids)

    async def replace_section(self, raw_resume_id, kind: SectionKind | str, items: Iterable[Mapping[str, Any]]) -> list | None:
        return await self.section(kind).replace_all(raw_resume_id, items)

    async def create_experience(self, fields: Mapping[str, Any]) -> ExperienceOut | None:
        return await self.section(SectionKind.EXPERIENCE).create(fields)

    async def find_experiences_by_resume_id(self, raw_resume_id) -> list[ExperienceOut]:
        return await self.section(SectionKind.EXPERIENCE).find_by_parent(raw_resume_id)

    async def update_experience(self, raw_id, fields: Mapping[str, Any]) -> bool:
        return await self.section(SectionKind.EXPERIENCE).update(raw_id, fields)

    async def delete_experience(self, raw_id) -> bool:
        return await self.section(SectionKind.EXPERIENCE).delete(raw_id)

    async def create_education(self, fields: Mapping[str, Any]) -> EducationOut | None:
        return await self.section(SectionKind.EDUCATION).create(fields)

    async def find_educations_by_resume_id(self, raw_resume_id) -> list[EducationOut]:
        return await self.section(SectionKind.EDUCATION).find_by_parent(raw_resume_id)

    async def update_education(self, raw_id, fields: Mapping[str, Any]) -> bool:
        return await self.section(SectionKind.EDUCATION).update(raw_id, fields)

    async def delete_education(self, raw_id) -> bool:
        return await self.section(SectionKind.EDUCATION).delete(raw_id)

    async def create_skill(self, fields: Mapping[str, Any]) -> SkillOut | None:
        return await self.section(SectionKind.SKILL).create(fields)

    async def find_skills_by_resume_id(self, raw_resume_id) -> list[SkillOut]:
        return await self.section(SectionKind.SKILL).find_by_parent(raw_resume_id)

    async def update_skill(self, raw_id, fields: Mapping[str, Any]) -> bool:
        return await self.section(SectionKind.SKILL).update(raw_id, fields)

    async def delete_skill(self, raw_id) -> bool:
        return await self.section(SectionKind.SKILL).delete(raw_id)

    async def create_project(self, fields: Mapping[str, Any]) -> ProjectOut | None:
        return await self.section(SectionKind.PROJECT).create(fields)

    async def find_projects_by_resume_id(self, raw_resume_id) -> list[ProjectOut]:
        return await self.section(SectionKind.PROJECT).find_by_parent(raw_resume_id)

    async def update_project(self, raw_id, fields: Mapping[str, Any]) -> bool:
        return await self.section(SectionKind.PROJECT).update(raw_id, fields)

    async def delete_project(self, raw_id) -> bool:
        return await self.section(SectionKind.PROJECT).delete(raw_id)

    async def create_certification(self, fields: Mapping[str, Any]) -> CertificationOut | None:
        return await self.section(SectionKind.CERTIFICATION).create(fields)

    async def find_certifications_by_resume_id(self, raw_resume_id) -> list[CertificationOut]:
        return await self.section(SectionKind.CERTIFICATION).find_by_parent(raw_resume_id)

    async def update_certification(self, raw_id, fields: Mapping[str, Any]) -> bool:
        return await self.section(SectionKind.CERTIFICATION).update(raw_id, fields)

    async def delete_certification(self, raw_id) -> bool:
        return await self.section(SectionKind.CERTIFICATION).delete(raw_id)
