"""Bindings for the five ordered list sections."""
from typing import Any, Iterable, Mapping

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from resume_core.core.identity import parse_key
from resume_core.core.logging import get_logger
from resume_core.models.sections import (
    Certification,
    Education,
    Experience,
    Project,
    SectionKind,
    Skill,
)
from resume_core.repositories.base import CollectionStore, ModelT, RecordT
from resume_core.schemas.sections import (
    CertificationCreate,
    CertificationOut,
    CertificationUpdate,
    EducationCreate,
    EducationOut,
    EducationUpdate,
    ExperienceCreate,
    ExperienceOut,
    ExperienceUpdate,
    ProjectCreate,
    ProjectOut,
    ProjectUpdate,
    SkillCreate,
    SkillOut,
    SkillUpdate,
)

logger = get_logger(__name__)


class OrderedSectionStore(CollectionStore[ModelT, RecordT]):
    """
    List section under a resume.

    ``replace_all`` is the editor's save path: the whole list is rewritten in
    one transaction, blank items are dropped and order_index follows the
    position of the kept items.
    """
    parent_field = "resume_id"
    # An item is kept only if at least one of these is non-empty
    required_any: tuple[str, ...] = ("name",)
    # Applied when the incoming value is missing or empty
    fill_defaults: dict[str, Any] = {}

    def _prepare(self, item: Mapping[str, Any]) -> dict[str, Any] | None:
        data = dict(item)
        for name, default in self.fill_defaults.items():
            if not data.get(name):
                data[name] = list(default) if isinstance(default, list) else default
        if not any(data.get(name) for name in self.required_any):
            return None
        return data

    async def replace_all(
        self, raw_parent_id, items: Iterable[Mapping[str, Any]], s: AsyncSession | None = None
    ) -> list[RecordT] | None:
        key = parse_key(raw_parent_id)
        if not key:
            return None

        async def _do(sess: AsyncSession) -> list[ModelT] | None:
            if not await self.resume_exists(sess, key):
                return None
            await sess.execute(delete(self.model).where(self.model.resume_id == key.value))
            rows = []
            for item in items:
                data = self._prepare(item)
                if data is None:
                    continue
                data["resume_id"] = key.value
                data["order_index"] = len(rows)
                row = self._new_row(self.create_schema.model_validate(data).model_dump())
                sess.add(row)
                rows.append(row)
            await sess.flush()
            return rows

        if s is not None:
            rows = await _do(s)
        else:
            async with self.database.transaction() as s2:
                rows = await _do(s2)
        if rows is None:
            return None

        logger.info("section_replaced", table=self.table, resume_id=key.value, count=len(rows))
        return [self.to_record(r) for r in rows]


class ExperienceStore(OrderedSectionStore[Experience, ExperienceOut]):
    model = Experience
    record = ExperienceOut
    create_schema = ExperienceCreate
    update_schema = ExperienceUpdate
    kind = SectionKind.EXPERIENCE
    required_any = ("company", "position")
    fill_defaults = {"company": "", "position": "", "duration": "", "bullets": [""]}


class EducationStore(OrderedSectionStore[Education, EducationOut]):
    model = Education
    record = EducationOut
    create_schema = EducationCreate
    update_schema = EducationUpdate
    kind = SectionKind.EDUCATION
    required_any = ("institution", "degree")
    fill_defaults = {"institution": "", "degree": "", "duration": "", "achievements": [""]}


class SkillStore(OrderedSectionStore[Skill, SkillOut]):
    model = Skill
    record = SkillOut
    create_schema = SkillCreate
    update_schema = SkillUpdate
    kind = SectionKind.SKILL
    fill_defaults = {"level": "Intermediate"}


class ProjectStore(OrderedSectionStore[Project, ProjectOut]):
    model = Project
    record = ProjectOut
    create_schema = ProjectCreate
    update_schema = ProjectUpdate
    kind = SectionKind.PROJECT
    fill_defaults = {"description": "", "technologies": "", "link": ""}


class CertificationStore(OrderedSectionStore[Certification, CertificationOut]):
    model = Certification
    record = CertificationOut
    create_schema = CertificationCreate
    update_schema = CertificationUpdate
    kind = SectionKind.CERTIFICATION
    fill_defaults = {"issuer": "", "date": "", "link": ""}


SECTION_STORES: dict[SectionKind, type[OrderedSectionStore]] = {
    SectionKind.EXPERIENCE: ExperienceStore,
    SectionKind.EDUCATION: EducationStore,
    SectionKind.SKILL: SkillStore,
    SectionKind.PROJECT: ProjectStore,
    SectionKind.CERTIFICATION: CertificationStore,
}
