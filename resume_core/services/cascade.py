"""
Resume creation with its default sections, and resume duplication.

Creation is a short saga: the root is written first (the sections need its
id), then each default section in order. The steps are separate
transactions, so a failure midway leaves the earlier rows behind unless
compensation is enabled; either way the caller gets PartialCascadeFailure.
"""
from resume_core.core.config import Settings, settings as default_settings
from resume_core.core.errors import PartialCascadeFailure, ResumeStoreError
from resume_core.core.logging import get_logger
from resume_core.repositories.base import CollectionStore
from resume_core.repositories.personal_info import PersonalInfoStore
from resume_core.repositories.resumes import ResumeStore
from resume_core.repositories.sections import EducationStore, ExperienceStore
from resume_core.schemas.resume import ResumeOut

logger = get_logger(__name__)


class CascadeCreator:
    def __init__(
        self,
        resumes: ResumeStore,
        personal_info: PersonalInfoStore,
        experiences: ExperienceStore,
        educations: EducationStore,
        settings: Settings | None = None,
    ):
        self.resumes = resumes
        self.personal_info = personal_info
        self.experiences = experiences
        self.educations = educations
        self.settings = settings or default_settings

    def _default_steps(self, resume_id: str) -> list[tuple[str, CollectionStore, dict]]:
        return [
            ("personal_info", self.personal_info, {"resume_id": resume_id}),
            ("experience", self.experiences, {
                "resume_id": resume_id,
                "company": "",
                "position": "",
                "duration": "",
                "bullets": [""],
            }),
            ("education", self.educations, {
                "resume_id": resume_id,
                "institution": "",
                "degree": "",
                "duration": "",
                "achievements": [""],
            }),
        ]

    async def create_resume(self, user_id: str, title: str | None = None, template: str | None = None) -> ResumeOut:
        resume = await self.resumes.create({
            "user_id": user_id,
            "title": title or self.settings.DEFAULT_RESUME_TITLE,
            "template": template or self.settings.DEFAULT_TEMPLATE,
        })

        # (step, store, id) for every write that has succeeded so far
        done: list[tuple[str, CollectionStore, str]] = [("resume", self.resumes, resume.id)]

        for step, store, fields in self._default_steps(resume.id):
            try:
                created = await store.create(fields)
                if created is None:
                    raise ResumeStoreError(f"{step} was refused for resume {resume.id}")
            except Exception as exc:
                logger.error("cascade_step_failed", resume_id=resume.id, step=step, error=repr(exc))
                raise await self._failure(resume.id, done, step, exc) from exc
            done.append((step, store, created.id))

        logger.info("resume_created", id=resume.id, user_id=user_id, steps=[name for name, _, _ in done])
        return resume

    async def _failure(self, resume_id, done, step, exc) -> PartialCascadeFailure:
        completed = [name for name, _, _ in done]
        if not self.settings.CASCADE_COMPENSATE:
            return PartialCascadeFailure(resume_id, completed, step, exc)

        try:
            for name, store, record_id in reversed(done):
                await store.delete(record_id)
        except Exception as comp_exc:
            logger.error("cascade_compensation_failed", resume_id=resume_id, error=repr(comp_exc))
            return PartialCascadeFailure(resume_id, completed, step, exc, compensation_error=comp_exc)

        logger.info("cascade_compensated", resume_id=resume_id, removed=completed)
        return PartialCascadeFailure(resume_id, completed, step, exc, compensated=True)

    async def duplicate_resume(self, raw_id) -> ResumeOut | None:
        """
        Copy the resume's own fields under a new id. Sections stay with the
        source resume.
        """
        source = await self.resumes.find_by_id(raw_id)
        if source is None:
            return None
        copy = await self.resumes.create({
            "user_id": source.user_id,
            "title": f"{source.title} (Copy)",
            "template": source.template,
        })
        logger.info("resume_duplicated", source_id=source.id, id=copy.id)
        return copy
