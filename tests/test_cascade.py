"""Tests for resume creation with default sections and for duplication."""
import pytest

from resume_core.core.errors import PartialCascadeFailure
from resume_core.core.identity import new_key
from resume_core.models.sections import SectionKind
from resume_core.services.resume_service import ResumeService


class TestCreateResume:
    async def test_default_sections(self, service):
        resume = await service.create_resume("U")
        assert resume.user_id == "U"

        info = await service.find_personal_info_by_resume_id(resume.id)
        assert info is not None

        [exp] = await service.find_experiences_by_resume_id(resume.id)
        assert exp.bullets == [""]
        assert (exp.company, exp.position, exp.duration) == ("", "", "")

        [edu] = await service.find_educations_by_resume_id(resume.id)
        assert edu.achievements == [""]

        assert await service.find_skills_by_resume_id(resume.id) == []
        assert await service.find_projects_by_resume_id(resume.id) == []
        assert await service.find_certifications_by_resume_id(resume.id) == []

    async def test_title_and_template_defaults(self, service):
        resume = await service.create_resume("U")
        assert resume.title == "Untitled Resume"
        assert resume.template == "professional"

    async def test_title_and_template_given(self, service):
        resume = await service.create_resume("U", title="Data Scientist", template="modern")
        assert (resume.title, resume.template) == ("Data Scientist", "modern")

    async def test_root_failure_propagates_unchanged(self, service, monkeypatch):
        async def broken(fields):
            raise RuntimeError("disk full")

        monkeypatch.setattr(service.resumes, "create", broken)
        with pytest.raises(RuntimeError, match="disk full"):
            await service.create_resume("U")


class TestPartialCascade:
    async def test_failure_is_surfaced_and_rows_remain(self, service, monkeypatch):
        async def broken(fields):
            raise RuntimeError("education table offline")

        monkeypatch.setattr(service.sections[SectionKind.EDUCATION], "create", broken)

        with pytest.raises(PartialCascadeFailure) as info:
            await service.create_resume("U")

        failure = info.value
        assert failure.failed_step == "education"
        assert failure.completed_steps == ["resume", "personal_info", "experience"]
        assert failure.compensated is False
        assert isinstance(failure.cause, RuntimeError)

        # Not transactional: what was written stays written
        assert await service.find_resume_by_id(failure.resume_id) is not None
        assert len(await service.find_experiences_by_resume_id(failure.resume_id)) == 1
        assert await service.find_educations_by_resume_id(failure.resume_id) == []

    async def test_refused_step_counts_as_failure(self, service, monkeypatch):
        async def refused(fields):
            return None

        monkeypatch.setattr(service.personal_info, "create", refused)

        with pytest.raises(PartialCascadeFailure) as info:
            await service.create_resume("U")
        assert info.value.failed_step == "personal_info"
        assert info.value.completed_steps == ["resume"]

    async def test_compensation_removes_partial_writes(self, database, settings, monkeypatch):
        service = ResumeService(database, settings.model_copy(update={"CASCADE_COMPENSATE": True}))

        async def broken(fields):
            raise RuntimeError("boom")

        monkeypatch.setattr(service.sections[SectionKind.EDUCATION], "create", broken)

        with pytest.raises(PartialCascadeFailure) as info:
            await service.create_resume("U")

        failure = info.value
        assert failure.compensated is True
        assert failure.compensation_error is None
        assert await service.find_resume_by_id(failure.resume_id) is None
        assert await service.find_personal_info_by_resume_id(failure.resume_id) is None
        assert await service.find_experiences_by_resume_id(failure.resume_id) == []


class TestDuplicateResume:
    async def test_shallow_copy(self, service):
        source = await service.create_resume("U", title="Platform Engineer", template="modern")
        copy = await service.duplicate_resume(source.id)

        assert copy.id != source.id
        assert copy.user_id == "U"
        assert copy.title == "Platform Engineer (Copy)"
        assert copy.template == "modern"
        assert copy.created_at > source.created_at

        # Sections stay with the source
        assert await service.find_experiences_by_resume_id(copy.id) == []
        assert await service.find_personal_info_by_resume_id(copy.id) is None
        assert len(await service.find_experiences_by_resume_id(source.id)) == 1

    async def test_missing_source(self, service):
        assert await service.duplicate_resume(new_key().value) is None
        assert await service.duplicate_resume("not-an-id") is None
