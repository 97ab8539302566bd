"""Tests for the per-table stores (resume_core.repositories)."""
import pytest
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError

from resume_core.core.identity import new_key
from resume_core.models.sections import SectionKind


# ── Users ────────────────────────────────────────────────────────────────


class TestUserStore:
    async def test_create_and_find(self, service):
        user = await service.create_user({"email": "ada@example.com", "name": "Ada Lovelace", "password_hash": "x"})
        assert len(user.id) == 32
        assert user.provider == "local"
        assert user.created_at == user.updated_at

        assert (await service.find_user_by_id(user.id)).email == "ada@example.com"
        assert (await service.find_user_by_email("ada@example.com")).id == user.id

    async def test_oauth_user_has_no_password(self, service):
        user = await service.create_user({
            "email": "g@example.com",
            "first_name": "Grace",
            "last_name": "Hopper",
            "provider": "google",
            "picture": "https://example.com/g.png",
        })
        assert user.password_hash is None
        assert user.provider == "google"

    async def test_missing_lookups(self, service):
        assert await service.find_user_by_email("nobody@example.com") is None
        assert await service.find_user_by_email("") is None
        assert await service.find_user_by_id(new_key().value) is None
        assert await service.find_user_by_id("bogus") is None

    async def test_duplicate_email_is_rejected(self, service):
        await service.create_user({"email": "dup@example.com"})
        with pytest.raises(IntegrityError):
            await service.create_user({"email": "dup@example.com"})

    async def test_invalid_email(self, service):
        with pytest.raises(ValidationError):
            await service.create_user({"email": "not-an-email"})

    async def test_update_merges_fields(self, service):
        user = await service.create_user({"email": "m@example.com", "name": "M"})
        assert await service.update_user(user.id, {"picture": "p.png"}) is True

        found = await service.find_user_by_id(user.id)
        assert found.picture == "p.png"
        assert found.name == "M"
        assert found.updated_at > user.updated_at
        assert found.created_at == user.created_at

    async def test_update_unknown_or_invalid(self, service):
        assert await service.update_user(new_key().value, {"name": "x"}) is False
        assert await service.update_user("nope", {"name": "x"}) is False


# ── Resumes ──────────────────────────────────────────────────────────────


class TestResumeStore:
    async def test_update_and_find(self, service, resume):
        assert await service.update_resume(resume.id, {"title": "Backend Engineer"}) is True
        found = await service.find_resume_by_id(resume.id)
        assert found.title == "Backend Engineer"
        assert found.template == "modern"
        assert found.user_id == "u1"

    async def test_store_owned_fields_are_ignored(self, service, resume):
        other = new_key().value
        await service.update_resume(resume.id, {"id": other, "created_at": "2001-01-01T00:00:00", "title": "T"})
        found = await service.find_resume_by_id(resume.id)
        assert found.id == resume.id
        assert found.created_at == resume.created_at
        assert await service.find_resume_by_id(other) is None

    async def test_find_by_user_sorted_by_last_modified(self, service):
        first = await service.resumes.create({"user_id": "u9", "title": "A", "template": "t"})
        second = await service.resumes.create({"user_id": "u9", "title": "B", "template": "t"})
        await service.resumes.create({"user_id": "someone-else", "title": "C", "template": "t"})

        assert [r.id for r in await service.find_resumes_by_user_id("u9")] == [second.id, first.id]

        await service.update_resume(first.id, {"template": "classic"})
        assert [r.id for r in await service.find_resumes_by_user_id("u9")] == [first.id, second.id]

    async def test_find_by_user_empty(self, service):
        assert await service.find_resumes_by_user_id("ghost") == []
        assert await service.find_resumes_by_user_id("") == []
        assert await service.find_resumes_by_user_id(None) == []

    async def test_delete(self, service, resume):
        assert await service.delete_resume(resume.id) is True
        assert await service.find_resume_by_id(resume.id) is None
        assert await service.delete_resume(resume.id) is False
        assert await service.delete_resume("bad id") is False


# ── List sections ────────────────────────────────────────────────────────


class TestSectionStores:
    async def test_create_defaults(self, service, resume):
        exp = await service.create_experience({"resume_id": resume.id, "company": "Acme"})
        assert exp.resume_id == resume.id
        assert exp.bullets == []
        assert exp.order_index == 0

        edu = await service.create_education({"resume_id": resume.id, "institution": "MIT"})
        assert edu.achievements == []

        skill = await service.create_skill({"resume_id": resume.id, "name": "Python"})
        assert skill.level == "Intermediate"

    @pytest.mark.parametrize("resume_id", [None, "", "u1", "507f1f77bcf86cd799439011", 42])
    async def test_create_refused_for_malformed_parent(self, service, resume_id):
        assert await service.create_project({"resume_id": resume_id, "name": "P"}) is None

    async def test_create_refused_for_missing_parent(self, service):
        orphan = await service.create_certification({"resume_id": new_key().value, "name": "CKA"})
        assert orphan is None

    async def test_create_refused_without_parent_field(self, service):
        assert await service.create_skill({"name": "Go"}) is None

    async def test_appends_at_end(self, service, resume):
        for name in ("a", "b", "c"):
            await service.create_skill({"resume_id": resume.id, "name": name})
        skills = await service.find_skills_by_resume_id(resume.id)
        assert [(s.name, s.order_index) for s in skills] == [("a", 0), ("b", 1), ("c", 2)]

    @pytest.mark.parametrize("kind", list(SectionKind))
    async def test_find_sorted_by_order_index(self, service, resume, kind):
        store = service.section(kind)
        required = {
            SectionKind.EXPERIENCE: {},
            SectionKind.EDUCATION: {},
            SectionKind.SKILL: {"name": "s"},
            SectionKind.PROJECT: {"name": "p"},
            SectionKind.CERTIFICATION: {"name": "c"},
        }[kind]
        for ordinal in (5, 1, 3, 0):
            await store.create({"resume_id": resume.id, "order_index": ordinal, **required})

        items = await store.find_by_parent(resume.id)
        assert [i.order_index for i in items] == [0, 1, 3, 5]

    async def test_ties_keep_insertion_order(self, service, resume):
        first = await service.create_project({"resume_id": resume.id, "name": "first", "order_index": 2})
        second = await service.create_project({"resume_id": resume.id, "name": "second", "order_index": 2})
        early = await service.create_project({"resume_id": resume.id, "name": "early", "order_index": 1})

        projects = await service.find_projects_by_resume_id(resume.id)
        assert [p.id for p in projects] == [early.id, first.id, second.id]

    async def test_explicit_ordinal_then_append(self, service, resume):
        await service.create_certification({"resume_id": resume.id, "name": "x", "order_index": 7})
        appended = await service.create_certification({"resume_id": resume.id, "name": "y"})
        assert appended.order_index == 8

    async def test_find_by_parent_empty_or_invalid(self, service, resume):
        assert await service.find_experiences_by_resume_id(resume.id) == []
        assert await service.find_experiences_by_resume_id(new_key().value) == []
        assert await service.find_experiences_by_resume_id("garbage") == []
        assert await service.find_experiences_by_resume_id(None) == []

    async def test_update_merges_only_supplied_fields(self, service, resume):
        exp = await service.create_experience({
            "resume_id": resume.id,
            "company": "Acme",
            "position": "Engineer",
            "bullets": ["Shipped things"],
        })
        assert await service.update_experience(exp.id, {"position": "Staff Engineer"}) is True

        [found] = await service.find_experiences_by_resume_id(resume.id)
        assert found.company == "Acme"
        assert found.position == "Staff Engineer"
        assert found.bullets == ["Shipped things"]
        assert found.updated_at > exp.updated_at

    async def test_update_skips_none_for_required_columns(self, service, resume):
        exp = await service.create_experience({"resume_id": resume.id, "company": "Acme"})
        await service.update_experience(exp.id, {"company": None, "duration": "2020-2022"})

        [found] = await service.find_experiences_by_resume_id(resume.id)
        assert found.company == "Acme"
        assert found.duration == "2020-2022"

    async def test_update_does_not_reparent(self, service, resume):
        other = await service.resumes.create({"user_id": "u2", "title": "Other", "template": "t"})
        skill = await service.create_skill({"resume_id": resume.id, "name": "SQL"})
        await service.update_skill(skill.id, {"resume_id": other.id, "level": "Expert"})

        [found] = await service.find_skills_by_resume_id(resume.id)
        assert found.level == "Expert"
        assert await service.find_skills_by_resume_id(other.id) == []

    async def test_update_and_delete_refused(self, service):
        assert await service.update_education("zzz", {"degree": "BSc"}) is False
        assert await service.update_education(new_key().value, {"degree": "BSc"}) is False
        assert await service.delete_education("zzz") is False
        assert await service.delete_education(new_key().value) is False

    async def test_delete_is_hard(self, service, resume):
        a = await service.create_skill({"resume_id": resume.id, "name": "a"})
        b = await service.create_skill({"resume_id": resume.id, "name": "b"})

        assert await service.delete_skill(a.id) is True
        assert [s.id for s in await service.find_skills_by_resume_id(resume.id)] == [b.id]
        assert await service.section(SectionKind.SKILL).find_by_id(a.id) is None
