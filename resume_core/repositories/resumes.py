from sqlalchemy import delete, select

from resume_core.core.identity import parse_key
from resume_core.core.logging import get_logger
from resume_core.models.resume import Resume
from resume_core.models.sections import SECTION_MODELS, PersonalInfo
from resume_core.repositories.base import CollectionStore
from resume_core.schemas.resume import ResumeCreate, ResumeOut, ResumeUpdate

logger = get_logger(__name__)


class ResumeStore(CollectionStore[Resume, ResumeOut]):
    model = Resume
    record = ResumeOut
    create_schema = ResumeCreate
    update_schema = ResumeUpdate

    async def find_by_user_id(self, user_id: str) -> list[ResumeOut]:
        """A user's resumes, most recently modified first."""
        if not isinstance(user_id, str) or not user_id:
            return []
        stmt = (
            select(Resume)
            .where(Resume.user_id == user_id)
            .order_by(Resume.updated_at.desc())
        )
        async with self.database.transaction() as s:
            rows = (await s.scalars(stmt)).all()
            return [self.to_record(r) for r in rows]

    async def delete(self, raw_id) -> bool:
        """Delete the resume and every section row that points at it, atomically."""
        key = parse_key(raw_id)
        if not key:
            return False
        removed = {}
        async with self.database.transaction() as s:
            for model in (PersonalInfo, *SECTION_MODELS.values()):
                result = await s.execute(delete(model).where(model.resume_id == key.value))
                removed[model.__tablename__] = result.rowcount
            result = await s.execute(delete(Resume).where(Resume.id == key.value))
        deleted = result.rowcount > 0
        logger.info("resume_deleted", id=key.value, found=deleted, dependents=removed)
        return deleted
