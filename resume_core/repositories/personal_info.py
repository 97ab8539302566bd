from typing import Any, Mapping

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from resume_core.core.errors import ResumeStoreError
from resume_core.core.identity import new_key, parse_key
from resume_core.core.logging import get_logger
from resume_core.models.sections import PersonalInfo
from resume_core.repositories.base import CollectionStore
from resume_core.schemas.sections import (
    PersonalInfoCreate,
    PersonalInfoFields,
    PersonalInfoOut,
)

logger = get_logger(__name__)


def _dialect_insert(dialect: str):
    if dialect == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
    elif dialect == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
    else:
        raise ResumeStoreError(f"atomic upsert is not available for dialect '{dialect}'")
    return insert


class PersonalInfoStore(CollectionStore[PersonalInfo, PersonalInfoOut]):
    """
    At most one row per resume. Every write goes through ``upsert``, a
    single INSERT .. ON CONFLICT (resume_id) DO UPDATE statement, so
    concurrent writers for the same resume converge on one row.
    """
    model = PersonalInfo
    record = PersonalInfoOut
    create_schema = PersonalInfoCreate
    update_schema = PersonalInfoFields
    parent_field = "resume_id"

    async def create(self, fields: Mapping[str, Any]) -> PersonalInfoOut | None:
        data = dict(fields)
        return await self.upsert(data.pop("resume_id", None), data)

    async def find_by_resume_id(self, raw_resume_id) -> PersonalInfoOut | None:
        key = parse_key(raw_resume_id)
        if not key:
            return None
        async with self.database.transaction() as s:
            row = await s.scalar(select(PersonalInfo).where(PersonalInfo.resume_id == key.value))
            return self.to_record(row) if row is not None else None

    async def upsert(
        self, raw_resume_id, fields: Mapping[str, Any], s: AsyncSession | None = None
    ) -> PersonalInfoOut | None:
        key = parse_key(raw_resume_id)
        if not key:
            return None
        changes = PersonalInfoFields.model_validate(dict(fields)).model_dump(exclude_unset=True)
        insert = _dialect_insert(self.database.dialect_name)
        now = self.database.now()

        stmt = insert(PersonalInfo).values(
            id=new_key().value,
            resume_id=key.value,
            created_at=now,
            updated_at=now,
            **changes,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[PersonalInfo.resume_id],
            set_={**changes, "updated_at": now},
        )

        async def _do(sess: AsyncSession) -> PersonalInfoOut | None:
            if not await self.resume_exists(sess, key):
                logger.info("create_refused", table=self.table, reason="missing_parent", resume_id=key.value)
                return None
            await sess.execute(stmt)
            row = await sess.scalar(
                select(PersonalInfo)
                .where(PersonalInfo.resume_id == key.value)
                .execution_options(populate_existing=True)
            )
            return self.to_record(row)

        if s is not None:
            record = await _do(s)
        else:
            async with self.database.transaction() as s2:
                record = await _do(s2)
        if record is None:
            return None

        logger.info("personal_info_upserted", resume_id=key.value, id=record.id, fields=sorted(changes))
        return record
