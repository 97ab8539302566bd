"""Generic async CRUD store shared by every table."""
from typing import Any, Generic, Mapping, TypeVar

from pydantic import BaseModel
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from resume_core.core.identity import Key, new_key, parse_key
from resume_core.core.logging import get_logger
from resume_core.db.base import Base
from resume_core.db.session import Database
from resume_core.models.resume import Resume
from resume_core.models.sections import SectionKind
from resume_core.services.ordering import OrderingPolicy

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)
RecordT = TypeVar("RecordT", bound=BaseModel)


class CollectionStore(Generic[ModelT, RecordT]):
    """
    CRUD over one table, returning pydantic records instead of ORM rows.

    Subclasses bind:
      model          ORM class
      record         read schema built from ORM rows
      create_schema  validates ``create`` input
      update_schema  validates ``update`` input (partial)
      parent_field   back-reference to the owning resume, if any
      kind           SectionKind for ordered list tables

    Raw identifiers are parsed with ``parse_key``; a malformed id resolves to
    None / False / [] without touching the database.
    """

    model: type[ModelT]
    record: type[RecordT]
    create_schema: type[BaseModel]
    update_schema: type[BaseModel]
    parent_field: str | None = None
    kind: SectionKind | None = None

    def __init__(self, database: Database, ordering: OrderingPolicy | None = None):
        self.database = database
        self.ordering = ordering or OrderingPolicy(database)

    @property
    def table(self) -> str:
        return self.model.__tablename__

    def to_record(self, row: ModelT) -> RecordT:
        return self.record.model_validate(row)

    # ---------- Create ----------
    async def create(self, fields: Mapping[str, Any]) -> RecordT | None:
        data = dict(fields)
        parent = None
        if self.parent_field:
            parent = parse_key(data.get(self.parent_field))
            if not parent:
                logger.info("create_refused", table=self.table, reason="invalid_parent")
                return None
            data[self.parent_field] = parent.value

        values = self.create_schema.model_validate(data).model_dump()

        async with self.database.transaction() as s:
            if parent is not None and not await self.resume_exists(s, parent):
                logger.info("create_refused", table=self.table, reason="missing_parent", resume_id=parent.value)
                return None
            if self.kind is not None and values.get("order_index") is None:
                values["order_index"] = await self.ordering.next_ordinal(parent, self.kind, s=s)
            row = self._new_row(values)
            s.add(row)

        logger.info("record_created", table=self.table, id=row.id)
        return self.to_record(row)

    def _new_row(self, values: dict[str, Any]) -> ModelT:
        now = self.database.now()
        return self.model(id=new_key().value, created_at=now, updated_at=now, **values)

    @staticmethod
    async def resume_exists(s: AsyncSession, key: Key) -> bool:
        """
        Whether the resume exists, locking its row until ``s`` ends so that
        writers under one resume take turns (FOR UPDATE is dropped on SQLite,
        where BEGIN IMMEDIATE already serializes them).
        """
        found = await s.scalar(select(Resume.id).where(Resume.id == key.value).with_for_update())
        return found is not None

    # ---------- Read ----------
    async def find_by_id(self, raw_id) -> RecordT | None:
        key = parse_key(raw_id)
        if not key:
            return None
        async with self.database.transaction() as s:
            row = await s.get(self.model, key.value)
            return self.to_record(row) if row is not None else None

    async def find_by_parent(self, raw_parent_id) -> list[RecordT]:
        """
        All rows under one resume. Ordered tables sort by order_index, then
        insertion order.
        """
        if not self.parent_field:
            raise TypeError(f"{self.table} has no parent resume")
        key = parse_key(raw_parent_id)
        if not key:
            return []
        parent_col = getattr(self.model, self.parent_field)
        stmt = select(self.model).where(parent_col == key.value)
        if self.kind is not None:
            stmt = stmt.order_by(self.model.order_index, self.model.created_at)
        else:
            stmt = stmt.order_by(self.model.created_at)
        async with self.database.transaction() as s:
            rows = (await s.scalars(stmt)).all()
            return [self.to_record(r) for r in rows]

    # ---------- Update / delete ----------
    def _changes(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        """Only the supplied fields; None is dropped for NOT NULL columns."""
        supplied = self.update_schema.model_validate(dict(fields)).model_dump(exclude_unset=True)
        columns = self.model.__table__.c
        return {
            name: value for name, value in supplied.items()
            if value is not None or columns[name].nullable
        }

    async def update(self, raw_id, fields: Mapping[str, Any], s: AsyncSession | None = None) -> bool:
        key = parse_key(raw_id)
        if not key:
            return False
        changes = self._changes(fields)
        changes["updated_at"] = self.database.now()
        stmt = update(self.model).where(self.model.id == key.value).values(**changes)
        if s is not None:
            result = await s.execute(stmt)
        else:
            async with self.database.transaction() as s2:
                result = await s2.execute(stmt)
        updated = result.rowcount > 0
        logger.info("record_updated", table=self.table, id=key.value, found=updated, fields=sorted(changes))
        return updated

    async def delete(self, raw_id) -> bool:
        key = parse_key(raw_id)
        if not key:
            return False
        async with self.database.transaction() as s:
            result = await s.execute(delete(self.model).where(self.model.id == key.value))
        deleted = result.rowcount > 0
        logger.info("record_deleted", table=self.table, id=key.value, found=deleted)
        return deleted
