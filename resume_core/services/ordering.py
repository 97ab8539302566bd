"""
Ordinal positions for list sections.

Items of one kind under one resume are displayed by ascending ``order_index``
(ties fall back to insertion order). New items are appended unless the caller
passes an explicit ordinal; ``reorder`` rewrites the whole list at once.
"""
from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from resume_core.core.errors import OrderingError
from resume_core.core.identity import Key, parse_key
from resume_core.core.logging import get_logger
from resume_core.db.session import Database
from resume_core.models.resume import Resume
from resume_core.models.sections import SectionKind

logger = get_logger(__name__)


class OrderingPolicy:
    def __init__(self, database: Database):
        self.database = database

    async def next_ordinal(self, parent: Key | str, kind: SectionKind | str, s: AsyncSession | None = None) -> int:
        """
        One past the current max order_index for (parent, kind), or 0.
        Pass the caller session ``s`` when computing inside a write; the
        caller must already hold the parent resume lock
        (``CollectionStore.resume_exists``) so concurrent appends queue up
        instead of reading the same max.
        """
        key = parse_key(parent)
        if not key:
            return 0
        model = SectionKind(kind).model

        async def _do(sess: AsyncSession) -> int:
            current = await sess.scalar(
                select(func.max(model.order_index)).where(model.resume_id == key.value)
            )
            return 0 if current is None else current + 1

        if s is not None:
            return await _do(s)
        async with self.database.transaction() as s2:
            return await _do(s2)

    async def reorder(self, parent: Key | str, kind: SectionKind | str, ordered_ids: list) -> bool:
        """
        Set each item's order_index to its 0-based position in ``ordered_ids``.
        The sequence must name every item of ``kind`` under ``parent`` exactly
        once. Returns False without writing if any identifier is malformed.
        """
        parent_key = parse_key(parent)
        keys = [parse_key(raw) for raw in ordered_ids]
        if not parent_key or not all(keys):
            return False

        kind = SectionKind(kind)
        model = kind.model
        wanted = [k.value for k in keys]

        async with self.database.transaction() as s:
            # Serialize with appends and other reorders under this resume
            await s.scalar(select(Resume.id).where(Resume.id == parent_key.value).with_for_update())
            existing = set(
                (await s.scalars(select(model.id).where(model.resume_id == parent_key.value))).all()
            )
            if len(set(wanted)) != len(wanted):
                raise OrderingError(f"duplicate ids in {kind.value} order for resume {parent_key}")
            if set(wanted) != existing:
                missing = sorted(existing - set(wanted))
                extra = sorted(set(wanted) - existing)
                raise OrderingError(
                    f"{kind.value} order for resume {parent_key} must list every item exactly once "
                    f"(missing={missing}, unknown={extra})"
                )

            now = self.database.now()
            for position, item_id in enumerate(wanted):
                await s.execute(
                    update(model)
                    .where(model.id == item_id)
                    .values(order_index=position, updated_at=now)
                )

        logger.info("section_reordered", resume_id=parent_key.value, kind=kind.value, count=len(wanted))
        return True
