"""
Full-resume read: the root plus all six sections in one document.

The sections live in separate tables with no join between them, so after the
root is found the six reads are issued concurrently and joined. Either every
section loads and a complete FullResume comes back, or the call raises; a
missing or malformed id gives NotFound.
"""
import asyncio
from dataclasses import dataclass, field
from typing import Any, Awaitable, Mapping

from resume_core.core.errors import AssemblyTimeout
from resume_core.core.identity import Key, parse_key
from resume_core.core.logging import get_logger
from resume_core.models.sections import SectionKind
from resume_core.repositories.personal_info import PersonalInfoStore
from resume_core.repositories.resumes import ResumeStore
from resume_core.repositories.sections import OrderedSectionStore
from resume_core.schemas.resume import FullResume

logger = get_logger(__name__)

INVALID_IDENTITY = "invalid_identity"
MISSING = "missing"


@dataclass(frozen=True)
class NotFound:
    """Falsy result for a resume that cannot be read."""
    raw_id: object = field(compare=False)
    reason: str = MISSING

    def __bool__(self) -> bool:
        return False


class AggregateAssembler:
    def __init__(
        self,
        resumes: ResumeStore,
        personal_info: PersonalInfoStore,
        sections: Mapping[SectionKind, OrderedSectionStore],
        timeout: float | None = None,
    ):
        self.resumes = resumes
        self.personal_info = personal_info
        self.sections = sections
        self.timeout = timeout

    async def get_full_resume(self, raw_id) -> FullResume | NotFound:
        key = parse_key(raw_id)
        if not key:
            return NotFound(raw_id, INVALID_IDENTITY)

        resume = await self.resumes.find_by_id(key)
        if resume is None:
            return NotFound(raw_id, MISSING)

        fetches = {"personalInfo": self.personal_info.find_by_resume_id(key)}
        for kind in SectionKind:
            fetches[kind.value] = self.sections[kind].find_by_parent(key)
        results = await self._gather(key, fetches)

        personal_info = results.pop("personalInfo")
        return FullResume(
            **resume.model_dump(),
            personal_info=personal_info.model_dump() if personal_info is not None else {},
            **{section: rows or [] for section, rows in results.items()},
        )

    async def _gather(self, key: Key, fetches: Mapping[str, Awaitable[Any]]) -> dict[str, Any]:
        """
        Run every fetch concurrently and wait for all of them. The first
        failure cancels the rest and propagates.
        """
        tasks = {
            section: asyncio.ensure_future(self._bounded(key, section, fetch))
            for section, fetch in fetches.items()
        }
        try:
            values = await asyncio.gather(*tasks.values())
        except BaseException:
            for task in tasks.values():
                task.cancel()
            await asyncio.gather(*tasks.values(), return_exceptions=True)
            raise
        return dict(zip(tasks.keys(), values))

    async def _bounded(self, key: Key, section: str, fetch: Awaitable[Any]) -> Any:
        try:
            return await asyncio.wait_for(fetch, timeout=self.timeout)
        except asyncio.TimeoutError as exc:
            logger.error("section_fetch_timed_out", resume_id=key.value, section=section, timeout=self.timeout)
            raise AssemblyTimeout(key.value, section, exc) from exc
        except Exception as exc:
            logger.error("section_fetch_failed", resume_id=key.value, section=section, error=repr(exc))
            raise
