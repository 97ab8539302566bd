"""Error taxonomy for the resume store.

Invalid identifiers and missing records are not exceptions here: they resolve
to ``None`` / ``False`` / ``[]`` (or ``NotFound`` for the aggregate read).
Everything below is raised to the caller unchanged.
"""


class ResumeStoreError(Exception):
    """Base class for errors raised by resume_core."""


class StoreUnavailable(ResumeStoreError):
    """The backing database cannot serve requests (network, auth, disconnect)."""


class PartialCascadeFailure(ResumeStoreError):
    """A cascade create failed after the resume root was written."""

    def __init__(
        self,
        resume_id: str,
        completed_steps: list[str],
        failed_step: str,
        cause: BaseException,
        compensated: bool = False,
        compensation_error: BaseException | None = None,
    ):
        self.resume_id = resume_id
        self.completed_steps = list(completed_steps)
        self.failed_step = failed_step
        self.cause = cause
        self.compensated = compensated
        self.compensation_error = compensation_error
        super().__init__(
            f"cascade create for resume {resume_id} failed at step '{failed_step}' "
            f"after {self.completed_steps} (compensated={compensated}): {cause!r}"
        )


class AssemblyError(ResumeStoreError):
    """A section read could not complete while assembling a full resume."""

    def __init__(self, resume_id: str, section: str, cause: BaseException):
        self.resume_id = resume_id
        self.section = section
        self.cause = cause
        super().__init__(f"failed to load '{section}' for resume {resume_id}: {cause!r}")


class AssemblyTimeout(AssemblyError):
    """A section read exceeded SECTION_FETCH_TIMEOUT_SECONDS."""


class OrderingError(ResumeStoreError, ValueError):
    """A reorder request does not name exactly the items under the parent."""
