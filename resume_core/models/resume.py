from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column
from resume_core.db.base import Base, KeyedMixin

class Resume(KeyedMixin, Base):
    """
    Aggregate root. Sections point back at it through resume_id; the
    resume itself holds no references to them.
    """
    __tablename__ = "resumes"
    __table_args__ = (Index("ix_resumes_updated_at", "updated_at"),)

    # Owner's external identifier, kept opaque (no FK to users)
    user_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    template: Mapped[str] = mapped_column(String(64), nullable=False)
