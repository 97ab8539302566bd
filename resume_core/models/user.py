from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column
from resume_core.db.base import Base, KeyedMixin

class User(KeyedMixin, Base):
    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    name: Mapped[str | None] = mapped_column(String(255))
    first_name: Mapped[str | None] = mapped_column(String(120))
    last_name: Mapped[str | None] = mapped_column(String(120))
    picture: Mapped[str | None] = mapped_column(String(1024))
    provider: Mapped[str] = mapped_column(String(32), nullable=False, default="local")
    # OAuth users have no password
    password_hash: Mapped[str | None] = mapped_column(String(255))
