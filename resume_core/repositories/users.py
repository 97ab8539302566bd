from sqlalchemy import select

from resume_core.models.user import User
from resume_core.repositories.base import CollectionStore
from resume_core.schemas.user import UserCreate, UserOut, UserUpdate


class UserStore(CollectionStore[User, UserOut]):
    model = User
    record = UserOut
    create_schema = UserCreate
    update_schema = UserUpdate

    async def find_by_email(self, email: str) -> UserOut | None:
        if not email:
            return None
        async with self.database.transaction() as s:
            row = await s.scalar(select(User).where(User.email == email))
            return self.to_record(row) if row is not None else None
