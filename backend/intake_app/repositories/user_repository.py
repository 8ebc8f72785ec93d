import logging
from typing import Optional

from pydantic import BaseModel, ConfigDict
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from intake_app.database import Database
from intake_app.errors import CreationFailed, StorageUnavailable
from intake_app.models import User

logger = logging.getLogger(__name__)


class UserCreate(BaseModel):
    username: str
    password: str


class UserRead(UserCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int


class UserRepository:
    """Access to the users table. Not used by the submission flow."""

    def __init__(self, database: Database):
        self.database = database

    def get(self, user_id: int) -> Optional[UserRead]:
        try:
            with self.database.session() as db:
                user = db.get(User, user_id)
                return UserRead.model_validate(user) if user else None
        except SQLAlchemyError as e:
            raise StorageUnavailable() from e

    def get_by_username(self, username: str) -> Optional[UserRead]:
        try:
            with self.database.session() as db:
                user = db.execute(select(User).where(User.username == username)).scalar_one_or_none()
                return UserRead.model_validate(user) if user else None
        except SQLAlchemyError as e:
            raise StorageUnavailable() from e

    def create(self, data: UserCreate) -> UserRead:
        user = User(username=data.username, password=data.password)
        try:
            with self.database.session() as db:
                db.add(user)
                db.flush()
                db.refresh(user)
                return UserRead.model_validate(user)
        except IntegrityError as e:
            logger.warning(f"[{data.username}] Username already taken")
            raise CreationFailed(f"Username {data.username} already exists") from e
        except SQLAlchemyError as e:
            raise StorageUnavailable() from e
