import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from intake_app.bot_submission_service.schema import SubmissionCreate, SubmissionResponse
from intake_app.database import Database
from intake_app.errors import CreationFailed, ReferenceCodeCollision, StorageUnavailable
from intake_app.models import BotSubmission, SubmissionStatus
from intake_app.repositories.repository import Repository

logger = logging.getLogger(__name__)


class SubmissionRepository(Repository):
    """SQLAlchemy-backed storage for the bot_submissions table."""

    def __init__(self, database: Database):
        self.database = database

    def init_db(self) -> None:
        try:
            self.database.init_db()
        except SQLAlchemyError as e:
            raise StorageUnavailable() from e

    def get_by_id(self, submission_id: int) -> Optional[SubmissionResponse]:
        try:
            with self.database.session() as db:
                submission = db.get(BotSubmission, submission_id)
                return SubmissionResponse.model_validate(submission) if submission else None
        except SQLAlchemyError as e:
            logger.error(f"[{submission_id}] Failed to load submission: {e}")
            raise StorageUnavailable() from e

    def get_by_reference_code(self, reference_code: str) -> Optional[SubmissionResponse]:
        try:
            with self.database.session() as db:
                submission = db.execute(
                    select(BotSubmission).where(BotSubmission.reference_code == reference_code)
                ).scalar_one_or_none()
                return SubmissionResponse.model_validate(submission) if submission else None
        except SQLAlchemyError as e:
            logger.error(f"[{reference_code}] Failed to load submission: {e}")
            raise StorageUnavailable() from e

    def get_all_ordered_by_creation(self) -> List[SubmissionResponse]:
        return self._list(select(BotSubmission))

    def get_by_requester_email(self, email: str) -> List[SubmissionResponse]:
        return self._list(select(BotSubmission).where(BotSubmission.requester_email == email))

    def _list(self, stmt) -> List[SubmissionResponse]:
        stmt = stmt.order_by(BotSubmission.created_at.asc(), BotSubmission.id.asc())
        try:
            with self.database.session() as db:
                rows = db.execute(stmt).scalars().all()
                return [SubmissionResponse.model_validate(row) for row in rows]
        except SQLAlchemyError as e:
            logger.error(f"Failed to list submissions: {e}")
            raise StorageUnavailable() from e

    def create(
        self,
        submission: SubmissionCreate,
        reference_code: str,
        status: str = SubmissionStatus.PENDING.value,
    ) -> SubmissionResponse:
        row = BotSubmission(
            reference_code=reference_code,
            status=status,
            **submission.model_dump(),
        )
        try:
            with self.database.session() as db:
                db.add(row)
                db.flush()
                db.refresh(row)
                created = SubmissionResponse.model_validate(row)
        except IntegrityError as e:
            if self._reference_code_taken(reference_code):
                logger.warning(f"[{reference_code}] Reference code already in use")
                raise ReferenceCodeCollision() from e
            logger.error(f"[{reference_code}] Constraint violation on insert: {e}")
            raise CreationFailed() from e
        except SQLAlchemyError as e:
            logger.error(f"[{reference_code}] Failed to insert submission: {e}")
            raise StorageUnavailable() from e

        logger.info(f"[{reference_code}] Created submission in database (id={created.id})")
        return created

    def _reference_code_taken(self, reference_code: str) -> bool:
        return self.get_by_reference_code(reference_code) is not None

    def update_status(self, submission_id: int, status: str) -> Optional[SubmissionResponse]:
        try:
            with self.database.session() as db:
                submission = db.get(BotSubmission, submission_id)
                if not submission:
                    return None
                submission.status = status
                db.flush()
                db.refresh(submission)
                updated = SubmissionResponse.model_validate(submission)
        except SQLAlchemyError as e:
            logger.error(f"[{submission_id}] Failed to update status: {e}")
            raise StorageUnavailable() from e

        logger.info(f"[{updated.reference_code}] Status set to {status}")
        return updated
