from abc import ABC, abstractmethod
from typing import List, Optional

from intake_app.bot_submission_service.schema import SubmissionCreate, SubmissionResponse


class Repository(ABC):
    """Durable storage of bot submissions, keyed by id and by reference code."""

    @abstractmethod
    def init_db(self) -> None:
        pass

    @abstractmethod
    def get_by_id(self, submission_id: int) -> Optional[SubmissionResponse]:
        pass

    @abstractmethod
    def get_by_reference_code(self, reference_code: str) -> Optional[SubmissionResponse]:
        pass

    @abstractmethod
    def get_all_ordered_by_creation(self) -> List[SubmissionResponse]:
        pass

    @abstractmethod
    def get_by_requester_email(self, email: str) -> List[SubmissionResponse]:
        pass

    @abstractmethod
    def create(self, submission: SubmissionCreate, reference_code: str, status: str) -> SubmissionResponse:
        """Insert a row; storage assigns id and created_at."""
        pass

    @abstractmethod
    def update_status(self, submission_id: int, status: str) -> Optional[SubmissionResponse]:
        pass
