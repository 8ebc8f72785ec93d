from abc import ABC, abstractmethod

from intake_app.bot_submission_service.schema import SubmissionResponse

SUBMISSION_CREATED = "submission.created"
SUBMISSION_STATUS_UPDATED = "submission.status_updated"


class IProducer(ABC):
    """Publishes submission lifecycle events for operators."""

    @abstractmethod
    def produce(self, event: str, submission: SubmissionResponse) -> None:
        pass

    @abstractmethod
    def is_available(self) -> bool:
        pass

    def close(self) -> None:
        pass
