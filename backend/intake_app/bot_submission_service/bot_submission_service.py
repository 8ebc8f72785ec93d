import logging
import re
from typing import Any, Callable, List, Optional, Union

from intake_app.bot_submission_service.reference_code import generate_reference_code
from intake_app.bot_submission_service.schema import SubmissionCreate, SubmissionResponse, SubmissionStatus
from intake_app.errors import (
    CreationFailed,
    InvalidStatus,
    InvalidSubmissionId,
    ReferenceCodeCollision,
    SubmissionNotFound,
    ValidationFailed,
)
from intake_app.interfaces.producer import SUBMISSION_CREATED, SUBMISSION_STATUS_UPDATED, IProducer
from intake_app.interfaces.validator import ISubmissionValidator
from intake_app.repositories.repository import Repository

logger = logging.getLogger(__name__)

DEFAULT_REFERENCE_CODE_ATTEMPTS = 3
# Largest id an integer primary key can hold
MAX_SUBMISSION_ID = 2 ** 63 - 1
_ID_PATTERN = re.compile(r"^[1-9][0-9]*$")

KNOWN_STATUSES = {status.value for status in SubmissionStatus}


def parse_submission_id(value: Union[int, str]) -> int:
    """Accept a positive integer or its decimal string form."""
    if isinstance(value, bool):
        raise InvalidSubmissionId()
    if isinstance(value, int):
        if value < 1:
            raise InvalidSubmissionId()
        return value
    if isinstance(value, str) and _ID_PATTERN.match(value.strip()):
        digits = value.strip()
        # Well-formed but too long to name a row; also keeps int() under its digit limit
        if len(digits) > len(str(MAX_SUBMISSION_ID)):
            raise SubmissionNotFound()
        return int(digits)
    raise InvalidSubmissionId()


class BotSubmissionService:
    """
    Create, read, list and update the status of bot customization requests.

    Flow for create:
    1. Validate the raw payload (no storage access on failure)
    2. Generate a reference code
    3. Insert with status "pending"; on a reference code collision retry with
       a fresh code, up to reference_code_attempts inserts in total
    4. Publish submission.created
    """

    def __init__(
        self,
        repository: Repository,
        validator: ISubmissionValidator,
        producer: Optional[IProducer] = None,
        reference_code_attempts: int = DEFAULT_REFERENCE_CODE_ATTEMPTS,
        code_generator: Callable[[], str] = generate_reference_code,
    ):
        self.repository = repository
        self.validator = validator
        self.producer = producer
        self.reference_code_attempts = max(1, reference_code_attempts)
        self.code_generator = code_generator

    def list_submissions(self, requester_email: Optional[str] = None) -> List[SubmissionResponse]:
        if requester_email:
            return self.repository.get_by_requester_email(requester_email)
        return self.repository.get_all_ordered_by_creation()

    def get_submission(self, submission_id: Union[int, str]) -> SubmissionResponse:
        parsed_id = parse_submission_id(submission_id)
        if parsed_id > MAX_SUBMISSION_ID:
            raise SubmissionNotFound()

        submission = self.repository.get_by_id(parsed_id)
        if not submission:
            raise SubmissionNotFound()
        return submission

    def get_submission_by_reference(self, reference_code: str) -> SubmissionResponse:
        submission = self.repository.get_by_reference_code(reference_code.strip().upper())
        if not submission:
            raise SubmissionNotFound()
        return submission

    def validate_submission(self, raw_input: Any) -> SubmissionCreate:
        result = self.validator.validate(raw_input)
        if not result.is_valid:
            raise ValidationFailed(result.errors)
        return result.submission

    def create_submission(self, raw_input: Any) -> SubmissionResponse:
        data = self.validate_submission(raw_input)

        for attempt in range(1, self.reference_code_attempts + 1):
            reference_code = self.code_generator()
            try:
                submission = self.repository.create(data, reference_code, SubmissionStatus.PENDING.value)
                break
            except ReferenceCodeCollision:
                logger.warning(
                    f"[{reference_code}] Reference code collision "
                    f"(attempt {attempt}/{self.reference_code_attempts})"
                )
        else:
            logger.error(f"No free reference code after {self.reference_code_attempts} attempts")
            raise CreationFailed()

        self._publish(SUBMISSION_CREATED, submission)
        return submission

    def update_submission_status(self, submission_id: Union[int, str], status: Any) -> SubmissionResponse:
        if not isinstance(status, str) or not status.strip():
            raise InvalidStatus()

        parsed_id = parse_submission_id(submission_id)
        if parsed_id > MAX_SUBMISSION_ID:
            raise SubmissionNotFound()

        if status not in KNOWN_STATUSES:
            logger.warning(f"[{parsed_id}] Non-standard status '{status}' requested")

        submission = self.repository.update_status(parsed_id, status)
        if not submission:
            raise SubmissionNotFound()

        self._publish(SUBMISSION_STATUS_UPDATED, submission)
        return submission

    def _publish(self, event: str, submission: SubmissionResponse) -> None:
        if not self.producer:
            return
        try:
            self.producer.produce(event, submission)
        except Exception as e:
            logger.error(f"[{submission.reference_code}] Failed to publish {event}: {e}")
