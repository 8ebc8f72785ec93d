"""Producer used when Kafka is disabled"""

import logging

from intake_app.bot_submission_service.schema import SubmissionResponse
from intake_app.interfaces.producer import IProducer

logger = logging.getLogger(__name__)


class LogProducer(IProducer):
    """Writes submission events to the application log instead of a broker"""

    def produce(self, event: str, submission: SubmissionResponse) -> None:
        logger.info(f"[{submission.reference_code}] {event} (status: {submission.status})")

    def is_available(self) -> bool:
        return True
