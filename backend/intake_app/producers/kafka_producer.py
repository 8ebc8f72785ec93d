"""Kafka producer announcing submission events to operators"""

import json
import logging
from typing import List

from kafka import KafkaProducer

from intake_app.bot_submission_service.schema import SubmissionResponse
from intake_app.interfaces.producer import IProducer

logger = logging.getLogger(__name__)


class KafkaProducerImpl(IProducer):

    def __init__(self, bootstrap_servers: List[str], topic: str = "bot-submissions"):
        self.bootstrap_servers = bootstrap_servers
        self.topic = topic
        try:
            self.producer = KafkaProducer(
                bootstrap_servers=bootstrap_servers,
                key_serializer=lambda k: k.encode('utf-8'),
                value_serializer=lambda v: json.dumps(v).encode('utf-8'),
                acks='all',
                retries=3,
                max_in_flight_requests_per_connection=1,
            )
            logger.info(f"Kafka producer connected, topic '{topic}'")
        except Exception as e:
            logger.warning(f"Could not connect to Kafka: {e}")
            self.producer = None

    def produce(self, event: str, submission: SubmissionResponse) -> None:
        if not self.producer:
            logger.warning(f"[{submission.reference_code}] Kafka unavailable, {event} not published")
            return

        message = {
            'event': event,
            'submission': submission.model_dump(mode='json', by_alias=True),
        }
        try:
            future = self.producer.send(self.topic, key=submission.reference_code, value=message)
            future.get(timeout=5)
            logger.info(f"[{submission.reference_code}] Published {event} to Kafka")
        except Exception as e:
            # The submission is already stored; only the notification is lost
            logger.error(f"[{submission.reference_code}] Failed to publish {event} to Kafka: {e}")

    def is_available(self) -> bool:
        return self.producer is not None

    def close(self) -> None:
        if self.producer:
            self.producer.flush()
            self.producer.close()
            logger.info("Kafka producer closed")
