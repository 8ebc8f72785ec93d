
import logging

from intake_app.bot_submission_service.bot_submission_service import BotSubmissionService
from intake_app.config import Config
from intake_app.database import Database
from intake_app.interfaces.producer import IProducer
from intake_app.producers import KafkaProducerImpl, LogProducer
from intake_app.repositories import SubmissionRepository
from intake_app.repositories.repository import Repository
from intake_app.validators import SubmissionValidator

logger = logging.getLogger(__name__)


class Factory:
    """Builds the runtime objects for one application instance."""

    @staticmethod
    def get_database(config: Config) -> Database:
        return Database(config.database_url)

    @staticmethod
    def get_producer(config: Config) -> IProducer:
        if config.use_kafka:
            logger.info("Using Kafka producer")
            return KafkaProducerImpl(config.kafka_bootstrap_servers, config.kafka_topic)
        logger.info("Using log producer")
        return LogProducer()

    @staticmethod
    def get_repository(database: Database) -> Repository:
        return SubmissionRepository(database)

    @staticmethod
    def get_service(config: Config, repository: Repository, producer: IProducer) -> BotSubmissionService:
        return BotSubmissionService(
            repository=repository,
            validator=SubmissionValidator(),
            producer=producer,
            reference_code_attempts=config.reference_code_attempts,
        )
