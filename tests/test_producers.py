"""
Tests for submission event producers and their selection.
"""

import json
from datetime import datetime

import pytest

from intake_app.bot_submission_service.schema import SubmissionResponse
from intake_app.config import Config
from intake_app.infra.factory import Factory
from intake_app.interfaces.producer import SUBMISSION_CREATED
from intake_app.producers import KafkaProducerImpl, LogProducer
from intake_app.producers import kafka_producer as kafka_module


class FakeFuture:
    def get(self, timeout=None):
        return None


class FakeKafkaProducer:
    """Stands in for kafka.KafkaProducer, recording sends."""

    def __init__(self, **kwargs):
        self.config = kwargs
        self.sent = []
        self.closed = False

    def send(self, topic, key=None, value=None):
        self.sent.append((
            topic,
            self.config["key_serializer"](key),
            self.config["value_serializer"](value),
        ))
        return FakeFuture()

    def flush(self):
        pass

    def close(self):
        self.closed = True


@pytest.fixture
def submission():
    return SubmissionResponse(
        id=1,
        reference_code="BOT-AAAAA-BBBBB",
        requester_name="Jo",
        requester_email="jo@example.com",
        equity_indices=["DJIA"],
        premium_access="roboClient",
        status="pending",
        created_at=datetime(2024, 5, 1, 12, 30),
    )


class TestKafkaProducer:

    def test_publishes_wire_submission(self, monkeypatch, submission):
        monkeypatch.setattr(kafka_module, "KafkaProducer", FakeKafkaProducer)
        producer = KafkaProducerImpl(["localhost:9092"], topic="bot-submissions")

        producer.produce(SUBMISSION_CREATED, submission)

        topic, key, value = producer.producer.sent[0]
        message = json.loads(value.decode("utf-8"))
        assert topic == "bot-submissions"
        assert key == b"BOT-AAAAA-BBBBB"
        assert message["event"] == SUBMISSION_CREATED
        assert message["submission"]["referenceCode"] == "BOT-AAAAA-BBBBB"
        assert message["submission"]["createdAt"] == "2024-05-01T12:30:00Z"

    def test_unreachable_broker_disables_producer(self, monkeypatch, submission):
        def refuse(**kwargs):
            raise ConnectionError("no brokers")

        monkeypatch.setattr(kafka_module, "KafkaProducer", refuse)
        producer = KafkaProducerImpl(["localhost:9092"])

        assert not producer.is_available()
        producer.produce(SUBMISSION_CREATED, submission)
        producer.close()

    def test_send_failure_is_logged_not_raised(self, monkeypatch, submission):
        class FailingProducer(FakeKafkaProducer):
            def send(self, topic, key=None, value=None):
                raise TimeoutError("broker timeout")

        monkeypatch.setattr(kafka_module, "KafkaProducer", FailingProducer)
        producer = KafkaProducerImpl(["localhost:9092"])

        producer.produce(SUBMISSION_CREATED, submission)

    def test_close_closes_client(self, monkeypatch):
        monkeypatch.setattr(kafka_module, "KafkaProducer", FakeKafkaProducer)
        producer = KafkaProducerImpl(["localhost:9092"])

        producer.close()

        assert producer.producer.closed


class TestFactory:

    def test_log_producer_by_default(self):
        producer = Factory.get_producer(Config(use_kafka=False))

        assert isinstance(producer, LogProducer)
        assert producer.is_available()

    def test_kafka_producer_when_enabled(self, monkeypatch):
        monkeypatch.setattr(kafka_module, "KafkaProducer", FakeKafkaProducer)

        producer = Factory.get_producer(Config(use_kafka=True, kafka_topic="events"))

        assert isinstance(producer, KafkaProducerImpl)
        assert producer.topic == "events"

    def test_service_wired_with_configured_attempts(self, tmp_path):
        config = Config(database_url=f"sqlite:///{tmp_path / 'f.db'}", reference_code_attempts=5)
        database = Factory.get_database(config)
        repository = Factory.get_repository(database)

        service = Factory.get_service(config, repository, LogProducer())

        assert service.reference_code_attempts == 5
        assert service.repository is repository
        database.dispose()


def test_config_reads_environment(monkeypatch):
    monkeypatch.setenv("USE_KAFKA", "yes")
    monkeypatch.setenv("KAFKA_BOOTSTRAP_SERVERS", "k1:9092, k2:9092")
    monkeypatch.setenv("REFERENCE_CODE_ATTEMPTS", "4")
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://intake.example.com")

    config = Config.load()

    assert config.use_kafka
    assert config.kafka_bootstrap_servers == ["k1:9092", "k2:9092"]
    assert config.reference_code_attempts == 4
    assert config.allowed_origins == ["https://intake.example.com"]
