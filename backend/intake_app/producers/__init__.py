from intake_app.producers.kafka_producer import KafkaProducerImpl
from intake_app.producers.log_producer import LogProducer

__all__ = ["KafkaProducerImpl", "LogProducer"]
