"""Application configuration loaded from environment variables."""

import os
from dataclasses import dataclass, field
from typing import List


def _env_flag(name: str, default: str = "") -> bool:
    return os.getenv(name, default).lower() in ('true', '1', 'yes')


def _env_list(name: str, default: str) -> List[str]:
    return [item.strip() for item in os.getenv(name, default).split(',') if item.strip()]


@dataclass
class Config:
    # Server
    host: str = field(default_factory=lambda: os.getenv("HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    allowed_origins: List[str] = field(
        default_factory=lambda: _env_list("ALLOWED_ORIGINS", "http://localhost:3000,http://localhost:5173")
    )

    # Storage
    # SQLite for simplicity, any SQLAlchemy URL (e.g. PostgreSQL) works in production
    database_url: str = field(default_factory=lambda: os.getenv("DATABASE_URL", "sqlite:///./submissions.db"))

    # Reference codes
    reference_code_attempts: int = field(
        default_factory=lambda: int(os.getenv("REFERENCE_CODE_ATTEMPTS", "3"))
    )

    # Events
    use_kafka: bool = field(default_factory=lambda: _env_flag("USE_KAFKA"))
    kafka_bootstrap_servers: List[str] = field(
        default_factory=lambda: _env_list("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092")
    )
    kafka_topic: str = field(default_factory=lambda: os.getenv("KAFKA_TOPIC", "bot-submissions"))

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from environment."""
        return cls()
