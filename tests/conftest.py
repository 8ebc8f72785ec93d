"""
Shared fixtures for the intake API tests.

Every test gets its own SQLite file under pytest's tmp_path.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from intake_app.bot_submission_service.bot_submission_service import BotSubmissionService
from intake_app.config import Config
from intake_app.database import Database
from intake_app.interfaces.producer import IProducer
from intake_app.repositories import SubmissionRepository, UserRepository
from intake_app.validators import SubmissionValidator
from main import create_app


class RecordingProducer(IProducer):
    """Collects published events in memory."""

    def __init__(self):
        self.events = []

    def produce(self, event, submission):
        self.events.append((event, submission))

    def is_available(self):
        return True


# =============================================================================
# Storage
# =============================================================================


@pytest.fixture
def database(tmp_path):
    db = Database(f"sqlite:///{tmp_path / 'submissions.db'}")
    yield db
    db.dispose()


@pytest.fixture
def repository(database):
    repository = SubmissionRepository(database)
    repository.init_db()
    return repository


@pytest.fixture
def user_repository(database, repository):
    # Tables are created by the submission repository
    return UserRepository(database)


# =============================================================================
# Service
# =============================================================================


@pytest.fixture
def producer():
    return RecordingProducer()


@pytest.fixture
def service(repository, producer):
    return BotSubmissionService(
        repository=repository,
        validator=SubmissionValidator(),
        producer=producer,
    )


@pytest.fixture
def valid_payload():
    """Scenario A from the intake form."""
    return {
        "requesterName": "Jo",
        "requesterEmail": "jo@example.com",
        "premiumAccess": "roboClient",
        "equityIndices": ["DJIA"],
        "forex": [],
        "commodities": [],
    }


@pytest.fixture
def full_payload():
    """Every form section filled in."""
    return {
        "requesterName": "Maria Lopez",
        "requesterEmail": "maria@example.com",
        "equityIndices": ["SP500", "NVDA"],
        "otherEquity": "FTSE 100",
        "forex": ["EURUSD"],
        "otherForex": "EUR/CHF",
        "commodities": ["XAUUSD", "CRUDEOIL"],
        "otherCommodities": "Copper",
        "customIndicators": "RSI divergence on 4h",
        "premiumAccess": "other",
        "otherAccess": "Discord server",
        "specialInstructions": "Signals in Spanish please",
    }


# =============================================================================
# HTTP
# =============================================================================


@pytest.fixture
def app_config(tmp_path):
    return Config(database_url=f"sqlite:///{tmp_path / 'api.db'}", use_kafka=False)


@pytest.fixture
def client(app_config):
    app = create_app(app_config)
    with TestClient(app) as test_client:
        yield test_client
