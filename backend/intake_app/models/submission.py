from enum import Enum
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Text, DateTime, JSON
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SubmissionStatus(str, Enum):
    """Status values the presentation layer knows how to render.

    The status column itself is open text; any string may be stored.
    """
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class BotSubmission(Base):
    __tablename__ = "bot_submissions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    reference_code = Column(String(32), unique=True, index=True, nullable=False)
    requester_name = Column(Text, nullable=False)
    requester_email = Column(Text, nullable=False, index=True)
    equity_indices = Column(JSON, nullable=False, default=list)
    other_equity = Column(Text, nullable=True)
    forex = Column(JSON, nullable=False, default=list)
    other_forex = Column(Text, nullable=True)
    commodities = Column(JSON, nullable=False, default=list)
    other_commodities = Column(Text, nullable=True)
    custom_indicators = Column(Text, nullable=True)
    premium_access = Column(Text, nullable=False)
    other_access = Column(Text, nullable=True)
    special_instructions = Column(Text, nullable=True)
    status = Column(Text, default=SubmissionStatus.PENDING.value, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    def __repr__(self):
        return f"<BotSubmission(id={self.id}, reference_code={self.reference_code}, status={self.status})>"
