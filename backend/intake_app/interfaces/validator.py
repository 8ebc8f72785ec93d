from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from intake_app.bot_submission_service.schema import SubmissionCreate


@dataclass(frozen=True)
class ValidationResult:
    submission: Optional[SubmissionCreate] = None
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return self.submission is not None and not self.errors


class ISubmissionValidator(ABC):

    @abstractmethod
    def validate(self, candidate: Any) -> ValidationResult:
        """Check untyped input against the submission schema. Must not touch storage."""
        pass
