"""Failures raised by the submission pipeline.

Routes translate these into HTTP responses; nothing here is fatal to the
process.
"""

from typing import Dict


class SubmissionError(Exception):
    """Base class for every submission pipeline failure."""

    message = "Submission request failed"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class ValidationFailed(SubmissionError):
    message = "Validation error"

    def __init__(self, errors: Dict[str, str]):
        super().__init__()
        self.errors = errors


class SubmissionNotFound(SubmissionError):
    message = "Submission not found"


class InvalidSubmissionId(SubmissionNotFound):
    """An id that cannot name any submission (not a positive integer)."""
    message = "Invalid submission ID"


class InvalidStatus(SubmissionError):
    message = "Status is required and must be a string"


class CreationFailed(SubmissionError):
    message = "Failed to create submission"


class ReferenceCodeCollision(CreationFailed):
    message = "Reference code already in use"


class StorageUnavailable(SubmissionError):
    message = "Submission storage is unavailable"
