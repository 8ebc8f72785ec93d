from intake_app.validators.submission_validator import SubmissionValidator

__all__ = ["SubmissionValidator"]
