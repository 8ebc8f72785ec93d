from intake_app.models.submission import Base, BotSubmission, SubmissionStatus
from intake_app.models.user import User

__all__ = ["Base", "BotSubmission", "SubmissionStatus", "User"]
