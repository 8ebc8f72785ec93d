from intake_app.repositories.repository import Repository
from intake_app.repositories.submission_repository import SubmissionRepository
from intake_app.repositories.user_repository import UserCreate, UserRead, UserRepository

__all__ = ["Repository", "SubmissionRepository", "UserCreate", "UserRead", "UserRepository"]
