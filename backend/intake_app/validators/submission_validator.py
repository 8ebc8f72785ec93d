import logging
from typing import Any, Dict

from pydantic import ValidationError

from intake_app.bot_submission_service.schema import SERVER_ASSIGNED_FIELDS, SubmissionCreate
from intake_app.interfaces.validator import ISubmissionValidator, ValidationResult

logger = logging.getLogger(__name__)

ROOT_FIELD = "_root"
REQUIRED_MESSAGE = "This field is required"
SERVER_ASSIGNED_MESSAGE = "This field is assigned by the server"

# Friendlier wording for the fields the form highlights most often
FIELD_MESSAGES: Dict[str, str] = {
    "requesterName": "Name must be at least 2 characters",
    "requesterEmail": "Please enter a valid email address",
    "premiumAccess": "Premium access selection is required",
}

_WIRE_NAMES: Dict[str, str] = {}
for _name, _field in SubmissionCreate.model_fields.items():
    _WIRE_NAMES[_name] = _field.alias or _name
    _WIRE_NAMES[_field.alias or _name] = _field.alias or _name


def _field_path(loc: tuple) -> str:
    if not loc:
        return ROOT_FIELD
    head = _WIRE_NAMES.get(str(loc[0]), str(loc[0]))
    return ".".join([head] + [str(part) for part in loc[1:]])


def _message(error: dict, path: str) -> str:
    if error["type"] == "missing":
        return REQUIRED_MESSAGE
    return FIELD_MESSAGES.get(path, error["msg"])


class SubmissionValidator(ISubmissionValidator):
    """
    Validates bot submission requests against SubmissionCreate.

    The same instance backs the pre-flight check and the authoritative check
    on create, so both report identical field errors.
    """

    def validate(self, candidate: Any) -> ValidationResult:
        if not isinstance(candidate, dict):
            return ValidationResult(errors={ROOT_FIELD: "Submission must be a JSON object"})

        errors: Dict[str, str] = {}
        for key in candidate:
            if key in SERVER_ASSIGNED_FIELDS:
                errors[key] = SERVER_ASSIGNED_MESSAGE

        try:
            submission = SubmissionCreate.model_validate(
                {key: value for key, value in candidate.items() if key not in SERVER_ASSIGNED_FIELDS}
            )
        except ValidationError as e:
            for error in e.errors():
                path = _field_path(error["loc"])
                # Keep the first message per field
                errors.setdefault(path, _message(error, path))
            submission = None

        if errors:
            logger.debug(f"Submission rejected: {sorted(errors)}")
            return ValidationResult(errors=errors)

        return ValidationResult(submission=submission)
