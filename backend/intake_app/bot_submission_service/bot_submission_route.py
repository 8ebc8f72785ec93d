import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request, status as http_status

from intake_app.bot_submission_service.bot_submission_service import BotSubmissionService
from intake_app.bot_submission_service.schema import SubmissionResponse, submission_form_schema
from intake_app.errors import (
    InvalidStatus,
    InvalidSubmissionId,
    StorageUnavailable,
    SubmissionError,
    SubmissionNotFound,
    ValidationFailed,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/submissions", tags=["submissions"])


def get_submission_service(request: Request) -> BotSubmissionService:
    return request.app.state.submission_service


def validation_error(errors: dict) -> HTTPException:
    return HTTPException(
        status_code=http_status.HTTP_400_BAD_REQUEST,
        detail={"message": ValidationFailed.message, "errors": errors},
    )


def server_error(message: str, error: Exception) -> HTTPException:
    # Internal detail stays in the log
    logger.error(f"{message}: {error}", exc_info=not isinstance(error, StorageUnavailable))
    return HTTPException(status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


@router.get("", response_model=List[SubmissionResponse])
def list_submissions(
    email: Optional[str] = Query(None, description="Only submissions from this requester"),
    service: BotSubmissionService = Depends(get_submission_service),
):
    """
    List submissions, oldest first.
    """
    try:
        return service.list_submissions(requester_email=email)
    except SubmissionError as e:
        raise server_error("Failed to fetch submissions", e)


@router.get("/schema")
def get_submission_schema():
    """
    Validation rules for the submission form, as JSON Schema, plus the option
    lists the form offers.
    """
    return submission_form_schema()


@router.post("/validate")
def validate_submission(
    payload: Any = Body(None),
    service: BotSubmissionService = Depends(get_submission_service),
):
    """
    Pre-flight check of a form payload. Nothing is stored.
    """
    try:
        service.validate_submission(payload)
    except ValidationFailed as e:
        raise validation_error(e.errors)
    return {"valid": True}


@router.get("/reference/{reference_code}", response_model=SubmissionResponse)
def get_submission_by_reference(
    reference_code: str,
    service: BotSubmissionService = Depends(get_submission_service),
):
    try:
        return service.get_submission_by_reference(reference_code)
    except SubmissionNotFound as e:
        raise HTTPException(status_code=http_status.HTTP_404_NOT_FOUND, detail=e.message)
    except SubmissionError as e:
        raise server_error("Failed to fetch submission", e)


@router.get("/{submission_id}", response_model=SubmissionResponse)
def get_submission(
    submission_id: str,
    service: BotSubmissionService = Depends(get_submission_service),
):
    """
    Retrieve submission status and details by ID.
    """
    try:
        return service.get_submission(submission_id)
    except InvalidSubmissionId as e:
        raise HTTPException(status_code=http_status.HTTP_400_BAD_REQUEST, detail=e.message)
    except SubmissionNotFound as e:
        raise HTTPException(status_code=http_status.HTTP_404_NOT_FOUND, detail=e.message)
    except SubmissionError as e:
        raise server_error("Failed to fetch submission", e)


@router.post("", response_model=SubmissionResponse, status_code=http_status.HTTP_201_CREATED)
def create_submission(
    payload: Any = Body(None),
    service: BotSubmissionService = Depends(get_submission_service),
):
    """
    Submit a bot customization request.

    The reference code, status and timestamps are assigned here; callers
    sending them get a validation error.
    """
    try:
        return service.create_submission(payload)
    except ValidationFailed as e:
        raise validation_error(e.errors)
    except SubmissionError as e:
        raise server_error("Failed to create submission", e)


@router.patch("/{submission_id}/status", response_model=SubmissionResponse)
def update_submission_status(
    submission_id: str,
    payload: Any = Body(None),
    service: BotSubmissionService = Depends(get_submission_service),
):
    """
    Set the status of a submission. Operators typically move it from
    "pending" to "completed" or "failed".
    """
    new_status = payload.get("status") if isinstance(payload, dict) else None
    try:
        return service.update_submission_status(submission_id, new_status)
    except (InvalidStatus, InvalidSubmissionId) as e:
        raise HTTPException(status_code=http_status.HTTP_400_BAD_REQUEST, detail=e.message)
    except SubmissionNotFound as e:
        raise HTTPException(status_code=http_status.HTTP_404_NOT_FOUND, detail=e.message)
    except SubmissionError as e:
        raise server_error("Failed to update submission status", e)
