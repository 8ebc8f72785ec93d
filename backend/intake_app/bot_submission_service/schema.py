from datetime import datetime, timezone
from typing import Annotated, Dict, List, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, WithJsonSchema, field_validator
from pydantic.alias_generators import to_camel

from intake_app.models.submission import SubmissionStatus

__all__ = [
    "ACCESS_TIERS",
    "INSTRUMENT_OPTIONS",
    "SERVER_ASSIGNED_FIELDS",
    "SubmissionCreate",
    "SubmissionResponse",
    "SubmissionStatus",
    "submission_form_schema",
]


# Options the form offers. Published for the client, never enforced here.
INSTRUMENT_OPTIONS: Dict[str, List[Dict[str, str]]] = {
    "equityIndices": [
        {"value": "DJIA", "label": "Dow Jones (DJIA)"},
        {"value": "NASDAQ", "label": "Nasdaq 100"},
        {"value": "SP500", "label": "S&P 500"},
        {"value": "TSLA", "label": "Tesla (TSLA)"},
        {"value": "NVDA", "label": "Nvidia (NVDA)"},
        {"value": "AAPL", "label": "Apple (AAPL)"},
        {"value": "AMZN", "label": "Amazon (AMZN)"},
        {"value": "GOOG", "label": "Google (GOOG)"},
        {"value": "META", "label": "Meta (META)"},
    ],
    "forex": [
        {"value": "EURUSD", "label": "EUR/USD"},
        {"value": "GBPUSD", "label": "GBP/USD"},
        {"value": "USDJPY", "label": "USD/JPY"},
        {"value": "AUDUSD", "label": "AUD/USD"},
        {"value": "USDCAD", "label": "USD/CAD"},
    ],
    "commodities": [
        {"value": "XAUUSD", "label": "Gold (XAU/USD)"},
        {"value": "CRUDEOIL", "label": "Crude Oil (WTI)"},
        {"value": "XAGUSD", "label": "Silver (XAG/USD)"},
    ],
}

ACCESS_TIERS: List[str] = ["roboClient", "telegramGroup", "fbGroup", "personalSelection", "other"]

# Wire name -> attribute name of fields only the server may set
SERVER_ASSIGNED_FIELDS: Dict[str, str] = {
    "id": "id",
    "referenceCode": "reference_code",
    "reference_code": "reference_code",
    "status": "status",
    "createdAt": "created_at",
    "created_at": "created_at",
}


def _check_email(value: str) -> str:
    # Syntax check only; the address is kept exactly as submitted
    try:
        validate_email(value, check_deliverability=False, test_environment=True)
    except EmailNotValidError as e:
        raise ValueError(str(e))
    return value


EmailAddress = Annotated[str, AfterValidator(_check_email), WithJsonSchema({"type": "string", "format": "email"})]


class WireModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class SubmissionCreate(WireModel):
    requester_name: str = Field(..., min_length=2)
    requester_email: EmailAddress
    equity_indices: List[str] = Field(default_factory=list)
    other_equity: Optional[str] = None
    forex: List[str] = Field(default_factory=list)
    other_forex: Optional[str] = None
    commodities: List[str] = Field(default_factory=list)
    other_commodities: Optional[str] = None
    custom_indicators: Optional[str] = None
    premium_access: str = Field(..., min_length=1)
    other_access: Optional[str] = None
    special_instructions: Optional[str] = None

    @field_validator("equity_indices", "forex", "commodities", mode="before")
    @classmethod
    def _null_list_is_empty(cls, value):
        return [] if value is None else value

    @field_validator("premium_access")
    @classmethod
    def _premium_access_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Premium access selection is required")
        return value


class SubmissionResponse(WireModel):
    id: int
    reference_code: str
    requester_name: str
    requester_email: str
    equity_indices: List[str] = Field(default_factory=list)
    other_equity: Optional[str] = None
    forex: List[str] = Field(default_factory=list)
    other_forex: Optional[str] = None
    commodities: List[str] = Field(default_factory=list)
    other_commodities: Optional[str] = None
    custom_indicators: Optional[str] = None
    premium_access: str
    other_access: Optional[str] = None
    special_instructions: Optional[str] = None
    status: str = SubmissionStatus.PENDING.value
    created_at: datetime

    @field_validator("equity_indices", "forex", "commodities", mode="before")
    @classmethod
    def _null_list_is_empty(cls, value):
        return [] if value is None else value

    @field_validator("created_at")
    @classmethod
    def _created_at_is_utc(cls, value: datetime) -> datetime:
        # Stored as UTC; some backends (SQLite) hand it back without tzinfo
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


def submission_form_schema() -> dict:
    """JSON Schema of the create payload plus the form's option catalog."""
    return {
        "schema": SubmissionCreate.model_json_schema(by_alias=True),
        "options": {
            **INSTRUMENT_OPTIONS,
            "premiumAccess": ACCESS_TIERS,
        },
        "statuses": [status.value for status in SubmissionStatus],
    }
