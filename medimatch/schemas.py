from typing import Optional, List, Literal, Union, Annotated
from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator

# --------------------------
# Shared
# --------------------------
Urgency = Literal["low", "medium", "high", "critical"]
DonationStatus = Literal["available", "matched"]
RequestStatus = Literal["pending", "matched"]

Required = Annotated[str, Field(min_length=1)]


class _FormIn(BaseModel):
    """Required strings must be non-empty; optional blanks are stored as null."""

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

# --------------------------
# Donations
# --------------------------
class DonationIn(_FormIn):
    donor_name: Required
    contact: Required
    medicine_name: Required
    quantity: Required
    expiry_date: Optional[date] = None
    description: Optional[str] = None


class DonationOut(BaseModel):
    id: str
    donor_name: str
    contact: str
    medicine_name: str
    quantity: str
    expiry_date: Optional[date] = None
    description: Optional[str] = None
    status: DonationStatus
    created_at: datetime
    updated_at: datetime

# --------------------------
# Requests
# --------------------------
class RequestIn(_FormIn):
    requester_name: Required
    contact: Required
    medicine_name: Required
    urgency: Urgency
    reason: Optional[str] = None
    location: Optional[str] = None


class RequestOut(BaseModel):
    id: str
    requester_name: str
    contact: str
    medicine_name: str
    urgency: Urgency
    reason: Optional[str] = None
    location: Optional[str] = None
    status: RequestStatus
    created_at: datetime
    updated_at: datetime

# --------------------------
# Submission outcome
# --------------------------
class SuccessMessage(BaseModel):
    kind: Literal["success"] = "success"
    text: str


class ErrorMessage(BaseModel):
    kind: Literal["error"] = "error"
    text: str


Message = Annotated[Union[SuccessMessage, ErrorMessage], Field(discriminator="kind")]


class DonationSubmissionOut(BaseModel):
    donation: DonationOut
    matched_request: Optional[RequestOut] = None
    message: Message


class RequestSubmissionOut(BaseModel):
    request: RequestOut
    matched_donation: Optional[DonationOut] = None
    message: Message

# --------------------------
# Stats
# --------------------------
class StatsOverview(BaseModel):
    total_donations: int
    total_requests: int
    available_donations: int
    pending_requests: int
    successful_matches: int
    by_medicine: List[dict] = []
