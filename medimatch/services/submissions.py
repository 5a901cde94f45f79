# medimatch/services/submissions.py
import logging

from ..core.exceptions import MatchError, StoreError, SubmissionFailed
from ..core.states import DONATIONS, MATCHED, REQUESTS
from ..schemas import (
    DonationIn,
    DonationSubmissionOut,
    RequestIn,
    RequestSubmissionOut,
    SuccessMessage,
)
from .matching import match_new_record

logger = logging.getLogger(__name__)

DONATION_FAILED = "Failed to submit donation. Please check your connection and try again."
REQUEST_FAILED = "Failed to submit request. Please check your connection and try again."

DONATION_REGISTERED = "Thank you! Your medicine donation has been registered. We'll notify you if someone needs it."
REQUEST_REGISTERED = (
    "Your request has been registered. "
    "We'll notify you as soon as a matching donation becomes available."
)


def donation_matched_text(requester_name: str) -> str:
    return (
        f"Great! Your donation has been matched with {requester_name}. "
        "Both parties will receive contact details via email shortly."
    )


def request_matched_text(donor_name: str) -> str:
    return (
        f"Great news! We found a matching donor ({donor_name}). "
        "Both parties will receive contact details via email shortly."
    )


async def _create(store, table: str, fields: dict) -> dict:
    try:
        return await store.create(table, fields)
    except StoreError as ex:
        logger.error("creating %s failed: %s", table, ex)
        raise SubmissionFailed(table) from ex


async def _try_match(store, table: str, record: dict):
    """
    Matching problems are logged only; the submission still counts as registered.
    Returns (counterpart or None, the new record with the status it ended up with).
    """
    try:
        counterpart = await match_new_record(store, table, record["id"], record["medicine_name"])
    except (StoreError, MatchError) as ex:
        logger.exception("matching %s %s failed", table, record["id"])
        return None, getattr(ex, "record", None) or record
    if counterpart is None:
        return None, record
    return counterpart, {**record, "status": MATCHED}


async def submit_donation(store, payload: DonationIn) -> DonationSubmissionOut:
    donation = await _create(store, DONATIONS, payload.model_dump(exclude_none=True))
    matched, donation = await _try_match(store, DONATIONS, donation)
    if matched is None:
        return DonationSubmissionOut(donation=donation, message=SuccessMessage(text=DONATION_REGISTERED))
    return DonationSubmissionOut(
        donation=donation,
        matched_request=matched,
        message=SuccessMessage(text=donation_matched_text(matched["requester_name"])),
    )


async def submit_request(store, payload: RequestIn) -> RequestSubmissionOut:
    request = await _create(store, REQUESTS, payload.model_dump(exclude_none=True))
    matched, request = await _try_match(store, REQUESTS, request)
    if matched is None:
        return RequestSubmissionOut(request=request, message=SuccessMessage(text=REQUEST_REGISTERED))
    return RequestSubmissionOut(
        request=request,
        matched_donation=matched,
        message=SuccessMessage(text=request_matched_text(matched["donor_name"])),
    )
