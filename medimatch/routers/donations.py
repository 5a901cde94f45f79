# medimatch/routers/donations.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ..core.exceptions import SubmissionFailed
from ..core.states import DONATIONS
from ..deps import get_store
from ..schemas import DonationIn, DonationOut, DonationSubmissionOut
from ..services.submissions import DONATION_FAILED, submit_donation

router = APIRouter(prefix="/api/donations", tags=["donations"])


@router.post("", response_model=DonationSubmissionOut, status_code=status.HTTP_201_CREATED)
async def create_donation(body: DonationIn, store=Depends(get_store)):
    try:
        return await submit_donation(store, body)
    except SubmissionFailed:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=DONATION_FAILED)


@router.get("", response_model=List[DonationOut])
async def list_donations(store=Depends(get_store)):
    return await store.list_all(DONATIONS)
