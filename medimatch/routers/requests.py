# medimatch/routers/requests.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ..core.exceptions import SubmissionFailed
from ..core.states import REQUESTS
from ..deps import get_store
from ..schemas import RequestIn, RequestOut, RequestSubmissionOut
from ..services.submissions import REQUEST_FAILED, submit_request

router = APIRouter(prefix="/api/requests", tags=["requests"])


@router.post("", response_model=RequestSubmissionOut, status_code=status.HTTP_201_CREATED)
async def create_request(body: RequestIn, store=Depends(get_store)):
    try:
        return await submit_request(store, body)
    except SubmissionFailed:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=REQUEST_FAILED)


@router.get("", response_model=List[RequestOut])
async def list_requests(store=Depends(get_store)):
    return await store.list_all(REQUESTS)
