import logging
from typing import List, Optional

import httpx

from medimatch.schemas import (
    DonationOut,
    DonationSubmissionOut,
    ErrorMessage,
    Message,
    RequestOut,
    RequestSubmissionOut,
    StatsOverview,
)
from medimatch.services.submissions import DONATION_FAILED, REQUEST_FAILED

logger = logging.getLogger(__name__)


class ApiClient:
    def __init__(self, base_url: str, timeout: float = 15.0,
                 transport: Optional[httpx.BaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.http = httpx.Client(
            base_url=self.base_url,
            headers={"Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    def close(self):
        self.http.close()

    # ---- submissions: always answer with a Message ----
    def submit_donation(self, form: dict) -> Message:
        try:
            r = self.http.post("/api/donations", json=form)
            r.raise_for_status()
            return DonationSubmissionOut.model_validate(r.json()).message
        except (httpx.HTTPError, ValueError) as ex:
            logger.error("Error submitting donation: %s", ex)
            return ErrorMessage(text=DONATION_FAILED)

    def submit_request(self, form: dict) -> Message:
        try:
            r = self.http.post("/api/requests", json=form)
            r.raise_for_status()
            return RequestSubmissionOut.model_validate(r.json()).message
        except (httpx.HTTPError, ValueError) as ex:
            logger.error("Error submitting request: %s", ex)
            return ErrorMessage(text=REQUEST_FAILED)

    # ---- listings ----
    def list_donations(self) -> List[DonationOut]:
        r = self.http.get("/api/donations")
        r.raise_for_status()
        return [DonationOut.model_validate(d) for d in r.json()]

    def list_requests(self) -> List[RequestOut]:
        r = self.http.get("/api/requests")
        r.raise_for_status()
        return [RequestOut.model_validate(d) for d in r.json()]

    def stats(self) -> StatsOverview:
        r = self.http.get("/api/stats/overview")
        r.raise_for_status()
        return StatsOverview.model_validate(r.json())
