"""Seed a few demo donations/requests through the configured store (and its matching)."""
import asyncio

from medimatch.core.config import get_settings
from medimatch.core.logging import setup_logging
from medimatch.repos import build_store
from medimatch.schemas import DonationIn, RequestIn
from medimatch.services.submissions import submit_donation, submit_request

REQUESTS = [
    {"requester_name": "Ana Cruz", "contact": "ana@example.org", "medicine_name": "Insulin",
     "urgency": "critical", "location": "Quezon City"},
    {"requester_name": "Ben Ortiz", "contact": "+63 917 555 0102", "medicine_name": "Amoxicillin",
     "urgency": "high", "reason": "Prescribed after dental surgery"},
]

DONATIONS = [
    {"donor_name": "Carla Reyes", "contact": "carla@example.org", "medicine_name": "Paracetamol",
     "quantity": "20 tablets", "expiry_date": "2027-03-31"},
    {"donor_name": "Dan Lim", "contact": "dan@example.org", "medicine_name": "Insulin",
     "quantity": "3 pens", "description": "Unopened, refrigerated"},
]


async def main():
    settings = get_settings()
    setup_logging(settings.log_level)
    store = build_store(settings)
    try:
        for body in REQUESTS:
            out = await submit_request(store, RequestIn(**body))
            print("request:", out.request.medicine_name, "->", out.message.text)
        for body in DONATIONS:
            out = await submit_donation(store, DonationIn(**body))
            print("donation:", out.donation.medicine_name, "->", out.message.text)
    finally:
        await store.close()


if __name__ == "__main__":
    asyncio.run(main())
