from datetime import date, datetime
from typing import Dict, List, Optional

DONATION_REQUIRED = ("donor_name", "contact", "medicine_name", "quantity")
REQUEST_REQUIRED = ("requester_name", "contact", "medicine_name", "urgency")

URGENCY_LEVELS = ["low", "medium", "high", "critical"]


def missing_required(values: Dict[str, Optional[str]], required) -> List[str]:
    """Names of required fields left empty."""
    return [name for name in required if not (values.get(name) or "").strip()]


def empty_form(fields) -> Dict[str, str]:
    return {name: "" for name in fields}


def show_date(value, fallback: str = "Not specified") -> str:
    if not value:
        return fallback
    if isinstance(value, datetime):
        value = value.date()
    if isinstance(value, date):
        return value.strftime("%b %d, %Y")
    return str(value)
