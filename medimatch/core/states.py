from .exceptions import InvalidTransition

DONATIONS = "donations"
REQUESTS = "requests"
TABLES = (DONATIONS, REQUESTS)

MATCHED = "matched"

OPEN_STATUS = {
    DONATIONS: "available",
    REQUESTS: "pending",
}

OPPOSITE = {
    DONATIONS: REQUESTS,
    REQUESTS: DONATIONS,
}

# (src, dst) pairs; matched is terminal
TRANSITIONS = {
    ("available", MATCHED),
    ("pending", MATCHED),
}


def can_transition(src: str, dst: str) -> bool:
    return (src, dst) in TRANSITIONS


def ensure_transition(table: str, dst: str) -> None:
    """Reject any status write that is not a forward transition for `table`."""
    if not can_transition(OPEN_STATUS[table], dst):
        raise InvalidTransition(table, dst)
