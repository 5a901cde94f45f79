# medimatch/services/matching.py
import asyncio
import logging
from typing import Optional

from ..core.exceptions import MatchConflict, MatchError
from ..core.states import MATCHED, OPEN_STATUS, OPPOSITE

logger = logging.getLogger(__name__)


async def find_counterpart(store, table: str, medicine_name: str) -> Optional[dict]:
    """Oldest open record of the other kind with exactly this medicine name."""
    rows = await store.find_open(OPPOSITE[table], medicine_name)
    return rows[0] if rows else None


async def match_new_record(store, table: str, record_id: str, medicine_name: str) -> Optional[dict]:
    """
    Bind a just-created record to the oldest open counterpart:
      - lookup in the opposite table (same medicine name, open, FIFO)
      - both rows -> "matched", updates launched together
    Returns the counterpart as updated, or None if nothing was open.
    The two writes are not atomic; a failure can leave one side matched.
    """
    other = OPPOSITE[table]
    counterpart = await find_counterpart(store, table, medicine_name)
    if counterpart is None:
        logger.info("no open %s for %r; %s %s stays open", other, medicine_name, table, record_id)
        return None

    results = await asyncio.gather(
        store.update_status(other, counterpart["id"], MATCHED, expected=OPEN_STATUS[other]),
        store.update_status(table, record_id, MATCHED, expected=OPEN_STATUS[table]),
        return_exceptions=True,
    )
    targets = ((other, counterpart["id"]), (table, record_id))
    own = results[1] if isinstance(results[1], dict) else None

    failed = [(t, res) for t, res in zip(targets, results) if isinstance(res, BaseException)]
    for (tbl, rid), res in failed:
        logger.error("status update failed for %s %s: %s", tbl, rid, res)
    if failed:
        first = failed[0][1]
        if not isinstance(first, Exception):
            raise first
        raise MatchError(
            f"match {table} {record_id} <-> {other} {counterpart['id']} incomplete", record=own
        ) from first

    lost = [t for t, res in zip(targets, results) if res is None]
    if lost:
        raise MatchConflict(
            f"no longer open: {', '.join(f'{tbl} {rid}' for tbl, rid in lost)}", record=own
        )

    logger.info("matched %s %s with %s %s (%r)", table, record_id, other, counterpart["id"], medicine_name)
    return results[0]
