# medimatch/services/stats.py
from collections import Counter
from io import BytesIO

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from ..core.states import DONATIONS, MATCHED, OPEN_STATUS, REQUESTS


async def compute_overview(store) -> dict:
    """
    Returns a dict that matches the StatsOverview schema.
    Reads every row of both tables (no pagination).
    """
    donations = await store.list_all(DONATIONS)
    requests = await store.list_all(REQUESTS)

    by_medicine = Counter(d["medicine_name"] for d in donations if d["status"] == MATCHED)
    return {
        "total_donations": len(donations),
        "total_requests": len(requests),
        "available_donations": sum(1 for d in donations if d["status"] == OPEN_STATUS[DONATIONS]),
        "pending_requests": sum(1 for r in requests if r["status"] == OPEN_STATUS[REQUESTS]),
        # one matched donation per match
        "successful_matches": sum(by_medicine.values()),
        "by_medicine": [{"medicine_name": k, "matches": v} for k, v in by_medicine.most_common(5)],
    }


async def plot_status_png(store) -> BytesIO:
    """Grouped bar chart of open vs matched rows per table. Returns a PNG buffer."""
    overview = await compute_overview(store)
    labels = ["Donations", "Requests"]
    open_counts = [overview["available_donations"], overview["pending_requests"]]
    matched_counts = [
        overview["total_donations"] - overview["available_donations"],
        overview["total_requests"] - overview["pending_requests"],
    ]

    fig, ax = plt.subplots()
    xs = range(len(labels))
    ax.bar([x - 0.2 for x in xs], open_counts, width=0.4, label="Open")
    ax.bar([x + 0.2 for x in xs], matched_counts, width=0.4, label="Matched")
    ax.set_xticks(list(xs))
    ax.set_xticklabels(labels)
    ax.set_title("Donations and Requests by Status")
    ax.legend()
    fig.tight_layout()

    buf = BytesIO()
    fig.savefig(buf, format="png")
    plt.close(fig)
    buf.seek(0)
    return buf
