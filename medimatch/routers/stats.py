from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from ..deps import get_store
from ..schemas import StatsOverview
from ..services.stats import compute_overview, plot_status_png

router = APIRouter(prefix="/api/stats", tags=["stats"])


@router.get("/overview", response_model=StatsOverview)
async def overview(store=Depends(get_store)):
    return await compute_overview(store)


@router.get("/plots/status.png")
async def status_plot(store=Depends(get_store)):
    buf = await plot_status_png(store)
    return StreamingResponse(buf, media_type="image/png")
