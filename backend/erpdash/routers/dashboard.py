"""Dashboard statistics route."""

from fastapi import APIRouter, Depends

from erpdash.auth.deps import get_session
from erpdash.auth.session import UserSession
from erpdash.dependencies import get_table_store
from erpdash.schemas.dashboard import DashboardStats
from erpdash.services.dashboard import compute_dashboard_stats
from erpdash.store import TableStore

router = APIRouter()


@router.get("/stats", response_model=DashboardStats)
async def dashboard_stats(
    session: UserSession = Depends(get_session),
    tables: TableStore = Depends(get_table_store),
):
    return await compute_dashboard_stats(session, tables)
